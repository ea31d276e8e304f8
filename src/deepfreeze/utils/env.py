from os import getenv
from typing import Literal, overload

__all__ = ("getenv_bool",)

_TRUTHY: frozenset[str] = frozenset(("true", "1", "t", "yes", "y", "on"))


@overload
def getenv_bool(
    key: str,
    /,
) -> bool | None: ...


@overload
def getenv_bool(
    key: str,
    /,
    default: bool,
) -> bool: ...


@overload
def getenv_bool(
    key: str,
    /,
    *,
    required: Literal[True],
) -> bool: ...


def getenv_bool(
    key: str,
    /,
    default: bool | None = None,
    *,
    required: bool = False,
) -> bool | None:
    """
    Get a boolean flag from an environment variable.

    Interprets 'true', '1', 't', 'yes', 'y' and 'on' (case-insensitive) as True,
    any other non-empty value as False.

    Parameters
    ----------
    key : str
        The environment variable name to retrieve
    default : bool | None, optional
        Value to return if the environment variable is not set or empty
    required : bool, default=False
        If True and the environment variable is not set and no default is provided,
        raises a ValueError

    Returns
    -------
    bool | None
        The flag read from the environment variable, or the default value

    Raises
    ------
    ValueError
        If required=True, the environment variable is not set, and no default is provided
    """
    if value := getenv(key):
        return value.strip().lower() in _TRUTHY

    elif required and default is None:
        raise ValueError(f"Required environment value `{key}` is missing!")

    else:
        return default
