import re
from abc import ABCMeta
from collections import deque
from collections.abc import Callable, MutableMapping, MutableSequence, MutableSet
from datetime import date, time, timedelta, tzinfo
from enum import Enum
from functools import partial
from logging import Logger, getLogger
from numbers import Number
from pathlib import PurePath
from types import FunctionType, new_class
from typing import Any, Final, Generic, NoReturn, Protocol
from uuid import UUID

from deepfreeze.freezing.members import is_structural, opaque_types
from deepfreeze.types import MISSING

__all__ = (
    "frozen_origin",
    "is_frozen",
    "mark_frozen",
)

_logger: Final[Logger] = getLogger(__name__)

_IMMUTABLE_SCALARS: tuple[type[Any], ...] = (
    bool,
    Number,
    str,
    bytes,
    range,
    date,
    time,
    timedelta,
    tzinfo,
    UUID,
    PurePath,
    re.Pattern,
    Enum,
)

_MUTATORS: tuple[tuple[type[Any], tuple[str, ...]], ...] = (
    (
        MutableMapping,
        (
            "__delitem__",
            "__init__",
            "__ior__",
            "__setitem__",
            "clear",
            "pop",
            "popitem",
            "setdefault",
            "update",
        ),
    ),
    (
        MutableSequence,
        (
            "__delitem__",
            "__iadd__",
            "__imul__",
            "__init__",
            "__setitem__",
            "append",
            "clear",
            "extend",
            "insert",
            "pop",
            "remove",
            "reverse",
            "sort",
        ),
    ),
    (
        MutableSet,
        (
            "__iand__",
            "__init__",
            "__ior__",
            "__isub__",
            "__ixor__",
            "add",
            "clear",
            "discard",
            "pop",
            "remove",
        ),
    ),
    (
        set,
        (
            "difference_update",
            "intersection_update",
            "symmetric_difference_update",
            "update",
        ),
    ),
    (
        deque,
        (
            "appendleft",
            "extendleft",
            "popleft",
            "rotate",
        ),
    ),
)

# class creation through these only affects the created class
_PLAIN_METACLASSES: tuple[type[Any], ...] = (
    type,
    ABCMeta,
)
_PLAIN_BASES: tuple[Any, ...] = (
    object,
    Generic,
    Protocol,
)

# original class -> frozen variant, None when the class can't take one
_VARIANTS: dict[type[Any], type[Any] | None] = {}


def is_frozen(
    value: Any,
    /,
) -> bool:
    """
    Check if a value is immutable, without looking at its members.

    Parameters
    ----------
    value : Any
        The value to check

    Returns
    -------
    bool
        True for absence markers, primitives, unique tokens, natively immutable
        containers (tuple, frozenset), frozen dataclasses and values marked with
        ``mark_frozen``; False for mutable values, including opaque handles
    """
    if value is None or value is MISSING:
        return True

    elif "__frozen_origin__" in type(value).__dict__:
        return True

    elif _is_frozen_dataclass(type(value)):
        return True

    elif isinstance(value, tuple | frozenset):
        # subclasses carrying a __dict__ can still be modified
        return getattr(value, "__dict__", None) is None

    elif isinstance(value, _IMMUTABLE_SCALARS):
        return True

    elif is_structural(value):
        return False

    else:  # tokens are immutable, handles and raw callables are not
        return not isinstance(value, (FunctionType, *opaque_types()))


def mark_frozen(
    value: Any,
    /,
) -> bool:
    """
    Make a single value immutable in place, preserving its identity.

    The value's class is swapped for a cached frozen variant: a subclass which
    rejects attribute assignment and deletion as well as all mutating container
    methods with an AttributeError. The variant reports the original class as
    ``__class__`` and pickles as an instance of it, so equality, hashing and
    serialization of the value stay as they were. Members of the value are not
    affected. Marking an already immutable value is a no-op.

    Parameters
    ----------
    value : Any
        The value to mark

    Returns
    -------
    bool
        True if the value is immutable afterwards, False if it can't be marked
        (opaque handles, exact builtin containers, function objects, classes
        refusing subclassing or running class creation hooks)
    """
    if is_frozen(value):
        return True

    elif not is_structural(value):
        return False  # handles stay as they are

    origin: type[Any] = type(value)
    variant: type[Any] | None = _frozen_variant(origin)
    if variant is None:
        return False

    try:
        # bypass any __setattr__ defined by the class itself
        object.__setattr__(value, "__class__", variant)

    except TypeError as exc:
        _logger.debug(
            "Instances of %s can't be marked frozen: %s",
            origin.__qualname__,
            exc,
        )
        _VARIANTS[origin] = None
        return False

    return True


def frozen_origin[Origin](
    cls: type[Origin],
    /,
) -> type[Origin]:
    """
    Resolve the original class of a frozen variant.

    Parameters
    ----------
    cls : type[Origin]
        A frozen variant or any other class

    Returns
    -------
    type[Origin]
        The class the variant was derived from, or ``cls`` when it is not a variant
    """
    return cls.__dict__.get("__frozen_origin__", cls)


def _is_frozen_dataclass(
    cls: type[Any],
) -> bool:
    params: Any = getattr(cls, "__dataclass_params__", None)
    return params is not None and bool(params.frozen)


def _runs_class_hooks(
    origin: type[Any],
) -> bool:
    if type(origin) not in _PLAIN_METACLASSES:
        return True

    return any(
        "__init_subclass__" in base.__dict__
        for base in origin.__mro__
        if base not in _PLAIN_BASES
    )


def _frozen_variant(
    origin: type[Any],
) -> type[Any] | None:
    if origin in _VARIANTS:
        return _VARIANTS[origin]

    variant: type[Any] | None
    if _runs_class_hooks(origin):
        _logger.debug(
            "Unable to derive frozen variant of %s: it defines class creation hooks",
            origin.__qualname__,
        )
        variant = None

    else:
        try:
            variant = new_class(
                origin.__name__,
                (origin,),
                exec_body=partial(
                    _frozen_namespace,
                    origin=origin,
                ),
            )

        except Exception as exc:
            _logger.debug(
                "Unable to derive frozen variant of %s: %s",
                origin.__qualname__,
                exc,
            )
            variant = None

    _VARIANTS[origin] = variant
    return variant


def _frozen_namespace(
    namespace: dict[str, Any],
    *,
    origin: type[Any],
) -> None:
    def origin_class(self: Any) -> type[Any]:
        return origin

    namespace["__slots__"] = ()  # keep the instance layout of the origin
    namespace["__module__"] = origin.__module__
    namespace["__qualname__"] = origin.__qualname__
    namespace["__doc__"] = origin.__doc__
    namespace["__frozen_origin__"] = origin
    namespace["__class__"] = property(origin_class)
    namespace["__new__"] = _frozen_new
    namespace["__setattr__"] = _frozen_setattr
    namespace["__delattr__"] = _frozen_delattr
    namespace["__copy__"] = _frozen_copy
    namespace["__deepcopy__"] = _frozen_deepcopy
    namespace["__reduce_ex__"] = _frozen_reduce_ex
    for name in _mutators(origin):
        namespace[name] = _rejecting(name)


def _mutators(
    origin: type[Any],
) -> set[str]:
    names: set[str] = set()
    for abstract, methods in _MUTATORS:
        if issubclass(origin, abstract):
            names.update(name for name in methods if hasattr(origin, name))

    return names


def _rejecting(
    name: str,
) -> Callable[..., NoReturn]:
    def rejected(
        self: Any,
        *args: Any,
        **kwargs: Any,
    ) -> NoReturn:
        raise AttributeError(
            f"Can't modify frozen {self.__class__.__qualname__}, {name} is not supported"
        )

    rejected.__name__ = name
    rejected.__qualname__ = name
    return rejected


def _frozen_new(
    cls: type[Any],
    /,
    *args: Any,
    **kwargs: Any,
) -> Any:
    # new values are regular instances of the origin
    return frozen_origin(cls)(*args, **kwargs)


def _frozen_setattr(
    self: Any,
    name: str,
    value: Any,
) -> NoReturn:
    raise AttributeError(
        f"Can't modify frozen {self.__class__.__qualname__}"
        f" attribute - '{name}' cannot be modified"
    )


def _frozen_delattr(
    self: Any,
    name: str,
) -> NoReturn:
    raise AttributeError(
        f"Can't modify frozen {self.__class__.__qualname__}"
        f" attribute - '{name}' cannot be deleted"
    )


def _frozen_copy(
    self: Any,
) -> Any:
    return self  # frozen, no need to provide an actual copy


def _frozen_deepcopy(
    self: Any,
    memo: dict[int, Any] | None,
) -> Any:
    return self  # frozen, no need to provide an actual copy


def _frozen_reduce_ex(
    self: Any,
    protocol: int,
) -> Any:
    variant: type[Any] = type(self)
    origin: type[Any] = frozen_origin(variant)
    reduced: Any = super(variant, self).__reduce_ex__(protocol)
    if isinstance(reduced, str):
        return reduced  # global reference

    # restored values are regular, mutable instances of the origin
    constructor, arguments, *rest = reduced
    return (
        constructor,
        tuple(origin if argument is variant else argument for argument in arguments),
        *rest,
    )
