from typing import Any, Final, TypeGuard, final

__all__ = (
    "MISSING",
    "Missing",
    "is_missing",
    "not_missing",
)


class MissingType(type):
    """
    Metaclass keeping a single Missing instance alive for the whole process.
    """

    _instance: Any = None

    def __call__(cls) -> Any:
        if cls._instance is None:
            cls._instance = super().__call__()

        return cls._instance


@final
class Missing(metaclass=MissingType):
    """
    Type representing absence of a value. Use the MISSING constant for its value.

    None stands for "no value", MISSING stands for "value not provided". Both are
    absence markers for the freezer and pass through it untouched. Compare with
    the 'is' operator.
    """

    __slots__ = ()
    __match_args__ = ()

    def __bool__(self) -> bool:
        return False

    def __hash__(self) -> int:
        return hash(self.__class__)

    def __eq__(
        self,
        value: object,
    ) -> bool:
        return value is MISSING

    def __str__(self) -> str:
        return "MISSING"

    def __repr__(self) -> str:
        return "MISSING"

    def __copy__(self) -> "Missing":
        return self

    def __deepcopy__(
        self,
        memo: dict[int, Any] | None,
    ) -> "Missing":
        return self

    def __getattr__(
        self,
        name: str,
    ) -> Any:
        raise AttributeError("Missing has no attributes")

    def __setattr__(
        self,
        __name: str,
        __value: Any,
    ) -> None:
        raise AttributeError("Missing can't be modified")

    def __delattr__(
        self,
        __name: str,
    ) -> None:
        raise AttributeError("Missing can't be modified")


MISSING: Final[Missing] = Missing()


def is_missing(
    check: Any | Missing,
    /,
) -> TypeGuard[Missing]:
    """
    Check if a value is the MISSING sentinel.
    """
    return check is MISSING


def not_missing[Value](
    check: Value | Missing,
    /,
) -> TypeGuard[Value]:
    """
    Check if a value is not the MISSING sentinel.
    """
    return check is not MISSING
