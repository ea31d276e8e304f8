import re
from collections.abc import Collection, Iterator, Mapping
from datetime import date, time, timedelta, tzinfo
from enum import Enum
from functools import cache
from io import IOBase
from logging import Handler, Logger
from numbers import Number
from pathlib import PurePath
from socket import socket
from threading import Thread
from types import (
    BuiltinFunctionType,
    FunctionType,
    MemberDescriptorType,
    MethodType,
    MethodWrapperType,
    ModuleType,
    WrapperDescriptorType,
)
from typing import Any
from uuid import UUID
from weakref import ReferenceType

from deepfreeze.types import MISSING

__all__ = (
    "is_structural",
    "opaque_types",
    "own_members",
    "register_opaque",
)

_OPAQUE_TYPES: tuple[type[Any], ...] = (
    # primitives
    bool,
    Number,
    str,
    bytes,
    memoryview,
    range,
    # value types
    date,
    time,
    timedelta,
    tzinfo,
    UUID,
    PurePath,
    re.Pattern,
    # tokens
    Enum,
    # raw callables
    type,
    BuiltinFunctionType,
    MethodType,
    MethodWrapperType,
    WrapperDescriptorType,
    # handles
    ModuleType,
    ReferenceType,
    IOBase,
    socket,
    Thread,
    Logger,
    Handler,
)

_TEXT_TYPES: tuple[type[Any], ...] = (str, bytes, bytearray, memoryview)


def register_opaque(
    *types: type[Any],
) -> None:
    """
    Register types whose instances are passed through the freezer untouched.

    Use it for handles holding process or external state (connections, clients,
    locks with attributes, ...) which must stay mutable even when reachable from
    a frozen value. Registration is global and idempotent.

    Parameters
    ----------
    *types : type[Any]
        Types to treat as opaque, subclasses included
    """
    global _OPAQUE_TYPES
    _OPAQUE_TYPES = _OPAQUE_TYPES + tuple(
        opaque for opaque in dict.fromkeys(types) if opaque not in _OPAQUE_TYPES
    )


def opaque_types() -> tuple[type[Any], ...]:
    """
    Return all types currently treated as opaque.
    """
    return _OPAQUE_TYPES


def is_structural(
    value: Any,
    /,
) -> bool:
    """
    Check if a value can hold own members and is subject to freezing.

    Parameters
    ----------
    value : Any
        The value to classify

    Returns
    -------
    bool
        True for containers, instances carrying attributes or slot fields and
        functions with attached attributes; False for absence markers,
        primitives, tokens, raw callables and opaque handles
    """
    if value is None or value is MISSING:
        return False

    elif isinstance(value, _OPAQUE_TYPES):
        return False

    elif isinstance(value, FunctionType):
        return bool(value.__dict__)  # only functions with attached state

    elif isinstance(value, Mapping | Collection):
        return True

    else:
        return _namespace(value) is not None or bool(_slot_descriptors(type(value)))


def own_members(
    value: Any,
    /,
) -> Iterator[Any]:
    """
    Iterate over own members of a value.

    Own members are mapping keys and values, collection elements, entries of the
    instance ``__dict__`` (private and non-string keyed entries included) and set
    slot fields. Anything resolved through the class, including class attributes,
    methods and properties, is not an own member.

    Parameters
    ----------
    value : Any
        The value to inspect

    Yields
    ------
    Any
        Member values, in no particular order
    """
    if isinstance(value, Mapping):
        for key, element in value.items():  # pyright: ignore[reportUnknownVariableType]
            yield key
            yield element

    elif isinstance(value, Collection) and not isinstance(value, _TEXT_TYPES):
        yield from value  # pyright: ignore[reportUnknownMemberType]

    if (namespace := _namespace(value)) is not None:
        yield from tuple(namespace.values())

    for descriptor in _slot_descriptors(type(value)):
        try:
            field: Any = descriptor.__get__(value, type(value))

        except AttributeError:
            continue  # unset slot

        yield field


def _namespace(
    value: Any,
) -> Mapping[Any, Any] | None:
    try:
        namespace: Any = object.__getattribute__(value, "__dict__")

    except AttributeError:
        return None

    if isinstance(namespace, Mapping):
        return namespace  # pyright: ignore[reportUnknownVariableType]

    else:
        return None


@cache
def _slot_descriptors(
    cls: type[Any],
) -> tuple[Any, ...]:
    descriptors: list[Any] = []
    for base in cls.__mro__:
        slots: Any = base.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)

        for name in slots:
            if name in ("__dict__", "__weakref__"):
                continue  # not a field

            if name.startswith("__") and not name.endswith("__"):
                name = f"_{base.__name__.lstrip('_')}{name}"  # noqa: PLW2901

            descriptor: Any = base.__dict__.get(name)
            if isinstance(descriptor, MemberDescriptorType):
                descriptors.append(descriptor)

    return tuple(descriptors)
