from collections import deque
from dataclasses import dataclass
from typing import Any

import pytest

from deepfreeze import frozen_origin, is_frozen, mark_frozen


class Record(dict[str, Any]):
    pass


class Queue(deque[Any]):
    pass


class Point:
    __slots__ = ("x", "y")

    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y


def test_mark_frozen_preserves_identity() -> None:
    record = Record(a=1)
    record_id = id(record)

    assert mark_frozen(record)
    assert id(record) == record_id
    assert isinstance(record, Record)
    assert type(record) is not Record
    assert type(record).__qualname__ == Record.__qualname__
    assert type(record).__module__ == Record.__module__


def test_mark_frozen_is_shallow() -> None:
    record = Record(nested=Record())

    mark_frozen(record)

    assert is_frozen(record)
    assert not is_frozen(record["nested"])
    record["nested"]["value"] = 1
    assert record == {"nested": {"value": 1}}


def test_mark_frozen_is_idempotent() -> None:
    record = Record()

    assert mark_frozen(record)
    variant = type(record)
    assert mark_frozen(record)
    assert type(record) is variant


def test_frozen_variants_are_shared_per_class() -> None:
    first = Record()
    second = Record()

    mark_frozen(first)
    mark_frozen(second)

    assert type(first) is type(second)
    assert frozen_origin(type(first)) is Record


def test_frozen_origin_of_regular_class() -> None:
    assert frozen_origin(Record) is Record
    assert frozen_origin(int) is int


def test_frozen_slotted_instance_keeps_fields() -> None:
    point = Point(1, 2)

    assert mark_frozen(point)
    assert (point.x, point.y) == (1, 2)

    with pytest.raises(AttributeError):
        point.x = 3


def test_frozen_deque_rejects_modification() -> None:
    queue = Queue([1, 2])

    mark_frozen(queue)

    with pytest.raises(AttributeError):
        queue.append(3)

    with pytest.raises(AttributeError):
        queue.appendleft(0)

    with pytest.raises(AttributeError):
        queue.rotate(1)

    assert list(queue) == [1, 2]


def test_frozen_value_rejects_class_reassignment() -> None:
    record = Record()

    mark_frozen(record)

    with pytest.raises(AttributeError):
        record.__class__ = Record

    assert record.__class__ is Record


def test_marks_frozen_dataclass() -> None:
    @dataclass(frozen=True)
    class Settings:
        name: str

    settings = Settings(name="test")

    assert mark_frozen(settings)
    assert is_frozen(settings)
    assert type(settings) is Settings
    assert settings.name == "test"
    assert repr(settings) == "test_marks_frozen_dataclass.<locals>.Settings(name='test')"


@pytest.mark.parametrize(
    "value",
    [
        {},
        [],
        set(),
        bytearray(b"abc"),
    ],
)
def test_exact_builtin_containers_are_not_markable(value: Any) -> None:
    assert not mark_frozen(value)
    assert not is_frozen(value)
    assert type(value) in (dict, list, set, bytearray)


@pytest.mark.parametrize(
    "value",
    [
        None,
        1,
        "text",
        b"bytes",
        (1, 2),
        frozenset({1}),
        range(3),
        object(),
    ],
)
def test_immutable_values_are_frozen(value: Any) -> None:
    assert is_frozen(value)
    assert mark_frozen(value)


def test_functions_and_classes_are_not_frozen() -> None:
    def function() -> None:
        pass

    assert not is_frozen(function)
    assert not is_frozen(Record)
    assert not mark_frozen(Record)


def test_frozen_variant_constructs_regular_instances() -> None:
    record = Record(a=1)
    mark_frozen(record)

    created = type(record)(b=2)

    assert type(created) is Record
    assert created == {"b": 2}
    assert not is_frozen(created)

    with pytest.raises(AttributeError):
        record.__init__(b=2)

    assert record == {"a": 1}
