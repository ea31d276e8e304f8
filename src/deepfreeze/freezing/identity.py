from collections.abc import Iterable, Iterator, MutableSet
from copy import deepcopy
from typing import Any

__all__ = ("IdentitySet",)


class IdentitySet[Element](MutableSet[Element]):
    """
    A mutable set comparing its elements by identity instead of equality.

    Membership is keyed by ``id()``, so unhashable values (dicts, lists) can be
    stored and two equal but distinct values are separate elements. The set keeps
    strong references to its elements, which guarantees an identity is never
    recycled for another object while it is stored.

    Parameters
    ----------
    elements : Iterable[Element], optional
        Initial elements of the set
    """

    __slots__ = ("_elements",)

    def __init__(
        self,
        elements: Iterable[Element] = (),
        /,
    ) -> None:
        self._elements: dict[int, Element] = {id(element): element for element in elements}

    def __contains__(
        self,
        element: object,
    ) -> bool:
        return id(element) in self._elements

    def __iter__(self) -> Iterator[Element]:
        return iter(tuple(self._elements.values()))

    def __len__(self) -> int:
        return len(self._elements)

    def add(
        self,
        element: Element,
    ) -> None:
        self._elements[id(element)] = element

    def discard(
        self,
        element: Element,
    ) -> None:
        self._elements.pop(id(element), None)

    def clear(self) -> None:
        self._elements.clear()

    def copy(self) -> "IdentitySet[Element]":
        return IdentitySet(self._elements.values())

    def __copy__(self) -> "IdentitySet[Element]":
        return self.copy()

    def __deepcopy__(
        self,
        memo: dict[int, Any] | None,
    ) -> "IdentitySet[Element]":
        # keyed by identities of the copies
        return IdentitySet(deepcopy(element, memo) for element in self._elements.values())

    def __eq__(
        self,
        other: object,
    ) -> bool:
        if not isinstance(other, IdentitySet):
            return NotImplemented

        return self._elements.keys() == other._elements.keys()  # pyright: ignore[reportUnknownMemberType]

    __hash__ = None  # pyright: ignore[reportAssignmentType]

    def __repr__(self) -> str:
        return f"IdentitySet({len(self._elements)} elements)"

    @classmethod
    def _from_iterable(
        cls,
        it: Iterable[Any],
    ) -> "IdentitySet[Any]":
        return cls(it)
