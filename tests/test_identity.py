from copy import deepcopy

from deepfreeze import IdentitySet


def test_compares_elements_by_identity() -> None:
    first = {"a": 1}
    second = {"a": 1}
    identities = IdentitySet([first])

    assert first in identities
    assert second not in identities
    assert first == second


def test_accepts_unhashable_elements() -> None:
    identities = IdentitySet[object]()
    elements = [[], {}, set()]

    for element in elements:
        identities.add(element)

    identities.add(elements[0])

    assert len(identities) == 3
    assert list(identities) == elements


def test_discard_removes_only_the_same_object() -> None:
    element = [1]
    identities = IdentitySet([element])

    identities.discard([1])
    assert len(identities) == 1

    identities.discard(element)
    assert len(identities) == 0
    assert element not in identities


def test_keeps_elements_alive() -> None:
    identities = IdentitySet[object]()
    identities.add([1, 2, 3])

    assert list(identities) == [[1, 2, 3]]


def test_copy_is_independent() -> None:
    element = {}
    identities = IdentitySet([element])

    copied = identities.copy()
    copied.clear()

    assert element in identities
    assert len(copied) == 0


def test_set_operations_preserve_identity_semantics() -> None:
    shared = []
    first = IdentitySet([shared, []])
    second = IdentitySet([shared])

    common = first & second

    assert isinstance(common, IdentitySet)
    assert list(common) == [shared]
    assert second <= first
    assert first != second


def test_deepcopy_copies_elements() -> None:
    element = {"a": 1}
    identities = IdentitySet([element])

    copied = deepcopy(identities)

    assert element not in copied
    assert len(copied) == 1
