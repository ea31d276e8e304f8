from logging import DEBUG, Logger, getLogger
from typing import Any, Final

from deepfreeze.freezing.identity import IdentitySet
from deepfreeze.freezing.marking import mark_frozen
from deepfreeze.freezing.members import is_structural, own_members
from deepfreeze.types import MISSING

__all__ = ("freeze",)

_logger: Final[Logger] = getLogger(__name__)


def freeze[Value](
    value: Value,
    /,
    visited: IdentitySet[Any] | None = None,
) -> Value:
    """
    Deeply freeze a value and everything reachable through its own members.

    Every structural value reachable from ``value`` (containers, instances with
    attributes or slots, functions with attached attributes) is marked immutable
    exactly once, in place. Cycles and shared references are handled through the
    identity based ``visited`` set, which is filled before members of a value are
    visited. Already frozen values are still traversed. Members inherited from
    classes are never visited. Absence markers, primitives and opaque handles are
    returned untouched.

    The walk uses an explicit stack, so the depth of the graph is not limited by
    the interpreter recursion limit.

    Parameters
    ----------
    value : Value
        The root of the graph to freeze
    visited : IdentitySet[Any] | None, optional
        Values to treat as already processed; it is updated with every structural
        value visited by this call. A fresh set is used when not provided.

    Returns
    -------
    Value
        The same ``value`` object

    Notes
    -----
    - Freezing never raises, values which can't be marked in place (exact
      builtin containers, function objects, classes refusing subclassing) are
      left mutable while their members are still frozen
    - Use ``is_frozen`` to check the outcome for a particular value
    """
    if value is None or value is MISSING:
        return value

    if visited is None:
        visited = IdentitySet()

    frozen: int = 0
    unmarked: int = 0
    pending: list[Any] = [value]
    while pending:
        current: Any = pending.pop()
        if current is None or current is MISSING:
            continue

        elif not is_structural(current):
            continue  # primitive or opaque

        elif current in visited:
            continue  # cycle or shared reference

        visited.add(current)
        if mark_frozen(current):
            frozen += 1

        else:
            unmarked += 1

        pending.extend(own_members(current))

    if _logger.isEnabledFor(DEBUG) and (frozen or unmarked):
        _logger.debug(
            "Froze %d values of %s graph, %d values could not be marked",
            frozen,
            type(value).__qualname__,
            unmarked,
        )

    return value
