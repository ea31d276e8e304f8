from deepfreeze.freezing.identity import IdentitySet
from deepfreeze.freezing.marking import frozen_origin, is_frozen, mark_frozen
from deepfreeze.freezing.members import is_structural, opaque_types, own_members, register_opaque
from deepfreeze.freezing.traversal import freeze

__all__ = (
    "IdentitySet",
    "freeze",
    "frozen_origin",
    "is_frozen",
    "is_structural",
    "mark_frozen",
    "opaque_types",
    "own_members",
    "register_opaque",
)
