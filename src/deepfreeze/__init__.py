from deepfreeze.freezing import (
    IdentitySet,
    freeze,
    frozen_origin,
    is_frozen,
    is_structural,
    mark_frozen,
    opaque_types,
    own_members,
    register_opaque,
)
from deepfreeze.types import MISSING, Missing, is_missing, not_missing
from deepfreeze.utils import getenv_bool, setup_logging

__all__ = (
    "MISSING",
    "IdentitySet",
    "Missing",
    "freeze",
    "frozen_origin",
    "getenv_bool",
    "is_frozen",
    "is_missing",
    "is_structural",
    "mark_frozen",
    "not_missing",
    "opaque_types",
    "own_members",
    "register_opaque",
    "setup_logging",
)
