from deepfreeze.types.missing import MISSING, Missing, is_missing, not_missing

__all__ = (
    "MISSING",
    "Missing",
    "is_missing",
    "not_missing",
)
