from deepfreeze.utils.env import getenv_bool
from deepfreeze.utils.logs import setup_logging

__all__ = (
    "getenv_bool",
    "setup_logging",
)
