import logging
from collections.abc import Generator

import pytest


@pytest.fixture
def restore_logging() -> Generator[None]:
    """
    Restore state of loggers changed by logging setup.
    """
    loggers = [
        logging.getLogger(),
        logging.getLogger("deepfreeze"),
        logging.getLogger("deepfreeze-tests"),
    ]
    states = [
        (logger.level, list(logger.handlers), logger.propagate, logger.disabled)
        for logger in loggers
    ]
    yield
    for logger, (level, handlers, propagate, disabled) in zip(loggers, states, strict=True):
        logger.setLevel(level)
        logger.handlers[:] = handlers
        logger.propagate = propagate
        logger.disabled = disabled
