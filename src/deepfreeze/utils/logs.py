from logging.config import dictConfig
from typing import Any, Final

from deepfreeze.utils.env import getenv_bool

__all__ = ("setup_logging",)

_PACKAGE_LOGGER: Final[str] = "deepfreeze"


def setup_logging(
    *loggers: str,
    time: bool = True,
    debug: bool | None = None,
    debug_freezing: bool | None = None,
    disable_existing_loggers: bool = False,
) -> None:
    """\
    Setup console logging for an application freezing its values.

    The "deepfreeze" logger is always configured, its DEBUG records report each
    freeze call (values frozen and values which could not be marked) and every
    class which can't take a frozen variant.

    Parameters
    ----------
    *loggers: str
        names of additional application loggers to configure.
    time: bool = True
        include timestamps in logs (emits local timezone offset).
    debug: bool | None = None
        include debug logs of the application, resolved from DEBUG_LOGGING env
        (falling back to __debug__) when not provided.
    debug_freezing: bool | None = None
        include debug logs of the freezer, resolved from DEBUG_FREEZING env
        (falling back to ``debug``) when not provided.
    disable_existing_loggers: bool = False
        disable other loggers which were created before calling the setup,
        freezer module loggers are kept enabled either way.

    NOTE: this function should be run only once on application start
    """
    if debug is None:
        debug = getenv_bool("DEBUG_LOGGING", __debug__)

    if debug_freezing is None:
        debug_freezing = getenv_bool("DEBUG_FREEZING", debug)

    level: str = "DEBUG" if debug else "INFO"
    dictConfig(
        config={
            "version": 1,
            "disable_existing_loggers": disable_existing_loggers,
            "formatters": {
                "standard": _formatter(time=time),
            },
            "handlers": {
                "console": {
                    "level": "DEBUG",  # loggers decide what passes
                    "formatter": "standard",
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                **{
                    name: _logger_config(level=level)
                    for name in loggers
                },
                _PACKAGE_LOGGER: _logger_config(level="DEBUG" if debug_freezing else "INFO"),
            },
            "root": {
                "handlers": ["console"],
                "level": level,
            },
        },
    )


def _formatter(
    *,
    time: bool,
) -> dict[str, Any]:
    if time:
        return {
            "format": "%(asctime)s [%(levelname)-4s] [%(name)s] %(message)s",
            "datefmt": "%d/%b/%Y:%H:%M:%S %z",
        }

    else:
        return {
            "format": "[%(levelname)-4s] [%(name)s] %(message)s",
        }


def _logger_config(
    *,
    level: str,
) -> dict[str, Any]:
    return {
        "handlers": ["console"],
        "level": level,
        "propagate": False,
    }
