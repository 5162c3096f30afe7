"""Logging for spellgraph.

Modules log through ``get_logger(__name__)``, a child of the ``spellgraph``
logger. What gets reported:

- DEBUG from `spellgraph.algorithms.max_flow`: every augmenting path with the
  amount pushed, then the total flow.
- DEBUG from `spellgraph.spelling.speller`: the size of each spelling network
  and the tendency pair and spelling of every voice.
- WARNING from `spellgraph.spelling.speller`: a voice whose cut lands on a
  tendency pair with no spelling, and the spelling used instead.

Only warnings reach the handler by default; ``set_log_level("DEBUG")`` turns
on tracing. Records propagate, so applications (and pytest's caplog) see
them through their own handlers as well.
"""

import logging
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "spellgraph"

DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Set once the spellgraph logger has its handler
_ROOT_LOGGER_CONFIGURED = False


def setup_root_logger(
    level: int = logging.WARNING,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Give the ``spellgraph`` logger a single handler.

    Only the first call has an effect; later calls return immediately.

    Args:
        level: Level of the ``spellgraph`` logger.
        format_string: Record format; defaults to `DEFAULT_FORMAT`.
        handler: Handler to install; defaults to a stderr stream handler.
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Logger for a spellgraph module, typically ``get_logger(__name__)``."""
    setup_root_logger()
    return logging.getLogger(name)


def set_log_level(level: Union[int, str]) -> None:
    """Set the level of every spellgraph logger and of the spellgraph handler.

    Args:
        level: A `logging` level or its name, e.g. ``logging.DEBUG`` or ``"debug"``.

    Raises:
        ValueError: If ``level`` names no logging level.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level '{level}'")
        level = resolved

    setup_root_logger()
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


setup_root_logger()
