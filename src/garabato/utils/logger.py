"""Logger naming and the shared parse-fallback message.

Every module logs under the ``garabato`` package logger, so one
``logging.getLogger("garabato")`` call configures the whole parser. The
library itself never attaches handlers or sets levels.

Example:
    >>> from garabato.utils.logger import get_logger
    >>> get_logger("parsing.inline.links").name
    'garabato.parsing.inline.links'
"""

from __future__ import annotations

import logging

PACKAGE_LOGGER = "garabato"


def get_logger(name: str) -> logging.Logger:
    """Return the package logger, or a child of it for name.

    Module names already under the package (``__name__`` inside garabato)
    are used as they are; any other name becomes a child of the package
    logger.
    """
    if name == PACKAGE_LOGGER:
        return logging.getLogger(PACKAGE_LOGGER)
    suffix = name.removeprefix(f"{PACKAGE_LOGGER}.")
    return logging.getLogger(PACKAGE_LOGGER).getChild(suffix)


def log_literal_fallback(logger: logging.Logger, limit: int, offset: int, literal: str) -> None:
    """Record that the nesting limit turned a delimiter into literal text."""
    logger.debug("Nesting limit %d reached at offset %d; %r kept literal", limit, offset, literal)
