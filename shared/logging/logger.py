"""Shared logger utility for all services.

Until a service installs its JSON handler through
``shared.logging.json.configure_logging``, loggers fall back to plain lines
on stderr so nothing is lost during startup.
"""

from __future__ import annotations

import logging
import sys

from shared.logging.json import PLAIN_FORMAT

_configured = False


def get_logger(name: str, auto_configure: bool = True) -> logging.Logger:
    """Return the named logger, installing the stderr fallback on first use."""
    global _configured

    if auto_configure and not _configured:
        logging.basicConfig(level=logging.INFO, format=PLAIN_FORMAT, stream=sys.stderr)
        _configured = True

    logger = logging.getLogger(name)
    logger.propagate = True
    return logger


def mark_configured():
    """Called by configure_logging once the service handler is in place."""
    global _configured
    _configured = True
