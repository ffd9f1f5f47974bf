"""Diagnostic logging setup for the ``dsjob`` logger namespace.

Records go to stderr through Rich's ``RichHandler`` when Rich is
installed, or a plain ``StreamHandler`` otherwise.  Only the CLI layer
configures handlers; every other module just calls
``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging

LOGGER_NAME: str = "dsjob"

_PLAIN_FORMAT: str = "%(levelname)s %(name)s: %(message)s"


def _build_handler() -> logging.Handler:
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
        return handler
    return RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a stderr handler to the ``dsjob`` logger at *level*.

    Safe to call repeatedly: the handler is installed once and only the
    level is updated afterwards.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not logger.handlers:
        logger.addHandler(_build_handler())
        logger.propagate = False
    return logger
