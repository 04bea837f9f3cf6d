"""
Logging configuration for DiscoPoP Results.

Library modules only create loggers below ``discopop_results``; handlers are
installed by the command line through ``setup_logging``. Reader failures log
at WARNING, failed joins at ERROR, so ``normal`` shows why a category is
missing while ``quiet`` keeps stdout clean for ``--format json``.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "discopop_results"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

# Marks handlers installed here, so repeated setup replaces instead of stacking
_INSTALLED = "_discopop_results_handler"


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach a rich handler (and optionally a file handler) to the package logger.

    Args:
        verbosity: One of ``quiet``, ``normal``, ``verbose``
        log_file: Optional file path to append plain-text logs to

    Returns:
        The ``discopop_results`` logger
    """
    level = LEVELS[verbosity]
    verbose = verbosity == "verbose"

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in [h for h in logger.handlers if getattr(h, _INSTALLED, False)]:
        logger.removeHandler(handler)
        handler.close()

    # File paths often contain brackets, keep rich markup off
    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            markup=False,
            rich_tracebacks=True,
            show_path=verbose,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    for handler in handlers:
        setattr(handler, _INSTALLED, True)
        handler.setLevel(level)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger below ``discopop_results``; the package logger when ``name`` is None."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
