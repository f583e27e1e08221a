"""Logging configuration for the module-level default logger.
"""
from __future__ import annotations

import sys
from typing import IO

from replaylog import config as config_log
from replaylog._backend import intercept_stdlib
from replaylog._logger import Logger

__all__ = [
    'configure_logging',
    'get_default_logger',
]

# Module-level logger instance
_default_logger: Logger | None = None


def get_default_logger() -> Logger:
    """Get the module-level logger, configuring it from settings on first use."""
    if _default_logger is None:
        configure_logging()
    return _default_logger


def configure_logging(
    out: IO[str] | None = None,
    err: IO[str] | None = None,
    *,
    verbose: bool | None = None,
    debug: bool | None = None,
    color: bool | None = None,
    buffer: bool | None = None,
    interactive: bool | None = None,
    intercept: list[str] | bool = False,
) -> Logger:
    """Configure the module-level logger.

    Args:
        out: Standard destination (defaults to ``sys.stdout``)
        err: Error destination (defaults to ``sys.stderr``)
        verbose: Verbose mode, ``REPLAYLOG_VERBOSE`` when None
        debug: Debug mode, ``REPLAYLOG_DEBUG`` when None
        color: Color mode, ``REPLAYLOG_COLOR`` when None
        buffer: Replay buffer, ``REPLAYLOG_BUFFER`` when None
        interactive: Terminal layout, ``REPLAYLOG_INTERACTIVE`` when None
        intercept: True routes the stdlib root logger here; a list of names
                   routes only those stdlib loggers.

    Returns
        The configured Logger. Reconfiguring reuses it and resets its
        mode and buffer.
    """
    global _default_logger

    settings = config_log.settings
    if _default_logger is None:
        _default_logger = Logger()
    logger = _default_logger
    logger.initialize(sys.stdout if out is None else out,
                      sys.stderr if err is None else err)

    logger.set_verbose(settings.verbose if verbose is None else verbose)
    logger.set_debug(settings.debug if debug is None else debug)
    logger.set_color(settings.color if color is None else color)
    if settings.buffer if buffer is None else buffer:
        logger.enable_buffer()

    if settings.interactive if interactive is None else interactive:
        logger.set_interactive()
    else:
        logger.set_color_prefix()

    if intercept:
        intercept_stdlib(logger, None if intercept is True else list(intercept))
    return logger
