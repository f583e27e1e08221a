"""Leveled logging facade with a replay buffer, on a loguru backend.

Public API - users should only import from this module.

Usage:
    import replaylog

    # Configure the module-level logger (stdout/stderr by default)
    replaylog.configure_logging(verbose=True, color=True, buffer=True)

    # Module-level logging
    replaylog.standard('Copying %d files', 12)
    replaylog.verbose_info('Only shown in verbose mode')
    replaylog.warn('Skipped %s', 'a.txt')

    # Replay everything that was logged, e.g. at exit
    print(replaylog.get_buffer())

    # Independent loggers with their own destinations
    logger = replaylog.Logger(out_stream, err_stream)
    logger.set_debug(True)
    logger.debug('x=%r', x)
"""
from replaylog._backend import intercept_stdlib
from replaylog._logger import Logger, NotInitializedError, get_logger
from replaylog.channels import Channel
from replaylog.colors import Color, colorize, decolorize
from replaylog.loggers import ChannelStream
from replaylog.modes import Flags, Mode
from replaylog.setup import configure_logging, get_default_logger

# Module-level convenience functions


def standard(msg: str, *args) -> None:
    """Log an unprefixed line."""
    get_default_logger()._emit(Channel.STANDARD, msg, args)


def standard_info(msg: str, *args) -> None:
    """Log an info line."""
    get_default_logger()._emit(Channel.INFO, msg, args)


def verbose(msg: str, *args) -> None:
    """Log an unprefixed line in verbose mode."""
    get_default_logger()._emit(Channel.STANDARD, msg, args, gate=Mode.VERBOSE)


def verbose_info(msg: str, *args) -> None:
    """Log an info line in verbose mode."""
    get_default_logger()._emit(Channel.INFO, msg, args, gate=Mode.VERBOSE)


def debug(msg: str, *args) -> None:
    """Log a debug line in debug mode."""
    get_default_logger()._emit(Channel.DEBUG, msg, args, gate=Mode.DEBUG)


def warn(msg: str, *args) -> None:
    """Log a warning line."""
    get_default_logger()._emit(Channel.WARNING, msg, args)


def error(msg: str, *args) -> None:
    """Log an error line."""
    get_default_logger()._emit(Channel.ERROR, msg, args)


def panic(msg: str, *args) -> None:
    """Log a panic line to stderr."""
    get_default_logger()._emit(Channel.PANIC, msg, args)


def get_buffer() -> str:
    """Return what the module-level logger has buffered."""
    return get_default_logger().get_buffer()


# Aliases
warning = warn


__all__ = [
    # Configuration
    'configure_logging',
    'intercept_stdlib',
    'Flags',
    'Mode',
    # Logger access
    'get_logger',
    'get_default_logger',
    'Logger',
    'NotInitializedError',
    'Channel',
    # Logging methods
    'standard',
    'standard_info',
    'verbose',
    'verbose_info',
    'debug',
    'warn',
    'warning',
    'error',
    'panic',
    'get_buffer',
    # Utilities
    'ChannelStream',
    'Color',
    'colorize',
    'decolorize',
]
