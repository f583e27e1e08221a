"""Loguru backend - internal implementation detail.

This module is NOT part of the public API. Users should never import from here.
To switch backends, only this file needs to change.
"""
from __future__ import annotations

import inspect
import logging
from collections import defaultdict
from contextlib import suppress
from typing import IO, TYPE_CHECKING

from loguru import logger as _loguru
from replaylog.channels import Channel
from replaylog.modes import Flags, Mode

if TYPE_CHECKING:
    from replaylog._logger import Logger

__all__ = ['get_backend', 'build_format', 'intercept_stdlib', 'InterceptHandler']


def build_format(flags: Flags) -> str:
    """Build the loguru format template for a set of line flags.

    The channel prefix travels in ``record['extra']['prefix']`` so it is
    substituted, never parsed as markup.

    >>> build_format(Flags.NONE)
    '{extra[prefix]}{message}'
    >>> build_format(Flags.DATE | Flags.TIME | Flags.MSGPREFIX)
    '{time:YYYY/MM/DD} {time:HH:mm:ss} {extra[prefix]}{message}'
    >>> build_format(Flags.TIME | Flags.SHORTFILE)
    '{extra[prefix]}{time:HH:mm:ss} {file.name}:{line}: {message}'
    """
    utc = '!UTC' if flags & Flags.UTC else ''
    header = ''
    if flags & Flags.DATE:
        header += f'{{time:YYYY/MM/DD{utc}}} '
    if flags & (Flags.TIME | Flags.MICROSECONDS):
        clock = 'HH:mm:ss.SSSSSS' if flags & Flags.MICROSECONDS else 'HH:mm:ss'
        header += f'{{time:{clock}{utc}}} '
    if flags & Flags.SHORTFILE:
        header += '{file.name}:{line}: '
    elif flags & Flags.LONGFILE:
        header += '{file.path}:{line}: '
    if flags & Flags.MSGPREFIX:
        return header + '{extra[prefix]}{message}'
    return '{extra[prefix]}' + header + '{message}'


class InterceptHandler(logging.Handler):
    """Handler that intercepts stdlib logging and forwards to a facade Logger.

    This allows existing code using logging.getLogger('job').info(...)
    to land on the facade channels, subject to its verbose/debug gates
    and its replay buffer.
    """

    # Checked from the most severe down, first match wins
    routes = (
        (logging.CRITICAL, Channel.PANIC, Mode.NONE),
        (logging.ERROR, Channel.ERROR, Mode.NONE),
        (logging.WARNING, Channel.WARNING, Mode.NONE),
        (logging.INFO, Channel.INFO, Mode.NONE),
        (logging.NOTSET, Channel.DEBUG, Mode.DEBUG),
    )

    def __init__(self, target: Logger) -> None:
        super().__init__()
        self.target = target

    def route(self, levelno: int) -> tuple[Channel, Mode]:
        for threshold, channel, gate in self.routes:
            if levelno >= threshold:
                return channel, gate
        return Channel.DEBUG, Mode.DEBUG

    def emit(self, record: logging.LogRecord) -> None:
        channel, gate = self.route(record.levelno)
        try:
            msg = record.getMessage()
        except (TypeError, ValueError, OverflowError):
            msg = f'{record.msg} %!(BADFORMAT {record.args})'

        # Find caller from where the log call originated
        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        try:
            self.target._emit(channel, msg, (), gate=gate, depth=depth + 1)
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


class LoguruBackend:
    """Loguru-based output backend.

    Every facade channel is one loguru sink. Sinks are owned by a logger
    token so several facade loggers can share the process-wide loguru core.
    """

    def __init__(self):
        self._sink_ids: dict[str, list[int]] = defaultdict(list)
        # loguru's default stderr sink would duplicate every channel line,
        # sinks the host added itself are left alone
        with suppress(ValueError):
            _loguru.remove(0)

    def reset(self) -> None:
        """Remove every sink this backend added and start fresh."""
        for owner in list(self._sink_ids):
            self.remove_owner(owner)

    def add_channel_sink(self, owner: str, channel: Channel,
                         destination: IO[str], flags: Flags) -> int:
        """Add a sink writing one channel of one owner to destination."""
        def only_channel(record: dict) -> bool:
            extra = record['extra']
            return extra.get('owner') == owner and extra.get('channel') == channel.value

        sink_id = _loguru.add(
            destination,
            level=0,
            format=build_format(flags),
            filter=only_channel,
            colorize=False,
            backtrace=False,
            diagnose=False,
            enqueue=False,
            catch=True,
        )
        self._sink_ids[owner].append(sink_id)
        return sink_id

    def remove_sink(self, owner: str, sink_id: int) -> None:
        """Remove a sink by ID."""
        ids = self._sink_ids.get(owner, [])
        if sink_id in ids:
            ids.remove(sink_id)
            with suppress(ValueError):
                _loguru.remove(sink_id)

    def remove_owner(self, owner: str) -> None:
        """Remove every sink an owner registered."""
        for sink_id in self._sink_ids.pop(owner, []):
            # already gone if the host called logger.remove() itself
            with suppress(ValueError):
                _loguru.remove(sink_id)

    def sink_ids(self, owner: str) -> list[int]:
        return list(self._sink_ids.get(owner, []))

    def write(self, owner: str, channel: Channel, prefix: str, text: str,
              depth: int = 0) -> None:
        """Write one rendered message to a channel.

        depth counts frames above the caller, as for ``logger.opt``.
        """
        _loguru.bind(owner=owner, channel=channel.value, prefix=prefix).opt(
            depth=depth + 1
        ).log(channel.level, text)


# Singleton backend instance
_backend: LoguruBackend | None = None


def get_backend() -> LoguruBackend:
    """Get the singleton backend instance."""
    global _backend
    if _backend is None:
        _backend = LoguruBackend()
    return _backend


def intercept_stdlib(target: Logger, logger_names: list[str] | None = None) -> None:
    """Set up stdlib logging interception.

    After calling this, logging.getLogger('name').info(...) will be
    routed through the facade Logger ``target``.

    Args:
        target: Facade logger receiving the records.
        logger_names: Specific logger names to intercept. If None,
                      intercepts the root logger (all loggers).
    """
    if not logger_names:
        logging.basicConfig(handlers=[InterceptHandler(target)], level=0, force=True)
        return

    for name in logger_names:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = [InterceptHandler(target)]
        stdlib_logger.propagate = False
        stdlib_logger.setLevel(logging.DEBUG)  # Let the facade gates filter
