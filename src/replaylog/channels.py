"""Channel table entries for the Logger facade."""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import IO

from replaylog.colors import Color
from replaylog.modes import Flags

__all__ = ['Channel', 'ChannelState', 'DEFAULT_FLAGS', 'PANIC', 'ROUTED']


class Channel(StrEnum):
    """Output channels, one per severity."""
    STANDARD = 'standard'
    INFO = 'info'
    WARNING = 'warning'
    DEBUG = 'debug'
    ERROR = 'error'
    PANIC = 'panic'

    @property
    def prefix(self) -> str:
        """Fixed-width line prefix."""
        return _PREFIXES[self]

    @property
    def color(self) -> Color:
        return _COLORS[self]

    @property
    def level(self) -> str:
        """loguru level the channel logs at."""
        return _LEVELS[self]

    @property
    def uses_error_output(self) -> bool:
        """Whether the channel writes to the error destination."""
        return self in {Channel.DEBUG, Channel.ERROR, Channel.PANIC}


_PREFIXES = {
    Channel.STANDARD: '       ',
    Channel.INFO: 'INFO:  ',
    Channel.WARNING: 'WARN:  ',
    Channel.DEBUG: 'DEBUG: ',
    Channel.ERROR: 'ERROR: ',
    Channel.PANIC: 'PANIC: ',
}

_COLORS = {
    Channel.STANDARD: Color.NONE,
    Channel.INFO: Color.GREEN,
    Channel.WARNING: Color.YELLOW,
    Channel.DEBUG: Color.RED,
    Channel.ERROR: Color.RED,
    Channel.PANIC: Color.RED,
}

_LEVELS = {
    Channel.STANDARD: 'INFO',
    Channel.INFO: 'INFO',
    Channel.WARNING: 'WARNING',
    Channel.DEBUG: 'DEBUG',
    Channel.ERROR: 'ERROR',
    Channel.PANIC: 'CRITICAL',
}

# Panic is pinned to the process stderr; only the other five follow set_output.
PANIC = Channel.PANIC
ROUTED = tuple(c for c in Channel if c is not PANIC)

DEFAULT_FLAGS = Flags.DATE | Flags.TIME | Flags.MSGPREFIX


@dataclass
class ChannelState:
    """Destination, format flags and loguru sink of one channel."""
    channel: Channel
    destination: IO[str]
    flags: Flags = DEFAULT_FLAGS
    sink_id: int | None = None
