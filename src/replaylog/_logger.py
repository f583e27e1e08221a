"""Logger facade - leveled channels, mode register and replay buffer.

Users interact with this module, never with loguru directly.
"""
from __future__ import annotations

import sys
import uuid
import weakref
from collections.abc import Mapping
from typing import IO, Any

from replaylog import config
from replaylog._backend import get_backend
from replaylog.channels import PANIC, ROUTED, Channel, ChannelState
from replaylog.colors import colorize
from replaylog.modes import Flags, Mode

__all__ = ['Logger', 'NotInitializedError', 'PROCESS_STDERR', 'get_logger']


class NotInitializedError(RuntimeError):
    """Raised when a Logger is used before initialize()."""


class _ProcessStderr:
    """Stream writing to whatever ``sys.stderr`` is at write time."""

    def write(self, message: str) -> None:
        sys.stderr.write(message)

    def flush(self) -> None:
        sys.stderr.flush()

    def __repr__(self) -> str:
        return '<process stderr>'


PROCESS_STDERR = _ProcessStderr()


def _format(msg: Any, args: tuple) -> str:
    """Apply printf-style substitution, marking bad pairs inline.

    >>> _format('x=%d', (1,))
    'x=1'
    >>> _format('100%', ())
    '100%'
    >>> _format('%(a)s-%(b)s', ({'a': 1, 'b': 2},))
    '1-2'
    >>> _format('x=%d', ('one',))
    "x=%d %!(BADFORMAT 'one')"
    """
    if not args:
        return str(msg)
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        args = args[0]
    try:
        return str(msg) % args
    except (TypeError, ValueError, KeyError, OverflowError):
        values = args.values() if isinstance(args, Mapping) else args
        return f"{msg} %!(BADFORMAT {', '.join(map(repr, values))})"


class Logger:
    """Leveled logging facade over six output channels.

    Standard, info and warning lines go to the standard destination; debug
    and error lines go to the error destination; panic lines always go to
    the process stderr. A mode register gates verbose and debug output,
    color, and the replay buffer.

    Not thread-safe: the mode register and the buffer are plain attributes.

    >>> import io
    >>> out, err = io.StringIO(), io.StringIO()
    >>> logger = Logger(out, err)
    >>> logger.set_flags(Flags.MSGPREFIX)
    >>> logger.enable_buffer()
    >>> logger.warn('disk at %d%%', 91)
    >>> out.getvalue()
    'WARN:  disk at 91%\\n'
    >>> logger.get_buffer()
    'disk at 91%'
    >>> logger.close()
    """

    def __init__(self, out: IO[str] | None = None, err: IO[str] | None = None):
        self._owner = uuid.uuid4().hex
        self._channels: dict[Channel, ChannelState] = {}
        self._mode = Mode.NONE
        self._colored_prefixes = False
        self._buffer: list[str] = []
        weakref.finalize(self, get_backend().remove_owner, self._owner)
        if out is not None and err is not None:
            self.initialize(out, err)

    #
    # Channel wiring
    #

    def initialize(self, out: IO[str], err: IO[str]) -> None:
        """Bind all channels and reset mode and buffer.

        Panic is bound to the process stderr, looked up on every write.
        """
        get_backend().remove_owner(self._owner)
        self._channels = {}
        for channel in Channel:
            if channel is PANIC:
                destination = PROCESS_STDERR
            elif channel.uses_error_output:
                destination = err
            else:
                destination = out
            self._channels[channel] = ChannelState(channel, destination)
            self._attach(self._channels[channel])
        self._mode = Mode.NONE
        self._colored_prefixes = False
        self._buffer = []

    @property
    def initialized(self) -> bool:
        return bool(self._channels)

    def set_output(self, out: IO[str], err: IO[str]) -> None:
        """Rebind every channel except panic."""
        self._require_initialized()
        for channel in ROUTED:
            state = self._channels[channel]
            state.destination = err if channel.uses_error_output else out
            self._attach(state)

    def set_flags(self, flags: Flags | int) -> None:
        """Apply one set of line format flags to all six channels."""
        self._require_initialized()
        for state in self._channels.values():
            state.flags = Flags(flags)
            self._attach(state)

    @property
    def flags(self) -> Flags:
        self._require_initialized()
        return self._channels[Channel.STANDARD].flags

    def destination(self, channel: Channel) -> IO[str]:
        """Stream a channel currently writes to."""
        self._require_initialized()
        return self._channels[Channel(channel)].destination

    def prefix(self, channel: Channel) -> str:
        """Prefix as it renders right now, colored or not."""
        channel = Channel(channel)
        if self._colored_prefixes and self._color_active:
            return colorize(channel.prefix, channel.color)
        return channel.prefix

    def set_color_prefix(self) -> None:
        """Color the info, warning, debug, error and panic prefixes.

        No-op while the color mode is off. Prefix color follows the color
        mode afterwards: ``set_color(False)`` renders plain prefixes again.
        """
        if Mode.COLOR in self._mode:
            self._colored_prefixes = True

    def set_interactive(self) -> None:
        """Drop date and time columns and color the prefixes."""
        self.set_flags(Flags.MSGPREFIX)
        self.set_color_prefix()

    def close(self) -> None:
        """Detach from the backend. Destinations are left open."""
        get_backend().remove_owner(self._owner)
        self._channels = {}

    def _attach(self, state: ChannelState) -> None:
        backend = get_backend()
        if state.sink_id is not None:
            backend.remove_sink(self._owner, state.sink_id)
        state.sink_id = backend.add_channel_sink(
            self._owner, state.channel, state.destination, state.flags)

    def _require_initialized(self) -> None:
        if not self._channels:
            raise NotInitializedError('Logger.initialize() must be called first')

    #
    # Mode register
    #

    @property
    def mode(self) -> Mode:
        return self._mode

    def set_mode(self, mode: Mode, on: bool = True) -> None:
        _check_mode(mode)
        self._mode = self._mode | mode if on else self._mode & ~mode

    def clear_mode(self, mode: Mode) -> None:
        self.set_mode(mode, False)

    def toggle_mode(self, mode: Mode) -> None:
        _check_mode(mode)
        self._mode ^= mode

    def has_mode(self, mode: Mode) -> bool:
        _check_mode(mode)
        return mode in self._mode

    def set_verbose(self, on: bool) -> None:
        self.set_mode(Mode.VERBOSE, on)

    def set_debug(self, on: bool) -> None:
        self.set_mode(Mode.DEBUG, on)

    def set_color(self, on: bool) -> None:
        self.set_mode(Mode.COLOR, on)

    def enable_buffer(self) -> None:
        self.set_mode(Mode.BUFFER)

    def disable_buffer(self) -> None:
        self.clear_mode(Mode.BUFFER)

    @property
    def _color_active(self) -> bool:
        return Mode.COLOR in self._mode and not config.settings.no_color

    #
    # Replay buffer
    #

    def add_buffer(self, msg: str, *args) -> None:
        """Append a formatted line to the buffer without writing it."""
        if Mode.BUFFER in self._mode:
            self._buffer.append(_format(msg, args))

    def get_buffer(self) -> str:
        """Return buffered lines, oldest first, newline separated."""
        return '\n'.join(self._buffer)

    #
    # Emission
    #

    def standard(self, msg: str, *args) -> None:
        self._emit(Channel.STANDARD, msg, args)

    def standard_info(self, msg: str, *args) -> None:
        self._emit(Channel.INFO, msg, args)

    def verbose(self, msg: str, *args) -> None:
        """Standard line, only in verbose mode."""
        self._emit(Channel.STANDARD, msg, args, gate=Mode.VERBOSE)

    def verbose_info(self, msg: str, *args) -> None:
        """Info line, only in verbose mode."""
        self._emit(Channel.INFO, msg, args, gate=Mode.VERBOSE)

    def debug(self, msg: str, *args) -> None:
        """Debug line, only in debug mode."""
        self._emit(Channel.DEBUG, msg, args, gate=Mode.DEBUG)

    def warn(self, msg: str, *args) -> None:
        self._emit(Channel.WARNING, msg, args)

    def error(self, msg: str, *args) -> None:
        self._emit(Channel.ERROR, msg, args)

    def panic(self, msg: str, *args) -> None:
        """Write to stderr immediately. Never buffered, never raises."""
        self._emit(Channel.PANIC, msg, args)

    # Aliases
    warning = warn

    def _emit(self, channel: Channel, msg: str, args: tuple,
              gate: Mode = Mode.NONE, depth: int = 2) -> None:
        self._require_initialized()
        if gate not in self._mode:
            return
        text = _format(msg, args)
        if channel is not PANIC and Mode.BUFFER in self._mode:
            self._buffer.append(text)
        # loguru ends every line itself
        text = text.removesuffix('\n')
        if self._color_active:
            text = colorize(text, channel.color)
        get_backend().write(self._owner, channel, self.prefix(channel), text,
                            depth=depth)


def _check_mode(mode: Any) -> None:
    if not isinstance(mode, Mode):
        raise ValueError(f'Expected a Mode, got {mode!r}')


def get_logger(out: IO[str] | None = None, err: IO[str] | None = None) -> Logger:
    """Get a logger instance, initialized when both destinations are given.

    Args:
        out: Destination for standard, info and warning lines
        err: Destination for debug and error lines

    Returns
        Logger instance

    Examples
        >>> import sys
        >>> log = get_logger(sys.stdout, sys.stderr)
        >>> log.set_flags(0)
        >>> log.standard('Hello')  # doctest: +SKIP
               Hello
        >>> log.close()
    """
    return Logger(out, err)
