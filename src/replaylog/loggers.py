"""Stream adapters for capturing output."""
from __future__ import annotations

import io
from typing import TYPE_CHECKING

from replaylog.channels import Channel
from replaylog.modes import Mode

if TYPE_CHECKING:
    from replaylog._logger import Logger

__all__ = ['ChannelStream']

_GATES = {
    Channel.DEBUG: Mode.DEBUG,
}


class ChannelStream:
    """File-like object writing each line to one channel of a Logger.

    Useful with ``contextlib.redirect_stdout`` to send print statements
    through the facade, where they are prefixed, gated and buffered like
    any other line. Placeholders isatty and fileno mimic python stream.

    Lines that do not end in a newline are held until one arrives or
    until flush().
    """

    def __init__(self, logger: Logger, channel: Channel = Channel.STANDARD,
                 verbose: bool = False) -> None:
        self.logger = logger
        self.channel = Channel(channel)
        self.gate = Mode.VERBOSE if verbose else _GATES.get(self.channel, Mode.NONE)
        self.linebuf = ''

    def write(self, buf: str) -> int:
        """Write complete buffer lines to the logger."""
        self.linebuf += buf
        *lines, self.linebuf = self.linebuf.split('\n')
        for line in lines:
            self._log(line)
        return len(buf)

    def flush(self) -> None:
        """Emit a pending partial line."""
        if self.linebuf:
            line, self.linebuf = self.linebuf, ''
            self._log(line)

    def _log(self, line: str) -> None:
        msg = line.rstrip()
        if msg:
            self.logger._emit(self.channel, msg, (), gate=self.gate, depth=3)

    def isatty(self) -> bool:
        """Return False as this is not a TTY.
        """
        return False

    def fileno(self) -> int:
        """Raise UnsupportedOperation as this is not a real file.
        """
        raise io.UnsupportedOperation('fileno')
