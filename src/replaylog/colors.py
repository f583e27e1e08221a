"""ANSI color helpers.

Pure functions only: nothing here holds state, callers pass the color they
want on every call.
"""
from __future__ import annotations

import re
import sys
from enum import Enum

if sys.platform == 'win32':
    try:
        import colorama
        colorama.just_fix_windows_console()
    except ImportError:
        pass

__all__ = [
    'ANSI_CLEAR',
    'ANSI_GREEN',
    'ANSI_RED',
    'ANSI_YELLOW',
    'Color',
    'colorize',
    'decolorize',
]

ANSI_RED = '\x1b[31m'
ANSI_GREEN = '\x1b[32m'
ANSI_YELLOW = '\x1b[33m'
ANSI_CLEAR = '\x1b[0m'

_ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;]*m')


class Color(Enum):
    """Colors a channel may be rendered in."""
    NONE = ''
    RED = ANSI_RED
    GREEN = ANSI_GREEN
    YELLOW = ANSI_YELLOW


def colorize(text: str, color: Color) -> str:
    """Wrap text in the escape sequence for color.

    >>> colorize('INFO:  ', Color.GREEN)
    '\\x1b[32mINFO:  \\x1b[0m'
    >>> colorize('plain', Color.NONE)
    'plain'
    """
    if color is Color.NONE or not text:
        return text
    return f'{color.value}{text}{ANSI_CLEAR}'


def decolorize(text: str) -> str:
    """Strip every ANSI color sequence from text.

    >>> decolorize(colorize('WARN:  ', Color.YELLOW))
    'WARN:  '
    """
    return _ANSI_ESCAPE.sub('', text)


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
