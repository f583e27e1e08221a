"""Mode register and line format flags."""
from enum import Flag, IntFlag, auto

__all__ = ['Flags', 'Mode']


class Mode(Flag):
    """Independent switches controlling what a Logger emits.

    Any combination is valid. A freshly initialized Logger has none set.
    """
    NONE = 0
    VERBOSE = auto()
    DEBUG = auto()
    COLOR = auto()
    BUFFER = auto()


class Flags(IntFlag):
    """Line format flags, shared by every channel of a Logger.

    >>> Flags.STD == Flags.DATE | Flags.TIME
    True
    """
    NONE = 0
    DATE = 1           # 2009/01/23
    TIME = 2           # 01:23:23
    MICROSECONDS = 4   # 01:23:23.123123, implies TIME
    LONGFILE = 8       # /a/b/c/d.py:23
    SHORTFILE = 16     # d.py:23, overrides LONGFILE
    UTC = 32           # date and time in UTC
    MSGPREFIX = 64     # prefix right before the message, not at line start
    STD = DATE | TIME


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
