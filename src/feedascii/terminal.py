import os
import sys

DEFAULT_SIZE = (80, 24)


def get_terminal_size() -> tuple[int, int]:
    """Return (columns, rows) of the terminal, or (80, 24) if not a tty.

    Both values are at least 1 so the result is always a valid raster size.
    """
    if not sys.stdout.isatty():
        return DEFAULT_SIZE
    try:
        size = os.get_terminal_size()
    except OSError:
        return DEFAULT_SIZE
    return (max(size.columns, 1), max(size.lines, 1))
