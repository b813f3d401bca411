"""Time source used when issuing and validating tokens."""

import time
from collections.abc import Callable

Clock = Callable[[], int]


def system_clock() -> int:
    """Return the current Unix time in whole seconds."""
    return int(time.time())
