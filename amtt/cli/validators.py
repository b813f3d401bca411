"""argparse value checks for command line options."""

import argparse
from collections.abc import Callable
from pathlib import Path

STDIN_PATH = "-"


def id_validator(length: int) -> Callable[[str], str]:
    """Build a check that an identifier has exactly ``length`` characters."""

    def verify_id(value: str) -> str:
        if len(value) != length:
            raise argparse.ArgumentTypeError(f"id should be {length}-character")
        return value

    return verify_id


def expiration_validator(maximum: int) -> Callable[[str], int]:
    """Build a check for a non-negative expiration no greater than ``maximum``."""

    def verify_expiration(value: str) -> int:
        try:
            seconds = int(value)
        except ValueError:
            raise argparse.ArgumentTypeError(
                f"`{value}` isn't an expiration number"
            ) from None
        if seconds < 0:
            raise argparse.ArgumentTypeError("expiration must not be negative")
        if seconds > maximum:
            raise argparse.ArgumentTypeError(
                f"expiration must not be greater than {maximum}"
            )
        return seconds

    return verify_expiration


def verify_tolerance(value: str) -> int:
    try:
        seconds = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"`{value}` isn't a number") from None
    if seconds < 0:
        raise argparse.ArgumentTypeError("tolerance must not be negative")
    return seconds


def verify_key_file(value: str) -> str:
    """Accept an existing file path, or ``-`` for stdin."""
    if value == STDIN_PATH or Path(value).is_file():
        return value
    raise argparse.ArgumentTypeError("file does not exist")
