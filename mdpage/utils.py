from __future__ import annotations

import sys
from typing import NoReturn


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return False


def progress(message: str, verbose: bool = True) -> None:
    if verbose:
        print(message)


def warn(message: str) -> None:
    print(f"Warning: {message}", file=sys.stderr)


def fail(message: str) -> NoReturn:
    print(message, file=sys.stderr)
    sys.exit(1)
