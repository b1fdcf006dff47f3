"""Persistence of the high score."""

from __future__ import annotations

import struct
from pathlib import Path

from .types import DEFAULT_HIGH_SCORE_PATH

_FORMAT = struct.Struct("<i")


def load_high_score(path: str | Path = DEFAULT_HIGH_SCORE_PATH) -> int:
    """Read the stored high score, or 0 if it cannot be read."""
    try:
        data = Path(path).read_bytes()
    except OSError:
        return 0
    if len(data) < _FORMAT.size:
        return 0
    return _FORMAT.unpack_from(data)[0]


def save_high_score(high_score: int, path: str | Path = DEFAULT_HIGH_SCORE_PATH) -> None:
    """Store the high score; a file that cannot be written is skipped."""
    try:
        Path(path).write_bytes(_FORMAT.pack(high_score))
    except OSError:
        pass