"""Before/after differencing shared by the motif detectors.

Every delta detector is ``detect_all(after) - detect_all(before)`` under a
motif-specific equality key, so a motif that already existed before the
move is never reported (or paid for) again.
"""

from typing import Callable, Hashable, TypeVar

import chess

T = TypeVar("T")


def new_motifs(
    detect_all: Callable[[chess.Board, chess.Color], list[T]],
    key_fn: Callable[[T], Hashable],
    before: chess.Board,
    after: chess.Board,
    color: chess.Color,
) -> list[T]:
    existing = {key_fn(m) for m in detect_all(before, color)}
    found: list[T] = []
    seen: set[Hashable] = set()
    for motif in detect_all(after, color):
        key = key_fn(motif)
        if key in existing or key in seen:
            continue
        seen.add(key)
        found.append(motif)
    return found
