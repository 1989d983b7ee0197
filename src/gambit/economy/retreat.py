"""Tactical retreat destinations and costs after a failed capture.

Sliding pieces retreat along the axis of the failed capture, in either
direction from the origin, stopping at the first occupied square and never
reaching the failed-capture square. Knights use a lookup table built once
at import: every square inside the rectangle spanned by the origin and the
failed-capture square, priced at the minimum number of knight moves needed
to reach it. Returning to the origin is always available and free.
"""

import logging
import math
from collections import deque
from dataclasses import dataclass

import chess

from gambit.board import direction
from gambit.constants import _RAY_DIRS, RETREAT_PIECES
from gambit.profiles import DEFAULT_CONFIG, GameConfig

logger = logging.getLogger(__name__)

KNIGHT_MOVES = [
    (-2, -1), (-2, 1), (-1, -2), (-1, 2),
    (1, -2), (1, 2), (2, -1), (2, 1),
]

# Table entries at or above this many knight moves are dropped.
MAX_KNIGHT_RETREAT_COST = 7


@dataclass(frozen=True)
class RetreatOption:
    destination: str
    bp_cost: int


def _knight_distances(start: chess.Square) -> dict[chess.Square, int]:
    """Minimum knight moves from start to every square (BFS)."""
    distances = {start: 0}
    queue = deque([start])
    while queue:
        sq = queue.popleft()
        f, r = chess.square_file(sq), chess.square_rank(sq)
        for df, dr in KNIGHT_MOVES:
            nf, nr = f + df, r + dr
            if not (0 <= nf <= 7 and 0 <= nr <= 7):
                continue
            nxt = chess.square(nf, nr)
            if nxt not in distances:
                distances[nxt] = distances[sq] + 1
                queue.append(nxt)
    return distances


def _build_knight_retreat_table() -> dict[
    tuple[chess.Square, chess.Square], tuple[tuple[chess.Square, int], ...]
]:
    table = {}
    for origin in chess.SQUARES:
        distances = _knight_distances(origin)
        for target in chess.SquareSet(chess.BB_KNIGHT_ATTACKS[origin]):
            files = sorted((chess.square_file(origin), chess.square_file(target)))
            ranks = sorted((chess.square_rank(origin), chess.square_rank(target)))
            options = []
            for f in range(files[0], files[1] + 1):
                for r in range(ranks[0], ranks[1] + 1):
                    sq = chess.square(f, r)
                    if sq in (origin, target):
                        continue
                    cost = distances[sq]
                    if cost < MAX_KNIGHT_RETREAT_COST:
                        options.append((sq, cost))
            table[(origin, target)] = tuple(options)
    return table


KNIGHT_RETREATS = _build_knight_retreat_table()


def knight_retreats(
    origin: chess.Square, failed_capture: chess.Square,
) -> tuple[tuple[chess.Square, int], ...]:
    """(square, cost) pairs from the lookup table; empty for non-knight geometry."""
    return KNIGHT_RETREATS.get((origin, failed_capture), ())


def can_retreat(piece_type: chess.PieceType, config: GameConfig = DEFAULT_CONFIG) -> bool:
    """Whether the piece may retreat anywhere other than its origin."""
    if piece_type not in RETREAT_PIECES:
        return False
    if piece_type == chess.KNIGHT:
        return config.retreat.knights_enabled
    return config.retreat.long_range_enabled


def _retreat_cost(distance: int, config: GameConfig) -> int:
    return math.ceil(distance * config.retreat.distance_multiplier)


def _sliding_retreats(
    piece_type: chess.PieceType,
    origin: chess.Square,
    failed_capture: chess.Square,
    board: chess.Board | None,
    config: GameConfig,
) -> list[RetreatOption]:
    step = direction(origin, failed_capture)
    if step is None or step not in _RAY_DIRS[piece_type]:
        return []

    options = []
    for sign in (1, -1):
        df, dr = step[0] * sign, step[1] * sign
        f = chess.square_file(origin) + df
        r = chess.square_rank(origin) + dr
        while 0 <= f <= 7 and 0 <= r <= 7:
            sq = chess.square(f, r)
            # The defender still stands on the failed-capture square.
            if sq == failed_capture or (board is not None and board.piece_at(sq) is not None):
                break
            options.append(RetreatOption(
                chess.square_name(sq),
                _retreat_cost(chess.square_distance(origin, sq), config),
            ))
            f += df
            r += dr
    return options


def _knight_options(
    origin: chess.Square,
    failed_capture: chess.Square,
    board: chess.Board | None,
) -> list[RetreatOption]:
    return [
        RetreatOption(chess.square_name(sq), cost)
        for sq, cost in knight_retreats(origin, failed_capture)
        if board is None or board.piece_at(sq) is None
    ]


def get_valid_retreats(
    piece_type: chess.PieceType,
    origin: str,
    failed_capture: str,
    board: chess.Board | None = None,
    config: GameConfig = DEFAULT_CONFIG,
) -> list[RetreatOption]:
    """Retreat options for a piece whose capture from origin failed.

    The first option is always the origin at cost 0. ``board`` (attacker
    on origin, defender on the failed-capture square) is used only for
    occupancy; without it every square but the failed-capture one is
    treated as empty. Malformed input yields an empty list.
    """
    try:
        origin_sq = chess.parse_square(origin)
        failed_sq = chess.parse_square(failed_capture)
    except ValueError:
        logger.warning("Invalid retreat squares: %r -> %r", origin, failed_capture)
        return []
    if piece_type not in chess.PIECE_TYPES or origin_sq == failed_sq:
        logger.warning("Invalid retreat request: piece %r %s -> %s",
                       piece_type, origin, failed_capture)
        return []

    options = [RetreatOption(origin, 0)]
    if not can_retreat(piece_type, config):
        return options
    if piece_type == chess.KNIGHT:
        options.extend(_knight_options(origin_sq, failed_sq, board))
    else:
        options.extend(_sliding_retreats(piece_type, origin_sq, failed_sq, board, config))
    return options
