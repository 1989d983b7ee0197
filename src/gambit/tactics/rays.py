"""Ray casting: what a sliding attacker would hit behind the piece it attacks."""

import logging

import chess

from gambit.board import PieceRef, direction, lifted, played, probe_board
from gambit.constants import SLIDING_PIECES
from gambit.tactics.types import RayCast

logger = logging.getLogger(__name__)


def _first_hit(board: chess.Board, start_sq: int, step: tuple[int, int]) -> int | None:
    """Walk from start_sq (exclusive) and return the first occupied square, if any."""
    df, dr = step
    f = chess.square_file(start_sq) + df
    r = chess.square_rank(start_sq) + dr
    while 0 <= f <= 7 and 0 <= r <= 7:
        sq = chess.square(f, r)
        if board.piece_at(sq) is not None:
            return sq
        f += df
        r += dr
    return None


def _can_clear_ray(
    probe: chess.Board,
    piece_sq: chess.Square,
    attacker_sq: chess.Square,
    step: tuple[int, int],
) -> bool:
    """True if some legal move of the piece leaves the ray hitting something else.

    The ray counts as still blocked when the first piece it meets after the
    move has the same color and type, i.e. the piece just slid along the line.
    """
    piece = probe.piece_at(piece_sq)
    if piece is None:
        return False
    moves = list(probe.generate_legal_moves(from_mask=chess.BB_SQUARES[piece_sq]))
    for move in moves:
        with played(probe, move):
            hit_sq = _first_hit(probe, attacker_sq, step)
            hit = probe.piece_at(hit_sq) if hit_sq is not None else None
        if hit is None or hit.color != piece.color or hit.piece_type != piece.piece_type:
            return True
    return False


class RayCastCache:
    """Memo of two-hit casts keyed by (color, FEN).

    Pure optimization: scope one instance to one move evaluation and clear
    it afterwards. Skipping it never changes results.
    """

    def __init__(self) -> None:
        self._casts: dict[tuple[chess.Color, str], tuple[RayCast, ...]] = {}

    def get(self, color: chess.Color, fen: str) -> tuple[RayCast, ...] | None:
        return self._casts.get((color, fen))

    def put(self, color: chess.Color, fen: str, casts: list[RayCast]) -> None:
        self._casts[(color, fen)] = tuple(casts)

    def clear(self) -> None:
        self._casts.clear()

    def __len__(self) -> int:
        return len(self._casts)


def two_hit_ray_casts(
    board: chess.Board,
    color: chess.Color,
    cache: RayCastCache | None = None,
) -> list[RayCast]:
    """Casts through every ``color`` piece attacked by an enemy slider.

    A candidate survives only if the attacked piece has a legal move that
    clears the ray; the piece behind it must also belong to ``color``.
    ``board`` is never modified: probing happens on a private copy.
    """
    fen = board.fen()
    if cache is not None:
        cached = cache.get(color, fen)
        if cached is not None:
            return list(cached)

    probe = probe_board(board, color)
    casts: list[RayCast] = []
    for target_sq in chess.SquareSet(board.occupied_co[color]):
        first_hit = PieceRef.at(board, target_sq)
        if first_hit is None:
            continue
        for attacker_sq in board.attackers(not color, target_sq):
            attacker_type = board.piece_type_at(attacker_sq)
            if attacker_type not in SLIDING_PIECES:
                continue
            step = direction(attacker_sq, target_sq)
            if step is None:
                continue
            if not _can_clear_ray(probe, target_sq, attacker_sq, step):
                logger.debug(
                    "Skipping cast %s -> %s: piece cannot leave the ray",
                    chess.square_name(attacker_sq), first_hit.square,
                )
                continue

            with lifted(probe, target_sq):
                behind_sq = _first_hit(probe, attacker_sq, step)
            if behind_sq is None:
                continue
            behind = board.piece_at(behind_sq)
            if behind is None or behind.color != color:
                continue
            casts.append(RayCast(
                attacker=PieceRef(attacker_type, chess.square_name(attacker_sq)),
                direction=step,
                first_hit=first_hit,
                second_hit=PieceRef(behind.piece_type, chess.square_name(behind_sq)),
            ))

    if cache is not None:
        cache.put(color, fen, casts)
    return casts
