"""Board-facing value types and scoped mutation helpers.

python-chess is the move-legality oracle: piece lookup, attackers,
check status, legal moves and FEN all come from chess.Board. This module
only adds the records the engine passes around (PieceRef, Move) and the
context managers that guarantee a probed board is restored on every exit
path.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

import chess


def square_to_coords(name: str) -> tuple[int, int]:
    """'e4' -> (4, 3). Raises ValueError for anything that is not a square."""
    sq = chess.parse_square(name)
    return chess.square_file(sq), chess.square_rank(sq)


def coords_to_square(x: int, y: int) -> str:
    if not (0 <= x <= 7 and 0 <= y <= 7):
        raise ValueError(f"coordinates off the board: ({x}, {y})")
    return chess.square_name(chess.square(x, y))


def direction(from_sq: chess.Square, to_sq: chess.Square) -> tuple[int, int] | None:
    """Unit step from one square towards another along a rank, file or diagonal."""
    dx = chess.square_file(to_sq) - chess.square_file(from_sq)
    dy = chess.square_rank(to_sq) - chess.square_rank(from_sq)
    if dx == 0 and dy == 0:
        return None
    if dx != 0 and dy != 0 and abs(dx) != abs(dy):
        return None
    return (dx > 0) - (dx < 0), (dy > 0) - (dy < 0)


@dataclass(frozen=True)
class PieceRef:
    """What piece and where; carries no color or board ownership."""
    piece_type: chess.PieceType
    square: str

    @property
    def name(self) -> str:
        return chess.piece_name(self.piece_type)

    @classmethod
    def at(cls, board: chess.Board, square: chess.Square) -> PieceRef | None:
        piece_type = board.piece_type_at(square)
        if piece_type is None:
            return None
        return cls(piece_type, chess.square_name(square))


@dataclass(frozen=True)
class Move:
    """One ply with the positions immediately before and after it.

    For a failed capture followed by a tactical retreat, ``to_square`` is
    the failed-capture square and ``retreat_square`` is where the piece
    actually ended up.
    """
    from_square: str
    to_square: str
    piece_type: chess.PieceType
    color: chess.Color
    before_fen: str
    after_fen: str
    is_capture_attempt: bool = False
    promotion: chess.PieceType | None = None
    is_en_passant: bool = False
    is_kingside_castle: bool = False
    is_queenside_castle: bool = False
    retreat_square: str | None = None

    @property
    def landing_square(self) -> str:
        return self.retreat_square or self.to_square

    @property
    def is_retreat_to_origin(self) -> bool:
        return self.retreat_square is not None and self.retreat_square == self.from_square

    def boards(self) -> tuple[chess.Board, chess.Board]:
        """Parse (before, after). Raises ValueError on a malformed FEN."""
        return chess.Board(self.before_fen), chess.Board(self.after_fen)

    @classmethod
    def from_board(
        cls,
        board: chess.Board,
        move: chess.Move,
        retreat_square: str | None = None,
    ) -> Move:
        """Record ``move`` played on ``board``. The board itself is not modified.

        With ``retreat_square`` the move is a failed capture: the defender
        stays, and the mover lands on the retreat square instead.
        """
        piece = board.piece_at(move.from_square)
        if piece is None:
            raise ValueError(f"no piece on {chess.square_name(move.from_square)}")
        after = board.copy(stack=False)
        if retreat_square is None:
            after.push(move)
        else:
            after.remove_piece_at(move.from_square)
            after.set_piece_at(chess.parse_square(retreat_square), piece)
            after.turn = not board.turn
            after.ep_square = None
        return cls(
            from_square=chess.square_name(move.from_square),
            to_square=chess.square_name(move.to_square),
            piece_type=piece.piece_type,
            color=piece.color,
            before_fen=board.fen(),
            after_fen=after.fen(),
            is_capture_attempt=board.is_capture(move),
            promotion=move.promotion,
            is_en_passant=board.is_en_passant(move),
            is_kingside_castle=board.is_kingside_castling(move),
            is_queenside_castle=board.is_queenside_castling(move),
            retreat_square=retreat_square,
        )


def probe_board(board: chess.Board, color: chess.Color) -> chess.Board:
    """Private copy of ``board`` with ``color`` to move, safe to mutate."""
    probe = board.copy(stack=False)
    if probe.turn != color:
        probe.turn = color
        probe.ep_square = None
    return probe


@contextmanager
def lifted(board: chess.Board, square: chess.Square) -> Iterator[chess.Piece | None]:
    """Temporarily take the piece off ``square``; it is put back on exit."""
    piece = board.remove_piece_at(square)
    try:
        yield piece
    finally:
        if piece is not None:
            board.set_piece_at(square, piece)


@contextmanager
def played(board: chess.Board, move: chess.Move) -> Iterator[chess.Board]:
    """Push ``move`` for the duration of the block, then pop it."""
    board.push(move)
    try:
        yield board
    finally:
        board.pop()
