"""Constants and small utility functions shared across the engine."""

import chess

__all__ = [
    "KING_VALUE",
    "SLIDING_PIECES",
    "RETREAT_PIECES",
    "get_piece_value",
    "_color_name",
    "_RAY_DIRS",
]

# Kings cannot be captured; the value only orders pins and skewers.
KING_VALUE = 10

SLIDING_PIECES = frozenset({chess.BISHOP, chess.ROOK, chess.QUEEN})
RETREAT_PIECES = frozenset({chess.BISHOP, chess.ROOK, chess.QUEEN, chess.KNIGHT})


def get_piece_value(piece_type: chess.PieceType, *, king: int = KING_VALUE) -> int:
    """Standard piece value, with the king valued above the queen."""
    return {
        chess.PAWN: 1, chess.KNIGHT: 3, chess.BISHOP: 3,
        chess.ROOK: 5, chess.QUEEN: 9, chess.KING: king,
    }[piece_type]


def _color_name(color: chess.Color) -> str:
    """Convert chess.Color bool to lowercase string."""
    return "white" if color == chess.WHITE else "black"


_ORTHOGONAL = [(0, 1), (0, -1), (1, 0), (-1, 0)]
_DIAGONAL = [(1, 1), (1, -1), (-1, 1), (-1, -1)]

_RAY_DIRS: dict[chess.PieceType, list[tuple[int, int]]] = {
    chess.ROOK: _ORTHOGONAL,
    chess.BISHOP: _DIAGONAL,
    chess.QUEEN: _ORTHOGONAL + _DIAGONAL,
}
