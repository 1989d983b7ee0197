"""Tests for direct defence detection."""

import chess

from gambit.board import Move, PieceRef
from gambit.tactics import DirectDefenceInfo, analyze_move, detect_direct_defences

ROOK_DEFENDS_KNIGHT = "4k3/8/8/8/1b6/2N5/8/R3K3 w - - 0 1"    # Ra1-c1 covers Nc3
ROOK_ALREADY_DEFENDS = "4k3/8/8/8/1b6/2N5/8/2R1K3 w - - 0 1"


def _move(fen: str, uci: str, retreat_square: str | None = None) -> Move:
    return Move.from_board(chess.Board(fen), chess.Move.from_uci(uci), retreat_square)


def _detect(move: Move) -> list[DirectDefenceInfo]:
    before, after = move.boards()
    return detect_direct_defences(after, before, move)


class TestDirectDefence:
    def test_new_defence_of_attacked_piece(self):
        assert _detect(_move(ROOK_DEFENDS_KNIGHT, "a1c1")) == [DirectDefenceInfo(
            defended_piece=PieceRef(chess.KNIGHT, "c3"),
            defending_piece=PieceRef(chess.ROOK, "c1"),
        )]

    def test_defence_kept_from_origin_is_not_new(self):
        assert _detect(_move(ROOK_ALREADY_DEFENDS, "c1c2")) == []

    def test_unattacked_piece_is_not_defended(self):
        # Without the bishop nothing threatens the knight.
        fen = ROOK_DEFENDS_KNIGHT.replace("1b6", "8")
        assert _detect(_move(fen, "a1c1")) == []

    def test_retreat_to_origin_defends_nothing(self):
        fen = ROOK_ALREADY_DEFENDS.replace("2R1K3", "p1R1K3")
        move = _move(fen, "c1a1", retreat_square="c1")
        assert _detect(move) == []
        assert len(analyze_move(move)) == 0
