"""Tests for discovered attack detection."""

import chess

from gambit.board import Move, PieceRef
from gambit.tactics import DiscoveredAttackInfo, detect_discovered_attacks

BISHOP_UNCOVERS_ROOK = "4q2k/8/8/8/4B3/8/8/4R1K1 w - - 0 1"
BISHOP_UNCOVERS_QUEEN_CHECK = "4k3/8/8/8/4B3/8/8/4QK2 w - - 0 1"
EN_PASSANT_UNCOVERS = "4k3/8/8/R2pP2q/8/8/8/4K3 w - d6 0 1"
FAILED_CAPTURE = "4q2k/1p6/8/8/4B3/8/8/4R1K1 w - - 0 1"


def _move(fen: str, uci: str, retreat_square: str | None = None) -> Move:
    return Move.from_board(chess.Board(fen), chess.Move.from_uci(uci), retreat_square)


def _detect(move: Move) -> list[DiscoveredAttackInfo]:
    before, after = move.boards()
    return detect_discovered_attacks(after, before, move)


class TestDiscoveredAttack:
    def test_rook_uncovered(self):
        assert _detect(_move(BISHOP_UNCOVERS_ROOK, "e4c2")) == [DiscoveredAttackInfo(
            attacked_piece=PieceRef(chess.QUEEN, "e8"),
            attacked_by=PieceRef(chess.ROOK, "e1"),
            is_check=False,
        )]

    def test_discovered_check(self):
        attacks = _detect(_move(BISHOP_UNCOVERS_QUEEN_CHECK, "e4c6"))
        assert attacks == [DiscoveredAttackInfo(
            attacked_piece=PieceRef(chess.KING, "e8"),
            attacked_by=PieceRef(chess.QUEEN, "e1"),
            is_check=True,
        )]

    def test_moving_piece_is_not_a_discoverer(self):
        # The bishop on c6 attacks e8 itself; only the queen's line was uncovered.
        attacks = _detect(_move(BISHOP_UNCOVERS_QUEEN_CHECK, "e4c6"))
        assert all(a.attacked_by.square != "c6" for a in attacks)

    def test_blocker_leaving_the_line(self):
        move = _move("4q2k/8/8/8/8/8/4B3/4R1K1 w - - 0 1", "e2d3")
        assert len(_detect(move)) == 1

    def test_vacated_square_not_between(self):
        # Be1 moves away but the rook's rank holds no enemy piece.
        move = _move("4q2k/8/8/8/8/8/8/R3B1K1 w - - 0 1", "e1d2")
        assert _detect(move) == []

    def test_en_passant_clears_captured_pawn_square(self):
        move = _move(EN_PASSANT_UNCOVERS, "e5d6")
        assert move.is_en_passant
        assert _detect(move) == [DiscoveredAttackInfo(
            attacked_piece=PieceRef(chess.QUEEN, "h5"),
            attacked_by=PieceRef(chess.ROOK, "a5"),
        )]


class TestFailedCaptureRetreat:
    def test_retreat_uncovers_line(self):
        move = _move(FAILED_CAPTURE, "e4b7", retreat_square="d3")
        assert _detect(move) == [DiscoveredAttackInfo(
            attacked_piece=PieceRef(chess.QUEEN, "e8"),
            attacked_by=PieceRef(chess.ROOK, "e1"),
        )]

    def test_retreat_to_origin_reports_nothing(self):
        move = _move(FAILED_CAPTURE, "e4b7", retreat_square="e4")
        assert move.is_retreat_to_origin
        assert _detect(move) == []
