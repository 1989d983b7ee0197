"""Tests for rays.py: two-hit ray casts, validation, caching."""

import chess

from gambit.board import PieceRef
from gambit.tactics import RayCast, RayCastCache, two_hit_ray_casts
from gambit.tactics.rays import _first_hit

# Rook e1 attacks knight e4 with the black queen on e8 behind it.
RELATIVE_PIN = "4q2k/8/8/8/4n3/8/8/4R2K b - - 0 1"
# Knight e4 shields its own king: it has no legal move at all.
ABSOLUTE_KNIGHT_PIN = "4k3/8/8/8/4n3/8/8/4R1K1 b - - 0 1"
# Bishop b2 attacks the knight on d4; a white pawn sits on f6 behind it.
ENEMY_BEHIND = "4k3/8/5P2/8/3n4/8/1B6/4K3 b - - 0 1"


class TestFirstHit:
    def test_first_hit(self):
        board = chess.Board(RELATIVE_PIN)
        assert _first_hit(board, chess.E1, (0, 1)) == chess.E4

    def test_hit_behind_lifted_piece(self):
        board = chess.Board(RELATIVE_PIN)
        board.remove_piece_at(chess.E4)
        assert _first_hit(board, chess.E1, (0, 1)) == chess.E8

    def test_empty_ray(self):
        board = chess.Board(RELATIVE_PIN)
        assert _first_hit(board, chess.E1, (-1, 0)) is None


class TestTwoHitRayCasts:
    def test_cast_through_attacked_piece(self):
        board = chess.Board(RELATIVE_PIN)
        casts = two_hit_ray_casts(board, chess.BLACK)
        assert casts == [RayCast(
            attacker=PieceRef(chess.ROOK, "e1"),
            direction=(0, 1),
            first_hit=PieceRef(chess.KNIGHT, "e4"),
            second_hit=PieceRef(chess.QUEEN, "e8"),
        )]

    def test_immobile_piece_is_discarded(self):
        board = chess.Board(ABSOLUTE_KNIGHT_PIN)
        assert two_hit_ray_casts(board, chess.BLACK) == []

    def test_enemy_piece_behind_is_ignored(self):
        board = chess.Board(ENEMY_BEHIND)
        assert two_hit_ray_casts(board, chess.BLACK) == []

    def test_no_casts_for_unattacked_side(self):
        board = chess.Board(RELATIVE_PIN)
        assert two_hit_ray_casts(board, chess.WHITE) == []

    def test_board_is_not_modified(self):
        board = chess.Board(RELATIVE_PIN)
        two_hit_ray_casts(board, chess.BLACK)
        assert board.fen() == RELATIVE_PIN

    def test_works_when_other_side_to_move(self):
        board = chess.Board(RELATIVE_PIN.replace(" b ", " w "))
        casts = two_hit_ray_casts(board, chess.BLACK)
        assert len(casts) == 1
        assert casts[0].second_hit == PieceRef(chess.QUEEN, "e8")


class TestRayCastCache:
    def test_cache_filled_and_reused(self):
        board = chess.Board(RELATIVE_PIN)
        cache = RayCastCache()
        first = two_hit_ray_casts(board, chess.BLACK, cache)
        assert len(cache) == 1
        assert two_hit_ray_casts(board, chess.BLACK, cache) == first

    def test_cache_keyed_by_color(self):
        board = chess.Board(RELATIVE_PIN)
        cache = RayCastCache()
        two_hit_ray_casts(board, chess.BLACK, cache)
        two_hit_ray_casts(board, chess.WHITE, cache)
        assert len(cache) == 2

    def test_results_match_uncached(self):
        board = chess.Board(RELATIVE_PIN)
        cache = RayCastCache()
        assert two_hit_ray_casts(board, chess.BLACK, cache) == two_hit_ray_casts(board, chess.BLACK)

    def test_clear(self):
        board = chess.Board(RELATIVE_PIN)
        cache = RayCastCache()
        two_hit_ray_casts(board, chess.BLACK, cache)
        cache.clear()
        assert len(cache) == 0
