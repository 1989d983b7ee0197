"""Motif detectors. Each takes (board after, board before, move) and
returns only the motifs that move created."""

import logging
from functools import partial
from typing import Mapping

import chess

from gambit.board import Move, PieceRef
from gambit.constants import SLIDING_PIECES, _color_name, get_piece_value
from gambit.tactics.delta import new_motifs
from gambit.tactics.rays import RayCastCache, two_hit_ray_casts
from gambit.tactics.types import (
    CheckInfo,
    DirectDefenceInfo,
    DiscoveredAttackInfo,
    ForkInfo,
    PinInfo,
    RayCast,
    SkewerInfo,
)

logger = logging.getLogger(__name__)

PieceValues = Mapping[chess.PieceType, int]


def _value(piece: PieceRef, values: PieceValues | None) -> int:
    if values is None:
        return get_piece_value(piece.piece_type)
    return values[piece.piece_type]


def is_pin(cast: RayCast, values: PieceValues | None = None) -> bool:
    """A lesser piece shields a more valuable one behind it."""
    return _value(cast.second_hit, values) > _value(cast.first_hit, values)


def is_skewer(cast: RayCast, values: PieceValues | None = None) -> bool:
    """A piece worth at least as much as the one behind it is in front."""
    return _value(cast.first_hit, values) >= _value(cast.second_hit, values)


def detect_all_pins(
    board: chess.Board,
    pinned_color: chess.Color,
    cache: RayCastCache | None = None,
    values: PieceValues | None = None,
) -> list[PinInfo]:
    return [
        PinInfo(pinned_piece=c.first_hit, pinned_to=c.second_hit, pinned_by=c.attacker)
        for c in two_hit_ray_casts(board, pinned_color, cache)
        if is_pin(c, values)
    ]


def detect_all_skewers(
    board: chess.Board,
    skewered_color: chess.Color,
    cache: RayCastCache | None = None,
    values: PieceValues | None = None,
) -> list[SkewerInfo]:
    return [
        SkewerInfo(skewered_piece=c.first_hit, skewered_to=c.second_hit, skewered_by=c.attacker)
        for c in two_hit_ray_casts(board, skewered_color, cache)
        if is_skewer(c, values)
    ]


def _pin_key(pin: PinInfo) -> tuple:
    return (pin.pinned_by.square, pin.pinned_by.piece_type,
            pin.pinned_piece.square, pin.pinned_to.square)


def _skewer_key(skewer: SkewerInfo) -> tuple:
    return (skewer.skewered_by.square, skewer.skewered_by.piece_type,
            skewer.skewered_piece.square, skewer.skewered_to.square)


def detect_pins(
    after: chess.Board,
    before: chess.Board,
    move: Move,
    cache: RayCastCache | None = None,
    values: PieceValues | None = None,
) -> list[PinInfo]:
    """New pins against the side that did not move.

    ``values`` overrides the standard piece values used to order the two
    pieces on the line.
    """
    detect_all = partial(detect_all_pins, cache=cache, values=values)
    return new_motifs(detect_all, _pin_key, before, after, not move.color)


def detect_skewers(
    after: chess.Board,
    before: chess.Board,
    move: Move,
    cache: RayCastCache | None = None,
    values: PieceValues | None = None,
) -> list[SkewerInfo]:
    detect_all = partial(detect_all_skewers, cache=cache, values=values)
    return new_motifs(detect_all, _skewer_key, before, after, not move.color)


def detect_all_forks(board: chess.Board, forking_color: chess.Color) -> list[ForkInfo]:
    """Every ``forking_color`` piece attacking two or more enemy pieces."""
    targets_by_attacker: dict[chess.Square, list[chess.Square]] = {}
    for target_sq in chess.SquareSet(board.occupied_co[not forking_color]):
        for attacker_sq in board.attackers(forking_color, target_sq):
            targets_by_attacker.setdefault(attacker_sq, []).append(target_sq)

    forks = []
    for attacker_sq, targets in targets_by_attacker.items():
        if len(targets) < 2:
            continue
        forks.append(ForkInfo(
            forked_by=PieceRef.at(board, attacker_sq),
            forked_pieces=tuple(PieceRef.at(board, sq) for sq in targets),
        ))
    return forks


def _fork_key(fork: ForkInfo) -> tuple:
    return (fork.forked_by.square, fork.forked_by.piece_type, fork.forked_squares)


def detect_forks(after: chess.Board, before: chess.Board, move: Move) -> list[ForkInfo]:
    # A fork is new if the forker differs or now hits a different set of pieces.
    return new_motifs(detect_all_forks, _fork_key, before, after, move.color)


def detect_discovered_attacks(
    after: chess.Board, before: chess.Board, move: Move,
) -> list[DiscoveredAttackInfo]:
    """Slider attacks whose line ran through the square the move vacated.

    No before/after delta: discovery is a property of the move itself.
    """
    if move.is_retreat_to_origin:
        return []

    mover = move.color
    vacated = chess.BB_SQUARES[chess.parse_square(move.from_square)]
    landing = chess.parse_square(move.landing_square)
    if move.is_en_passant:
        to_sq = chess.parse_square(move.to_square)
        from_sq = chess.parse_square(move.from_square)
        # The captured pawn sat beside the capturing pawn's origin.
        vacated |= chess.BB_SQUARES[chess.square(chess.square_file(to_sq), chess.square_rank(from_sq))]

    attacks = []
    for target_sq in chess.SquareSet(after.occupied_co[not mover]):
        target_type = after.piece_type_at(target_sq)
        for attacker_sq in after.attackers(mover, target_sq):
            if attacker_sq == landing:
                continue
            attacker_type = after.piece_type_at(attacker_sq)
            if attacker_type not in SLIDING_PIECES:
                continue
            if not chess.between(attacker_sq, target_sq) & vacated:
                continue
            attacks.append(DiscoveredAttackInfo(
                attacked_piece=PieceRef(target_type, chess.square_name(target_sq)),
                attacked_by=PieceRef(attacker_type, chess.square_name(attacker_sq)),
                is_check=target_type == chess.KING,
            ))
    return attacks


def detect_checks(after: chess.Board, before: chess.Board, move: Move) -> list[CheckInfo]:
    opponent = not move.color
    king_sq = after.king(opponent)
    if king_sq is None:
        logger.warning("No %s king on the board; skipping check detection", _color_name(opponent))
        return []

    if after.turn == opponent:
        in_check = after.is_check()
    else:
        in_check = after.is_attacked_by(move.color, king_sq)
    if not in_check:
        return []

    attackers = list(after.attackers(move.color, king_sq))
    if not attackers:
        logger.warning("Board reports check on %s but no attackers were found: %s",
                       chess.square_name(king_sq), after.fen())
        return []

    first = PieceRef.at(after, attackers[0])
    if len(attackers) == 1:
        return [CheckInfo(checking_piece=first, is_double_check=False)]

    if len(attackers) > 2:
        logger.warning("%d pieces give check at once, reporting the first two: %s",
                       len(attackers), after.fen())
    return [CheckInfo(
        checking_piece=first,
        is_double_check=True,
        second_checking_piece=PieceRef.at(after, attackers[1]),
    )]


def _defended_charges(board: chess.Board, defender_sq: chess.Square) -> set[chess.Square]:
    """Attacked friendly non-king pieces covered by the piece on defender_sq."""
    defender = board.piece_at(defender_sq)
    if defender is None:
        return set()
    charges = set()
    for sq in board.attacks(defender_sq):
        piece = board.piece_at(sq)
        if piece is None or piece.color != defender.color or piece.piece_type == chess.KING:
            continue
        if board.is_attacked_by(not defender.color, sq):
            charges.add(sq)
    return charges


def detect_direct_defences(
    after: chess.Board, before: chess.Board, move: Move,
) -> list[DirectDefenceInfo]:
    """Threatened pieces the moved piece defends now but did not from its origin."""
    if move.is_retreat_to_origin:
        return []
    landing = chess.parse_square(move.landing_square)
    defender = after.piece_at(landing)
    if defender is None or defender.color != move.color:
        return []

    already = _defended_charges(before, chess.parse_square(move.from_square))
    defending = PieceRef(defender.piece_type, move.landing_square)
    return [
        DirectDefenceInfo(defended_piece=PieceRef.at(after, sq), defending_piece=defending)
        for sq in sorted(_defended_charges(after, landing) - already)
    ]
