"""Tactical motif detection for a single move: checks, pins, skewers, forks,
discovered attacks and direct defences."""

import logging
from typing import Mapping

import chess

from gambit.board import Move
from gambit.tactics.types import (
    CheckInfo,
    DirectDefenceInfo,
    DiscoveredAttackInfo,
    ForkInfo,
    MotifType,
    PinInfo,
    RayCast,
    SkewerInfo,
    TacticInfo,
    TacticsReport,
)
from gambit.tactics.rays import RayCastCache, two_hit_ray_casts
from gambit.tactics.finders import (
    detect_all_forks,
    detect_all_pins,
    detect_all_skewers,
    detect_checks,
    detect_direct_defences,
    detect_discovered_attacks,
    detect_forks,
    detect_pins,
    detect_skewers,
    is_pin,
    is_skewer,
)

__all__ = [
    "CheckInfo",
    "DirectDefenceInfo",
    "DiscoveredAttackInfo",
    "ForkInfo",
    "MotifType",
    "PinInfo",
    "RayCast",
    "SkewerInfo",
    "TacticInfo",
    "TacticsReport",
    "RayCastCache",
    "two_hit_ray_casts",
    "detect_all_forks",
    "detect_all_pins",
    "detect_all_skewers",
    "detect_checks",
    "detect_direct_defences",
    "detect_discovered_attacks",
    "detect_forks",
    "detect_pins",
    "detect_skewers",
    "is_pin",
    "is_skewer",
    "analyze_move",
    "detect_tactics",
]

logger = logging.getLogger(__name__)


def analyze_move(
    move: Move, piece_values: Mapping[chess.PieceType, int] | None = None,
) -> TacticsReport:
    """Run every detector once over ``move`` and collect what it created.

    ``piece_values`` (usually ``GameConfig.piece_values``) orders the pieces
    on a line when telling pins from skewers.
    """
    # A piece retreating to its own origin square changes nothing.
    if move.is_retreat_to_origin:
        return TacticsReport()

    try:
        before, after = move.boards()
    except ValueError as e:
        logger.warning("Unparseable position in move %s-%s: %s",
                       move.from_square, move.to_square, e)
        return TacticsReport()

    cache = RayCastCache()
    report = TacticsReport(
        checks=detect_checks(after, before, move),
        direct_defences=detect_direct_defences(after, before, move),
        discovered_attacks=detect_discovered_attacks(after, before, move),
        forks=detect_forks(after, before, move),
        pins=detect_pins(after, before, move, cache=cache, values=piece_values),
        skewers=detect_skewers(after, before, move, cache=cache, values=piece_values),
    )
    cache.clear()
    return report


def detect_tactics(
    move: Move, piece_values: Mapping[chess.PieceType, int] | None = None,
) -> list[TacticInfo]:
    return analyze_move(move, piece_values).all()
