"""Game configuration and named difficulty profiles.

A GameConfig is read-only input to the engine. Profiles differ only in
configuration, never in code: regeneration formulas are declarative
RegenRule descriptors interpreted per motif type in
gambit.economy.regeneration.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping

import chess

from gambit.tactics.types import MotifType

STANDARD_PIECE_VALUES: Mapping[chess.PieceType, int] = MappingProxyType({
    chess.PAWN: 1, chess.KNIGHT: 3, chess.BISHOP: 3,
    chess.ROOK: 5, chess.QUEEN: 9, chess.KING: 10,
})

STANDARD_CAPACITIES: Mapping[chess.PieceType, int] = MappingProxyType({
    chess.PAWN: 1, chess.KNIGHT: 3, chess.BISHOP: 3,
    chess.ROOK: 5, chess.QUEEN: 9, chess.KING: 0,
})

# 8 pawns + 2 knights + 2 bishops + 2 rooks + queen
TOTAL_STARTING_VALUE = 39


@dataclass(frozen=True)
class RegenRule:
    """Formula descriptor for one motif type.

    Which fields matter depends on the motif: pins use multiplier and
    king_bonus, skewers multiplier and minimum, forks aggregate and
    multiplier, discovered attacks multiplier, checks and direct
    defences constant.
    """
    enabled: bool = True
    constant: float = 0
    multiplier: float = 1.0
    king_bonus: float = 0
    minimum: float = 0
    aggregate: str = "min"  # "min" | "sum" over forked piece values
    description: str = ""


def _rules(**rules: RegenRule) -> Mapping[MotifType, RegenRule]:
    return MappingProxyType({MotifType[k.upper()]: v for k, v in rules.items()})


STANDARD_REGEN_RULES = _rules(
    pin=RegenRule(multiplier=1, king_bonus=1,
                  description="Pinned piece's value, +1 if pinned to the king"),
    skewer=RegenRule(multiplier=1, minimum=1,
                     description="Difference of the skewered pieces' values, minimum 1"),
    fork=RegenRule(aggregate="min", description="Lowest value among forked pieces"),
    discovered_attack=RegenRule(multiplier=0.5,
                                description="Half the attacked piece's value, rounded up"),
    check=RegenRule(constant=2, description="2 BP for checking the king"),
    direct_defence=RegenRule(constant=1, description="1 BP for defending a threatened piece"),
)

BEGINNER_REGEN_RULES = _rules(
    pin=RegenRule(enabled=False),
    skewer=RegenRule(enabled=False),
    fork=RegenRule(enabled=False),
    discovered_attack=RegenRule(enabled=False),
    check=RegenRule(constant=3, description="3 BP for checking the king"),
    direct_defence=RegenRule(constant=1, description="1 BP for defending a threatened piece"),
)

ADVANCED_REGEN_RULES = _rules(
    pin=RegenRule(multiplier=1.5, king_bonus=2,
                  description="150% of the pinned piece's value, +2 if pinned to the king"),
    skewer=RegenRule(multiplier=1.5, minimum=2,
                     description="150% of the skewered value difference, minimum 2"),
    fork=RegenRule(aggregate="sum", multiplier=0.5,
                   description="Half the total value of the forked pieces"),
    discovered_attack=RegenRule(multiplier=1, description="Full value of the attacked piece"),
    check=RegenRule(constant=3, description="3 BP for checking the king"),
    direct_defence=RegenRule(constant=1, description="1 BP for defending a threatened piece"),
)


@dataclass(frozen=True)
class RegenerationRules:
    base_turn_regeneration: int = 1
    turn_regen_cap: int | None = None
    rules: Mapping[MotifType, RegenRule] = field(default_factory=lambda: STANDARD_REGEN_RULES)


@dataclass(frozen=True)
class RetreatRules:
    distance_multiplier: float = 1.0
    long_range_enabled: bool = True
    knights_enabled: bool = True


@dataclass(frozen=True)
class GameConfig:
    name: str = "standard"
    initial_bp: int = TOTAL_STARTING_VALUE
    piece_capacities: Mapping[chess.PieceType, int] = field(default_factory=lambda: STANDARD_CAPACITIES)
    piece_values: Mapping[chess.PieceType, int] = field(default_factory=lambda: STANDARD_PIECE_VALUES)
    max_effective_bp: int = 10
    regeneration: RegenerationRules = field(default_factory=RegenerationRules)
    defender_wins_ties: bool = True
    retreat: RetreatRules = field(default_factory=RetreatRules)

    def capacity(self, piece_type: chess.PieceType) -> int:
        return self.piece_capacities[piece_type]

    def value(self, piece_type: chess.PieceType) -> int:
        return self.piece_values[piece_type]


DEFAULT_CONFIG = GameConfig()

GAME_PROFILES: dict[str, GameConfig] = {
    "standard": DEFAULT_CONFIG,
    "beginner": replace(
        DEFAULT_CONFIG,
        name="beginner",
        initial_bp=round(TOTAL_STARTING_VALUE * 1.5),
        regeneration=RegenerationRules(base_turn_regeneration=2, rules=BEGINNER_REGEN_RULES),
        retreat=RetreatRules(distance_multiplier=0.5),
    ),
    "advanced": replace(
        DEFAULT_CONFIG,
        name="advanced",
        initial_bp=round(TOTAL_STARTING_VALUE * 0.8),
        max_effective_bp=15,
        regeneration=RegenerationRules(base_turn_regeneration=0, rules=ADVANCED_REGEN_RULES),
        defender_wins_ties=False,
        retreat=RetreatRules(distance_multiplier=1.5),
    ),
    "risky": replace(
        DEFAULT_CONFIG,
        name="risky",
        initial_bp=round(TOTAL_STARTING_VALUE * 1.2),
        retreat=RetreatRules(distance_multiplier=2),
    ),
    "attacker_wins_ties": replace(
        DEFAULT_CONFIG, name="attacker_wins_ties", defender_wins_ties=False,
    ),
}

DEFAULT_PROFILE = "standard"


def get_profile(name: str) -> GameConfig:
    """Look up a game profile by name, falling back to the default."""
    return GAME_PROFILES.get(name, GAME_PROFILES[DEFAULT_PROFILE])
