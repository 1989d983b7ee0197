"""Tactical motif types: ray casts, per-motif records and the report container."""

import enum
from dataclasses import dataclass, field
from typing import ClassVar

from gambit.board import PieceRef


class MotifType(enum.Enum):
    CHECK = "check"
    PIN = "pin"
    SKEWER = "skewer"
    FORK = "fork"
    DISCOVERED_ATTACK = "discovered_attack"
    DIRECT_DEFENCE = "direct_defence"


@dataclass(frozen=True)
class RayCast:
    """A sliding attacker hitting first_hit, with second_hit directly behind it."""
    attacker: PieceRef
    direction: tuple[int, int]
    first_hit: PieceRef
    second_hit: PieceRef


@dataclass(frozen=True)
class CheckInfo:
    motif_type: ClassVar[MotifType] = MotifType.CHECK
    checking_piece: PieceRef
    is_double_check: bool = False
    second_checking_piece: PieceRef | None = None

    @property
    def checking_pieces(self) -> list[PieceRef]:
        if self.second_checking_piece is None:
            return [self.checking_piece]
        return [self.checking_piece, self.second_checking_piece]


@dataclass(frozen=True)
class PinInfo:
    motif_type: ClassVar[MotifType] = MotifType.PIN
    pinned_piece: PieceRef
    pinned_to: PieceRef
    pinned_by: PieceRef


@dataclass(frozen=True)
class SkewerInfo:
    motif_type: ClassVar[MotifType] = MotifType.SKEWER
    skewered_piece: PieceRef  # front, the more valuable one
    skewered_to: PieceRef     # behind
    skewered_by: PieceRef


@dataclass(frozen=True)
class ForkInfo:
    motif_type: ClassVar[MotifType] = MotifType.FORK
    forked_by: PieceRef
    forked_pieces: tuple[PieceRef, ...]

    @property
    def forked_squares(self) -> tuple[str, ...]:
        return tuple(sorted(p.square for p in self.forked_pieces))


@dataclass(frozen=True)
class DiscoveredAttackInfo:
    motif_type: ClassVar[MotifType] = MotifType.DISCOVERED_ATTACK
    attacked_piece: PieceRef
    attacked_by: PieceRef
    is_check: bool = False


@dataclass(frozen=True)
class DirectDefenceInfo:
    motif_type: ClassVar[MotifType] = MotifType.DIRECT_DEFENCE
    defended_piece: PieceRef
    defending_piece: PieceRef


TacticInfo = CheckInfo | PinInfo | SkewerInfo | ForkInfo | DiscoveredAttackInfo | DirectDefenceInfo


@dataclass
class TacticsReport:
    """Newly created motifs for a single move."""
    checks: list[CheckInfo] = field(default_factory=list)
    direct_defences: list[DirectDefenceInfo] = field(default_factory=list)
    discovered_attacks: list[DiscoveredAttackInfo] = field(default_factory=list)
    forks: list[ForkInfo] = field(default_factory=list)
    pins: list[PinInfo] = field(default_factory=list)
    skewers: list[SkewerInfo] = field(default_factory=list)

    def all(self) -> list[TacticInfo]:
        return [
            *self.checks,
            *self.direct_defences,
            *self.discovered_attacks,
            *self.forks,
            *self.pins,
            *self.skewers,
        ]

    def __len__(self) -> int:
        return len(self.all())
