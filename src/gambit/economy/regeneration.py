"""Per-turn BP regeneration from the tactics a move created.

Each motif type has one formula; a profile's RegenRule supplies its
parameters. Every contribution is floored to a whole BP, the turn's base
regeneration is added, and the profile cap (if any) is applied last.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterable

import chess

from gambit.constants import _color_name
from gambit.profiles import DEFAULT_CONFIG, GameConfig, RegenRule
from gambit.tactics.types import (
    CheckInfo,
    DiscoveredAttackInfo,
    ForkInfo,
    MotifType,
    PinInfo,
    SkewerInfo,
    TacticInfo,
    TacticsReport,
)

logger = logging.getLogger(__name__)


def _pin_regen(pin: PinInfo, rule: RegenRule, config: GameConfig) -> float:
    bonus = rule.king_bonus if pin.pinned_to.piece_type == chess.KING else 0
    return config.value(pin.pinned_piece.piece_type) * rule.multiplier + bonus


def _skewer_regen(skewer: SkewerInfo, rule: RegenRule, config: GameConfig) -> float:
    front = config.value(skewer.skewered_piece.piece_type)
    back = config.value(skewer.skewered_to.piece_type)
    return max(rule.minimum, abs(front - back) * rule.multiplier)


def _fork_regen(fork: ForkInfo, rule: RegenRule, config: GameConfig) -> float:
    values = [config.value(p.piece_type) for p in fork.forked_pieces]
    total = sum(values) if rule.aggregate == "sum" else min(values)
    return total * rule.multiplier


def _discovered_regen(attack: DiscoveredAttackInfo, rule: RegenRule, config: GameConfig) -> float:
    return math.ceil(config.value(attack.attacked_piece.piece_type) * rule.multiplier)


def _constant_regen(tactic: TacticInfo, rule: RegenRule, config: GameConfig) -> float:
    return rule.constant


REGEN_FORMULAS: dict[MotifType, Callable[[TacticInfo, RegenRule, GameConfig], float]] = {
    MotifType.PIN: _pin_regen,
    MotifType.SKEWER: _skewer_regen,
    MotifType.FORK: _fork_regen,
    MotifType.DISCOVERED_ATTACK: _discovered_regen,
    MotifType.CHECK: _constant_regen,
    MotifType.DIRECT_DEFENCE: _constant_regen,
}


@dataclass(frozen=True)
class TacticRegenDetail:
    motif_type: MotifType
    tactic: TacticInfo
    result: int
    description: str


@dataclass(frozen=True)
class RegenerationResult:
    color: chess.Color
    total: int
    base: int
    tactic_regeneration: int
    applied_cap: int | None
    details: tuple[TacticRegenDetail, ...]


def _is_discovered_check(tactic: TacticInfo) -> bool:
    return isinstance(tactic, DiscoveredAttackInfo) and tactic.is_check


def calculate_regeneration(
    tactics: Iterable[TacticInfo] | TacticsReport,
    mover_color: chess.Color,
    config: GameConfig = DEFAULT_CONFIG,
) -> RegenerationResult:
    """Itemised regeneration for the side that just moved.

    A discovered check is also reported as a check by the same piece; it is
    priced once, as the discovered attack, unless discovered attacks are
    disabled in the profile. A double check whose other checker is the
    moved piece still earns the check bonus.
    """
    if isinstance(tactics, TacticsReport):
        tactics = tactics.all()
    tactics = list(tactics)
    ordered = ([t for t in tactics if _is_discovered_check(t)]
               + [t for t in tactics if not _is_discovered_check(t)])

    rules = config.regeneration.rules
    details: list[TacticRegenDetail] = []
    discovered_checkers: set[str] = set()
    for tactic in ordered:
        rule = rules.get(tactic.motif_type)
        if rule is None or not rule.enabled:
            continue
        if isinstance(tactic, CheckInfo) and all(
            p.square in discovered_checkers for p in tactic.checking_pieces
        ):
            logger.debug("Check from %s already priced as a discovered check",
                         tactic.checking_piece.square)
            continue
        result = math.floor(REGEN_FORMULAS[tactic.motif_type](tactic, rule, config))
        if _is_discovered_check(tactic):
            discovered_checkers.add(tactic.attacked_by.square)
        details.append(TacticRegenDetail(tactic.motif_type, tactic, result, rule.description))

    base = config.regeneration.base_turn_regeneration
    tactic_regeneration = sum(d.result for d in details)
    total = base + tactic_regeneration
    cap = config.regeneration.turn_regen_cap
    applied_cap = None
    if cap is not None and total > cap:
        applied_cap = cap
        total = cap
    logger.debug("Regeneration for %s: base %d + tactics %d = %d",
                 _color_name(mover_color), base, tactic_regeneration, total)
    return RegenerationResult(
        color=mover_color,
        total=total,
        base=base,
        tactic_regeneration=tactic_regeneration,
        applied_cap=applied_cap,
        details=tuple(details),
    )


def compute_regeneration(
    tactics: Iterable[TacticInfo] | TacticsReport,
    mover_color: chess.Color,
    config: GameConfig = DEFAULT_CONFIG,
) -> int:
    """Total BP the mover regains this turn."""
    return calculate_regeneration(tactics, mover_color, config).total
