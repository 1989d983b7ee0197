"""Capacity-based duel resolution and the per-game BP ledger.

Every capture attempt is a duel: both players secretly allocate BP from
their pools, each allocation is turned into effective power by the piece's
capacity curve, and the higher effective power wins. Kings never duel.

Contract violations (a king in a duel, overspending, resolving a duel that
was never opened) are caller bugs and raise BPContractError rather than
being coerced.
"""

import enum
import logging
import math
from dataclasses import dataclass, field

import chess

from gambit.economy.retreat import RetreatOption, get_valid_retreats
from gambit.profiles import DEFAULT_CONFIG, GameConfig

logger = logging.getLogger(__name__)


class BPContractError(AssertionError):
    """A caller broke a precondition of the BP economy."""


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise BPContractError(message)


class DuelOutcome(enum.Enum):
    SUCCESS = "success"
    FAILED = "failed"


def effective_power(
    piece_type: chess.PieceType, spent: int, config: GameConfig = DEFAULT_CONFIG,
) -> float:
    """Effective duel power of ``spent`` BP on a piece.

    Spending up to the piece's capacity counts one-for-one; every BP above
    it counts half. The result never exceeds ``config.max_effective_bp``.
    """
    _require(piece_type != chess.KING, "kings cannot participate in duels")
    _require(spent >= 0, f"negative BP allocation: {spent}")
    capacity = config.capacity(piece_type)
    if spent <= capacity:
        power = float(spent)
    else:
        power = capacity + (spent - capacity) / 2
    return min(power, float(config.max_effective_bp))


def max_effective_power(
    piece_type: chess.PieceType,
    config: GameConfig = DEFAULT_CONFIG,
    pool: int | None = None,
) -> float:
    """Highest effective power the piece can reach, optionally limited by a BP pool."""
    if pool is None:
        _require(piece_type != chess.KING, "kings cannot participate in duels")
        return float(config.max_effective_bp)
    return effective_power(piece_type, pool, config)


def bp_needed(
    piece_type: chess.PieceType, target: float, config: GameConfig = DEFAULT_CONFIG,
) -> int:
    """Smallest BP spend whose effective power reaches ``target``."""
    _require(piece_type != chess.KING, "kings cannot participate in duels")
    _require(target <= config.max_effective_bp,
             f"effective power {target} exceeds the maximum of {config.max_effective_bp}")
    if target <= 0:
        return 0
    capacity = config.capacity(piece_type)
    if target <= capacity:
        return math.ceil(target)
    return math.ceil(capacity + (target - capacity) * 2)


def bp_to_guarantee_win(
    attacker_type: chess.PieceType,
    defender_type: chess.PieceType,
    config: GameConfig = DEFAULT_CONFIG,
    defender_pool: int | None = None,
) -> int | None:
    """BP the attacker must spend to win whatever the defender allocates.

    Returns None when no spend can guarantee a win, e.g. when both sides
    can reach the effective cap and ties go to the defender.
    """
    defender_max = max_effective_power(defender_type, config, defender_pool)
    capacity = config.capacity(attacker_type)
    limit = capacity + 2 * max(config.max_effective_bp - capacity, 0)
    for spent in range(limit + 1):
        power = effective_power(attacker_type, spent, config)
        if power > defender_max or (power == defender_max and not config.defender_wins_ties):
            return spent
    return None


@dataclass(frozen=True)
class Duel:
    attacker_color: chess.Color
    attacker_type: chess.PieceType
    defender_type: chess.PieceType
    attacker_allocation: int
    defender_allocation: int


@dataclass(frozen=True)
class DuelResult:
    outcome: DuelOutcome
    effective_attacker: float
    effective_defender: float
    retreats: tuple[RetreatOption, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.outcome == DuelOutcome.SUCCESS


def resolve_duel(duel: Duel, config: GameConfig = DEFAULT_CONFIG) -> DuelResult:
    """Compare effective powers. Ties follow ``config.defender_wins_ties``."""
    _require(duel.attacker_type != chess.KING and duel.defender_type != chess.KING,
             "kings cannot participate in duels")
    attack = effective_power(duel.attacker_type, duel.attacker_allocation, config)
    defence = effective_power(duel.defender_type, duel.defender_allocation, config)
    if attack > defence:
        outcome = DuelOutcome.SUCCESS
    elif attack == defence and not config.defender_wins_ties:
        outcome = DuelOutcome.SUCCESS
    else:
        outcome = DuelOutcome.FAILED
    return DuelResult(outcome, attack, defence)


@dataclass
class _PendingDuel:
    attacker_color: chess.Color
    attacker_type: chess.PieceType
    defender_type: chess.PieceType
    origin: str | None = None
    target: str | None = None
    allocations: dict[chess.Color, int] = field(default_factory=dict)


class BPLedger:
    """Both players' BP pools and at most one open duel."""

    def __init__(self, config: GameConfig = DEFAULT_CONFIG):
        self.config = config
        self._pools: dict[chess.Color, int] = {
            chess.WHITE: config.initial_bp,
            chess.BLACK: config.initial_bp,
        }
        self._duel: _PendingDuel | None = None

    def balance(self, color: chess.Color) -> int:
        return self._pools[color]

    @property
    def duel_open(self) -> bool:
        return self._duel is not None

    def open_duel(
        self,
        attacker_color: chess.Color,
        attacker_type: chess.PieceType,
        defender_type: chess.PieceType,
        origin: str | None = None,
        target: str | None = None,
    ) -> None:
        """Start a duel. Origin and target squares enable retreat options on failure."""
        _require(self._duel is None, "a duel is already open")
        _require(attacker_type != chess.KING and defender_type != chess.KING,
                 "kings cannot participate in duels")
        self._duel = _PendingDuel(attacker_color, attacker_type, defender_type, origin, target)

    def allocate(self, color: chess.Color, amount: int) -> None:
        _require(self._duel is not None, "no duel is open")
        _require(color not in self._duel.allocations, "allocation already made")
        _require(amount >= 0, f"negative BP allocation: {amount}")
        _require(amount <= self._pools[color],
                 f"allocation {amount} exceeds pool {self._pools[color]}")
        self._duel.allocations[color] = amount

    def resolve(self, board: chess.Board | None = None) -> DuelResult:
        """Settle the open duel, deduct both allocations and close it.

        A failed duel whose squares were given to open_duel carries the
        attacker's retreat options.
        """
        pending = self._duel
        _require(pending is not None, "no duel is open")
        _require(len(pending.allocations) == 2, "both players must allocate before resolving")

        attacker = pending.attacker_color
        duel = Duel(
            attacker_color=attacker,
            attacker_type=pending.attacker_type,
            defender_type=pending.defender_type,
            attacker_allocation=pending.allocations[attacker],
            defender_allocation=pending.allocations[not attacker],
        )
        result = resolve_duel(duel, self.config)
        for color, amount in pending.allocations.items():
            self._pools[color] -= amount
        self._duel = None

        logger.debug("Duel %s: %s %.1f vs %s %.1f", result.outcome.value,
                     chess.piece_name(duel.attacker_type), result.effective_attacker,
                     chess.piece_name(duel.defender_type), result.effective_defender)

        if not result.succeeded and pending.origin and pending.target:
            retreats = get_valid_retreats(
                pending.attacker_type, pending.origin, pending.target, board, self.config,
            )
            result = DuelResult(result.outcome, result.effective_attacker,
                                result.effective_defender, tuple(retreats))
        return result

    def credit(self, color: chess.Color, amount: int) -> None:
        _require(amount >= 0, f"negative BP credit: {amount}")
        self._pools[color] += amount

    def pay_retreat(self, color: chess.Color, option: RetreatOption) -> None:
        _require(option.bp_cost <= self._pools[color],
                 f"retreat cost {option.bp_cost} exceeds pool {self._pools[color]}")
        self._pools[color] -= option.bp_cost
