"""Battle-point economy: duels, retreats and per-turn regeneration."""

from gambit.economy.duel import (
    BPContractError,
    BPLedger,
    Duel,
    DuelOutcome,
    DuelResult,
    bp_needed,
    bp_to_guarantee_win,
    effective_power,
    max_effective_power,
    resolve_duel,
)
from gambit.economy.regeneration import (
    REGEN_FORMULAS,
    RegenerationResult,
    TacticRegenDetail,
    calculate_regeneration,
    compute_regeneration,
)
from gambit.economy.retreat import (
    KNIGHT_RETREATS,
    RetreatOption,
    can_retreat,
    get_valid_retreats,
    knight_retreats,
)

__all__ = [
    "BPContractError",
    "BPLedger",
    "Duel",
    "DuelOutcome",
    "DuelResult",
    "bp_needed",
    "bp_to_guarantee_win",
    "effective_power",
    "max_effective_power",
    "resolve_duel",
    "REGEN_FORMULAS",
    "RegenerationResult",
    "TacticRegenDetail",
    "calculate_regeneration",
    "compute_regeneration",
    "KNIGHT_RETREATS",
    "RetreatOption",
    "can_retreat",
    "get_valid_retreats",
    "knight_retreats",
]
