"""End-of-game settlement for home poker games."""

from pokerledger.domain import (
    InvalidInputError,
    SettlementConfig,
    compute_payouts,
    settle,
    validate_pot,
    value_player,
)
from pokerledger.services import GameResults, compute_game_results

__all__ = [
    "GameResults",
    "InvalidInputError",
    "SettlementConfig",
    "compute_game_results",
    "compute_payouts",
    "settle",
    "validate_pot",
    "value_player",
]
