from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from pokerledger.domain import (
    Diagnostic,
    GameRecord,
    InvalidInputError,
    PayoutResult,
    PlayerEarnings,
    PotValidationResult,
    SettlementConfig,
    SettlementTransfer,
    is_valid_amount,
    settle,
    value_player,
)
from pokerledger.domain.valuation import payouts_from_earnings, validation_from_values


@dataclass(frozen=True)
class FinalRanking:
    name: str
    position: int
    payout: Decimal
    net_gain: Decimal


@dataclass(frozen=True)
class GameResults:
    player_earnings: list[PlayerEarnings]
    payouts: list[PayoutResult]
    venmo_payments: list[SettlementTransfer]
    validation_result: PotValidationResult
    final_rankings: list[FinalRanking] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


def compute_game_results(game: GameRecord, *, config: SettlementConfig | None = None) -> GameResults:
    """Run the whole end-of-game calculation for one completed game."""
    if len(game.chip_config) == 0:
        raise InvalidInputError("no chip configuration found")
    if not game.players:
        raise InvalidInputError("no players found")
    config = config or SettlementConfig()
    diagnostics: list[Diagnostic] = []

    # each player is valued once; payouts and validation reuse these values
    player_earnings = [value_player(player, game.chip_config, diagnostics=diagnostics) for player in game.players]

    if not is_valid_amount(game.total_pot):
        raise InvalidInputError(f"invalid total pot amount: {game.total_pot}")
    payouts = payouts_from_earnings(player_earnings, game.total_pot, config=config, diagnostics=diagnostics)
    venmo_payments = settle(payouts, config=config, diagnostics=diagnostics)
    validation_result = validation_from_values(
        (earnings.chip_value for earnings in player_earnings),
        game.total_pot,
        config=config,
    )

    return GameResults(
        player_earnings=player_earnings,
        payouts=payouts,
        venmo_payments=venmo_payments,
        validation_result=validation_result,
        final_rankings=final_rankings(payouts),
        diagnostics=diagnostics,
    )


def final_rankings(payouts: Iterable[PayoutResult]) -> list[FinalRanking]:
    """Order players by net gain, best first; ties keep their input order."""
    ordered = sorted(payouts, key=lambda payout: -payout.net_gain)
    return [
        FinalRanking(name=payout.name, position=idx, payout=payout.final_payout, net_gain=payout.net_gain)
        for idx, payout in enumerate(ordered, start=1)
    ]
