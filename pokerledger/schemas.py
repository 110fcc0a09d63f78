from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pokerledger.domain import (
    ChipConfiguration,
    ChipDenomination,
    GameRecord,
    PlayerLedger,
    Rebuy,
    apply_rebuy,
)
from pokerledger.services import GameResults


class ChipColorIn(BaseModel):
    name: str = Field(..., min_length=1, examples=["Red"])
    value: Decimal = Field(..., ge=0, description="Dollar value of one chip", examples=[5])


class PlayerIn(BaseModel):
    name: str = Field(..., min_length=1, examples=["alice"])
    initial_chips: dict[str, int] = Field(default_factory=dict)
    current_chips: dict[str, int] = Field(
        default_factory=dict,
        description="Chip counts by color at the end of the game",
        examples=[{"Red": 10, "Blue": 4}],
    )
    total_buy_in: Decimal = Field(..., ge=0, description="Buy-in plus rebuys in dollars", examples=[100])


class RebuyIn(BaseModel):
    player_name: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0)
    chips_by_color: dict[str, int] = Field(default_factory=dict)
    timestamp: datetime | None = None


class GameSnapshotIn(BaseModel):
    chip_config: list[ChipColorIn]
    players: list[PlayerIn]
    total_pot: Decimal = Field(..., ge=0, description="Declared pot, not counting the rebuys listed below")
    initial_buy_in: Decimal = Field(default=Decimal("0"), ge=0)
    rebuys: list[RebuyIn] = Field(
        default_factory=list,
        description="Rebuys not yet folded into the players' totals",
    )

    @model_validator(mode="after")
    def validate_names(self) -> "GameSnapshotIn":
        players = [player.name.strip() for player in self.players]
        if len(set(players)) != len(players):
            raise ValueError("player names must be unique")
        colors = [color.name for color in self.chip_config]
        if len(set(colors)) != len(colors):
            raise ValueError("chip colors must be unique")
        return self

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "chip_config": [{"name": "White", "value": 1}, {"name": "Red", "value": 5}],
                    "players": [
                        {"name": "alice", "current_chips": {"Red": 30}, "total_buy_in": 100},
                        {"name": "bob", "current_chips": {"Red": 10}, "total_buy_in": 100},
                    ],
                    "total_pot": 200,
                    "initial_buy_in": 100,
                }
            ]
        }
    }

    def to_domain(self) -> GameRecord:
        game = GameRecord(
            chip_config=ChipConfiguration(
                colors=tuple(ChipDenomination(name=color.name, value=color.value) for color in self.chip_config)
            ),
            players=tuple(
                PlayerLedger(
                    name=player.name,
                    initial_chips=player.initial_chips,
                    current_chips=player.current_chips,
                    total_buy_in=player.total_buy_in,
                )
                for player in self.players
            ),
            total_pot=self.total_pot,
            initial_buy_in=self.initial_buy_in,
        )
        for rebuy in self.rebuys:
            game = apply_rebuy(
                game,
                Rebuy(
                    player_name=rebuy.player_name,
                    amount=rebuy.amount,
                    chips_by_color=rebuy.chips_by_color,
                    timestamp=rebuy.timestamp,
                ),
            )
        return game


class TransferOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(..., alias="from")
    to: str
    amount: Decimal
    note: str


class PlayerEarningsOut(BaseModel):
    name: str
    chip_value: Decimal
    net_earnings: Decimal
    earnings_percentage: Decimal
    total_buy_in: Decimal


class PayoutOut(BaseModel):
    name: str
    chip_value: Decimal
    buy_in: Decimal
    final_payout: Decimal
    net_gain: Decimal


class PotValidationOut(BaseModel):
    is_valid: bool
    total_chip_value: Decimal
    expected_value: Decimal
    difference: Decimal
    error_message: str | None = None


class FinalRankingOut(BaseModel):
    name: str
    position: int
    payout: Decimal
    net_gain: Decimal


class DiagnosticOut(BaseModel):
    code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class GameResultsOut(BaseModel):
    player_earnings: list[PlayerEarningsOut]
    payouts: list[PayoutOut]
    venmo_payments: list[TransferOut]
    validation_result: PotValidationOut
    final_rankings: list[FinalRankingOut]
    diagnostics: list[DiagnosticOut]

    @classmethod
    def from_domain(cls, results: GameResults) -> "GameResultsOut":
        return cls(
            player_earnings=[PlayerEarningsOut(**vars(item)) for item in results.player_earnings],
            payouts=[PayoutOut(**vars(item)) for item in results.payouts],
            venmo_payments=[TransferOut(**transfer.to_dict()) for transfer in results.venmo_payments],
            validation_result=PotValidationOut(**vars(results.validation_result)),
            final_rankings=[FinalRankingOut(**vars(item)) for item in results.final_rankings],
            diagnostics=[DiagnosticOut(**item.to_dict()) for item in results.diagnostics],
        )
