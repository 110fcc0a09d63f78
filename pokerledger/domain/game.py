from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Tuple

from .errors import InvalidInputError
from .money import add_money, is_valid_amount, to_money


@dataclass(frozen=True)
class ChipDenomination:
    name: str
    value: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", to_money(self.value))


@dataclass(frozen=True)
class ChipConfiguration:
    colors: Tuple[ChipDenomination, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        colors = tuple(self.colors)
        names = [color.name for color in colors]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise InvalidInputError(f"duplicate chip colors: {', '.join(duplicates)}")
        object.__setattr__(self, "colors", colors)

    def __iter__(self) -> Iterator[ChipDenomination]:
        return iter(self.colors)

    def __len__(self) -> int:
        return len(self.colors)

    def get(self, name: str) -> ChipDenomination | None:
        for color in self.colors:
            if color.name == name:
                return color
        return None

    @classmethod
    def coerce(cls, value: ChipConfiguration | Iterable[ChipDenomination]) -> ChipConfiguration:
        if isinstance(value, ChipConfiguration):
            return value
        return cls(colors=tuple(value))


@dataclass(frozen=True)
class PlayerLedger:
    name: str
    current_chips: Mapping[str, int] = field(default_factory=dict)
    total_buy_in: Decimal = Decimal("0")
    initial_chips: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", normalize_player(self.name))
        object.__setattr__(self, "current_chips", _frozen_holding(self.current_chips))
        object.__setattr__(self, "initial_chips", _frozen_holding(self.initial_chips))
        object.__setattr__(self, "total_buy_in", to_money(self.total_buy_in))
        if not is_valid_amount(self.total_buy_in):
            raise InvalidInputError(f"invalid buy-in for player {self.name}: {self.total_buy_in}")


@dataclass(frozen=True)
class Rebuy:
    player_name: str
    amount: Decimal
    chips_by_color: Mapping[str, int] = field(default_factory=dict)
    timestamp: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "player_name", normalize_player(self.player_name))
        object.__setattr__(self, "amount", to_money(self.amount))
        object.__setattr__(self, "chips_by_color", _frozen_holding(self.chips_by_color))


@dataclass(frozen=True)
class GameRecord:
    """Snapshot of a game taken at end-game time."""

    chip_config: ChipConfiguration
    players: Tuple[PlayerLedger, ...]
    total_pot: Decimal
    initial_buy_in: Decimal = Decimal("0")
    rebuys: Tuple[Rebuy, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        players = tuple(self.players)
        names = [player.name for player in players]
        if len(set(names)) != len(names):
            raise InvalidInputError("players must be unique")
        object.__setattr__(self, "chip_config", ChipConfiguration.coerce(self.chip_config))
        object.__setattr__(self, "players", players)
        object.__setattr__(self, "rebuys", tuple(self.rebuys))
        object.__setattr__(self, "total_pot", to_money(self.total_pot))
        object.__setattr__(self, "initial_buy_in", to_money(self.initial_buy_in))

    def player(self, name: str) -> PlayerLedger | None:
        for ledger in self.players:
            if ledger.name == name:
                return ledger
        return None


def normalize_player(name: str) -> str:
    value = name.strip()
    if not value:
        raise InvalidInputError("player name must be non-empty")
    return value


def apply_rebuy(game: GameRecord, rebuy: Rebuy) -> GameRecord:
    """Record a rebuy on a game snapshot and return a new record; the input is left as is."""
    ledger = game.player(rebuy.player_name)
    if ledger is None:
        raise InvalidInputError(f"unknown player: {rebuy.player_name}")
    if not is_valid_amount(rebuy.amount):
        raise InvalidInputError(f"invalid rebuy amount: {rebuy.amount}")

    negative = sorted(color for color, count in rebuy.chips_by_color.items() if count < 0)
    if negative:
        raise InvalidInputError(f"negative rebuy chip count for: {', '.join(negative)}")

    chips = dict(ledger.current_chips)
    for color, count in rebuy.chips_by_color.items():
        chips[color] = chips.get(color, 0) + count

    if rebuy.timestamp is None:
        rebuy = replace(rebuy, timestamp=datetime.now(timezone.utc))

    updated = replace(
        ledger,
        current_chips=chips,
        total_buy_in=add_money(ledger.total_buy_in, rebuy.amount),
    )
    return replace(
        game,
        players=tuple(updated if player.name == ledger.name else player for player in game.players),
        rebuys=game.rebuys + (rebuy,),
        total_pot=add_money(game.total_pot, rebuy.amount),
    )


def _frozen_holding(holding: Mapping[str, Any]) -> Mapping[str, int]:
    return MappingProxyType(dict(holding))
