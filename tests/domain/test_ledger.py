from datetime import datetime
from decimal import Decimal

import pytest

from pokerledger.domain import (
    ChipConfiguration,
    ChipDenomination,
    GameRecord,
    InvalidInputError,
    PlayerLedger,
    Rebuy,
    apply_rebuy,
)


def _game() -> GameRecord:
    return GameRecord(
        chip_config=[ChipDenomination(name="Red", value=5), ChipDenomination(name="Black", value=25)],
        players=(
            PlayerLedger(name="alice", current_chips={"Red": 20}, total_buy_in=100),
            PlayerLedger(name="bob", current_chips={"Red": 20}, total_buy_in=100),
        ),
        total_pot=200,
        initial_buy_in=100,
    )


def test_ledger_normalizes_name_and_amounts() -> None:
    ledger = PlayerLedger(name="  alice ", current_chips={"Red": 1}, total_buy_in="12.50")

    assert ledger.name == "alice"
    assert ledger.total_buy_in == Decimal("12.50")
    assert dict(ledger.initial_chips) == {}


@pytest.mark.parametrize("buy_in", [-10, "-0.01", float("nan")], ids=["negative", "negative_cent", "nan"])
def test_invalid_buy_in_rejected(buy_in) -> None:
    with pytest.raises(InvalidInputError, match="buy-in"):
        PlayerLedger(name="alice", total_buy_in=buy_in)


def test_blank_player_name_rejected() -> None:
    with pytest.raises(InvalidInputError):
        PlayerLedger(name="   ")


def test_duplicate_chip_colors_rejected() -> None:
    with pytest.raises(InvalidInputError, match="Red"):
        ChipConfiguration(colors=(ChipDenomination(name="Red", value=1), ChipDenomination(name="Red", value=5)))


def test_duplicate_players_rejected() -> None:
    with pytest.raises(InvalidInputError):
        GameRecord(
            chip_config=[ChipDenomination(name="Red", value=5)],
            players=(PlayerLedger(name="alice"), PlayerLedger(name="alice ")),
            total_pot=0,
        )


def test_chip_configuration_lookup() -> None:
    config = _game().chip_config

    assert config.get("Black").value == Decimal("25")
    assert config.get("black") is None
    assert len(config) == 2


def test_apply_rebuy_returns_new_record() -> None:
    game = _game()
    rebuy = Rebuy(
        player_name="bob",
        amount=100,
        chips_by_color={"Red": 10, "Black": 2},
        timestamp=datetime(2025, 1, 1, 22, 0, 0),
    )

    updated = apply_rebuy(game, rebuy)

    bob = updated.player("bob")
    assert bob.total_buy_in == Decimal("200.00")
    assert dict(bob.current_chips) == {"Red": 30, "Black": 2}
    assert updated.total_pot == Decimal("300.00")
    assert updated.rebuys == (rebuy,)
    assert updated.player("alice") == game.player("alice")

    assert game.player("bob").total_buy_in == Decimal("100")
    assert game.total_pot == Decimal("200")
    assert game.rebuys == ()


def test_apply_rebuy_stamps_missing_timestamp() -> None:
    updated = apply_rebuy(_game(), Rebuy(player_name="alice", amount=50))

    assert updated.rebuys[0].timestamp is not None


@pytest.mark.parametrize(
    "rebuy",
    [
        Rebuy(player_name="carol", amount=100),
        Rebuy(player_name="alice", amount=-5),
        Rebuy(player_name="alice", amount=50, chips_by_color={"Red": -1}),
    ],
    ids=["unknown_player", "negative_amount", "negative_chips"],
)
def test_apply_rebuy_rejects_invalid_rebuys(rebuy: Rebuy) -> None:
    with pytest.raises(InvalidInputError):
        apply_rebuy(_game(), rebuy)
