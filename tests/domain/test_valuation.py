import logging
from decimal import Decimal

import pytest

from pokerledger.domain import (
    ChipConfiguration,
    ChipDenomination,
    InvalidInputError,
    PlayerLedger,
    compute_payouts,
    validate_pot,
    value_player,
)

CHIPS = ChipConfiguration(
    colors=(
        ChipDenomination(name="White", value=Decimal("0.25")),
        ChipDenomination(name="Red", value=Decimal("1")),
        ChipDenomination(name="Green", value=Decimal("5")),
    )
)


def test_value_player_sums_known_colors() -> None:
    ledger = PlayerLedger(name="alice", current_chips={"White": 8, "Red": 10, "Green": 4}, total_buy_in=20)

    earnings = value_player(ledger, CHIPS)

    assert earnings.chip_value == Decimal("32.00")
    assert earnings.net_earnings == Decimal("12.00")
    assert earnings.earnings_percentage == Decimal("60.00")
    assert earnings.total_buy_in == Decimal("20")


def test_value_player_with_zero_buy_in_reports_zero_percentage() -> None:
    ledger = PlayerLedger(name="house", current_chips={"Red": 3}, total_buy_in=0)

    earnings = value_player(ledger, CHIPS)

    assert earnings.net_earnings == Decimal("3.00")
    assert earnings.earnings_percentage == Decimal("0")


def test_unknown_color_is_skipped_with_diagnostic(caplog) -> None:
    config = [ChipDenomination(name="Red", value=5)]
    ledger = PlayerLedger(name="bob", current_chips={"Blue": 5, "Red": 10}, total_buy_in=50)
    diagnostics = []

    with caplog.at_level(logging.WARNING):
        earnings = value_player(ledger, config, diagnostics=diagnostics)

    assert earnings.chip_value == Decimal("50.00")
    assert [d.code for d in diagnostics] == ["unknown_chip_color"]
    assert diagnostics[0].details == {"color": "Blue", "player": "bob"}
    assert "Blue" in caplog.text


def test_color_lookup_is_case_sensitive() -> None:
    ledger = PlayerLedger(name="bob", current_chips={"red": 10}, total_buy_in=0)
    diagnostics = []

    earnings = value_player(ledger, CHIPS, diagnostics=diagnostics)

    assert earnings.chip_value == Decimal("0.00")
    assert diagnostics[0].details["color"] == "red"


def test_negative_chip_count_is_fatal() -> None:
    ledger = PlayerLedger(name="carol", current_chips={"Red": -5}, total_buy_in=10)

    with pytest.raises(InvalidInputError, match="Red"):
        value_player(ledger, CHIPS)


def test_invalid_denomination_value_is_fatal() -> None:
    config = [ChipDenomination(name="Gold", value=Decimal("-1"))]
    ledger = PlayerLedger(name="carol", current_chips={"Gold": 1}, total_buy_in=10)

    with pytest.raises(InvalidInputError, match="Gold"):
        value_player(ledger, config)


def test_value_player_does_not_mutate_inputs() -> None:
    holding = {"Red": 10}
    ledger = PlayerLedger(name="dave", current_chips=holding, total_buy_in=10)

    value_player(ledger, CHIPS)

    assert holding == {"Red": 10}
    with pytest.raises(TypeError):
        ledger.current_chips["Red"] = 0  # type: ignore[index]


def test_compute_payouts_builds_results_in_input_order() -> None:
    ledgers = [
        PlayerLedger(name="alice", current_chips={"Green": 30}, total_buy_in=100),
        PlayerLedger(name="bob", current_chips={"Green": 10}, total_buy_in=100),
    ]

    payouts = compute_payouts(ledgers, CHIPS, total_pot=200)

    assert [p.name for p in payouts] == ["alice", "bob"]
    assert payouts[0].final_payout == payouts[0].chip_value == Decimal("150.00")
    assert payouts[0].net_gain == Decimal("50.00")
    assert payouts[1].buy_in == Decimal("100")
    assert payouts[1].net_gain == Decimal("-50.00")


def test_compute_payouts_warns_on_pot_mismatch_but_returns() -> None:
    ledgers = [PlayerLedger(name="alice", current_chips={"Green": 40}, total_buy_in=100)]
    diagnostics = []

    payouts = compute_payouts(ledgers, CHIPS, total_pot=100, diagnostics=diagnostics)

    assert len(payouts) == 1
    assert [d.code for d in diagnostics] == ["chip_value_mismatch"]
    assert diagnostics[0].details["difference"] == Decimal("100.00")


@pytest.mark.parametrize(
    "ledgers, pot",
    [
        ([], 100),
        ([PlayerLedger(name="alice", total_buy_in=10)], float("nan")),
        ([PlayerLedger(name="alice", total_buy_in=10)], -1),
    ],
    ids=["no_players", "nan_pot", "negative_pot"],
)
def test_compute_payouts_rejects_invalid_input(ledgers, pot) -> None:
    with pytest.raises(InvalidInputError):
        compute_payouts(ledgers, CHIPS, total_pot=pot)


def test_validate_pot_reports_mismatch() -> None:
    ledgers = [
        PlayerLedger(name="alice", current_chips={"Green": 30}, total_buy_in=50),
        PlayerLedger(name="bob", current_chips={"Green": 10}, total_buy_in=50),
    ]

    result = validate_pot(ledgers, CHIPS, expected_pot=100)

    assert result.is_valid is False
    assert result.total_chip_value == Decimal("200.00")
    assert result.expected_value == Decimal("100")
    assert result.difference == Decimal("100.00")
    assert result.error_message == "Chip total (200.00) does not match pot (100)"


def test_validate_pot_accepts_matching_total() -> None:
    ledgers = [PlayerLedger(name="alice", current_chips={"White": 3}, total_buy_in=1)]

    result = validate_pot(ledgers, CHIPS, expected_pot="0.75")

    assert result.is_valid is True
    assert result.difference == Decimal("0.00")
    assert result.error_message is None


def test_validate_pot_never_raises() -> None:
    invalid_pot = validate_pot([], CHIPS, expected_pot=float("nan"))
    assert invalid_pot.is_valid is False
    assert invalid_pot.error_message == "Invalid expected pot amount"

    negative_chips = [PlayerLedger(name="alice", current_chips={"Red": -1}, total_buy_in=1)]
    broken = validate_pot(negative_chips, CHIPS, expected_pot=1)
    assert broken.is_valid is False
    assert "Red" in broken.error_message


def test_validate_pot_folds_unroundable_pot_into_result() -> None:
    ledgers = [PlayerLedger(name="alice", current_chips={"Red": 1}, total_buy_in=1)]

    result = validate_pot(ledgers, CHIPS, expected_pot=1e30)

    assert result.is_valid is False
    assert "too large" in result.error_message


def test_compute_payouts_unroundable_pot_raises_domain_error() -> None:
    ledgers = [PlayerLedger(name="alice", current_chips={"Red": 1}, total_buy_in=1)]

    with pytest.raises(InvalidInputError, match="too large"):
        compute_payouts(ledgers, CHIPS, total_pot=1e30)
