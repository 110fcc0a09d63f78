"""Chip valuation, payout computation and pot validation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from .config import SettlementConfig
from .diagnostics import Diagnostic, report
from .errors import InvalidInputError
from .game import ChipConfiguration, ChipDenomination, PlayerLedger
from .money import (
    ZERO,
    Money,
    add_money,
    amounts_equal,
    is_valid_amount,
    multiply_money,
    round_money,
    subtract_money,
    sum_money,
    to_money,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerEarnings:
    name: str
    chip_value: Decimal
    net_earnings: Decimal
    earnings_percentage: Decimal
    total_buy_in: Decimal


@dataclass(frozen=True)
class PayoutResult:
    name: str
    chip_value: Decimal
    buy_in: Decimal
    final_payout: Decimal
    net_gain: Decimal


@dataclass(frozen=True)
class PotValidationResult:
    is_valid: bool
    total_chip_value: Decimal
    expected_value: Decimal
    difference: Decimal
    error_message: str | None = None


def value_player(
    ledger: PlayerLedger,
    chip_config: ChipConfiguration | Iterable[ChipDenomination],
    *,
    diagnostics: list[Diagnostic] | None = None,
) -> PlayerEarnings:
    config = ChipConfiguration.coerce(chip_config)
    chip_value = _chip_value(ledger, config, diagnostics)
    net_earnings = subtract_money(chip_value, ledger.total_buy_in)
    if ledger.total_buy_in > 0:
        percentage = round_money(net_earnings * 100 / ledger.total_buy_in)
    else:
        percentage = ZERO
    return PlayerEarnings(
        name=ledger.name,
        chip_value=chip_value,
        net_earnings=net_earnings,
        earnings_percentage=percentage,
        total_buy_in=ledger.total_buy_in,
    )


def compute_payouts(
    ledgers: Sequence[PlayerLedger],
    chip_config: ChipConfiguration | Iterable[ChipDenomination],
    total_pot: Money,
    *,
    config: SettlementConfig | None = None,
    diagnostics: list[Diagnostic] | None = None,
) -> list[PayoutResult]:
    if not is_valid_amount(total_pot):
        raise InvalidInputError(f"invalid total pot amount: {total_pot!r}")
    if not ledgers:
        raise InvalidInputError("no players to calculate payouts for")

    chips = ChipConfiguration.coerce(chip_config)
    earnings = [value_player(ledger, chips, diagnostics=diagnostics) for ledger in ledgers]
    return payouts_from_earnings(earnings, to_money(total_pot), config=config, diagnostics=diagnostics)


def payouts_from_earnings(
    earnings: Sequence[PlayerEarnings],
    total_pot: Decimal,
    *,
    config: SettlementConfig | None = None,
    diagnostics: list[Diagnostic] | None = None,
) -> list[PayoutResult]:
    """Build payouts from already valued players and cross-check the pot."""
    config = config or SettlementConfig()
    results = [
        PayoutResult(
            name=item.name,
            chip_value=item.chip_value,
            buy_in=item.total_buy_in,
            final_payout=item.chip_value,
            net_gain=subtract_money(item.chip_value, item.total_buy_in),
        )
        for item in earnings
    ]

    total_chip_value = sum_money(result.chip_value for result in results)
    if not amounts_equal(total_chip_value, total_pot, config.pot_tolerance):
        report(
            diagnostics,
            logger,
            code="chip_value_mismatch",
            message=f"Chip value mismatch: total chips = {total_chip_value}, pot = {total_pot}",
            total_chip_value=total_chip_value,
            total_pot=total_pot,
            difference=subtract_money(total_chip_value, total_pot),
        )
    return results


def validate_pot(
    ledgers: Sequence[PlayerLedger],
    chip_config: ChipConfiguration | Iterable[ChipDenomination],
    expected_pot: Money,
    *,
    config: SettlementConfig | None = None,
    diagnostics: list[Diagnostic] | None = None,
) -> PotValidationResult:
    """Check the chip total against the declared pot. Never raises."""
    if not is_valid_amount(expected_pot):
        return PotValidationResult(
            is_valid=False,
            total_chip_value=ZERO,
            expected_value=_expected_or_nan(expected_pot),
            difference=ZERO,
            error_message="Invalid expected pot amount",
        )

    try:
        chips = ChipConfiguration.coerce(chip_config)
        chip_values = [_chip_value(ledger, chips, diagnostics) for ledger in ledgers]
        return validation_from_values(chip_values, to_money(expected_pot), config=config)
    except InvalidInputError as exc:
        return PotValidationResult(
            is_valid=False,
            total_chip_value=ZERO,
            expected_value=to_money(expected_pot),
            difference=ZERO,
            error_message=str(exc),
        )


def validation_from_values(
    chip_values: Iterable[Decimal],
    expected_pot: Decimal,
    *,
    config: SettlementConfig | None = None,
) -> PotValidationResult:
    config = config or SettlementConfig()
    total_chip_value = sum_money(chip_values)
    is_valid = amounts_equal(total_chip_value, expected_pot, config.pot_tolerance)
    return PotValidationResult(
        is_valid=is_valid,
        total_chip_value=total_chip_value,
        expected_value=expected_pot,
        difference=subtract_money(total_chip_value, expected_pot),
        error_message=None if is_valid else f"Chip total ({total_chip_value}) does not match pot ({expected_pot})",
    )


def _chip_value(
    ledger: PlayerLedger,
    config: ChipConfiguration,
    diagnostics: list[Diagnostic] | None,
) -> Decimal:
    total = ZERO
    for color, count in ledger.current_chips.items():
        denomination = config.get(color)
        if denomination is None:
            report(
                diagnostics,
                logger,
                code="unknown_chip_color",
                message=f'Chip color "{color}" not found in configuration',
                color=color,
                player=ledger.name,
            )
            continue
        if not is_valid_amount(denomination.value):
            raise InvalidInputError(f'invalid chip value for color "{color}": {denomination.value}')
        if count < 0:
            raise InvalidInputError(f'negative chip count for color "{color}": {count}')
        total = add_money(total, multiply_money(denomination.value, count))
    return total


def _expected_or_nan(value: object) -> Decimal:
    try:
        return to_money(value)  # type: ignore[arg-type]
    except InvalidInputError:
        return Decimal("NaN")
