"""Cent-exact money arithmetic shared by valuation and settlement."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from .errors import InvalidInputError

Money = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Money) -> Decimal:
    """Coerce ``value`` to a Decimal without rounding.

    Floats go through ``repr`` so ``1.235`` stays ``1.235`` instead of its
    binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidInputError(f"invalid money amount: {value!r}")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation as exc:
            raise InvalidInputError(f"invalid money amount: {value!r}") from exc
    raise InvalidInputError(f"invalid money amount: {value!r}")


def round_money(amount: Money) -> Decimal:
    value = to_money(amount)
    if not value.is_finite():
        raise InvalidInputError(f"cannot round non-finite amount: {value}")
    try:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise InvalidInputError(f"amount too large to round to the cent: {value}") from exc


def add_money(a: Money, b: Money) -> Decimal:
    return round_money(to_money(a) + to_money(b))


def subtract_money(a: Money, b: Money) -> Decimal:
    return round_money(to_money(a) - to_money(b))


def multiply_money(amount: Money, quantity: int | Decimal) -> Decimal:
    return round_money(to_money(amount) * to_money(quantity))


def sum_money(amounts: Iterable[Money]) -> Decimal:
    """Fold with ``add_money`` so every intermediate total is cent-rounded."""
    total = ZERO
    for amount in amounts:
        total = add_money(total, amount)
    return total


def amounts_equal(a: Money, b: Money, epsilon: Money = CENT) -> bool:
    left, right = to_money(a), to_money(b)
    if not (left.is_finite() and right.is_finite()):
        return False
    return abs(left - right) < to_money(epsilon)


def is_valid_amount(amount: object) -> bool:
    try:
        value = to_money(amount)  # type: ignore[arg-type]
    except InvalidInputError:
        return False
    return value.is_finite() and value >= 0


def format_currency(amount: Money, include_sign: bool = True) -> str:
    value = round_money(amount)
    text = f"{abs(value):.2f}"
    if include_sign:
        text = f"${text}"
    return f"-{text}" if value < 0 else text
