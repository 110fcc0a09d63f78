from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal

from .errors import InvalidInputError
from .money import CENT, is_valid_amount, to_money

DEFAULT_PAYMENT_NOTE = "Poker game settlement"


@dataclass(slots=True)
class SettlementConfig:
    pot_tolerance: Decimal = CENT
    dust_threshold: Decimal = CENT
    payment_note: str = DEFAULT_PAYMENT_NOTE

    def __post_init__(self) -> None:
        for field_name in ("pot_tolerance", "dust_threshold"):
            value = getattr(self, field_name)
            if not is_valid_amount(value):
                raise InvalidInputError(f"{field_name} must be a non-negative amount, got {value!r}")
            setattr(self, field_name, to_money(value))
        if self.pot_tolerance <= 0:
            raise InvalidInputError(f"pot_tolerance must be greater than zero, got {self.pot_tolerance}")
        if self.dust_threshold < CENT:
            raise InvalidInputError(f"dust_threshold must be at least {CENT}, got {self.dust_threshold}")

    @classmethod
    def from_env(cls) -> SettlementConfig:
        return cls(
            pot_tolerance=os.getenv("POKER_POT_TOLERANCE", str(CENT)),  # type: ignore[arg-type]
            dust_threshold=os.getenv("POKER_DUST_THRESHOLD", str(CENT)),  # type: ignore[arg-type]
            payment_note=os.getenv("POKER_PAYMENT_NOTE", DEFAULT_PAYMENT_NOTE),
        )
