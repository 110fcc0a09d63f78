from .config import SettlementConfig
from .diagnostics import Diagnostic
from .errors import InvalidInputError
from .game import (
    ChipConfiguration,
    ChipDenomination,
    GameRecord,
    PlayerLedger,
    Rebuy,
    apply_rebuy,
    normalize_player,
)
from .money import (
    add_money,
    amounts_equal,
    format_currency,
    is_valid_amount,
    multiply_money,
    round_money,
    subtract_money,
    sum_money,
    to_money,
)
from .settlement import SettlementTransfer, build_transfers, settle
from .valuation import (
    PayoutResult,
    PlayerEarnings,
    PotValidationResult,
    compute_payouts,
    validate_pot,
    value_player,
)

__all__ = [
    "ChipConfiguration",
    "ChipDenomination",
    "Diagnostic",
    "GameRecord",
    "InvalidInputError",
    "PayoutResult",
    "PlayerEarnings",
    "PlayerLedger",
    "PotValidationResult",
    "Rebuy",
    "SettlementConfig",
    "SettlementTransfer",
    "add_money",
    "amounts_equal",
    "apply_rebuy",
    "build_transfers",
    "compute_payouts",
    "format_currency",
    "is_valid_amount",
    "multiply_money",
    "normalize_player",
    "round_money",
    "settle",
    "subtract_money",
    "sum_money",
    "to_money",
    "validate_pot",
    "value_player",
]
