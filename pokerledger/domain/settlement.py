"""Greedy debt-minimization: turn net gains and losses into payments."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Protocol, Tuple, Union

from .config import SettlementConfig
from .diagnostics import Diagnostic, report
from .money import Money, round_money, subtract_money, sum_money, to_money

logger = logging.getLogger(__name__)


class HasNetGain(Protocol):
    name: str
    net_gain: Decimal


NetBalances = Union[Mapping[str, Money], Iterable[Tuple[str, Money]]]


@dataclass(frozen=True)
class SettlementTransfer:
    from_player: str
    to_player: str
    amount: Decimal
    note: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.from_player,
            "to": self.to_player,
            "amount": self.amount,
            "note": self.note,
        }


def settle(
    payouts: Iterable[HasNetGain],
    *,
    config: SettlementConfig | None = None,
    diagnostics: list[Diagnostic] | None = None,
) -> list[SettlementTransfer]:
    return build_transfers(
        [(payout.name, payout.net_gain) for payout in payouts],
        config=config,
        diagnostics=diagnostics,
    )


def build_transfers(
    net: NetBalances,
    *,
    config: SettlementConfig | None = None,
    diagnostics: list[Diagnostic] | None = None,
) -> list[SettlementTransfer]:
    """Match the largest debtors against the largest creditors.

    Not a minimum-transaction solver: the result uses at most
    ``max(creditors, debtors)`` payments, never routes money in a circle and
    discharges every balance to within the dust threshold.
    """
    config = config or SettlementConfig()
    threshold = config.dust_threshold
    entries = net.items() if isinstance(net, Mapping) else net
    balances = [(name, to_money(amount)) for name, amount in entries]

    # sorted() is stable, so equal amounts keep their input order
    creditors = sorted(
        ([name, amount] for name, amount in balances if amount > 0),
        key=lambda item: -item[1],
    )
    debtors = sorted(
        ([name, -amount] for name, amount in balances if amount < 0),
        key=lambda item: -item[1],
    )

    transfers: list[SettlementTransfer] = []
    creditor_idx = 0
    debtor_idx = 0
    while creditor_idx < len(creditors) and debtor_idx < len(debtors):
        creditor = creditors[creditor_idx]
        debtor = debtors[debtor_idx]

        payment = min(creditor[1], debtor[1])
        if payment >= threshold:
            transfers.append(
                SettlementTransfer(
                    from_player=debtor[0],
                    to_player=creditor[0],
                    amount=round_money(payment),
                    note=config.payment_note,
                )
            )

        creditor[1] = subtract_money(creditor[1], payment)
        debtor[1] = subtract_money(debtor[1], payment)

        if creditor[1] < threshold:
            creditor_idx += 1
        if debtor[1] < threshold:
            debtor_idx += 1

    remaining_credit = sum_money(amount for _, amount in creditors[creditor_idx:])
    remaining_debt = sum_money(amount for _, amount in debtors[debtor_idx:])
    if remaining_credit >= threshold or remaining_debt >= threshold:
        report(
            diagnostics,
            logger,
            code="settlement_imbalance",
            message=(
                f"Payment imbalance: winners need {remaining_credit}, "
                f"losers owe {remaining_debt}"
            ),
            remaining_credit=remaining_credit,
            remaining_debt=remaining_debt,
        )
    return transfers
