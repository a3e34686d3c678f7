#!/usr/bin/env python3
"""
Internal Transfer Reconciler

The source bank reports a transfer between two of the customer's own
accounts as two unrelated transactions: a debit on one account and a credit
on the other, with no shared id. This module pairs them up so each transfer
is written to the ledger once.

Matching rule:
- Group candidates by (absolute amount, accounting date, text)
- Within a group, split into debits and credits, each in fetch order
- Pair the i-th debit with the i-th credit
- Whatever is left in a group is reported as a leftover and never posted
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field

from ..core.dates import FinancialDate
from ..core.money import Money
from ..source.models import SourceTransaction

logger = logging.getLogger(__name__)

GroupKey = tuple[int, FinancialDate, str]


@dataclass(frozen=True)
class TransferCandidate:
    """A transaction flagged as one half of an internal transfer."""

    transaction: SourceTransaction

    @property
    def account_external_id(self) -> str:
        return self.transaction.account_external_id

    @property
    def amount(self) -> Money:
        return self.transaction.amount

    @property
    def group_key(self) -> GroupKey:
        return (
            self.transaction.amount.abs().to_minor_units(),
            self.transaction.accounting_date,
            self.transaction.text,
        )


@dataclass(frozen=True)
class TransferPair:
    """Matched debit and credit halves of one internal transfer."""

    debit: TransferCandidate
    credit: TransferCandidate

    @property
    def amount(self) -> Money:
        """Absolute transferred amount."""
        return self.credit.amount.abs()

    @property
    def date(self) -> FinancialDate:
        return self.debit.transaction.accounting_date

    @property
    def text(self) -> str:
        return self.debit.transaction.text

    def is_balanced(self) -> bool:
        """Amounts cancel out and date and text are identical."""
        debit_tx = self.debit.transaction
        credit_tx = self.credit.transaction
        return (
            debit_tx.amount == -credit_tx.amount
            and debit_tx.accounting_date == credit_tx.accounting_date
            and debit_tx.text == credit_tx.text
        )


@dataclass
class ReconciliationResult:
    """Pairs found and candidates left over for one sync year."""

    pairs: list[TransferPair] = field(default_factory=list)
    leftovers: list[TransferCandidate] = field(default_factory=list)
    unbalanced: list[TransferPair] = field(default_factory=list)

    @property
    def candidate_count(self) -> int:
        return 2 * (len(self.pairs) + len(self.unbalanced)) + len(self.leftovers)


def group_candidates(candidates: list[TransferCandidate]) -> dict[GroupKey, list[TransferCandidate]]:
    """Group candidates by (absolute amount, date, text), keeping fetch order within and across groups."""
    groups: dict[GroupKey, list[TransferCandidate]] = defaultdict(list)
    for candidate in candidates:
        groups[candidate.group_key].append(candidate)
    return groups


def reconcile_transfers(candidates: list[TransferCandidate]) -> ReconciliationResult:
    """
    Pair internal transfer candidates into transfers.

    Every candidate ends up in exactly one pair or in the leftover list.
    The number of pairs is the sum over groups of min(debits, credits).

    Args:
        candidates: Transfer candidates from all accounts for one sync year

    Returns:
        ReconciliationResult with pairs, leftovers and pairs that failed the
        equality re-check
    """
    result = ReconciliationResult()

    for key, group in group_candidates(candidates).items():
        debits = [c for c in group if c.amount.is_negative()]
        credits = [c for c in group if not c.amount.is_negative()]

        for debit, credit in zip(debits, credits):
            pair = TransferPair(debit=debit, credit=credit)
            if pair.is_balanced():
                result.pairs.append(pair)
            else:
                # Equality re-check before posting
                result.unbalanced.append(pair)

        matched = min(len(debits), len(credits))
        result.leftovers.extend(debits[matched:])
        result.leftovers.extend(credits[matched:])

    logger.debug(
        f"Reconciled {len(candidates)} transfer candidate(s): "
        f"{len(result.pairs)} pair(s), {len(result.leftovers)} leftover(s)"
    )
    return result
