#!/usr/bin/env python3
"""
Transaction Classifier

Labels source transactions as deposits, withdrawals or internal transfer
candidates based on the bank's transaction type code.
"""

import logging
from enum import Enum

from ..source.models import SourceTransaction

logger = logging.getLogger(__name__)

# Type codes the bank uses for transfers between the customer's own accounts
INTERNAL_TRANSFER_CODES = frozenset({"OVFNETTB", "MOB.B.OVF", "TILBAKEF."})


class TransactionClass(Enum):
    """Classification of a fetched source transaction."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    INTERNAL_TRANSFER_CANDIDATE = "internal_transfer_candidate"


def classify_transaction(transaction: SourceTransaction) -> TransactionClass:
    """
    Classify a source transaction.

    Internal transfer codes win regardless of sign. Everything else is
    decided by sign alone: negative is a withdrawal, zero or positive a deposit.
    """
    if transaction.type_code in INTERNAL_TRANSFER_CODES:
        return TransactionClass.INTERNAL_TRANSFER_CANDIDATE

    if transaction.amount.is_negative():
        return TransactionClass.WITHDRAWAL

    if transaction.amount.to_minor_units() == 0:
        logger.debug(
            f"Zero-amount transaction on {transaction.accounting_date} ({transaction.text!r}) treated as deposit"
        )
    return TransactionClass.DEPOSIT
