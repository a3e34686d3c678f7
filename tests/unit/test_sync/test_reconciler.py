#!/usr/bin/env python3
"""Tests for internal transfer reconciliation."""

import random
from collections import Counter

import pytest

from bankmirror.sync.reconciler import TransferCandidate, group_candidates, reconcile_transfers
from tests.fixtures.fakes import make_transaction


def candidate(account, amount, date="2021-03-01", text="Til: Savings", code="OVFNETTB"):
    return TransferCandidate(transaction=make_transaction(account, amount, date=date, text=text, type_code=code))


@pytest.mark.unit
@pytest.mark.sync
class TestReconcileTransfers:
    """Test grouped matching of debit and credit halves."""

    def test_simple_pair(self):
        debit = candidate("A", "-500")
        credit = candidate("B", "500")

        result = reconcile_transfers([debit, credit])

        assert len(result.pairs) == 1
        pair = result.pairs[0]
        assert pair.debit is debit
        assert pair.credit is credit
        assert pair.amount.to_amount_str() == "500.00"
        assert pair.is_balanced()
        assert result.leftovers == []

    def test_credit_fetched_before_debit(self):
        credit = candidate("B", "500")
        debit = candidate("A", "-500")

        result = reconcile_transfers([credit, debit])

        assert result.pairs[0].debit is debit
        assert result.pairs[0].credit is credit

    def test_unequal_group_leaves_leftover(self):
        debit = candidate("A", "-300")
        first_credit = candidate("B", "300")
        second_credit = candidate("C", "300")

        result = reconcile_transfers([debit, first_credit, second_credit])

        assert len(result.pairs) == 1
        assert result.pairs[0].credit is first_credit
        assert result.leftovers == [second_credit]

    def test_different_text_does_not_match(self):
        result = reconcile_transfers([candidate("A", "-100", text="Til: Savings"), candidate("B", "100", text="Fra: Brukskonto")])

        assert result.pairs == []
        assert len(result.leftovers) == 2

    def test_different_date_does_not_match(self):
        result = reconcile_transfers([candidate("A", "-100", date="2021-03-01"), candidate("B", "100", date="2021-03-02")])

        assert result.pairs == []
        assert len(result.leftovers) == 2

    def test_different_amount_does_not_match(self):
        result = reconcile_transfers([candidate("A", "-100"), candidate("B", "100.01")])

        assert result.pairs == []
        assert len(result.leftovers) == 2

    def test_three_identical_transfers_clustered_by_sign(self):
        debits = [candidate("A", "-200") for _ in range(3)]
        credits = [candidate("B", "200") for _ in range(3)]

        result = reconcile_transfers(debits + credits)

        assert len(result.pairs) == 3
        assert [p.debit for p in result.pairs] == debits
        assert [p.credit for p in result.pairs] == credits
        assert result.leftovers == []

    def test_same_sign_only_group_is_all_leftover(self):
        result = reconcile_transfers([candidate("A", "-50"), candidate("B", "-50")])

        assert result.pairs == []
        assert len(result.leftovers) == 2

    def test_empty_input(self):
        result = reconcile_transfers([])

        assert result.pairs == []
        assert result.leftovers == []
        assert result.candidate_count == 0


@pytest.mark.unit
@pytest.mark.sync
class TestReconcileProperties:
    """Pair counts and completeness over generated candidate lists."""

    def _random_candidates(self, rng):
        texts = ["Til: Savings", "Fra: Brukskonto", "Overføring"]
        dates = ["2021-03-01", "2021-03-02"]
        amounts = ["100", "250.50", "300"]
        result = []
        for _ in range(rng.randint(0, 30)):
            amount = rng.choice(amounts)
            if rng.random() < 0.5:
                amount = "-" + amount
            result.append(
                candidate(rng.choice("ABC"), amount, date=rng.choice(dates), text=rng.choice(texts))
            )
        return result

    @pytest.mark.parametrize("seed", range(25))
    def test_pair_count_and_completeness(self, seed):
        rng = random.Random(seed)
        candidates = self._random_candidates(rng)

        result = reconcile_transfers(candidates)

        expected_pairs = 0
        for group in group_candidates(candidates).values():
            negatives = sum(1 for c in group if c.amount.is_negative())
            expected_pairs += min(negatives, len(group) - negatives)
        assert len(result.pairs) == expected_pairs
        assert result.unbalanced == []

        for pair in result.pairs:
            assert pair.debit.amount == -pair.credit.amount
            assert pair.debit.transaction.accounting_date == pair.credit.transaction.accounting_date
            assert pair.debit.transaction.text == pair.credit.transaction.text

        # Every candidate is used exactly once
        used = Counter(id(c) for pair in result.pairs for c in (pair.debit, pair.credit))
        used.update(id(c) for c in result.leftovers)
        assert used == Counter(id(c) for c in candidates)
        assert result.candidate_count == len(candidates)
