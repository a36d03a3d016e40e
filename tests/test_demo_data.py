import random
from datetime import UTC, datetime, timedelta

import pytest

from finassist.services.demo_data import (
    AMOUNT_RANGES,
    CATEGORIES,
    build_snapshot,
    calculate_account_balances,
    generate_transactions,
)

NOW = datetime(2025, 6, 1, tzinfo=UTC)


@pytest.fixture
def transactions():
    return generate_transactions("user-1", count=80, rng=random.Random(42), now=NOW)


def test_generate_transactions_mix(transactions):
    income = [tx for tx in transactions if tx.type == "income"]
    expenses = [tx for tx in transactions if tx.type == "expense"]

    assert len(transactions) == 80
    assert len(income) == 16
    assert len(expenses) == 64
    assert all(1000 <= tx.amount <= 5000 for tx in income)
    assert all(tx.category in CATEGORIES for tx in expenses)


def test_generate_transactions_sorted_and_recent(transactions):
    dates = [tx.date for tx in transactions]

    assert dates == sorted(dates, reverse=True)
    assert all(NOW - timedelta(days=90) < d <= NOW for d in dates)
    assert len({tx.id for tx in transactions}) == 80


def test_expense_amounts_follow_category_ranges(transactions):
    for tx in transactions:
        if tx.category in AMOUNT_RANGES:
            low, high = AMOUNT_RANGES[tx.category]
            assert low <= tx.amount <= high


def test_generation_is_reproducible_with_seed():
    first = generate_transactions("u", count=20, rng=random.Random(7), now=NOW)
    second = generate_transactions("u", count=20, rng=random.Random(7), now=NOW)

    assert first == second


def test_account_balances_floor():
    big_spender = generate_transactions("u", count=10, rng=random.Random(1), now=NOW)
    for tx in big_spender:
        tx.type = "expense"
        tx.amount = 10_000

    checking, savings, credit = calculate_account_balances(big_spender)

    assert checking.balances.current == 100
    assert savings.balances.current == 200
    assert credit.balances.limit == 2000


def test_account_balances_without_spending():
    checking, savings, credit = calculate_account_balances([])

    assert checking.balances.current == 5000
    assert savings.balances.current == 10000
    assert credit.balances.available == 2000


def test_snapshot_totals(transactions):
    accounts = calculate_account_balances(transactions)

    snapshot = build_snapshot(transactions, accounts)

    expected_total = round(sum(acc.balances.current for acc in accounts), 2)
    assert snapshot.total_balance == expected_total
    assert len(snapshot.recent_transactions) == 5

    food = sum(tx.amount for tx in transactions if tx.category == "Food & Dining")
    if food:
        assert snapshot.spending_by_category["Food & Dining"] == pytest.approx(food, abs=0.01)
    assert "Income" not in snapshot.spending_by_category
