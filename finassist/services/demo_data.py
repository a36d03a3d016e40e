import random
from collections import defaultdict
from datetime import UTC, datetime, timedelta

from finassist.models.schemas import Account, Balances, FinancialSnapshot, Transaction

CATEGORIES = [
    "Food & Dining",
    "Shopping",
    "Transportation",
    "Bills & Utilities",
    "Entertainment",
    "Healthcare",
    "Groceries",
    "Travel",
    "Personal Care",
    "Other",
]

MERCHANTS = {
    "Food & Dining": ["Starbucks", "McDonald's", "Chipotle", "Subway", "Pizza Hut", "Local Restaurant", "Cafe Luna"],
    "Shopping": ["Amazon", "Target", "Walmart", "Best Buy", "Apple Store", "Nike", "H&M"],
    "Transportation": ["Uber", "Lyft", "Shell Gas", "Chevron", "Public Transit", "Airport Parking"],
    "Bills & Utilities": ["Electric Company", "Water Utility", "Internet Provider", "Phone Bill", "Rent Payment"],
    "Entertainment": ["Netflix", "Spotify", "Movie Theater", "Concert Tickets", "Gaming Store"],
    "Healthcare": ["CVS Pharmacy", "Doctor Visit", "Dentist", "Medical Lab", "Health Insurance"],
    "Groceries": ["Whole Foods", "Trader Joe's", "Safeway", "Costco", "Local Market"],
    "Travel": ["Airbnb", "Hotel", "United Airlines", "Expedia", "Car Rental"],
    "Personal Care": ["Salon", "Gym Membership", "Spa", "Barber Shop"],
    "Other": ["Miscellaneous", "Cash Withdrawal", "Transfer", "Online Purchase"],
}

INCOME_DESCRIPTIONS = ["Salary", "Freelance Work", "Investment Return", "Bonus", "Side Project", "Refund"]

# (min, max) expense amount per category
AMOUNT_RANGES = {
    "Bills & Utilities": (50, 300),
    "Shopping": (20, 500),
    "Travel": (20, 500),
    "Groceries": (30, 200),
    "Food & Dining": (10, 80),
}
DEFAULT_AMOUNT_RANGE = (15, 150)

INCOME_SHARE = 0.2
HISTORY_DAYS = 90


def _random_amount(rng: random.Random, low: float, high: float) -> float:
    return round(rng.uniform(low, high), 2)


def _random_date(rng: random.Random, now: datetime) -> datetime:
    return now - timedelta(days=rng.randrange(HISTORY_DAYS))


def generate_transactions(
    user_id: str, count: int = 80, rng: random.Random | None = None, now: datetime | None = None
) -> list[Transaction]:
    """
    Generates mock transactions for the last 90 days: 20% income, the rest expenses
    spread over CATEGORIES. Sorted newest first.
    """
    rng = rng or random.Random()
    now = now or datetime.now(UTC)

    transactions = []
    income_count = int(count * INCOME_SHARE)

    for _ in range(income_count):
        transactions.append(
            dict(
                amount=_random_amount(rng, 1000, 5000),
                type="income",
                category="Income",
                description=rng.choice(INCOME_DESCRIPTIONS),
                date=_random_date(rng, now),
            )
        )

    for _ in range(count - income_count):
        category = rng.choice(CATEGORIES)
        low, high = AMOUNT_RANGES.get(category, DEFAULT_AMOUNT_RANGE)
        transactions.append(
            dict(
                amount=_random_amount(rng, low, high),
                type="expense",
                category=category,
                description=rng.choice(MERCHANTS[category]),
                date=_random_date(rng, now),
            )
        )

    result = [
        Transaction(id=i, user_id=user_id, is_manual=False, created_at=now, **tx)
        for i, tx in enumerate(transactions, start=1)
    ]
    result.sort(key=lambda tx: tx.date, reverse=True)
    return result


def calculate_account_balances(transactions: list[Transaction]) -> list[Account]:
    """Derives demo checking / savings / credit card balances from total spending."""
    total_spent = sum(tx.amount for tx in transactions if tx.type == "expense")

    checking = max(5000 - total_spent * 0.6, 100)
    savings = max(10000 - total_spent * 0.3, 200)
    credit_available = 2000

    return [
        Account(
            account_id="acc_1",
            name="Checking Account",
            official_name="Primary Checking",
            type="depository",
            subtype="checking",
            mask="0000",
            balances=Balances(available=checking, current=checking, iso_currency_code="USD"),
        ),
        Account(
            account_id="acc_2",
            name="Savings Account",
            official_name="High Yield Savings",
            type="depository",
            subtype="savings",
            mask="1111",
            balances=Balances(available=savings, current=savings, iso_currency_code="USD"),
        ),
        Account(
            account_id="acc_3",
            name="Credit Card",
            official_name="Rewards Credit Card",
            type="credit",
            subtype="credit card",
            mask="3333",
            balances=Balances(
                available=credit_available, current=credit_available, limit=2000, iso_currency_code="USD"
            ),
        ),
    ]


def build_snapshot(
    transactions: list[Transaction], accounts: list[Account], recent_limit: int = 5
) -> FinancialSnapshot:
    """
    Builds the assistant context: total balance across accounts, the most recent
    expenses and spending summed per category.
    """
    spending = defaultdict(float)
    for tx in transactions:
        if tx.type == "expense":
            spending[tx.category] += tx.amount

    expenses = sorted((tx for tx in transactions if tx.type == "expense"), key=lambda tx: tx.date, reverse=True)

    return FinancialSnapshot(
        total_balance=round(sum(acc.balances.current or 0 for acc in accounts), 2),
        accounts=[{"name": acc.name, "balances": acc.balances} for acc in accounts],
        recent_transactions=[{"name": tx.description, "amount": tx.amount} for tx in expenses[:recent_limit]],
        spending_by_category={category: round(total, 2) for category, total in sorted(spending.items())},
    )
