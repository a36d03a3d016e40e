from collections.abc import Sequence

from finassist.constants import MAX_HISTORY_MESSAGES, MAX_PROMPT_TRANSACTIONS, PROMPTS
from finassist.models.schemas import ChatMessage, FinancialSnapshot


def _money(value: float | None) -> str:
    if value is None:
        return "n/a"
    if float(value).is_integer():
        return f"${int(value)}"
    return f"${value}"


def _snapshot_section(snapshot: FinancialSnapshot) -> str:
    section = "User's Financial Data:\n"

    if snapshot.total_balance:
        section += f"- Total Balance: {_money(snapshot.total_balance)}\n"

    if snapshot.accounts:
        section += f"- Accounts: {len(snapshot.accounts)}\n"
        for acc in snapshot.accounts:
            section += f"  • {acc.name}: {_money(acc.balances.current)}\n"

    if snapshot.recent_transactions:
        section += "- Recent Transactions:\n"
        for tx in snapshot.recent_transactions[:MAX_PROMPT_TRANSACTIONS]:
            section += f"  • {tx.name}: {_money(tx.amount)}\n"

    if snapshot.spending_by_category is not None:
        section += "- Spending by Category:\n"
        for category, amount in snapshot.spending_by_category.items():
            section += f"  • {category}: {_money(amount)}\n"

    return section + "\n"


def _history_section(history: Sequence[ChatMessage]) -> str:
    recent = list(history)[-MAX_HISTORY_MESSAGES:]
    if not recent:
        return ""

    section = "Recent Conversation:\n"
    for msg in recent:
        role = "User" if msg.sender == "user" else "Assistant"
        section += f"{role}: {msg.text}\n"
    return section + "\n"


def build_prompt(
    message: str,
    snapshot: FinancialSnapshot | None = None,
    history: Sequence[ChatMessage] | None = None,
) -> str:
    """
    Assembles the assistant prompt.

    The result depends only on the arguments: the same message, snapshot and history
    always produce the same text. Only the last MAX_HISTORY_MESSAGES history entries are used.
    """
    prompt = PROMPTS["preamble"]

    if snapshot is not None:
        prompt += _snapshot_section(snapshot)

    if history:
        prompt += _history_section(history)

    prompt += PROMPTS["response_format"]
    prompt += f"User: {message}\nAssistant:"
    return prompt
