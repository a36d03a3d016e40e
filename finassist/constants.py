# constants.py

PROMPTS = {
    "preamble": "You are a helpful financial advisor. Give brief, actionable advice (under 100 words).\n\n",
    "response_format": """Respond ONLY with a JSON object of the following shape, without markdown formatting:
{"message": "<your reply to the user>", "insights": ["<short insight>", "..."]}
"insights" must contain between 3 and 6 short, specific budgeting insights.

""",
}

MAX_HISTORY_MESSAGES = 6
MAX_PROMPT_TRANSACTIONS = 5

MIN_INSIGHTS = 3
MAX_INSIGHTS = 6

FALLBACK_MESSAGE = "I'm sorry, I couldn't put together a proper answer this time. Please try again."

FALLBACK_INSIGHTS = [
    "Track your spending by category to see where your money goes.",
    "Set aside a fixed share of every paycheck for savings.",
    "Review recurring subscriptions and cancel the ones you don't use.",
]
