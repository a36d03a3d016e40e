import json
import logging
import re
from dataclasses import dataclass, field

from finassist.constants import FALLBACK_INSIGHTS, FALLBACK_MESSAGE, MAX_INSIGHTS

logger = logging.getLogger(__name__)

# Only the fence wrapping the whole reply is removed
_OPENING_FENCE = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"\n?```$")


@dataclass(frozen=True)
class ParsedReply:
    """A reply the model returned in the expected JSON shape."""

    message: str
    insights: list[str]


@dataclass(frozen=True)
class FallbackReply:
    """Substitute reply used when the model output could not be parsed."""

    message: str
    insights: list[str] = field(default_factory=lambda: list(FALLBACK_INSIGHTS))


AssistantReply = ParsedReply | FallbackReply


def _strip_code_fences(text: str) -> str:
    text = text.strip()
    text = _OPENING_FENCE.sub("", text, count=1)
    text = _CLOSING_FENCE.sub("", text, count=1)
    return text.strip()


def _load_json_object(text: str):
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        # JSONDecodeError, oversized integers and deep nesting alike
        pass

    # Model sometimes wraps the object in prose
    start, end = text.find("{"), text.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        return json.loads(text[start : end + 1])
    except (ValueError, RecursionError):
        return None


def parse_reply(raw_text: str | None) -> AssistantReply:
    """
    Normalizes raw model output into a reply.

    Never raises: anything that is not a JSON object with a non-empty string `message`
    and a non-empty list of string `insights` becomes a FallbackReply carrying the raw text.
    """
    text = raw_text if isinstance(raw_text, str) else ""
    fallback = FallbackReply(message=text.strip() or FALLBACK_MESSAGE)

    data = _load_json_object(_strip_code_fences(text))
    if not isinstance(data, dict):
        logger.warning("Model reply is not a JSON object, using fallback insights")
        return fallback

    message = data.get("message")
    insights = data.get("insights")

    if not isinstance(message, str) or not message.strip():
        logger.warning("Model reply has no message, using fallback insights")
        return fallback

    if not isinstance(insights, list) or not insights or not all(isinstance(i, str) for i in insights):
        logger.warning("Model reply has no usable insights, using fallback insights")
        return fallback

    return ParsedReply(message=message, insights=insights[:MAX_INSIGHTS])
