import pytest

from finassist.constants import FALLBACK_INSIGHTS, FALLBACK_MESSAGE, MAX_INSIGHTS, MIN_INSIGHTS
from finassist.services.replies import FallbackReply, ParsedReply, parse_reply


def test_invalid_json_falls_back():
    reply = parse_reply("Not valid JSON")

    assert isinstance(reply, FallbackReply)
    assert reply.message == "Not valid JSON"
    assert reply.insights == FALLBACK_INSIGHTS
    assert len(reply.insights) == 3


def test_code_fence_is_stripped():
    reply = parse_reply('```json\n{"message":"Save more","insights":["Cut dining out"]}\n```')

    assert isinstance(reply, ParsedReply)
    assert reply.message == "Save more"
    assert reply.insights == ["Cut dining out"]


def test_json_embedded_in_prose():
    reply = parse_reply('Sure! {"message": "Hi", "insights": ["a", "b", "c"]} Hope that helps.')

    assert reply == ParsedReply(message="Hi", insights=["a", "b", "c"])


def test_insights_capped():
    raw = '{"message": "Hi", "insights": ["1", "2", "3", "4", "5", "6", "7", "8"]}'

    reply = parse_reply(raw)

    assert len(reply.insights) == MAX_INSIGHTS


@pytest.mark.parametrize(
    "raw",
    [
        '{"insights": ["a", "b", "c"]}',
        '{"message": "Hi"}',
        '{"message": "Hi", "insights": []}',
        '{"message": "Hi", "insights": "not a list"}',
        '{"message": 42, "insights": ["a"]}',
        '{"message": "Hi", "insights": [1, 2, 3]}',
        '["message", "insights"]',
        "null",
        "{broken",
        "```",
        "1" * 5000,
        '{"message": "Hi", "insights": ["a"], "total": ' + "9" * 5000 + "}",
        "[" * 100000,
        '{"message": "Hi", "insights": ' + "[" * 100000 + "]}",
    ],
)
def test_malformed_shapes_fall_back(raw):
    reply = parse_reply(raw)

    assert isinstance(reply, FallbackReply)
    assert reply.message == raw.strip()
    assert MIN_INSIGHTS <= len(reply.insights) <= MAX_INSIGHTS


@pytest.mark.parametrize("raw", ["", "   ", None])
def test_empty_output_uses_fallback_message(raw):
    reply = parse_reply(raw)

    assert isinstance(reply, FallbackReply)
    assert reply.message == FALLBACK_MESSAGE


def test_fallback_insights_are_not_shared():
    reply = parse_reply("oops")
    reply.insights.append("mutated")

    assert parse_reply("oops").insights == FALLBACK_INSIGHTS


def test_code_fence_inside_message_is_kept():
    raw = '```json\n{"message": "Run this:\\n```\\nbudget --month\\n```", "insights": ["a", "b", "c"]}\n```'

    reply = parse_reply(raw)

    assert isinstance(reply, ParsedReply)
    assert reply.message == "Run this:\n```\nbudget --month\n```"


def test_unfenced_json_with_backticks():
    reply = parse_reply('{"message": "Use ``` for code", "insights": ["a", "b", "c"]}')

    assert reply.message == "Use ``` for code"
