# ABOUTME: Canned Gemini generateContent replies and insight texts for tests.
# ABOUTME: Includes well-formed, empty, and malformed reply shapes.

from typing import Any


def reply(text: str) -> dict[str, Any]:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


INSIGHT_TEXT = """Reading trends: the collection leans heavily on classic fiction.

1. Try The Remains of the Day
2. Add more science fiction
I recommend exploring poetry anthologies
Library health score: 8 out of 10
"""

INSIGHT_TEXT_HIGH_SCORE = "Overall score: 42\nNothing else to add."

SUMMARY_TEXT = "  A sweeping tale of love and loss on the Riviera.  "

EMPTY_REPLY: dict[str, Any] = {"candidates": []}

BLANK_TEXT_REPLY = reply("   ")

MALFORMED_REPLY = {"candidates": [{"content": {}}]}
