from __future__ import annotations

from google.genai import types

from backend.llm.base import AbsentText, PresentText
from backend.llm.extractors import (
    extract_gemini_text,
    extract_openai_text,
    gemini_response_id,
    openai_response_id,
)


def _gemini(*texts: str, response_id=None) -> types.GenerateContentResponse:
    parts = [types.Part(text=t) for t in texts]
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=parts))],
        response_id=response_id,
    )


def test_gemini_joins_parts() -> None:
    assert extract_gemini_text(_gemini("Hola", "¿Cómo estás?")) == PresentText("Hola\n¿Cómo estás?")


def test_gemini_skips_thoughts() -> None:
    resp = types.GenerateContentResponse(candidates=[types.Candidate(content=types.Content(
        role="model",
        parts=[types.Part(text="pensando", thought=True), types.Part(text=" Ciao ")],
    ))])
    assert extract_gemini_text(resp) == PresentText("Ciao")


def test_gemini_absent_when_blocked() -> None:
    blocked = types.GenerateContentResponse(candidates=[types.Candidate(finish_reason=types.FinishReason.SAFETY)])
    assert isinstance(extract_gemini_text(blocked), AbsentText)
    assert isinstance(extract_gemini_text(types.GenerateContentResponse()), AbsentText)
    assert isinstance(extract_gemini_text(None), AbsentText)
    assert isinstance(extract_gemini_text(_gemini("  ", "\n")), AbsentText)


def test_gemini_response_id() -> None:
    assert gemini_response_id(_gemini("x", response_id="abc")) == "abc"
    synthesized = gemini_response_id(_gemini("x"))
    assert synthesized.startswith("gemini-")
    assert synthesized != gemini_response_id(_gemini("x"))


def test_openai_filters_message_output_text() -> None:
    body = {
        "id": "resp_1",
        "output": [
            {"type": "reasoning", "content": [{"type": "output_text", "text": "hidden"}]},
            {"type": "message", "content": [
                {"type": "output_text", "text": "Hola"},
                {"type": "refusal", "refusal": "no"},
                {"type": "output_text", "text": 5},
            ]},
            "junk",
            {"type": "message", "content": [{"type": "output_text", "text": "¿Cómo estás?"}]},
        ],
    }
    assert extract_openai_text(body) == PresentText("Hola\n¿Cómo estás?")
    assert openai_response_id(body) == "resp_1"


def test_openai_tolerates_missing_fields() -> None:
    assert isinstance(extract_openai_text({}), AbsentText)
    assert isinstance(extract_openai_text({"output": None}), AbsentText)
    assert isinstance(extract_openai_text({"output": [{"type": "message", "content": None}]}), AbsentText)
    assert isinstance(extract_openai_text([]), AbsentText)
    assert openai_response_id({}) is None
    assert openai_response_id(None) is None
