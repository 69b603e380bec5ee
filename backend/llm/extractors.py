# Role: Pull the generated text and a response id out of each provider's nested response.
# Never raises on missing or malformed fields: anything unreadable simply contributes no text.

from __future__ import annotations

import time
import uuid
from typing import Any, List, Optional

from google.genai import types
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from backend.llm.base import Extraction, extraction_from


# ----------------------------
# Gemini (google-genai SDK objects)
# ----------------------------
def extract_gemini_text(response: Optional[types.GenerateContentResponse]) -> Extraction:
    # 1) First candidate only
    # 2) Its content parts, skipping thought summaries
    # 3) Newline-join the text fragments
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return extraction_from("")

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []

    texts: List[str] = []
    for part in parts:
        if getattr(part, "thought", None):
            continue
        text = getattr(part, "text", None)
        if isinstance(text, str):
            texts.append(text)
    return extraction_from("\n".join(texts))


def gemini_response_id(response: Optional[types.GenerateContentResponse]) -> str:
    # Key line: best-effort correlation token, not a unique key.
    provided = getattr(response, "response_id", None)
    if isinstance(provided, str) and provided.strip():
        return provided.strip()
    try:
        return f"gemini-{uuid.uuid4().hex}"
    except NotImplementedError:
        # No OS randomness source available.
        return f"gemini-{int(time.time() * 1000)}"


def gemini_details(response: Optional[types.GenerateContentResponse]) -> Any:
    if response is None:
        return {}
    # Key line: response headers are transport detail, not provider output.
    return response.model_dump(mode="json", exclude_none=True, exclude={"sdk_http_response"})


# ----------------------------
# OpenAI Responses API (raw JSON)
# ----------------------------
class _OutputContent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: Optional[str] = None
    text: Any = None


class _OutputItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: Optional[str] = None
    content: Optional[List[Any]] = Field(default=None)


def _parse(model: type, value: Any) -> Optional[Any]:
    try:
        return model.model_validate(value)
    except ValidationError:
        return None


def extract_openai_text(body: Any) -> Extraction:
    output = body.get("output") if isinstance(body, dict) else None
    if not isinstance(output, list):
        return extraction_from("")

    texts: List[str] = []
    for raw_item in output:
        item = _parse(_OutputItem, raw_item)
        if item is None or item.type != "message":
            continue
        for raw_content in item.content or []:
            content = _parse(_OutputContent, raw_content)
            if content is None or content.type != "output_text":
                continue
            if isinstance(content.text, str):
                texts.append(content.text)
    return extraction_from("\n".join(texts))


def openai_response_id(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    value = body.get("id")
    return str(value) if value is not None else None
