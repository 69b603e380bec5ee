# Role: Input gatekeeper for a tutor turn. Checks the shared-secret header, parses the body tolerantly,
# and turns the raw JSON into a bounded TutorRequest before anything leaves the process.

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from backend.core.errors import UnauthorizedError, ValidationFailure
from backend.models.tutor import MAX_TEXT_CHARS, HistoryTurn, TargetLanguage, TutorRequest

APP_TOKEN_HEADER = "x-app-token"


def parse_body(raw: bytes) -> Dict[str, Any]:
    # Key line: a body we cannot read is treated as an empty request, not as an error.
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def check_app_token(headers: Mapping[str, str], expected: str) -> None:
    expected = (expected or "").strip()
    if not expected:
        return
    sent = (headers.get(APP_TOKEN_HEADER) or "").strip()
    if sent != expected:
        raise UnauthorizedError()


def normalize_language(value: Any) -> TargetLanguage:
    lang = str(value if value is not None else "").strip().lower()
    if lang in {"it", "ita"} or lang.startswith(("it-", "it_")) or "ital" in lang:
        return TargetLanguage.ITALIAN
    return TargetLanguage.SPANISH


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


class TutorRequestValidator:
    def validate(self, body: Mapping[str, Any]) -> TutorRequest:
        # 1) Text: present and bounded
        # 2) Language: normalized to the closed enum
        # 3) Context: history list and/or continuation id, whichever the client sent
        text = _coerce_text(body.get("text"))
        if not text:
            raise ValidationFailure("Missing text")
        if len(text) > MAX_TEXT_CHARS:
            raise ValidationFailure("Text too long")

        return TutorRequest(
            lang=normalize_language(body.get("lang")),
            text=text,
            history=self._history(body.get("history")),
            previous_response_id=self._previous_response_id(body.get("previous_response_id")),
        )

    def _history(self, raw: Any) -> List[HistoryTurn]:
        if not isinstance(raw, list):
            return []
        turns: List[HistoryTurn] = []
        for item in raw:
            if not isinstance(item, dict):
                continue
            turn = HistoryTurn(role=item.get("role"), text=item.get("text"))
            if turn.text:
                turns.append(turn)
        return turns

    def _previous_response_id(self, raw: Any) -> Optional[str]:
        if not raw:
            return None
        return str(raw).strip() or None
