# Role: Request-scoped data model for one tutor turn. Everything here is built at the start of a
# request and dropped at its end; the only cross-turn memory is what the client resends.

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

MAX_TEXT_CHARS = 1500


class TargetLanguage(str, Enum):
    SPANISH = "es"
    ITALIAN = "it"

    @property
    def display_name(self) -> str:
        # Key line: this is the only part of the prompt that varies.
        if self is TargetLanguage.ITALIAN:
            return "Italiano"
        return "Espanhol (rioplatense neutro)"


class HistoryTurn(BaseModel):
    role: str = "user"
    text: str

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, value: object) -> str:
        return str(value if value is not None else "user").strip().lower()

    @field_validator("text", mode="before")
    @classmethod
    def _coerce_text(cls, value: object) -> str:
        return str(value if value is not None else "").strip()


class TutorRequest(BaseModel):
    lang: TargetLanguage = TargetLanguage.SPANISH
    text: str = Field(min_length=1, max_length=MAX_TEXT_CHARS)
    history: List[HistoryTurn] = Field(default_factory=list)
    previous_response_id: Optional[str] = None


class TutorReply(BaseModel):
    text: str
    response_id: Optional[str] = None
