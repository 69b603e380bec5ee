# Role: Common shape for the language-model providers. The flow only talks to TutorProvider, so
# validation and error shaping are written once for both upstreams.

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Union

from backend.config import Settings
from backend.models.tutor import TutorRequest


@dataclass(frozen=True)
class PresentText:
    text: str


@dataclass(frozen=True)
class AbsentText:
    pass


Extraction = Union[PresentText, AbsentText]


def extraction_from(text: str) -> Extraction:
    text = (text or "").strip()
    return PresentText(text) if text else AbsentText()


@dataclass(frozen=True)
class Generation:
    extraction: Extraction
    response_id: Optional[str]
    raw: Dict[str, Any] = field(default_factory=dict)


class TutorProvider(ABC):
    name: str = ""
    credential_name: str = ""
    # Key line: Gemini treats an empty generation as a failure; OpenAI returns it as-is.
    empty_is_error: bool = False

    @abstractmethod
    def generate(self, request: TutorRequest, instructions: str) -> Generation:
        """Make exactly one upstream call and return its extracted text."""


ProviderFactory = Callable[[Settings], TutorProvider]
