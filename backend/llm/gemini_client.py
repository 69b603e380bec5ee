# Role: Gemini adapter for the tutor. Centralizes model name, generation parameters and error mapping,
# so the flow calls a single method: generate(request, instructions).

from __future__ import annotations

from typing import Any, List, Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from backend.config import Settings
from backend.core.errors import MissingCredentialError, UpstreamError
from backend.llm.base import Generation, TutorProvider
from backend.llm.extractors import extract_gemini_text, gemini_details, gemini_response_id
from backend.models.tutor import HistoryTurn, TutorRequest

TEMPERATURE = 0.6
MAX_OUTPUT_TOKENS = 280

_MODEL_ROLES = {"model", "assistant"}


def _gemini_role(turn: HistoryTurn) -> str:
    # Key line: anything that is not clearly the model's turn is sent as the user's.
    return "model" if turn.role in _MODEL_ROLES else "user"


def build_contents(request: TutorRequest) -> List[types.Content]:
    contents = [
        types.Content(role=_gemini_role(turn), parts=[types.Part(text=turn.text)])
        for turn in request.history
    ]
    contents.append(types.Content(role="user", parts=[types.Part(text=request.text)]))
    return contents


class GeminiClient(TutorProvider):
    name = "Gemini"
    credential_name = "GEMINI_API_KEY"
    empty_is_error = True

    def __init__(self, settings: Settings, client: Optional[Any] = None) -> None:
        # Key lines:
        # - Credential comes from Settings (no secrets in code, no env lookups per call).
        # - A missing key fails here, before any network activity.
        if not settings.gemini_api_key:
            raise MissingCredentialError(self.credential_name)

        self.settings = settings
        self.model_name = settings.gemini_model
        self.client = client or genai.Client(
            api_key=settings.gemini_api_key,
            http_options=types.HttpOptions(timeout=int(settings.upstream_timeout_seconds * 1000)),
        )

    def generate(self, request: TutorRequest, instructions: str) -> Generation:
        # 1) Build role-tagged contents (history + current text)
        # 2) Call Gemini once
        # 3) Extract text + response id (empty handling is the flow's call)
        contents = build_contents(request)
        config = types.GenerateContentConfig(
            system_instruction=types.Content(parts=[types.Part(text=instructions)]),
            temperature=TEMPERATURE,
            max_output_tokens=MAX_OUTPUT_TOKENS,
        )

        if self.settings.debug:
            print("\n--- GEMINI TUTOR ---")
            print("MODEL:", self.model_name, "| LANG:", request.lang.value, "| TURNS:", len(contents))

        try:
            resp = self.client.models.generate_content(
                model=self.model_name,
                contents=contents,
                config=config,
            )
        except genai_errors.APIError as e:
            if self.settings.debug:
                print("UPSTREAM ERROR:", e.code)
                print("--------------------\n")
            raise UpstreamError(self.name, e.code, e.details) from e

        extraction = extract_gemini_text(resp)
        response_id = gemini_response_id(resp)

        if self.settings.debug:
            print("RESPONSE ID:", response_id, "| EXTRACTION:", type(extraction).__name__)
            print("--------------------\n")

        return Generation(extraction=extraction, response_id=response_id, raw=gemini_details(resp))
