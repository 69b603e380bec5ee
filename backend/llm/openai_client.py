# Role: OpenAI Responses API adapter for the tutor. Sends instructions + a single input text, chaining
# turns through previous_response_id. Non-2xx answers are passed through with their body untouched.

from __future__ import annotations

from typing import Any, Dict

import requests

from backend.config import Settings
from backend.core.errors import MissingCredentialError, UpstreamError
from backend.llm.base import Generation, TutorProvider
from backend.llm.extractors import extract_openai_text, openai_response_id
from backend.models.tutor import TutorRequest

TEMPERATURE = 0.6
MAX_OUTPUT_TOKENS = 280


class OpenAIClient(TutorProvider):
    name = "OpenAI"
    credential_name = "OPENAI_API_KEY"

    def __init__(self, settings: Settings) -> None:
        if not settings.openai_api_key:
            raise MissingCredentialError(self.credential_name)
        self.settings = settings
        self.url = f"{settings.openai_base_url}/responses"

    def build_payload(self, request: TutorRequest, instructions: str) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self.settings.openai_model,
            "instructions": instructions,
            "input": request.text,
            "max_output_tokens": MAX_OUTPUT_TOKENS,
            "temperature": TEMPERATURE,
            "store": self.settings.openai_store_responses,
        }
        # Key line: multi-turn continuity is the provider's job; we only forward the opaque id.
        if request.previous_response_id:
            payload["previous_response_id"] = request.previous_response_id
        return payload

    def generate(self, request: TutorRequest, instructions: str) -> Generation:
        # 1) Build payload
        # 2) POST once (bounded timeout, no retries)
        # 3) Non-2xx -> UpstreamError with the body verbatim
        # 4) Extract output_text fragments + top-level id
        payload = self.build_payload(request, instructions)

        if self.settings.debug:
            print("\n--- OPENAI TUTOR ---")
            print("MODEL:", payload["model"], "| LANG:", request.lang.value,
                  "| CHAINED:", "previous_response_id" in payload)

        r = requests.post(
            self.url,
            json=payload,
            headers={"Authorization": f"Bearer {self.settings.openai_api_key}"},
            timeout=self.settings.upstream_timeout_seconds,
        )

        try:
            data = r.json()
        except ValueError:
            data = {}

        if self.settings.debug:
            print("STATUS:", r.status_code)
            print("--------------------\n")

        if not r.ok:
            raise UpstreamError(self.name, r.status_code, data)

        return Generation(
            extraction=extract_openai_text(data),
            response_id=openai_response_id(data),
            raw=data if isinstance(data, dict) else {},
        )
