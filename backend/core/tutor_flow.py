# Role: Orchestrator for one tutor turn. Runs auth -> parse -> validate -> provider -> extract and either
# returns a TutorReply or raises a TutorError. Holds no state between turns.

from __future__ import annotations

from typing import Mapping, Optional

from backend.config import Settings
from backend.core.errors import EmptyGenerationError
from backend.core.validator import TutorRequestValidator, check_app_token, parse_body
from backend.llm.base import AbsentText, ProviderFactory
from backend.models.tutor import TutorReply
from backend.prompts.tutor_prompt import build_tutor_instructions


class TutorFlow:
    def __init__(
        self,
        settings: Settings,
        provider_factory: ProviderFactory,
        validator: Optional[TutorRequestValidator] = None,
    ) -> None:
        self.settings = settings
        self.provider_factory = provider_factory
        self.validator = validator or TutorRequestValidator()

    def handle_turn(self, headers: Mapping[str, str], raw_body: bytes) -> TutorReply:
        # 1) Shared-secret header (skipped when no secret is configured)
        # 2) Tolerant body parse + bounded validation
        # 3) Provider construction fails fast on a missing credential
        # 4) One upstream call with the tutor instructions
        # 5) Empty generation is an error only for providers that say so
        check_app_token(headers, self.settings.app_token)
        request = self.validator.validate(parse_body(raw_body))

        provider = self.provider_factory(self.settings)
        generation = provider.generate(request, build_tutor_instructions(request.lang))

        if isinstance(generation.extraction, AbsentText):
            if provider.empty_is_error:
                raise EmptyGenerationError(generation.response_id, generation.raw)
            return TutorReply(text="", response_id=generation.response_id)

        return TutorReply(text=generation.extraction.text, response_id=generation.response_id)
