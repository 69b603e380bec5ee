# Role: Client-side conversation memory shared by cli.py and the Streamlit UI. The server keeps nothing,
# so this is what gets resent: Gemini history, or an OpenAI continuation id when chaining is possible.

from __future__ import annotations

from typing import Any, Dict, List, Optional


class TutorSession:
    def __init__(self, provider: str, lang: str = "es", chain_responses: bool = False) -> None:
        self.provider = provider
        self.lang = lang
        # Key line: OpenAI can only resolve previous_response_id for responses it stored.
        self.chain_responses = chain_responses
        self.history: List[Dict[str, str]] = []
        self.previous_response_id: Optional[str] = None

    def reset(self) -> None:
        self.history = []
        self.previous_response_id = None

    def switch(self, provider: Optional[str] = None, lang: Optional[str] = None) -> bool:
        """Change provider and/or language; context from the old pair is dropped. Returns True on change."""
        new_provider = provider or self.provider
        new_lang = lang or self.lang
        if (new_provider, new_lang) == (self.provider, self.lang):
            return False
        self.provider = new_provider
        self.lang = new_lang
        self.reset()
        return True

    def body(self, text: str) -> Dict[str, Any]:
        body: Dict[str, Any] = {"text": text, "lang": self.lang}
        if self.provider == "gemini" and self.history:
            body["history"] = list(self.history)
        if self.provider == "openai" and self.chain_responses and self.previous_response_id:
            body["previous_response_id"] = self.previous_response_id
        return body

    def record(self, text: str, reply_text: str, response_id: Optional[str]) -> None:
        self.history.append({"role": "user", "text": text})
        self.history.append({"role": "model", "text": reply_text})
        if self.provider == "openai" and self.chain_responses:
            self.previous_response_id = response_id
        else:
            self.previous_response_id = None

    def record_failure(self, status_code: int) -> None:
        # A rejected request may be rejecting the continuation id itself; don't resend it.
        if 400 <= status_code < 500:
            self.previous_response_id = None
