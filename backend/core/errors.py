# Role: Failure taxonomy for a tutor turn. Each error knows its HTTP status and JSON body, so the API
# layer converts any of them with one except clause.

from __future__ import annotations

from typing import Any, Dict, Optional


class TutorError(Exception):
    status_code: int = 500

    def payload(self) -> Dict[str, Any]:
        return {"error": str(self)}


class UnauthorizedError(TutorError):
    status_code = 401

    def __init__(self) -> None:
        super().__init__("Unauthorized")


class ValidationFailure(TutorError):
    status_code = 400


class MissingCredentialError(TutorError):
    status_code = 500

    def __init__(self, credential_name: str) -> None:
        self.credential_name = credential_name
        super().__init__(f"Server missing {credential_name}")


class UpstreamError(TutorError):
    """Provider answered with a non-2xx status; details carry its body untouched."""

    def __init__(self, provider: str, status: Optional[int], details: Any) -> None:
        self.provider = provider
        self.status = status
        self.details = details
        super().__init__(f"{provider} error")

    @property
    def status_code(self) -> int:  # type: ignore[override]
        # Key line: pass the upstream status through when it is a real HTTP error code.
        if isinstance(self.status, int) and 400 <= self.status <= 599:
            return self.status
        return 502

    def payload(self) -> Dict[str, Any]:
        return {"error": str(self), "status": self.status, "details": self.details}


class EmptyGenerationError(TutorError):
    """Provider returned 2xx with no extractable text (typically a safety block)."""

    status_code = 502

    def __init__(self, response_id: Optional[str], details: Any) -> None:
        self.response_id = response_id
        self.details = details
        super().__init__("Empty response")

    def payload(self) -> Dict[str, Any]:
        return {"error": str(self), "response_id": self.response_id, "details": self.details}
