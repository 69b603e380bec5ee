# Role: Central configuration module. Loads .env into environment variables and builds an immutable
# Settings object once at startup. Handlers receive Settings through backend.api.deps, never via os.environ.

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

_TRUTHY = {"1", "true", "yes"}


def load_env() -> None:
    """
    Load .env into os.environ.
    Existing environment variables win over .env values (python-dotenv default).
    """
    load_dotenv()


def _flag(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    # Key line: accept common truthy values.
    return value.strip().lower() in _TRUTHY


def _seconds(value: Optional[str], default: float) -> float:
    try:
        parsed = float(value) if value is not None else default
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@dataclass(frozen=True)
class Settings:
    app_token: str = ""
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    openai_api_key: str = ""
    openai_model: str = "gpt-4.1"
    openai_base_url: str = "https://api.openai.com/v1"
    openai_store_responses: bool = False
    tutor_provider: str = "openai"
    upstream_timeout_seconds: float = 30.0
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            app_token=(env.get("APP_TOKEN") or "").strip(),
            gemini_api_key=(env.get("GEMINI_API_KEY") or "").strip(),
            gemini_model=(env.get("GEMINI_MODEL") or "").strip() or defaults.gemini_model,
            openai_api_key=(env.get("OPENAI_API_KEY") or "").strip(),
            openai_model=(env.get("OPENAI_MODEL") or "").strip() or defaults.openai_model,
            openai_base_url=((env.get("OPENAI_BASE_URL") or "").strip() or defaults.openai_base_url).rstrip("/"),
            openai_store_responses=_flag(env.get("OPENAI_STORE_RESPONSES")),
            tutor_provider=(env.get("TUTOR_PROVIDER") or defaults.tutor_provider).strip().lower(),
            upstream_timeout_seconds=_seconds(env.get("UPSTREAM_TIMEOUT_SECONDS"), defaults.upstream_timeout_seconds),
            debug=_flag(env.get("DEBUG")),
        )
