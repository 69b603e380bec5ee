# Role: FastAPI dependencies shared by the routers. Tests swap any of these through
# app.dependency_overrides instead of touching the process environment.

from __future__ import annotations

from fastapi import Request

from backend.config import Settings
from backend.llm.base import ProviderFactory
from backend.llm.gemini_client import GeminiClient
from backend.llm.openai_client import OpenAIClient


def get_settings(request: Request) -> Settings:
    # Key line: built once by create_app; never re-read from the environment per request.
    return request.app.state.settings


def get_gemini_factory() -> ProviderFactory:
    return GeminiClient


def get_openai_factory() -> ProviderFactory:
    return OpenAIClient
