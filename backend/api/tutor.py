# Role: Thin HTTP adapter for the tutor endpoints. Reads the raw body, hands the turn to TutorFlow in a
# worker thread, and converts the reply or any failure into JSON (the transport never sees an exception).

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from backend.api.deps import get_gemini_factory, get_openai_factory, get_settings
from backend.config import Settings
from backend.core.errors import TutorError
from backend.core.tutor_flow import TutorFlow
from backend.llm.base import ProviderFactory

router = APIRouter(tags=["tutor"])

CORS_HEADERS = {
    "access-control-allow-origin": "*",
    "access-control-allow-headers": "content-type, x-app-token",
    "access-control-allow-methods": "POST, OPTIONS",
}


def tutor_json(data: Dict[str, Any], status_code: int = 200, no_store: bool = False) -> JSONResponse:
    headers = dict(CORS_HEADERS)
    if no_store:
        headers["cache-control"] = "no-store"
    return JSONResponse(content=data, status_code=status_code, headers=headers)


async def _handle(request: Request, settings: Settings, factory: ProviderFactory, no_store: bool) -> JSONResponse:
    try:
        raw_body = await request.body()
        flow = TutorFlow(settings, factory)
        reply = await run_in_threadpool(flow.handle_turn, request.headers, raw_body)
        return tutor_json(reply.model_dump(), 200, no_store)
    except TutorError as e:
        return tutor_json(e.payload(), e.status_code, no_store)
    except Exception as e:
        # Key line: outermost catch; every failure leaves as JSON.
        if settings.debug:
            print(f"\n--- TUTOR SERVER ERROR ---\n{type(e).__name__}: {e}\n--------------------------\n")
        return tutor_json({"error": "Server error", "details": str(e) or type(e).__name__}, 500, no_store)


@router.options("/openai/tutor")
def openai_preflight() -> JSONResponse:
    return tutor_json({"ok": True})


@router.options("/gemini/tutor")
def gemini_preflight() -> JSONResponse:
    return tutor_json({"ok": True}, no_store=True)


@router.options("/tutor")
def tutor_preflight(settings: Settings = Depends(get_settings)) -> JSONResponse:
    return tutor_json({"ok": True}, no_store=settings.tutor_provider == "gemini")


@router.post("/gemini/tutor")
async def gemini_tutor(
    request: Request,
    settings: Settings = Depends(get_settings),
    factory: ProviderFactory = Depends(get_gemini_factory),
) -> JSONResponse:
    return await _handle(request, settings, factory, no_store=True)


@router.post("/openai/tutor")
async def openai_tutor(
    request: Request,
    settings: Settings = Depends(get_settings),
    factory: ProviderFactory = Depends(get_openai_factory),
) -> JSONResponse:
    return await _handle(request, settings, factory, no_store=False)


@router.post("/tutor")
async def tutor(
    request: Request,
    settings: Settings = Depends(get_settings),
    gemini_factory: ProviderFactory = Depends(get_gemini_factory),
    openai_factory: ProviderFactory = Depends(get_openai_factory),
) -> JSONResponse:
    # Key line: the unprefixed route serves whichever provider the deployment selected.
    if settings.tutor_provider == "gemini":
        return await _handle(request, settings, gemini_factory, no_store=True)
    return await _handle(request, settings, openai_factory, no_store=False)
