# ampd/web/app.py
from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from ampd.config import CORS_ORIGINS, FETCH_FAILED_MESSAGE, URL_REQUIRED_MESSAGE
from ampd.models import GameListingResult
from ampd.scrape import orchestrator
from ampd.scrape.http import StoreFetchError
from ampd.utils_debug import dbg, log_error


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _resolve_payload(payload: Any) -> GameListingResult:
    url = payload.get("url") if isinstance(payload, dict) else None
    region = payload.get("region") if isinstance(payload, dict) else None
    if region is not None and not isinstance(region, str):
        region = None

    try:
        if region:
            return orchestrator.resolve_regional(url, region)
        return orchestrator.resolve(url)
    except StoreFetchError as e:
        # Storefront trouble is not the caller's problem; answer with what we have.
        log_error("api", url=e.url, status=e.status_code, error=str(e))
        return e.partial


async def resolve_game_info(request: Request) -> JSONResponse:
    """
    POST {"url": "...", "region": "KR"?}

    200 {"data": {...}}     found fields only (possibly none)
    400 {"error": ...}      url missing / not a string
    500 {"error": ...}      anything unexpected
    """
    try:
        payload = await request.json()
    except ValueError as e:
        log_error("api", error=f"bad body: {e}")
        return _error(500, FETCH_FAILED_MESSAGE)

    url = payload.get("url") if isinstance(payload, dict) else None
    if not isinstance(url, str) or not url.strip():
        return _error(400, URL_REQUIRED_MESSAGE)

    try:
        result = await run_in_threadpool(_resolve_payload, payload)
    except Exception as e:
        log_error("api", url=url, error=repr(e))
        return _error(500, FETCH_FAILED_MESSAGE)

    dbg("api", url=url, found=sorted(result.to_dict()))
    return JSONResponse({"data": result.to_dict()})


def create_app() -> FastAPI:
    app = FastAPI(title="AMPD Game Info API", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(CORS_ORIGINS),
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_api_route("/resolve-game-info", resolve_game_info, methods=["POST"])
    # Path the dashboard calls
    app.add_api_route("/api/fetch-game-info", resolve_game_info, methods=["POST"])

    @app.get("/healthz")
    def healthz():
        return {"ok": True}

    return app


app = create_app()
