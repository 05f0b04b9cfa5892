"""FastAPI server exposing the UI snapshot and input endpoints."""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from android_ui_bridge import __version__
from android_ui_bridge.daemon.core import BridgeCore
from android_ui_bridge.daemon.models import (
    ClickRequest,
    KeyRequest,
    SwipeRequest,
    TapRequest,
    parse_query,
)
from android_ui_bridge.errors import BridgeError

logger = structlog.get_logger()

ResponsePayload = dict[str, Any]
EndpointResponse = Response | ResponsePayload


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage bridge lifecycle."""
    logger.info("bridge_starting")
    app.state.core = BridgeCore()
    config = app.state.core.config
    if not config.is_loopback:
        logger.warning(
            "bridge_bound_beyond_loopback",
            host=config.host,
            hint="The API has no authentication; put one in front of it",
        )
    await app.state.core.start()
    yield
    logger.info("bridge_stopping")
    await app.state.core.stop()


app = FastAPI(
    title="Android UI Bridge",
    version=__version__,
    lifespan=lifespan,
)


def _client_error(error: BridgeError) -> PlainTextResponse:
    return PlainTextResponse(error.message, status_code=400)


@app.middleware("http")
async def guard_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Log every request and turn unexpected faults into a 500."""
    start = time.time()
    try:
        response = await call_next(request)
    except Exception as exc:
        logger.exception("request_failed", method=request.method, path=request.url.path)
        return PlainTextResponse(f"error: {exc}", status_code=500)
    logger.info(
        "request_handled",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        elapsed_ms=round((time.time() - start) * 1000, 2),
    )
    return response


@app.exception_handler(StarletteHTTPException)
async def http_error(_request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """Unknown paths and wrong methods on known paths are both 'not found'."""
    if exc.status_code in (404, 405):
        return PlainTextResponse("not found", status_code=404)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


@app.get("/screen")
async def screen() -> ResponsePayload:
    """Flattened current hierarchy; the empty state before any snapshot."""
    core: BridgeCore = app.state.core
    snapshot = core.store.current()
    return core.serializer.screen_payload(snapshot, revision=core.store.revision)


@app.get("/health")
async def health() -> ResponsePayload:
    """Liveness and snapshot status."""
    core: BridgeCore = app.state.core
    return {
        "status": "ok" if core.is_running else "starting",
        "rev": core.store.revision,
        "has_snapshot": core.store.current() is not None,
        "privileged": core.action_executor.has_privileged_channel,
    }


@app.post("/click", response_model=None)
async def click(request: Request) -> EndpointResponse:
    """Click the first node whose text or description equals ``text``."""
    core: BridgeCore = app.state.core
    try:
        req = parse_query(ClickRequest, request.query_params, "missing text")
    except BridgeError as e:
        return _client_error(e)

    snapshot = core.store.current()
    if snapshot is None:
        return {"ok": False}
    ok = await asyncio.to_thread(core.matcher.find_and_click, snapshot.root, req.text)
    return {"ok": ok}


@app.post("/tap", response_model=None)
async def tap(request: Request) -> EndpointResponse:
    """Tap at x, y."""
    core: BridgeCore = app.state.core
    try:
        req = parse_query(TapRequest, request.query_params, "missing x/y")
    except BridgeError as e:
        return _client_error(e)

    ok = await asyncio.to_thread(core.action_executor.tap, req.x, req.y)
    return {"ok": ok}


@app.post("/swipe", response_model=None)
async def swipe(request: Request) -> EndpointResponse:
    """Swipe from x1, y1 to x2, y2 over ``dur`` milliseconds (default 300)."""
    core: BridgeCore = app.state.core
    try:
        req = parse_query(SwipeRequest, request.query_params, "missing x1/y1/x2/y2")
    except BridgeError as e:
        return _client_error(e)

    ok = await asyncio.to_thread(
        core.action_executor.swipe, req.x1, req.y1, req.x2, req.y2, req.dur
    )
    return {"ok": ok}


@app.post("/key", response_model=None)
async def key(request: Request) -> EndpointResponse:
    """Press home, back, enter or menu; anything else is ok=false."""
    core: BridgeCore = app.state.core
    req = parse_query(KeyRequest, request.query_params, "missing name")
    ok = await asyncio.to_thread(core.action_executor.key, req.name)
    return {"ok": ok}
