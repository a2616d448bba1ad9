"""FastAPI application exposing the total-amount endpoint."""

import asyncio
import contextlib
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from receipt_total.api.handler import HandlerRequest, TotalAmountHandler, build_handler
from receipt_total.config.settings import Settings
from receipt_total.logging.logger import Log
from receipt_total.rate_limit.memory_limiter import run_periodic_cleanup

# The handler answers OPTIONS and rejects everything except POST.
_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def create_app(settings: Settings, handler: TotalAmountHandler | None = None) -> FastAPI:
    """Build the application. ``handler`` defaults to one wired from settings."""
    total_amount_handler = handler if handler is not None else build_handler(settings)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        sweep = asyncio.create_task(
            run_periodic_cleanup(
                total_amount_handler.rate_limiter,
                settings.rate_limit_cleanup_interval_seconds,
            )
        )
        Log.info(f"Serving /{settings.endpoint_name} ({settings.app_env})")
        try:
            yield
        finally:
            sweep.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sweep

    app = FastAPI(title="Receipt Total", version="1.0.0", lifespan=lifespan)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    @app.api_route(f"/{settings.endpoint_name}", methods=_ALL_METHODS)
    async def get_total_amount(request: Request) -> Response:
        result = await total_amount_handler.handle(
            HandlerRequest(
                method=request.method,
                headers=dict(request.headers),
                body=await request.body(),
                client_address=client_address(request),
            )
        )
        if result.payload is None:
            return Response(status_code=result.status_code, headers=result.headers)
        return JSONResponse(result.payload, status_code=result.status_code, headers=result.headers)

    return app


def client_address(request: Request) -> str:
    """First hop of X-Forwarded-For, else the socket peer."""
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client is not None and request.client.host:
        return request.client.host
    return "unknown"
