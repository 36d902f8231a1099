from __future__ import annotations

import asyncio
import contextlib
import logging
import time

from fastapi import FastAPI, Request

from flypad.api import api_router
from flypad.config import settings
from flypad.models.events import UserIdLoadRequested
from flypad.services import FlypadRuntime

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("flypad")


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the briefing event loop and stop it on shutdown."""

    runtime = FlypadRuntime()
    app.state.runtime = runtime
    app.state.runtime_task = asyncio.create_task(runtime.run())
    runtime.dispatch(UserIdLoadRequested())
    logger.info("Briefing runtime started")

    try:
        yield
    finally:
        task = app.state.runtime_task
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        await runtime.aclose()


app = FastAPI(title="Flypad Backend", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log basic request information for observability."""

    start_time = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        "HTTP %s %s -> %s (%.2f ms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


app.include_router(api_router)


@app.get("/", summary="Root")
def read_root() -> dict[str, str]:
    """Basic root endpoint for quick verification."""

    return {"message": "Flypad backend is running"}
