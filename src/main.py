"""tideflow - energy-matched task flow with reflection analytics."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.dates import InvalidDateKeyError
from src.core.errors import classify_error_with_response, http_status_for
from src.core.logging import configure_logfire, instrument_fastapi, log_rejected_request
from src.core.task_store import TaskStore, TaskStoreError
from src.interface.api_router import router as api_router


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Startup
    configure_logfire()

    if settings.store_snapshot_path:
        app.state.task_store = TaskStore.load(settings.require_snapshot_path())
    yield
    # Shutdown
    if settings.store_snapshot_path:
        app.state.task_store.save(settings.require_snapshot_path())


app = FastAPI(
    title="tideflow",
    description="Energy-matched task flow with reflection analytics",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.task_store = TaskStore()

# Instrument FastAPI with Logfire
instrument_fastapi(app)

# Register routers
app.include_router(api_router)


@app.exception_handler(TaskStoreError)
@app.exception_handler(InvalidDateKeyError)
async def handle_task_error(request: Request, exc: Exception) -> JSONResponse:
    """Convert store and date errors into structured error responses."""
    error = classify_error_with_response(exc)
    status_code = http_status_for(exc)
    log_rejected_request(logger, path=request.url.path, code=error.code, error=exc)
    return JSONResponse(content=error.model_dump(mode="json"), status_code=status_code)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=200)
