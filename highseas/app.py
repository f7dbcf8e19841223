"""
High Seas - FastAPI application
Main entry point for the data-layer server.

Run with:
    uvicorn highseas.app:app --reload --host 0.0.0.0 --port 8001
"""

import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from highseas import config
from highseas.api.routes import router as api_router
from highseas.core.logging import configure_logging
from highseas.data import get_data_service, set_data_service
from highseas.domain.errors import AirtableError, MalformedRecordError

configure_logging()
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan (startup / shutdown)
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the data service (creates tables) and close it on shutdown."""
    logger.info("Initialising data service...")
    service = get_data_service()
    logger.info("Data service ready.")

    yield  # Application is running

    await service.close()
    set_data_service(None)


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

app = FastAPI(
    title="High Seas data layer",
    version="1.0.0",
    description="Cached access to High Seas ships, people and shop orders",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Exception handlers -- upstream and data problems surface as 502 so the
# frontend can tell them apart from its own bad requests.
# ---------------------------------------------------------------------------

@app.exception_handler(AirtableError)
async def airtable_error_handler(request: Request, exc: AirtableError):
    logger.error("Airtable failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=502,
        content={"detail": str(exc), "type": "AirtableError", "table": exc.table},
    )


@app.exception_handler(MalformedRecordError)
async def malformed_record_handler(request: Request, exc: MalformedRecordError):
    logger.error("Malformed record on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=502,
        content={
            "detail": str(exc),
            "type": "MalformedRecordError",
            "record_id": exc.record_id,
            "field": exc.field,
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exc()
    logger.error(
        "Unhandled exception on %s %s: %s\n%s",
        request.method, request.url.path, exc, tb,
    )
    content = {"detail": str(exc), "type": type(exc).__name__, "path": request.url.path}
    if config.EXPOSE_TRACEBACKS:
        content["traceback"] = tb
    return JSONResponse(status_code=500, content=content)


app.include_router(api_router)
