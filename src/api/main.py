import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.deps import get_settings
from src.domain.errors import EditorError
from src.rules.loader import load_rules_or_default

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Validate rules on startup (fail-fast)
    try:
        load_rules_or_default(settings.rules_path)
        logger.info("Rules loaded from %s", settings.rules_path)
    except ValueError as e:
        logger.critical("Rules load failed: %s", e)
        sys.exit(1)

    yield


app = FastAPI(
    title="Tri-view Editor API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.exception_handler(EditorError)
async def editor_error_handler(request: Request, exc: EditorError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc), "code": exc.code})


# --- Routers ---
from src.api.routes import documents, markup  # noqa: E402

app.include_router(markup.router, prefix="/api/markup", tags=["Markup"])
app.include_router(documents.router, prefix="/api/documents", tags=["Documents"])


# CORS (Allow Frontend)
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
