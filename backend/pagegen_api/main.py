"""FastAPI Application Entry Point.

Configures the app, lifespan, CORS, and includes all route modules.
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pagegen.logging_config import get_api_logger

from .sessions import SESSION_HEADER, close_all_sessions

logger = get_api_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Warn about missing provider config; close session clients on shutdown."""
    from pagegen.config import API_BASE_URL, GOOGLE_API_KEY
    if not GOOGLE_API_KEY:
        logger.warning(
            "GOOGLE_API_KEY not set: /api/v1/generate and /api/v1/images endpoints "
            "will answer 503. Set GOOGLE_API_KEY in .env or environment."
        )
    logger.info(f"Auth backend: {API_BASE_URL}")

    yield
    await close_all_sessions()


app = FastAPI(title="PageGen API", version="1.0.0", lifespan=lifespan)

# CORS configuration: configurable via CORS_ORIGINS env var (comma-separated)
_default_origins = "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173"
CORS_ORIGINS = [
    o.strip() for o in os.getenv("CORS_ORIGINS", _default_origins).split(",") if o.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[SESSION_HEADER],
)

# Include routers
from .routes.auth import router as auth_router  # noqa: E402
from .routes.generate import router as generate_router  # noqa: E402
from .routes.images import router as images_router  # noqa: E402

app.include_router(auth_router)
app.include_router(generate_router)
app.include_router(images_router)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "ok"}
