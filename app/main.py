"""
Main application entry point - FastAPI app instance and configuration.
This is where the ASGI application is created and configured.
Run with: uvicorn app.main:app --port 8080
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status  # The FastAPI framework
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware  # Cross-Origin Resource Sharing
from fastapi.responses import JSONResponse

from app.core.config import settings  # Application settings
from app.routers import prompt  # Consensus prompt engineering router

logger = logging.getLogger("consensus.app")


# ---------------------------------------------------------------------------
# LIFESPAN
# ---------------------------------------------------------------------------
# Missing credentials do not stop the app: the affected provider fails each
# call with a configuration error. Warn once at startup so it is visible.
@asynccontextmanager
async def lifespan(app: FastAPI):
    for provider in settings.missing_credentials():
        logger.warning(f"{provider.upper()}_API_KEY is not set; {provider} calls will fail")
    yield


# ---------------------------------------------------------------------------
# CREATE FASTAPI APPLICATION
# ---------------------------------------------------------------------------
# - docs_url: Swagger UI at http://localhost:8080/docs
# - redoc_url: ReDoc at http://localhost:8080/redoc
app = FastAPI(
    title=settings.APP_NAME,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# CORS MIDDLEWARE
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# ERROR HANDLERS
# ---------------------------------------------------------------------------
# A malformed body is the client's fault: answer 400 rather than FastAPI's 422.
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', 'invalid')}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": message or "invalid request body"},
    )


# ---------------------------------------------------------------------------
# REGISTER ROUTERS
# ---------------------------------------------------------------------------
# prompt.router: /engineer-prompt, /engineer-prompt/stats
app.include_router(prompt.router)


# ---------------------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ---------------------------------------------------------------------------
@app.get("/health", tags=["health"])
def health_check():
    """
    Simple health check endpoint.

    Does NOT call any provider; it only reports that the process is up.

    Returns:
        {"status": "ok"}
    """
    return {"status": "ok"}
