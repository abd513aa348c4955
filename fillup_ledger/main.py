"""
Point d'entree FastAPI / FastAPI entry point.
Fillup Ledger - suivi des pleins et de la consommation.
"""

import json
import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError
from starlette.middleware.base import BaseHTTPMiddleware

from fillup_ledger.api import api_router
from fillup_ledger.config import settings
from fillup_ledger.database import init_db
from fillup_ledger.exceptions import InvalidFillupError, InvalidOdometerError
from fillup_ledger.rate_limit import limiter

logger = logging.getLogger("fillup_ledger")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialisation et fermeture / Startup and shutdown."""
    # Creer les tables au demarrage / Create tables on startup
    await init_db()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Suivi des pleins et calcul du MPG / Fuel fill-up tracking and MPG statistics",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID", "X-Requested-With"],
)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Ajoute un X-Request-ID unique a chaque requete / Add unique X-Request-ID to each request."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        response: Response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


app.add_middleware(RequestIDMiddleware)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "-")


# Erreurs metier -> 400 / Domain errors -> 400
@app.exception_handler(InvalidFillupError)
async def invalid_fillup_handler(request: Request, exc: InvalidFillupError):
    logger.warning("[%s] %s %s - invalid fill-up: %s", _request_id(request), request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(InvalidOdometerError)
async def invalid_odometer_handler(request: Request, exc: InvalidOdometerError):
    logger.warning("[%s] %s %s - invalid odometer: %s", _request_id(request), request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# Conflit concurrent sur (vehicule, odometre) / Concurrent (vehicle, odometer) conflict
@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("[%s] %s %s - integrity error: %s", _request_id(request), request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=409, content={"detail": "Conflicting fill-up data"})


# Routes API
app.include_router(api_router)


# Sante de l'API / API health check
@app.get("/api/")
async def api_health():
    """Health check."""
    return {"app": settings.APP_NAME, "version": settings.APP_VERSION, "status": "running"}


# Logging JSON structure en production / Structured JSON logging in production
if not settings.DEBUG:

    class JSONFormatter(logging.Formatter):
        def format(self, record):
            log_entry = {
                "timestamp": self.formatTime(record),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
            }
            if record.exc_info and record.exc_info[0]:
                log_entry["exception"] = self.formatException(record.exc_info)
            return json.dumps(log_entry)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logging.root.handlers = [handler]
    logging.root.setLevel(logging.INFO)
