"""FastAPI application and app configuration for the dashboard seeder.

This module creates the FastAPI `app`, configures middleware (CORS, rate limiting),
registers the seeding router and maps seeding failures to the error payload.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from app.database import engine
from app.errors import SeedError, make_seed_error_response
from app.routers import system

logger = logging.getLogger(__name__)
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))


DEFAULT_RATE_LIMIT = os.getenv("RATE_LIMIT", "10/minute")
limiter = Limiter(key_func=get_remote_address, default_limits=[DEFAULT_RATE_LIMIT])


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Lifespan startup: database dialect=%s", engine.dialect.name)
    yield
    logger.info("Lifespan shutdown: disposing database engine")
    engine.dispose()

app = FastAPI(title="Dashboard Seeder", version="1.0.0", lifespan=lifespan)
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# CORS (developer friendly defaults)
origins = os.getenv("CORS_ORIGINS", "*")
if origins == "*":
    allowed_origins: List[str] = ["*"]
else:
    # comma separated list
    allowed_origins = [o.strip() for o in origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(status_code=429, content={"error": {"code": "rate_limited", "message": "Rate limit exceeded"}})


@app.exception_handler(SeedError)
async def seed_error_handler(request: Request, exc: SeedError):
    logger.error("Seeding error: %s", exc)
    return JSONResponse(status_code=500, content=make_seed_error_response(exc.details))


@app.get("/health", tags=["Health"])
async def health() -> dict:
    return {"status": "ok"}


app.include_router(system.router)


__all__ = ["app", "limiter"]
