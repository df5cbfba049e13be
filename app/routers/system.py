"""System routes: database seeding.

This router exposes `GET /seed`, which runs `app.seed.seed_database` against
the engine provided by `app.database.get_engine`. Every failure surfaces as
`app.errors.SeedError` and is turned into the error payload by the handler
registered in `app.main`.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.engine import Engine

from app.database import get_engine
from app.errors import SeedError
from app.schemas import SeedErrorResponse, SeedResponse
from app.seed import seed_database

logger = logging.getLogger(__name__)

router = APIRouter(tags=["System"])


@router.get("/seed", response_model=SeedResponse, responses={500: {"model": SeedErrorResponse}})
async def seed_data(engine: Engine = Depends(get_engine)) -> SeedResponse:
    """Create the dashboard tables if needed and load the sample data.

    Safe to call repeatedly for users, customers and revenue: rows whose key
    already exists are skipped. Invoices are appended on every call unless
    SEED_INVOICE_ID_MODE=deterministic.
    """
    try:
        result = await seed_database(engine)
    except SeedError:
        raise
    except Exception as exc:
        logger.exception("Seeding failed outside a table group: %s", exc)
        raise SeedError("seed", exc) from exc
    logger.debug("Seed result: %s", result.summary())
    return SeedResponse(message="Database seeded successfully")


__all__ = ["router"]
