"""Seeding errors and the error payload returned to HTTP callers.

Provides:
- SeedError: a fault raised while seeding one table group
- SEED_FAILED_MESSAGE: the fixed error label of the failure payload
- fault_message(...) -> the driver-level message of a fault
- make_seed_error_response(...) -> dict payload used by the exception handler
"""
from __future__ import annotations

from typing import Optional

from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import DBAPIError

SEED_FAILED_MESSAGE = "Failed to seed database"


def fault_message(exc: Optional[BaseException]) -> str:
    """Message of the underlying fault, without SQL text or bound parameters."""
    if exc is None:
        return "Unknown error"
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        exc = exc.orig
    return str(exc).strip() or exc.__class__.__name__


class SeedError(Exception):
    """Raised when a seeding group fails.

    `group` names the table group ("users", "customers", ...) and `cause` is
    the underlying fault; `details` is the cause's driver-level message.
    """

    def __init__(self, group: str, cause: Optional[BaseException] = None, message: Optional[str] = None):
        self.group = group
        self.cause = cause
        self.details = message or fault_message(cause)
        super().__init__(f"Error seeding {group}: {self.details}")


def make_seed_error_response(details: Optional[str]) -> dict:
    payload = {"error": SEED_FAILED_MESSAGE, "details": details or "Unknown error"}
    return jsonable_encoder(payload)


__all__ = ["SEED_FAILED_MESSAGE", "SeedError", "fault_message", "make_seed_error_response"]
