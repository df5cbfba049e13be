"""Pydantic schemas for the seeder.

Includes the typed fixture records, the dataset container, the seeding
summary and the HTTP response payloads.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Dict, List
from uuid import UUID

from pydantic import BaseModel, Field


class InvoiceStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class InvoiceIdMode(str, Enum):
    APPEND = "append"
    DETERMINISTIC = "deterministic"


# ----------------------------- Fixture records ---------------------------------
class UserSeed(BaseModel):
    id: UUID
    name: str = Field(..., max_length=255)
    email: str
    password: str = Field(..., min_length=1)


class CustomerSeed(BaseModel):
    id: UUID
    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=255)
    image_url: str = Field(..., max_length=255)


class InvoiceSeed(BaseModel):
    customer_id: UUID
    amount: int
    status: InvoiceStatus
    date: datetime.date


class RevenueSeed(BaseModel):
    month: str = Field(..., max_length=4)
    revenue: int


class SeedDataset(BaseModel):
    users: List[UserSeed] = Field(default_factory=list)
    customers: List[CustomerSeed] = Field(default_factory=list)
    invoices: List[InvoiceSeed] = Field(default_factory=list)
    revenue: List[RevenueSeed] = Field(default_factory=list)


# ----------------------------- Results ---------------------------------
class GroupResult(BaseModel):
    attempted: int = 0
    inserted: int = 0

    @property
    def skipped(self) -> int:
        return self.attempted - self.inserted


class SeedResult(BaseModel):
    groups: Dict[str, GroupResult] = Field(default_factory=dict)

    def summary(self) -> str:
        return ", ".join(
            f"{name}: {g.inserted} inserted, {g.skipped} skipped" for name, g in self.groups.items()
        )


class SeedResponse(BaseModel):
    message: str


class SeedErrorResponse(BaseModel):
    error: str
    details: str


__all__ = [
    "InvoiceStatus",
    "InvoiceIdMode",
    "UserSeed",
    "CustomerSeed",
    "InvoiceSeed",
    "RevenueSeed",
    "SeedDataset",
    "GroupResult",
    "SeedResult",
    "SeedResponse",
    "SeedErrorResponse",
]
