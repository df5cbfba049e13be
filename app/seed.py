"""Seed utilities for loading the dashboard sample data.

Contains the `Seeder` used by the `/seed` router and by `scripts/seed_db.py`.

Each table group (users, customers, invoices, revenue) runs in a fixed order:
the table is created when missing, then every record is inserted with a
conflict-skip statement. Rows of one group are inserted concurrently and the
group finishes only once all of them have settled.
"""
from __future__ import annotations

import asyncio
import logging
import os
import uuid
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Type

from sqlalchemy import text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from starlette.concurrency import run_in_threadpool

from app import models
from app.auth import get_password_hash
from app.errors import SeedError
from app.placeholder_data import PLACEHOLDER_DATA
from app.schemas import GroupResult, InvoiceIdMode, InvoiceSeed, SeedDataset, SeedResult

logger = logging.getLogger(__name__)

# Rejected at import so a bad setting fails at startup, not per request
SEED_INVOICE_ID_MODE = InvoiceIdMode(os.getenv("SEED_INVOICE_ID_MODE", InvoiceIdMode.APPEND.value))

# Namespace for invoice ids derived from invoice content
INVOICE_NAMESPACE = uuid.UUID("5d1c2a9e-7c61-4d5b-9f0e-1f6a3b2c8e47")

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


async def gather_all(calls: Sequence[Callable[[], Awaitable[Any]]]) -> List[Any]:
    """Start every call, wait until all of them settle, then raise the first fault.

    Faults are ordered by submission, not completion. Calls that succeeded are
    left in place.
    """
    results = await asyncio.gather(*(call() for call in calls), return_exceptions=True)
    failures = [r for r in results if isinstance(r, BaseException)]
    if failures:
        if len(failures) > 1:
            logger.warning("%d of %d concurrent inserts failed", len(failures), len(results))
        raise failures[0]
    return results


def invoice_id(invoice: InvoiceSeed) -> uuid.UUID:
    """Stable id for an invoice, derived from its content."""
    key = f"{invoice.customer_id}|{invoice.amount}|{invoice.status.value}|{invoice.date.isoformat()}"
    return uuid.uuid5(INVOICE_NAMESPACE, key)


class Seeder:
    """Create the dashboard tables and load a dataset into them.

    The engine is passed in by the caller; it should hold a single pooled
    connection (see `app.database.build_engine`).
    """

    def __init__(
        self,
        engine: Engine,
        dataset: Optional[SeedDataset] = None,
        invoice_id_mode: Optional[str] = None,
    ) -> None:
        self.engine = engine
        self.dataset = dataset if dataset is not None else PLACEHOLDER_DATA
        self.invoice_id_mode = InvoiceIdMode(invoice_id_mode) if invoice_id_mode else SEED_INVOICE_ID_MODE

    # ----------------------------- Statements ---------------------------------
    def _insert(self, model: Type[models.Base], values: Dict[str, Any], conflict: str):
        dialect = self.engine.dialect.name
        insert = _INSERT_BY_DIALECT.get(dialect)
        if insert is None:
            raise ValueError(f"Conflict-skip inserts are not supported on dialect '{dialect}'")
        key = model.__table__.c[conflict]
        # A skipped row returns nothing, an inserted row returns its key
        return insert(model).values(**values).on_conflict_do_nothing(index_elements=[key]).returning(key)

    def _ensure_extension(self) -> None:
        if self.engine.dialect.name != "postgresql":
            return
        with self.engine.begin() as conn:
            conn.execute(text('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"'))

    def ensure_table(self, model: Type[models.Base]) -> None:
        """Create the model's table if it does not exist yet; existing tables are left untouched."""
        with self.engine.begin() as conn:
            model.__table__.create(bind=conn, checkfirst=True)

    def _execute(self, statement) -> int:
        # One statement per transaction: a failing row never undoes the others
        with self.engine.begin() as conn:
            return len(conn.execute(statement).all())

    async def _insert_rows(self, statements: List[Any]) -> GroupResult:
        calls = [lambda s=s: run_in_threadpool(self._execute, s) for s in statements]
        counts = await gather_all(calls)
        return GroupResult(attempted=len(statements), inserted=sum(counts))

    async def _prepare(self, model: Type[models.Base], needs_uuid: bool = True) -> None:
        if needs_uuid:
            await run_in_threadpool(self._ensure_extension)
        await run_in_threadpool(self.ensure_table, model)

    # ----------------------------- Groups ---------------------------------
    async def seed_users(self) -> GroupResult:
        await self._prepare(models.UserModel)

        async def insert_user(user) -> int:
            hashed_password = await run_in_threadpool(get_password_hash, user.password)
            statement = self._insert(
                models.UserModel,
                {"id": user.id, "name": user.name, "email": user.email, "password": hashed_password},
                conflict="id",
            )
            return await run_in_threadpool(self._execute, statement)

        counts = await gather_all([lambda u=u: insert_user(u) for u in self.dataset.users])
        return GroupResult(attempted=len(self.dataset.users), inserted=sum(counts))

    async def seed_customers(self) -> GroupResult:
        await self._prepare(models.CustomerModel)
        statements = [
            self._insert(
                models.CustomerModel,
                {"id": c.id, "name": c.name, "email": c.email, "image_url": c.image_url},
                conflict="id",
            )
            for c in self.dataset.customers
        ]
        return await self._insert_rows(statements)

    async def seed_invoices(self) -> GroupResult:
        await self._prepare(models.InvoiceModel)
        statements = []
        for invoice in self.dataset.invoices:
            values: Dict[str, Any] = {
                "customer_id": invoice.customer_id,
                "amount": invoice.amount,
                "status": invoice.status.value,
                "date": invoice.date,
            }
            if self.invoice_id_mode == InvoiceIdMode.DETERMINISTIC:
                values["id"] = invoice_id(invoice)
            statements.append(self._insert(models.InvoiceModel, values, conflict="id"))
        return await self._insert_rows(statements)

    async def seed_revenue(self) -> GroupResult:
        await self._prepare(models.RevenueModel, needs_uuid=False)
        statements = [
            self._insert(models.RevenueModel, {"month": r.month, "revenue": r.revenue}, conflict="month")
            for r in self.dataset.revenue
        ]
        return await self._insert_rows(statements)

    # ----------------------------- Entry point ---------------------------------
    async def seed(self) -> SeedResult:
        """Run every group in order and return per-group counts.

        The first failing group raises `SeedError`; later groups are not run.
        """
        logger.info("Starting database seeding...")
        result = SeedResult()

        steps = (
            ("users", self.seed_users, "Users seeded"),
            ("customers", self.seed_customers, "Customers seeded"),
            ("invoices", self.seed_invoices, "Invoices seeded"),
            ("revenue", self.seed_revenue, "Revenue seeded"),
        )
        for group, step, checkpoint in steps:
            try:
                result.groups[group] = await step()
            except Exception as exc:
                logger.exception("Error seeding %s: %s", group, exc)
                raise SeedError(group, exc) from exc
            logger.info(checkpoint)

        logger.info("Database seeding completed successfully (%s)", result.summary())
        return result


async def seed_database(engine: Engine, dataset: Optional[SeedDataset] = None, invoice_id_mode: Optional[str] = None) -> SeedResult:
    """Convenience wrapper used by routers and scripts."""
    return await Seeder(engine, dataset=dataset, invoice_id_mode=invoice_id_mode).seed()


__all__ = ["Seeder", "seed_database", "gather_all", "invoice_id", "INVOICE_NAMESPACE"]
