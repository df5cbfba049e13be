"""SQLAlchemy models for the dashboard sample data.

Models implemented:
- UserModel
- CustomerModel
- InvoiceModel
- RevenueModel

Uses SQLAlchemy 2.0 typing (Mapped, mapped_column) and the declarative Base from `app.database`.
"""

from __future__ import annotations

import datetime
import uuid

from sqlalchemy import Column, Date, Integer, String, Table, Text, Uuid
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql.expression import FunctionElement

from app.database import Base


class generate_uuid(FunctionElement):
    """Server-side random UUID, rendered per dialect."""

    type = Uuid()
    inherit_cache = True


@compiles(generate_uuid)
def _generate_uuid_default(element, compiler, **kw):
    # uuid_generate_v4() is provided by the uuid-ossp extension
    return "uuid_generate_v4()"


@compiles(generate_uuid, "sqlite")
def _generate_uuid_sqlite(element, compiler, **kw):
    # Uuid columns are stored as 32 hex characters on SQLite
    return "lower(hex(randomblob(16)))"


class UserModel(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, server_default=generate_uuid())
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    password: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"<User id={self.id} email={self.email}>"


class CustomerModel(Base):
    __tablename__ = "customers"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, server_default=generate_uuid())
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Customer id={self.id} name={self.name}>"


class InvoiceModel(Base):
    __tablename__ = "invoices"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, server_default=generate_uuid())
    # Soft reference to customers.id; no foreign key is declared
    customer_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    def __repr__(self) -> str:
        return f"<Invoice id={self.id} customer_id={self.customer_id} status={self.status}>"


class RevenueModel(Base):
    # The table has no primary key, only a unique month; the mapper keys on month
    __table__ = Table(
        "revenue",
        Base.metadata,
        Column("month", String(4), nullable=False, unique=True),
        Column("revenue", Integer, nullable=False),
    )
    __mapper_args__ = {"primary_key": [__table__.c.month]}

    def __repr__(self) -> str:
        return f"<Revenue month={self.month} revenue={self.revenue}>"


__all__ = [
    "generate_uuid",
    "UserModel",
    "CustomerModel",
    "InvoiceModel",
    "RevenueModel",
]
