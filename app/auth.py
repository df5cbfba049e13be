"""Password hashing helpers for seeded user accounts."""

from __future__ import annotations

import logging

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

# Fixed bcrypt work factor; hashes stay comparable across seeding runs
BCRYPT_ROUNDS = 10

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


__all__ = [
    "BCRYPT_ROUNDS",
    "verify_password",
    "get_password_hash",
]
