# backend/api/deps.py
from __future__ import annotations

from collections.abc import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from db import SessionLocal
from services.chaos import FailureStrategy, RandomFailure

_default_failure = RandomFailure(settings.delete_failure_rate)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        yield session


def get_failure_strategy() -> FailureStrategy:
    return _default_failure


def get_delete_delay() -> float:
    return settings.delete_delay_seconds
