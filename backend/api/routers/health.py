from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_delete_delay, get_failure_strategy, get_session
from services.chaos import FailureStrategy
from services.notes import count_notes

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health_check(
    session: AsyncSession = Depends(get_session),
    failure: FailureStrategy = Depends(get_failure_strategy),
    delete_delay: float = Depends(get_delete_delay),
):
    try:
        notes = await count_notes(session)
    except SQLAlchemyError as exc:
        raise HTTPException(status_code=503, detail=f"Notes store unreachable: {exc}") from exc

    # What a client should expect from deletes on this instance.
    return {
        "status": "ok",
        "notes": notes,
        "delete": {
            "delay_seconds": delete_delay,
            "failure_strategy": type(failure).__name__,
            "failure_probability": getattr(failure, "probability", None),
        },
    }
