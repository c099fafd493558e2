from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Form
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_delete_delay, get_failure_strategy, get_session
from schemas.notes import MutationErrorOut, NoteOut
from services.chaos import FailureStrategy
from services.mutations import (
    INTENT_CREATE,
    MissingNoteError,
    NoteValidationError,
    TransientDeleteError,
    handle_mutation,
)
from services.notes import list_notes

router = APIRouter(prefix="/notes", tags=["notes"])


def _error(status_code: int, message: str, note_id: str | None = None) -> JSONResponse:
    payload = MutationErrorOut(error=message, id=note_id)
    return JSONResponse(status_code=status_code, content=payload.model_dump(exclude_none=True))


@router.get("", response_model=list[NoteOut])
async def read_notes(session: AsyncSession = Depends(get_session)) -> list[NoteOut]:
    rows = await list_notes(session)
    return [NoteOut.model_validate(row) for row in rows]


@router.post(
    "",
    response_model=NoteOut,
    responses={400: {"model": MutationErrorOut}, 404: {"model": MutationErrorOut}, 503: {"model": MutationErrorOut}},
)
async def submit_mutation(
    intent: Optional[str] = Form(default=None, alias="_intent"),
    action: Optional[str] = Form(default=None, alias="_action"),
    title: Optional[str] = Form(default=None),
    body: Optional[str] = Form(default=None),
    note_id: Optional[str] = Form(default=None, alias="id"),
    session: AsyncSession = Depends(get_session),
    failure: FailureStrategy = Depends(get_failure_strategy),
    delete_delay: float = Depends(get_delete_delay),
):
    # Both discriminator names are in use by form authors; _intent wins.
    resolved_intent = intent or action
    try:
        row = await handle_mutation(
            session,
            intent=resolved_intent,
            title=title,
            body=body,
            note_id=note_id,
            failure=failure,
            delete_delay_seconds=delete_delay,
        )
        out = NoteOut.model_validate(row)
        await session.commit()
    except NoteValidationError as e:
        await session.rollback()
        return _error(400, e.message, e.note_id)
    except MissingNoteError as e:
        await session.rollback()
        return _error(404, e.message, e.note_id)
    except TransientDeleteError as e:
        await session.rollback()
        return _error(503, e.message, e.note_id)
    except SQLAlchemyError as e:
        await session.rollback()
        return _error(500, f"Failed to apply {resolved_intent}: {e}", note_id)

    status_code = 201 if resolved_intent == INTENT_CREATE else 200
    return JSONResponse(status_code=status_code, content=out.model_dump(mode="json"))
