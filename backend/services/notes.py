from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Note


class NoteNotFoundError(LookupError):
    pass


async def list_notes(session: AsyncSession) -> list[Note]:
    return list(
        (await session.execute(select(Note).order_by(Note.created_at.asc(), Note.id.asc()))).scalars().all()
    )


async def get_note(session: AsyncSession, *, note_id: str) -> Note | None:
    return (
        await session.execute(select(Note).where(Note.id == note_id).limit(1))
    ).scalar_one_or_none()


async def create_note(session: AsyncSession, *, title: str, body: str) -> Note:
    row = Note(title=title, body=body)
    session.add(row)
    await session.flush()  # populates id / created_at
    return row


async def delete_note(session: AsyncSession, *, note_id: str) -> Note:
    row = await get_note(session, note_id=note_id)
    if row is None:
        raise NoteNotFoundError(f"Note does not exist: {note_id}")
    await session.delete(row)
    await session.flush()
    return row


async def count_notes(session: AsyncSession) -> int:
    return int((await session.execute(select(func.count()).select_from(Note))).scalar_one())
