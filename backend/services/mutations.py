from __future__ import annotations

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from models import Note
from services.chaos import FailureStrategy
from services.notes import NoteNotFoundError, create_note, delete_note

logger = logging.getLogger(__name__)

INTENT_CREATE = "create"
INTENT_DELETE = "delete"


class MutationError(Exception):
    def __init__(self, message: str, *, note_id: str | None = None):
        super().__init__(message)
        self.message = message
        self.note_id = note_id


class NoteValidationError(MutationError, ValueError):
    pass


class TransientDeleteError(MutationError, RuntimeError):
    pass


class MissingNoteError(MutationError, LookupError):
    pass


def _present(value: str | None) -> bool:
    return isinstance(value, str) and value != ""


async def handle_mutation(
    session: AsyncSession,
    *,
    intent: str | None,
    title: str | None = None,
    body: str | None = None,
    note_id: str | None = None,
    failure: FailureStrategy,
    delete_delay_seconds: float = 2.0,
) -> Note:
    """
    Single attempt at a create/delete. Raises a MutationError subclass on any
    failure; the caller owns commit/rollback.
    """
    if intent == INTENT_DELETE:
        if not _present(note_id):
            logger.warning("Rejected delete: missing id")
            raise NoteValidationError("Missing id")

        await asyncio.sleep(delete_delay_seconds)
        if failure.should_fail():
            logger.info("Injected delete failure for note %s", note_id)
            raise TransientDeleteError("Failed to delete note", note_id=note_id)

        try:
            row = await delete_note(session, note_id=note_id)
        except NoteNotFoundError as e:
            raise MissingNoteError("Note not found", note_id=note_id) from e
        logger.info("Deleted note %s", note_id)
        return row

    if intent == INTENT_CREATE:
        if not _present(title):
            logger.warning("Rejected create: missing title")
            raise NoteValidationError("Title is required")
        if not _present(body):
            logger.warning("Rejected create: missing body")
            raise NoteValidationError("Body is required")

        row = await create_note(session, title=title, body=body)
        logger.info("Created note %s", row.id)
        return row

    logger.warning("Rejected mutation with unknown intent %r", intent)
    raise NoteValidationError("Unknown intent")
