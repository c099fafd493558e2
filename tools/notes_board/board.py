from __future__ import annotations

import asyncio
import logging
from typing import Callable

from .api import NotesApi
from .view import (
    BoardEvent,
    BoardSnapshot,
    CreateFailed,
    CreateInFlightError,
    CreateSubmitted,
    CreateSucceeded,
    DeleteFailed,
    DeleteSubmitted,
    DeleteSucceeded,
    DraftEdited,
    NotesLoaded,
    reconcile,
)

logger = logging.getLogger(__name__)


class Board:
    """
    Single-threaded controller: every state change goes through ``dispatch``.

    Each delete runs as its own task keyed by note id, so several can be in
    flight at once. Submitted requests are never cancelled.
    """

    def __init__(self, api: NotesApi, on_change: Callable[[BoardSnapshot], None] | None = None):
        self.api = api
        self.snapshot = BoardSnapshot()
        self._on_change = on_change
        self._deletes: dict[str, asyncio.Task] = {}
        self._create: asyncio.Task | None = None

    def dispatch(self, event: BoardEvent) -> BoardSnapshot:
        self.snapshot = reconcile(self.snapshot, event)
        if self._on_change is not None:
            self._on_change(self.snapshot)
        return self.snapshot

    @property
    def in_flight_deletes(self) -> frozenset[str]:
        return frozenset(self._deletes)

    async def reload(self) -> BoardSnapshot:
        notes = await self.api.list_notes()
        return self.dispatch(NotesLoaded(tuple(notes)))

    def edit_draft(self, title: str, body: str) -> BoardSnapshot:
        return self.dispatch(DraftEdited(title=title, body=body))

    def submit_delete(self, note_id: str) -> asyncio.Task:
        existing = self._deletes.get(note_id)
        if existing is not None and not existing.done():
            return existing
        self.dispatch(DeleteSubmitted(note_id))
        task = asyncio.create_task(self._run_delete(note_id))
        self._deletes[note_id] = task
        return task

    async def _run_delete(self, note_id: str) -> None:
        try:
            result = await self.api.delete_note(note_id)
        finally:
            self._deletes.pop(note_id, None)
        if result.ok:
            self.dispatch(DeleteSucceeded(note_id))
            return
        failed_id = result.failure.note_id or note_id
        logger.info("Delete of %s failed: %s", failed_id, result.failure.error)
        if failed_id != note_id:
            self.dispatch(DeleteFailed(note_id, result.failure.error))
        self.dispatch(DeleteFailed(failed_id, result.failure.error))

    def submit_create(self) -> asyncio.Task:
        if self.snapshot.creating:
            raise CreateInFlightError("A note is already being created")
        title, body = self.snapshot.draft_title, self.snapshot.draft_body
        self.dispatch(CreateSubmitted())
        self._create = asyncio.create_task(self._run_create(title, body))
        return self._create

    async def _run_create(self, title: str, body: str) -> None:
        try:
            result = await self.api.create_note(title, body)
        finally:
            self._create = None
        if result.ok:
            self.dispatch(CreateSucceeded(result.note))
        else:
            self.dispatch(CreateFailed(result.failure.error))

    async def settle(self) -> None:
        """Wait for every outstanding request."""
        pending = list(self._deletes.values())
        if self._create is not None:
            pending.append(self._create)
        if pending:
            await asyncio.gather(*pending)
