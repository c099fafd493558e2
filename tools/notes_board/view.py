"""
Board state and its reconciliation.

The board never mutates state in place: every server response or user action
is an event, and ``reconcile`` maps (snapshot, event) to the next snapshot.
Rendering reads only from the snapshot, so optimistic removal is purely
presentational; ``notes`` keeps what the last load (or a confirmed mutation)
reported.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, Union

DELETE_LABEL = "Delete"
RETRY_LABEL = "Retry PLS"
CREATE_LABEL = "Create"
CREATING_LABEL = "Creating"

FOCUS_TITLE = "title"
FOCUS_BODY = "body"


@dataclass(frozen=True)
class NoteRecord:
    id: str
    title: str
    body: str
    created_at: datetime

    @classmethod
    def from_payload(cls, payload: Mapping) -> "NoteRecord":
        return cls(
            id=str(payload["id"]),
            title=str(payload["title"]),
            body=str(payload["body"]),
            created_at=datetime.fromisoformat(str(payload["created_at"])),
        )


def _frozen_map(data: Mapping[str, str] | None = None) -> Mapping[str, str]:
    return MappingProxyType(dict(data or {}))


@dataclass(frozen=True)
class BoardSnapshot:
    notes: tuple[NoteRecord, ...] = ()
    pending_deletes: frozenset[str] = frozenset()
    failed_deletes: Mapping[str, str] = field(default_factory=_frozen_map)
    creating: bool = False
    create_error: str | None = None
    draft_title: str = ""
    draft_body: str = ""
    focus: str = FOCUS_TITLE


# --- Events -------------------------------------------------------------------

@dataclass(frozen=True)
class NotesLoaded:
    notes: tuple[NoteRecord, ...]


@dataclass(frozen=True)
class DraftEdited:
    title: str
    body: str
    focus: str = FOCUS_BODY


@dataclass(frozen=True)
class DeleteSubmitted:
    note_id: str


@dataclass(frozen=True)
class DeleteSucceeded:
    note_id: str


@dataclass(frozen=True)
class DeleteFailed:
    note_id: str
    error: str


@dataclass(frozen=True)
class CreateSubmitted:
    pass


@dataclass(frozen=True)
class CreateSucceeded:
    note: NoteRecord


@dataclass(frozen=True)
class CreateFailed:
    error: str


BoardEvent = Union[
    NotesLoaded,
    DraftEdited,
    DeleteSubmitted,
    DeleteSucceeded,
    DeleteFailed,
    CreateSubmitted,
    CreateSucceeded,
    CreateFailed,
]


class CreateInFlightError(RuntimeError):
    pass


def _without(mapping: Mapping[str, str], key: str) -> Mapping[str, str]:
    return _frozen_map({k: v for k, v in mapping.items() if k != key})


def reconcile(snapshot: BoardSnapshot, event: BoardEvent) -> BoardSnapshot:
    if isinstance(event, NotesLoaded):
        ids = {n.id for n in event.notes}
        return replace(
            snapshot,
            notes=tuple(event.notes),
            failed_deletes=_frozen_map({k: v for k, v in snapshot.failed_deletes.items() if k in ids}),
        )

    if isinstance(event, DraftEdited):
        return replace(snapshot, draft_title=event.title, draft_body=event.body, focus=event.focus)

    if isinstance(event, DeleteSubmitted):
        return replace(
            snapshot,
            pending_deletes=snapshot.pending_deletes | {event.note_id},
            failed_deletes=_without(snapshot.failed_deletes, event.note_id),
        )

    if isinstance(event, DeleteSucceeded):
        return replace(
            snapshot,
            notes=tuple(n for n in snapshot.notes if n.id != event.note_id),
            pending_deletes=snapshot.pending_deletes - {event.note_id},
            failed_deletes=_without(snapshot.failed_deletes, event.note_id),
        )

    if isinstance(event, DeleteFailed):
        failed = dict(snapshot.failed_deletes)
        failed[event.note_id] = event.error
        return replace(
            snapshot,
            pending_deletes=snapshot.pending_deletes - {event.note_id},
            failed_deletes=_frozen_map(failed),
        )

    if isinstance(event, CreateSubmitted):
        if snapshot.creating:
            raise CreateInFlightError("A note is already being created")
        return replace(snapshot, creating=True, create_error=None)

    if isinstance(event, CreateSucceeded):
        # a reload that raced the create may already carry the note
        notes = snapshot.notes
        if all(n.id != event.note.id for n in notes):
            notes = notes + (event.note,)
        return replace(
            snapshot,
            notes=notes,
            creating=False,
            create_error=None,
            draft_title="",
            draft_body="",
            focus=FOCUS_TITLE,
        )

    if isinstance(event, CreateFailed):
        return replace(
            snapshot,
            creating=False,
            create_error=event.error,
            draft_title="",
            draft_body="",
            focus=FOCUS_TITLE,
        )

    raise TypeError(f"Unsupported board event: {event!r}")


# --- Views --------------------------------------------------------------------

@dataclass(frozen=True)
class NoteRow:
    note: NoteRecord
    delete_label: str
    error: str | None = None


def visible_notes(snapshot: BoardSnapshot) -> list[NoteRow]:
    rows: list[NoteRow] = []
    for note in snapshot.notes:
        if note.id in snapshot.pending_deletes:
            continue
        error = snapshot.failed_deletes.get(note.id)
        rows.append(NoteRow(note=note, delete_label=RETRY_LABEL if error is not None else DELETE_LABEL, error=error))
    return rows


def create_label(snapshot: BoardSnapshot) -> str:
    return CREATING_LABEL if snapshot.creating else CREATE_LABEL
