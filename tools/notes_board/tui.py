from __future__ import annotations

import httpx
from prompt_toolkit import PromptSession
from prompt_toolkit.patch_stdout import patch_stdout

from .api import NotesApi
from .board import Board
from .view import BoardSnapshot, CreateInFlightError, create_label, visible_notes

HELP = "controls: l=reload  c=create  d <n>=delete  q=quit"


def render(snapshot: BoardSnapshot) -> str:
    lines = ["", "---"]
    rows = visible_notes(snapshot)
    if not rows:
        lines.append("(no notes)")
    for index, row in enumerate(rows, start=1):
        note = row.note
        lines.append(f"[{index}] {note.title}")
        lines.append(f"    Created at: {note.created_at.isoformat(sep=' ', timespec='seconds')}")
        lines.append(f"    Body: {note.body}")
        control = f"    d {index} -> {row.delete_label}"
        if row.error:
            control += f"  ({row.error})"
        lines.append(control)
    if snapshot.pending_deletes:
        lines.append(f"deleting: {len(snapshot.pending_deletes)}")
    if snapshot.create_error:
        lines.append(f"create error: {snapshot.create_error}")
    lines.append(f"[{create_label(snapshot)}]  {HELP}")
    return "\n".join(lines)


def resolve_row(snapshot: BoardSnapshot, raw_index: str) -> str | None:
    """Map a 1-based index from the last render to a note id."""
    try:
        index = int(raw_index)
    except ValueError:
        return None
    rows = visible_notes(snapshot)
    if index < 1 or index > len(rows):
        return None
    return rows[index - 1].note.id


async def _confirm(session: PromptSession, message: str) -> bool:
    answer = (await session.prompt_async(f"{message} (y/n): ")).strip().lower()
    return answer in {"y", "yes"}


async def run_board(*, api: NotesApi) -> Board:
    board = Board(api, on_change=lambda snapshot: print(render(snapshot)))
    session = PromptSession()

    with patch_stdout():
        await board.reload()

        while True:
            raw = (await session.prompt_async("> ")).strip()
            if not raw:
                continue
            command, _, arg = raw.partition(" ")
            command = command.lower()

            if command == "q":
                break

            if command == "l":
                try:
                    await board.reload()
                except (httpx.HTTPError, ValueError) as exc:
                    print(f"Reload failed: {exc}")
                continue

            if command == "c":
                if board.snapshot.creating:
                    print("A note is already being created.")
                    continue
                title = await session.prompt_async("Title: ", default=board.snapshot.draft_title)
                body = await session.prompt_async("Body: ", default=board.snapshot.draft_body)
                board.edit_draft(title, body)
                try:
                    board.submit_create()
                except CreateInFlightError as exc:
                    print(str(exc))
                continue

            if command == "d":
                note_id = resolve_row(board.snapshot, arg.strip())
                if note_id is None:
                    print("Pick a note number from the list, e.g. d 1")
                    continue
                if not await _confirm(session, "Are you sure you want to delete this note?"):
                    continue
                board.submit_delete(note_id)
                continue

            print(HELP)

        await board.settle()

    return board
