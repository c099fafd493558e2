from __future__ import annotations

import json
import logging
import shlex
from dataclasses import dataclass
from typing import Any

import httpx

from .view import NoteRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MutationFailure:
    error: str
    note_id: str | None = None


@dataclass(frozen=True)
class MutationResult:
    note: NoteRecord | None = None
    failure: MutationFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


class NotesApi:
    def __init__(
        self,
        base_url: str,
        timeout: float = 20.0,
        emit_curl: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.emit_curl = emit_curl
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "NotesApi":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _curl(self, method: str, path: str, form: dict[str, Any] | None = None) -> str:
        parts = ["curl", "-X", method.upper()]
        if form:
            for key, value in form.items():
                parts.extend(["--data-urlencode", f"{key}={value}"])
        parts.append(f"{self.base_url}{path}")
        return " ".join(shlex.quote(p) for p in parts)

    def _print_curl(self, method: str, path: str, form: dict[str, Any] | None = None) -> None:
        if self.emit_curl:
            print(self._curl(method=method, path=path, form=form))

    async def list_notes(self) -> list[NoteRecord]:
        path = "/notes"
        self._print_curl("GET", path)
        resp = await self._client.get(path)
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, list):
            raise ValueError("Expected list response from /notes")
        return [NoteRecord.from_payload(item) for item in data]

    async def _submit(self, form: dict[str, str], *, note_id: str | None = None) -> MutationResult:
        path = "/notes"
        self._print_curl("POST", path, form=form)
        try:
            resp = await self._client.post(path, data=form)
        except httpx.HTTPError as exc:
            logger.warning("Request %s failed: %s", form.get("_intent"), exc)
            return MutationResult(failure=MutationFailure(error=f"Request failed: {exc}", note_id=note_id))

        try:
            payload = resp.json()
        except json.JSONDecodeError:
            payload = None

        if not isinstance(payload, dict):
            return MutationResult(
                failure=MutationFailure(error=f"Unexpected response ({resp.status_code})", note_id=note_id)
            )
        if "error" in payload:
            return MutationResult(
                failure=MutationFailure(error=str(payload["error"]), note_id=payload.get("id") or note_id)
            )
        if resp.is_error:
            return MutationResult(
                failure=MutationFailure(error=f"Unexpected response ({resp.status_code})", note_id=note_id)
            )
        try:
            note = NoteRecord.from_payload(payload)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Malformed note in %s response: %s", form.get("_intent"), exc)
            return MutationResult(
                failure=MutationFailure(error=f"Malformed response ({resp.status_code})", note_id=note_id)
            )
        return MutationResult(note=note)

    async def create_note(self, title: str, body: str) -> MutationResult:
        return await self._submit({"_intent": "create", "title": title, "body": body})

    async def delete_note(self, note_id: str) -> MutationResult:
        return await self._submit({"_intent": "delete", "id": note_id}, note_id=note_id)
