from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel, ConfigDict


class NoteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    body: str
    created_at: datetime


class MutationErrorOut(BaseModel):
    error: str
    id: str | None = None
