import uuid
from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db import Base


def new_note_id() -> str:
    return uuid.uuid4().hex


class Note(Base):
    """
    Notes are immutable once created: there is no update path, only create
    and delete. (Also enforced by a trigger, see schema_bootstrap.)
    """
    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_note_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
    )


Index("ix_notes_created_at", Note.created_at)
