from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

SQL_STATEMENTS: list[str] = [
    # --- Notes are immutable: create and delete only -----------------------
    """
    CREATE TRIGGER IF NOT EXISTS trg_notes_immutable
    BEFORE UPDATE ON notes
    FOR EACH ROW
    BEGIN
      SELECT RAISE(ABORT, 'notes are immutable: create or delete only');
    END;
    """,
]

async def apply_schema_bootstrap(engine: AsyncEngine) -> None:
    if engine.dialect.name != "sqlite":
        return
    async with engine.begin() as conn:
        for stmt in SQL_STATEMENTS:
            await conn.exec_driver_sql(stmt)
