import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from db import engine, Base, ensure_sqlite_dir
from logging_config import configure_logging
from schema_bootstrap import apply_schema_bootstrap

import models  # noqa: F401  (registers tables on Base.metadata)
from api.routers.notes import router as notes_router
from api.routers.health import router as health_router

logger = logging.getLogger(__name__)

app = FastAPI(title="Notes Board API")

app.include_router(notes_router)
app.include_router(health_router)

# Allow the frontend to talk to this backend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup() -> None:
    configure_logging(settings.log_level)
    ensure_sqlite_dir(settings.database_url)
    # Create database tables if they don't exist yet
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await apply_schema_bootstrap(engine)
    logger.info(
        "Notes API ready (delete delay %.1fs, failure rate %.2f)",
        settings.delete_delay_seconds,
        settings.delete_failure_rate,
    )


@app.get("/")
async def root():
    return {"status": "ok"}
