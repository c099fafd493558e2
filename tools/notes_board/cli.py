from __future__ import annotations

import asyncio
import logging

import httpx
import typer

from .api import NotesApi
from .tui import run_board

# Same line layout as the backend (backend/logging_config.py).
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


async def _run(base_url: str, timeout: float, emit_curl: bool) -> None:
    async with NotesApi(base_url=base_url, timeout=timeout, emit_curl=emit_curl) as api:
        await run_board(api=api)


def main(
    base_url: str = typer.Option("http://localhost:7712", "--base-url", help="Backend API base URL"),
    timeout: float = typer.Option(20.0, "--timeout", min=0.1, help="Per-request timeout in seconds"),
    no_curl: bool = typer.Option(False, "--no-curl", help="Do not print equivalent curl commands"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log request failures"),
) -> None:
    """Interactive notes board for the Notes Board backend API."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )
    try:
        asyncio.run(_run(base_url, timeout, not no_curl))
    except (httpx.HTTPError, ValueError) as exc:
        typer.secho(f"API error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    except (EOFError, KeyboardInterrupt):
        typer.echo("\nBye.")


def run() -> None:
    typer.run(main)


if __name__ == "__main__":
    run()
