"""Content Audit CLI — entry-point for the extraction pipeline.

Usage:
    python cli/main.py --help

Commands:
    fetch     → fetch a URL and print its primary content
    extract   → extract primary content from a local HTML file
    serve     → run the HTTP API with uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import NoReturn

# Ensure the project root is on sys.path so that
# `from contentaudit.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import typer

from contentaudit.config import configure_logging, settings
from contentaudit.scraper.errors import ContentAuditError

app = typer.Typer(
    name="content-audit",
    help="Content Audit extraction CLI.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level."),
) -> None:
    """Fetch web pages and extract their readable text."""
    configure_logging(log_level)


def _fail(exc: ContentAuditError) -> NoReturn:
    typer.echo(f"[error] {exc.message}", err=True)
    raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Extraction commands
# ---------------------------------------------------------------------------
@app.command("fetch")
def fetch(
    url: str = typer.Option(..., help="URL to fetch."),
) -> None:
    """Fetch a URL and print its extracted primary content to stdout."""
    from contentaudit.pipeline import fetch_and_extract

    typer.echo(f"[fetch] Fetching {url!r} …")
    try:
        result = fetch_and_extract(url)
    except ContentAuditError as exc:
        _fail(exc)

    typer.echo(f"[fetch] Chars  : {len(result.content)}")
    typer.echo(f"[fetch] Words  : {len(result.content.split())}")
    typer.echo("")
    typer.echo(result.content)


@app.command("extract")
def extract(
    file: Path = typer.Option(..., "--file", exists=True, dir_okay=False, help="Local HTML file."),
    url: str = typer.Option("", help="Source URL to report alongside the text."),
) -> None:
    """Extract primary content from a saved HTML file."""
    from contentaudit.scraper.extractor import extract_text

    markup = file.read_text(encoding="utf-8", errors="replace")
    try:
        content = extract_text(markup)
    except ContentAuditError as exc:
        _fail(exc)

    if url:
        typer.echo(f"[extract] Source : {url}")
    typer.echo(f"[extract] Chars  : {len(content)}")
    typer.echo("")
    typer.echo(content)


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address."),
    port: int = typer.Option(8000, help="Bind port."),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    typer.echo(f"[serve] Listening on http://{host}:{port}")
    uvicorn.run("contentaudit.api.app:app", host=host, port=port, log_level=settings.log_level.lower())


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
