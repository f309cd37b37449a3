from __future__ import annotations

"""crpt_api.cli
=================================
Command-line interface powered by Typer.

Usage examples
--------------
$ crpt-api submit document.json --signature SIG      # submit one document file
$ crpt-api encode document.json                      # validate and pretty-print a document file
$ crpt-api demo --dry-run                            # print the sample document as sent on the wire
$ crpt-api --log-level DEBUG demo --count 12         # submit 12 sample documents from a thread pool
"""

from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from pathlib import Path
from typing import Optional
import logging

import dotenv
import typer
from typing_extensions import Annotated

from crpt_api.app.api import CrptApiClient
from crpt_api.core.domain.errors import CrptApiError, SerializationError
from crpt_api.core.domain.models import SubmissionResult
from crpt_api.infra.serializer import JsonDocumentSerializer
from crpt_api.samples import SAMPLE_SIGNATURE, sample_document

# Typer application ---------------------------------------------------------
app = typer.Typer(add_completion=False, help="CRPT document submission client")


class LogLevel(str, Enum):
    OFF = "OFF"
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"
    NOTSET = "NOTSET"


# ---------------------------------------------------------------------------
# Helper utilities
# ---------------------------------------------------------------------------

def _echo_result(result: SubmissionResult) -> None:
    typer.echo(f"status: {result.status_code}")
    if result.body:
        typer.echo(f"body: {result.text}")


def _read_document(path: Path):
    try:
        return JsonDocumentSerializer().decode(path.read_bytes())
    except SerializationError as e:
        typer.echo(f"Invalid document '{path}': {e}", err=True)
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# Global options / logging setup
# ---------------------------------------------------------------------------


@app.callback()
def main(
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option(
            "--log-level",
            help="Set log level (OFF, CRITICAL, ERROR, WARNING, INFO, DEBUG, NOTSET). Default: OFF",
        ),
    ] = None,
) -> None:
    """Load .env from the working directory and configure logging if requested."""
    dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True))

    if log_level in (None, LogLevel.OFF):
        return

    level = logging.getLevelNamesMapping().get(log_level.value, logging.INFO)

    # Configure the package logger derived from this module name
    package_name = __package__.split(".", 1)[0] if __package__ else "crpt_api"
    logger = logging.getLogger(package_name)

    # Avoid stacking console handlers on repeated invocations
    has_stream = any(isinstance(h, logging.StreamHandler) for h in logger.handlers)
    if not has_stream:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))
        logger.addHandler(handler)

    logger.propagate = False
    logger.setLevel(level)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command()
def submit(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="JSON document file"),
    signature: str = typer.Option(..., "--signature", "-s", help="Document signature, forwarded as-is"),
    endpoint: Optional[str] = typer.Option(None, help="Override the create endpoint URL"),
    capacity: Optional[int] = typer.Option(None, help="Requests allowed per interval"),
    interval: Optional[float] = typer.Option(None, help="Interval length in seconds"),
):
    """Submit one document file to the create endpoint."""
    document = _read_document(path)
    try:
        with CrptApiClient(endpoint=endpoint, capacity=capacity, interval_seconds=interval) as client:
            result = client.submit(document, signature)
    except CrptApiError as e:
        typer.echo(f"Submission failed: {e}", err=True)
        raise typer.Exit(code=1)
    _echo_result(result)


@app.command()
def encode(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="JSON document file"),
):
    """Validate a document file and print it exactly as it would be sent."""
    document = _read_document(path)
    typer.echo(JsonDocumentSerializer(indent=2).encode(document).decode("utf-8"))


@app.command()
def demo(
    signature: str = typer.Option(SAMPLE_SIGNATURE, "--signature", "-s", help="Signature to forward"),
    count: int = typer.Option(1, min=1, help="Number of copies to submit concurrently"),
    workers: int = typer.Option(4, min=1, help="Thread pool size"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the encoded sample instead of sending it"),
):
    """Submit the built-in sample document, optionally many times in parallel."""
    document = sample_document()
    if dry_run:
        typer.echo(JsonDocumentSerializer(indent=2).encode(document).decode("utf-8"))
        return

    try:
        with CrptApiClient() as client:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                futures = [pool.submit(client.submit, document, signature) for _ in range(count)]
                results = [f.result() for f in futures]
    except CrptApiError as e:
        typer.echo(f"Submission failed: {e}", err=True)
        raise typer.Exit(code=1)
    for result in results:
        _echo_result(result)


if __name__ == "__main__":  # pragma: no cover
    app()
