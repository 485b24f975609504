"""Command-line access to the Translation, Natural Language and Speech APIs.

Usage::

    python scripts/glang_cli.py --config glang.yaml translate "Hallo Welt" --target en
    python scripts/glang_cli.py detect "Bonjour" "Hola" --output detections.csv
    python scripts/glang_cli.py nlp "Google is based in Mountain View." --nlp-type analyzeEntities
    python scripts/glang_cli.py speech gs://bucket/audio.flac --encoding FLAC --asynch

Credentials come from the YAML profile or the GLANG_API_KEY /
GLANG_ACCESS_TOKEN environment variables.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import typer
from rich.console import Console
from rich.table import Table

from glang.client import LanguageClient
from glang.config.profile import ClientProfile
from glang.exceptions import GLangError
from glang.logger import set_log_level
from glang.schemas.results import SpeechOperation, SpeechResult

app = typer.Typer(help="glang: Google language APIs with client-side quota throttling.")
console = Console()


def _build_client(config: Path | None) -> LanguageClient:
    """Build a client from an optional YAML profile plus environment."""
    if config is not None:
        return LanguageClient.from_yaml(config)
    return LanguageClient(ClientProfile.from_env())


def _client(ctx: typer.Context) -> LanguageClient:
    try:
        return _build_client(ctx.obj["config"])
    except Exception as exc:
        console.print(f"[red]Invalid configuration: {exc}[/red]")
        raise SystemExit(1) from exc


def _emit(df: pd.DataFrame, title: str, output: Path | None) -> None:
    """Print a DataFrame as a rich table and optionally save it as CSV."""
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output, index=False)
        console.print(f"[green]Wrote {len(df)} row(s) to {output}[/green]")

    if df.empty:
        console.print(f"[yellow]{title}: no results.[/yellow]")
        return

    table = Table(title=title)
    for col in df.columns:
        table.add_column(str(col))
    for _, row in df.iterrows():
        table.add_row(*[f"{v:.4f}" if isinstance(v, float) else str(v) for v in row])
    console.print(table)


def _print_speech(result: SpeechResult | SpeechOperation, output: Path | None) -> None:
    if isinstance(result, SpeechOperation):
        state = "done" if result.done else "running"
        console.print(f"Operation [bold]{result.name}[/bold] is {state}.")
        return
    _emit(result.transcript, "Transcript", output)
    if not result.timings.empty:
        _emit(result.timings, "Word timings", None)


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None, "--config", exists=True, help="YAML client profile."
    ),
    log_level: str = typer.Option(
        "INFO", "--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)."
    ),
) -> None:
    """Configure logging and remember the profile for the chosen command."""
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        console.print(f"[red]Invalid log level: {log_level}[/red]")
        raise SystemExit(1)
    set_log_level(log_level.upper())
    ctx.obj = {"config": config}


@app.command()
def languages(
    ctx: typer.Context,
    target: str = typer.Option("en", "--target", help="Language for the names."),
    output: Path | None = typer.Option(None, "--output", help="CSV output path."),
) -> None:
    """List languages supported for translation."""
    with _client(ctx) as client:
        try:
            df = client.translator.list_languages(target=target)
        except GLangError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc
    _emit(df, "Supported languages", output)


@app.command()
def detect(
    ctx: typer.Context,
    text: list[str] = typer.Argument(..., help="Text(s) to inspect."),
    output: Path | None = typer.Option(None, "--output", help="CSV output path."),
) -> None:
    """Detect the language of text."""
    with _client(ctx) as client:
        try:
            df = client.translator.detect(text)
        except GLangError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc
    _emit(df, "Detected languages", output)


@app.command()
def translate(
    ctx: typer.Context,
    text: list[str] = typer.Argument(..., help="Text(s) to translate."),
    target: str = typer.Option("en", "--target", help="Target language code."),
    source: str = typer.Option("", "--source", help="Source language (auto if empty)."),
    fmt: str = typer.Option("text", "--format", help="text or html."),
    model: str = typer.Option("nmt", "--model", help="nmt or base."),
    output: Path | None = typer.Option(None, "--output", help="CSV output path."),
) -> None:
    """Translate text."""
    with _client(ctx) as client:
        try:
            df = client.translator.translate(
                text, target=target, format=fmt, source=source, model=model
            )
        except GLangError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc
    _emit(df, "Translations", output)


@app.command()
def nlp(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Text to analyse."),
    nlp_type: str = typer.Option("annotateText", "--nlp-type", help="API method."),
    doc_type: str = typer.Option("PLAIN_TEXT", "--type", help="PLAIN_TEXT or HTML."),
    language: str | None = typer.Option(None, "--language", help="Document language."),
    output: Path | None = typer.Option(
        None, "--output", help="CSV output path for the entity table."
    ),
) -> None:
    """Analyse text with the Natural Language API."""
    with _client(ctx) as client:
        try:
            result = client.nlp.analyze(
                text, nlp_type=nlp_type, type=doc_type, language=language
            )
        except GLangError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc

    if result.document_sentiment:
        console.print(
            "Document sentiment: "
            f"score={result.document_sentiment.get('score', 0.0):.2f} "
            f"magnitude={result.document_sentiment.get('magnitude', 0.0):.2f}"
        )
    if not result.sentences.empty:
        _emit(result.sentences, "Sentences", None)
    if not result.classify_text.empty:
        _emit(result.classify_text, "Categories", None)
    _emit(result.entities, "Entities", output)


@app.command()
def speech(
    ctx: typer.Context,
    audio: str = typer.Argument(..., help="Audio file path or gs:// URI."),
    encoding: str = typer.Option("LINEAR16", "--encoding", help="Audio encoding."),
    sample_rate: int | None = typer.Option(
        None, "--sample-rate", help="Sample rate in hertz."
    ),
    language_code: str = typer.Option("en-US", "--language-code", help="BCP-47 code."),
    asynch: bool = typer.Option(
        False, "--asynch", help="Start a long-running operation."
    ),
    output: Path | None = typer.Option(
        None, "--output", help="CSV output path for the transcript."
    ),
) -> None:
    """Transcribe audio with the Speech-to-Text API."""
    with _client(ctx) as client:
        try:
            result = client.speech.recognize(
                audio,
                encoding=encoding,
                sample_rate_hertz=sample_rate,
                language_code=language_code,
                asynch=asynch,
            )
        except GLangError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc
    _print_speech(result, output)


@app.command()
def operation(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Long-running operation name."),
    output: Path | None = typer.Option(
        None, "--output", help="CSV output path for the transcript."
    ),
) -> None:
    """Fetch the result of a long-running speech operation."""
    with _client(ctx) as client:
        try:
            result = client.speech.get_operation(name)
        except GLangError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc
    _print_speech(result, output)


if __name__ == "__main__":
    app()
