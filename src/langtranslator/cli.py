"""CLI interface for langtranslator using Typer."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from langtranslator import __version__
from langtranslator.backends.base import TranslationClient
from langtranslator.config import ConfigError, TranslatorSettings, load_settings
from langtranslator.core.languages import SUPPORTED_LANGUAGES, UnsupportedLanguageError
from langtranslator.pipeline import Translator
from langtranslator.session import SessionState, TranslatorSession

app = typer.Typer(
    name="langtranslator",
    help="Translate text through the Google Translate web endpoint.",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

_verbose = False
_quiet = False

_SHELL_HELP = (
    "Type text to translate it. Commands: "
    ":from CODE, :to CODE, :swap, :langs, :help, :quit"
)


def _print(msg: str, *, verbose_only: bool = False) -> None:
    """Print respecting --verbose/--quiet flags. Errors bypass --quiet."""
    if _quiet:
        return
    if verbose_only and not _verbose:
        return
    console.print(msg)


def _configure_logging(verbose: bool, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def _load_settings_or_exit(
    *,
    endpoint: str | None = None,
    max_chunk_size: int | None = None,
) -> TranslatorSettings:
    try:
        settings = load_settings()
        if endpoint:
            settings = replace(settings, endpoint=endpoint)
        if max_chunk_size is not None:
            settings = replace(settings, max_chunk_size=max_chunk_size)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None
    return settings


def _create_client(settings: TranslatorSettings, *, use_dummy: bool = False) -> TranslationClient:
    """Create the endpoint client once; callers own and close it."""
    if use_dummy:
        from langtranslator.backends.dummy import DummyClient
        return DummyClient()

    from langtranslator.backends.google import GoogleTranslateClient
    return GoogleTranslateClient.from_settings(settings)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"langtranslator {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Show extra info (endpoint, chunking).",
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only show errors.",
    ),
) -> None:
    """langtranslator: translate text between English, Spanish, Hindi and Punjabi."""
    global _verbose, _quiet
    _verbose = verbose
    _quiet = quiet
    _configure_logging(verbose, quiet)


@app.command()
def translate(
    text: str | None = typer.Argument(
        None, help="Text to translate. Omit when using --file.",
    ),
    source: str | None = typer.Option(
        None, "--from", "-f",
        help="Source language code (e.g. en, es, hi, pa).",
    ),
    target: str | None = typer.Option(
        None, "--to", "-t",
        help="Target language code (e.g. en, es, hi, pa).",
    ),
    file: Path | None = typer.Option(
        None, "--file",
        help="Read the text to translate from a UTF-8 file.",
    ),
    endpoint: str | None = typer.Option(
        None, "--endpoint",
        help="Override the translation endpoint URL.",
    ),
    max_chunk_size: int | None = typer.Option(
        None, "--max-chunk-size", min=1,
        help="Texts longer than this are split into sentence chunks.",
    ),
    use_dummy: bool = typer.Option(
        False, "--dummy",
        help="Use the offline dummy client (for testing).",
    ),
) -> None:
    """Translate a piece of text and print the result."""
    if file is not None:
        if not file.exists():
            console.print(f"[red]Error:[/red] File not found: {file}")
            raise typer.Exit(1)
        try:
            text = file.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            console.print(f"[red]Error:[/red] Not valid UTF-8 text: {escape(str(file))}")
            raise typer.Exit(1) from None
    if text is None:
        console.print("[red]Error:[/red] Provide TEXT or --file.")
        raise typer.Exit(1)

    settings = _load_settings_or_exit(endpoint=endpoint, max_chunk_size=max_chunk_size)
    source_code = source or settings.default_source
    target_code = target or settings.default_target

    _print(
        f"Endpoint: [cyan]{'dummy' if use_dummy else settings.endpoint}[/cyan]",
        verbose_only=True,
    )

    with _create_client(settings, use_dummy=use_dummy) as client:
        translator = Translator(client, max_chunk_size=settings.max_chunk_size)
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            console=err_console,
            transient=True,
            disable=_quiet,
        ) as progress:
            task = progress.add_task(f"Translating {source_code} → {target_code}", total=None)

            def on_progress(phase: str, current: int, total: int, message: str) -> None:
                progress.update(task, completed=current, total=total)

            result = translator.translate(text, source_code, target_code, on_progress=on_progress)

    if not result.ok:
        assert result.error is not None
        console.print(f"[red]Error:[/red] {escape(result.error.message)}", highlight=False)
        raise typer.Exit(1)

    _print(f"Chunks: [cyan]{result.chunk_count}[/cyan]", verbose_only=True)
    if result.detected_source:
        _print(f"Detected source: [cyan]{result.detected_source}[/cyan]", verbose_only=True)
    if result.dropped_chunks:
        _print(
            f"[yellow]Warning:[/yellow] {len(result.dropped_chunks)} of {result.chunk_count}"
            " chunk(s) could not be translated and were left out.",
        )

    console.print(result.translated_text, markup=False, highlight=False, soft_wrap=True)


@app.command()
def languages() -> None:
    """List the supported languages."""
    table = Table(title="Supported languages")
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    for lang in SUPPORTED_LANGUAGES:
        table.add_row(lang.code, lang.name)
    console.print(table)


def _render_state(state: SessionState) -> None:
    if state.error:
        console.print(f"[red]{escape(state.error)}[/red]", highlight=False)
        return
    if state.translated_text:
        console.print(
            f"[cyan]{state.target_language.label}[/cyan]: ", end="", highlight=False,
        )
        console.print(state.translated_text, markup=False, highlight=False, soft_wrap=True)
        if state.dropped_chunks:
            console.print(
                f"[yellow]{state.dropped_chunks} chunk(s) could not be translated.[/yellow]",
            )


def _run_command(session: TranslatorSession, line: str) -> bool:
    """Handle one ':' command. Returns False when the shell should exit."""
    command, _, arg = line[1:].partition(" ")
    command = command.lower()
    arg = arg.strip()

    if command in ("quit", "q", "exit"):
        return False
    if command == "help":
        console.print(_SHELL_HELP)
    elif command == "langs":
        languages()
    elif command in ("from", "to"):
        try:
            if command == "from":
                session.set_source_language(arg)
            else:
                session.set_target_language(arg)
        except UnsupportedLanguageError as e:
            session.set_error_message(str(e))
            _render_state(session.state)
    elif command == "swap":
        session.swap_languages()
        if session.state.is_loading:
            with console.status("Translating..."):
                session.wait()
        _render_state(session.state)
    else:
        console.print(f"[yellow]Unknown command:[/yellow] {command}")
    return True


@app.command()
def shell(
    source: str | None = typer.Option(None, "--from", "-f", help="Initial source language."),
    target: str | None = typer.Option(None, "--to", "-t", help="Initial target language."),
    use_dummy: bool = typer.Option(
        False, "--dummy",
        help="Use the offline dummy client (for testing).",
    ),
) -> None:
    """Interactive translation session."""
    settings = _load_settings_or_exit()

    with _create_client(settings, use_dummy=use_dummy) as client:
        translator = Translator(client, max_chunk_size=settings.max_chunk_size)
        try:
            session = TranslatorSession(
                translator,
                source_language=source or settings.default_source,
                target_language=target or settings.default_target,
            )
        except UnsupportedLanguageError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(1) from None

        _print(_SHELL_HELP)
        while True:
            state = session.state
            prompt = f"[cyan]{state.source_language.code} → {state.target_language.code}[/cyan]> "
            try:
                line = console.input(prompt)
            except (EOFError, KeyboardInterrupt):
                break

            line = line.strip()
            if line.startswith(":"):
                if not _run_command(session, line):
                    break
                continue

            session.set_input_text(line)
            if session.translate():
                with console.status("Translating..."):
                    session.wait()
            _render_state(session.state)


if __name__ == "__main__":
    app()
