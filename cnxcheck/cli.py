"""
cnxcheck CLI - grammar linting for CNXML documents, and image questions for a local VLM.

Usage:
    cnxcheck-lint ./modules --languagetool-host http://localhost:8011 > issues.csv
    cnxcheck-image photo.jpg "What is in this picture?"
"""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path

import typer
from dotenv import load_dotenv
from PIL import Image
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from cnxcheck.checker import DocumentLinter
from cnxcheck.errors import CnxCheckError, DocumentLoadError
from cnxcheck.providers.languagetool import LanguageToolClient
from cnxcheck.providers.ollama import OllamaVLM
from cnxcheck.providers.ollama.vlm import DEFAULT_PROMPT
from cnxcheck.report import CsvReportWriter
from cnxcheck.tag_rules import DEFAULT_TAG_RULES, TagRules
from cnxcheck.walker import iter_documents

# Load environment variables from .env file
load_dotenv()

lint_app = typer.Typer(add_completion=False)
image_app = typer.Typer(add_completion=False)
console = Console(stderr=True)

logger = logging.getLogger("cnxcheck")


def _setup_logging(verbose: bool, debug: bool = False) -> None:
    if debug:
        level = logging.DEBUG
    else:
        level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%Y-%m-%d %H:%M:%S]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


class TimedContext:
    """Context manager for timing operations."""

    def __init__(self, label: str):
        self.label = label
        self.t0 = 0.0

    def __enter__(self):
        self.t0 = time.time()
        logger.debug(f"START {self.label}")
        return self

    def __exit__(self, exc_type, exc, tb):
        dt = time.time() - self.t0
        if exc:
            logger.debug(f"FAIL  {self.label} ({dt:.2f}s): {exc}")
        else:
            logger.debug(f"DONE  {self.label} ({dt:.2f}s)")
        return False


def _load_rules(rules_path: str | None) -> TagRules:
    if not rules_path:
        return DEFAULT_TAG_RULES
    try:
        return TagRules.from_file(rules_path)
    except OSError as e:
        raise typer.BadParameter(f"cannot read rules file: {e}", param_hint="--rules")
    except ValidationError as e:
        raise typer.BadParameter(f"invalid rules file:\n{e}", param_hint="--rules")


# =============================================================================
# Document linter
# =============================================================================

@lint_app.command()
def lint(
    path: str = typer.Argument(..., help="Directory (searched recursively) or single document"),
    output: str | None = typer.Option(None, "--output", "-o", help="Write CSV here instead of stdout"),
    extension: str = typer.Option(".cnxml", "--extension", help="Document file extension"),
    rules: str | None = typer.Option(None, "--rules", help="JSON file replacing the tag rules"),
    header: bool = typer.Option(True, "--header/--no-header", help="Write a CSV header row"),
    languagetool_host: str = typer.Option("", "--languagetool-host", help="LanguageTool host"),
    language: str = typer.Option("en", "--language", help="Language code sent to the checker"),
    timeout_sec: int = typer.Option(600, "--timeout-sec"),
    verbose: bool = typer.Option(True, "--verbose/--quiet"),
    debug: bool = typer.Option(False, "--debug", help="Log requests and per-file timings"),
):
    """Check the prose of XML documents and write grammar issues as CSV."""
    _setup_logging(verbose, debug)
    tag_rules = _load_rules(rules)

    checker = LanguageToolClient(host=languagetool_host, language=language, timeout_sec=timeout_sec)
    logger.info(f"checker={checker.host} language={language} path={path}")

    try:
        out = open(output, "w", encoding="utf-8", newline="") if output else sys.stdout
    except OSError as e:
        raise typer.BadParameter(f"cannot write output file: {e}", param_hint="--output")
    try:
        writer = CsvReportWriter(out, header=header)
        writer.write_header()
        linter = DocumentLinter(checker=checker, rules=tag_rules, on_issue=writer.write_issue)

        n_files = 0
        n_skipped = 0
        for doc_path in iter_documents(path, extension=extension):
            try:
                with TimedContext(f"lint {doc_path}"):
                    linter.lint_file(doc_path)
                n_files += 1
            except DocumentLoadError as e:
                logger.error(f"Error reading file: {e}")
                n_skipped += 1
            except CnxCheckError as e:
                console.print(f"[red]Aborted while checking {escape(doc_path)}:[/red] {escape(str(e))}")
                raise typer.Exit(code=1)
    finally:
        if output:
            out.close()

    logger.info(
        f"files={n_files} skipped={n_skipped} blocks={linter.n_blocks} issues={writer.rows_written}"
    )


# =============================================================================
# Image question
# =============================================================================

@image_app.command()
def ask(
    image_path: str = typer.Argument(..., help="Path to the image"),
    prompt: str = typer.Argument(DEFAULT_PROMPT, help="Question about the image"),
    model: str = typer.Option("", "--model", help="Ollama model (default: $VLM_MODEL or llava)"),
    ollama_host: str = typer.Option("", "--ollama-host", help="Ollama host"),
    temperature: float | None = typer.Option(None, "--temperature", help="Sampling temperature (default: model setting)"),
    timeout_sec: int = typer.Option(600, "--timeout-sec"),
    verbose: bool = typer.Option(True, "--verbose/--quiet"),
    debug: bool = typer.Option(False, "--debug", help="Log request details"),
):
    """Send an image and a prompt to a local VLM and stream the answer."""
    _setup_logging(verbose, debug)

    try:
        image = Image.open(Path(image_path))
        image.load()
    except OSError as e:
        console.print(f"[red]Error:[/red] cannot open image {escape(image_path)}: {escape(str(e))}")
        raise typer.Exit(code=1)

    options = {"temperature": temperature} if temperature is not None else None
    vlm = OllamaVLM(model=model, host=ollama_host, timeout_sec=timeout_sec, options=options)
    logger.debug(f"model={vlm.model} image={image_path} size={image.size}")

    try:
        for fragment in vlm.stream(prompt=prompt, image=image):
            sys.stdout.write(fragment)
            sys.stdout.flush()
    except CnxCheckError as e:
        sys.stdout.write("\n")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    sys.stdout.write("\n")


def lint_main():
    """Entry point for cnxcheck-lint CLI."""
    lint_app()


def image_main():
    """Entry point for cnxcheck-image CLI."""
    image_app()
