"""
Answer Grader CLI Application.

Provides a command-line interface for grading a single answer, inspecting how
answer text is classified and normalized, and checking the oracle connection.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from answer_grader.answers import classify, normalize
from answer_grader.canonical import CanonicalParseError, describe_rules, parse_canonical
from answer_grader.config import GraderConfig, get_settings
from answer_grader.extraction import GradeRequest
from answer_grader.grading import (
    GradingOrchestrator,
    LLMError,
    LLMEquivalenceOracle,
    create_orchestrator,
)
from answer_grader.models import GradeResponse, GradeResult

# Create Typer app
app = typer.Typer(
    name="answer-grader",
    help="Grade numeric, multiple-choice, short-text and algebraic answers",
    add_completion=False,
)

console = Console()

RESULT_COLORS = {
    GradeResult.PASS: "green",
    GradeResult.REVIEW: "yellow",
    GradeResult.FAIL: "red",
}


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """Configure logging for all commands."""
    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_json(path: Path) -> dict:
    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def grade(
    request_file: Annotated[Path, typer.Argument(help="Path to a JSON grading request")],
    no_oracle: Annotated[
        bool,
        typer.Option("--no-oracle", help="Grade algebra by normalized comparison only"),
    ] = False,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the raw grade response as JSON"),
    ] = False,
) -> None:
    """
    Grade one answer against its canonical answer.

    The request holds the extracted answer under "payload" and the stored
    canonical answer under "canonical".
    """
    data = _load_json(request_file)
    try:
        request = GradeRequest.model_validate(data)
    except (ValidationError, CanonicalParseError) as e:
        console.print(f"[red]Invalid grading request:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    settings = get_settings()
    if no_oracle:
        config = GraderConfig.from_settings(settings).model_copy(update={"use_oracle": False})
        orchestrator = GradingOrchestrator(config=config)
    else:
        orchestrator = create_orchestrator(settings)

    response = asyncio.run(orchestrator.grade(request.to_submission(), request.canonical))

    if as_json:
        console.print_json(response.model_dump_json())
    else:
        _display_response(response, describe_rules(request.canonical))


@app.command(name="classify")
def classify_command(
    text: Annotated[str, typer.Argument(help="Answer text to classify")],
) -> None:
    """Show the answer kind inferred for TEXT."""
    console.print(classify(text).value)


@app.command(name="normalize")
def normalize_command(
    expression: Annotated[str, typer.Argument(help="Algebraic expression")],
) -> None:
    """Show the normalized form of EXPRESSION."""
    console.print(normalize(expression), markup=False)


@app.command()
def rules(
    canonical_file: Annotated[Path, typer.Argument(help="Path to a stored canonical answer")],
) -> None:
    """Show the grading rules for a stored canonical answer."""
    data = _load_json(canonical_file)
    try:
        canonical = parse_canonical(data)
    except CanonicalParseError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(Panel(describe_rules(canonical), title=f"Canonical ({canonical.kind.value})"))


@app.command()
def health() -> None:
    """
    Check if the equivalence oracle is operational.

    Verifies configuration and API connectivity.
    """
    settings = get_settings()
    console.print("[bold]Answer Grader Health Check[/bold]\n")

    console.print("[dim]Checking configuration...[/dim]")
    console.print(f"  API Base URL: {settings.openai_base_url}")
    console.print(f"  Model: {settings.oracle_model}")
    console.print(f"  Oracle Enabled: {settings.use_oracle}")
    console.print(
        f"  Thresholds: pass >= {settings.pass_confidence_threshold}, "
        f"review >= {settings.review_confidence_threshold}"
    )

    if not settings.use_oracle:
        console.print("\n[yellow]Oracle disabled; algebra uses normalized comparison[/yellow]")
        return

    console.print("\n[dim]Checking API connectivity...[/dim]")
    try:
        oracle = LLMEquivalenceOracle(settings)
    except LLMError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if asyncio.run(oracle.health_check()):
        console.print("[green]✓ API is reachable[/green]")
    else:
        console.print("[red]✗ API is not reachable[/red]")
        raise typer.Exit(1)

    console.print("\n[green]All systems operational[/green]")


def _display_response(response: GradeResponse, rules_text: str) -> None:
    """Display a grade response as a panel and reason table."""
    color = RESULT_COLORS[response.result]
    console.print(
        Panel(
            f"[{color}][bold]{response.result.value}[/bold] (score {response.score:g})[/{color}]",
            title="Result",
            subtitle=escape(rules_text),
        )
    )

    table = Table(title="Reasons")
    table.add_column("#", justify="right")
    table.add_column("Reason", style="cyan")
    for i, reason in enumerate(response.reasons, start=1):
        table.add_row(str(i), escape(reason))
    console.print(table)


if __name__ == "__main__":
    app()
