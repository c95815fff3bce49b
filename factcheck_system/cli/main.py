"""Command line interface for the fact-check pipeline using Typer and Rich."""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from factcheck_system.config.logging import configure_logging, get_logger
from factcheck_system.config.settings import settings
from factcheck_system.corroboration.schemas import ClassifyRequest, CorroborationStatus, FinalResult, Page
from factcheck_system.corroboration.trust_registry import DomainTrustRegistry
from factcheck_system.errors import FactCheckError
from factcheck_system.pipeline import CorroborationPipeline
from factcheck_system.utils.logging import configure_structured_logging

# Initialize CLI app
app = typer.Typer(
    help="Fact-check CLI - classify a page and corroborate its claims against trusted sources",
    add_completion=False,
)

# Results go to stdout, logs to stderr
console = Console()

logger = get_logger("cli")

_STATUS_STYLES = {
    CorroborationStatus.CORROBORATED: "green",
    CorroborationStatus.CONTRADICTED: "red",
    CorroborationStatus.INCONCLUSIVE: "yellow",
}


def _configured(value: str) -> str:
    return "✓ Configured" if value else "⚠ Not Configured"


@app.command()
def status() -> None:
    """
    Display pipeline configuration.

    Shows the selected completion and search providers, deadlines and limits.
    """
    logger.info("Displaying system status")

    table = Table(title="Fact-check System Status", show_header=True, header_style="bold magenta")
    table.add_column("Component", style="cyan", width=20)
    table.add_column("Status", style="green", width=18)
    table.add_column("Details", style="yellow")

    if settings.llm_provider == "openai":
        table.add_row("Completion", _configured(settings.openai_api_key), f"openai / {settings.openai_model}")
    else:
        table.add_row("Completion", _configured(settings.gemini_api_key), f"gemini / {settings.gemini_model}")

    table.add_row(
        "Web search",
        _configured(settings.search_api_key()),
        f"{settings.search_provider} (gl={settings.search_country}, hl={settings.search_language})",
    )

    registry = DomainTrustRegistry(extra_domains=settings.trusted_domain_extras())
    table.add_row("Trust registry", "✓ Loaded", f"{len(registry)} domains")

    table.add_row(
        "Deadlines",
        "✓ Active",
        f"llm {settings.llm_timeout:g}s, search {settings.search_timeout:g}s, "
        f"request {settings.request_timeout:g}s",
    )
    table.add_row(
        "Limits",
        "✓ Active",
        f"max_claims {settings.max_claims}, max_results {settings.max_results}",
    )
    table.add_row("Logging", "✓ Active", f"Level: {settings.log_level}, Format: {settings.log_format}")

    console.print(table)


def _load_page(path: Path) -> Page:
    raw = json.loads(path.read_text(encoding="utf-8"))
    # Accept either a bare page or a full request body
    if isinstance(raw, dict) and isinstance(raw.get("page"), dict):
        raw = raw["page"]
    return Page.model_validate(raw)


async def _run(request: ClassifyRequest) -> FinalResult:
    async with CorroborationPipeline(settings) as pipeline:
        return await pipeline.classify(request)


def _render(result: FinalResult) -> None:
    style = _STATUS_STYLES[result.corroboration.overall]
    console.print(Panel(
        "\n".join(f"• {escape(reason)}" for reason in result.reasons) or "[dim]No reasons given[/dim]",
        title=f"{result.label.value.upper()}  {result.score:.2f}",
        border_style=style,
    ))

    heuristics = result.checks.quick_heuristics
    console.print(
        f"[dim]exclam={heuristics.exclam} allcaps={heuristics.allcaps} "
        f"clickbait={heuristics.clickbait} has_sources={heuristics.has_sources}[/dim]"
    )
    console.print(f"[{style}]{result.corroboration.summary}[/{style}]")

    if result.corroboration.verdicts:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Claim", style="cyan")
        table.add_column("Status", width=14)
        table.add_column("Sources", style="yellow")
        for verdict in result.corroboration.verdicts:
            table.add_row(
                escape(verdict.claim),
                f"[{_STATUS_STYLES[verdict.status]}]{verdict.status.value}[/]",
                "\n".join(source.url for source in verdict.sources) or "-",
            )
        console.print(table)

    for source in result.suggested_sources:
        console.print(f"[green]→[/green] {escape(source.title or source.url)} [dim]{source.url}[/dim]")


@app.command()
def classify(
    page_json: Path = typer.Argument(..., exists=True, dir_okay=False, help="Page JSON file"),
    web_search: bool = typer.Option(True, "--web-search/--no-web-search", help="Corroborate claims on the web"),
    max_claims: Optional[int] = typer.Option(None, min=1, help="Claims extracted from the page"),
    max_results: Optional[int] = typer.Option(None, min=1, help="Search results budget per claim"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
    log_level: Optional[str] = typer.Option(None, help="Override LOG_LEVEL"),
) -> None:
    """
    Classify a page and corroborate its claims.

    Args:
        page_json: File holding {title, text, url?, domain?, author?, published_time?}
        web_search: Run corroboration against the configured search provider
        max_claims: Claims extracted from the page
        max_results: Search results budget per claim
        as_json: Print the FinalResult as JSON instead of a rendered summary
    """
    if log_level:
        configure_logging(level=log_level)
        configure_structured_logging(level=log_level)

    try:
        request = ClassifyRequest(
            page=_load_page(page_json),
            web_search=web_search,
            max_claims=max_claims or settings.max_claims,
            max_results=max_results or settings.max_results,
        )
    except (json.JSONDecodeError, ValidationError) as e:
        console.print(f"[red]✗[/red] Invalid page file: {escape(str(e))}")
        raise typer.Exit(2)

    logger.bind(web_search=web_search).info("Classifying {}", page_json)

    try:
        result = asyncio.run(_run(request))
    except FactCheckError as e:
        console.print(f"[red]✗[/red] {type(e).__name__}: {escape(str(e))}")
        logger.error("Classification failed: {}", e)
        raise typer.Exit(1)

    if as_json:
        console.print_json(result.model_dump_json())
    else:
        _render(result)


@app.command()
def version() -> None:
    """Display version information."""
    console.print("[bold]Fact-check System[/bold]")
    console.print("Version: 0.1.0")


if __name__ == "__main__":
    app()
