"""CLI entry point for the prospect research tool."""

from __future__ import annotations

import asyncio
import io
import logging
import os
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from prospect_research.config import Config, load_config
from prospect_research.input.reader import read_input_file
from prospect_research.models import BatchError, CompanyInput, ResearchResult
from prospect_research.output.report import render_summary_table, write_json_report
from prospect_research.pipeline import ResearchError, ResearchPipeline

# Fix Windows console encoding for Unicode output
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace")
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding="utf-8", errors="replace")
    os.environ.setdefault("PYTHONIOENCODING", "utf-8")

console = Console(force_terminal=True)


def _setup(verbose: bool) -> Config:
    try:
        config = load_config()
    except ValueError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        sys.exit(1)

    log_level = logging.DEBUG if verbose else getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False, show_time=False)],
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return config


@click.group()
def main() -> None:
    """Research B2B prospects: find the website, score fit, surface contacts."""


@main.command()
@click.argument("company_name")
@click.option("--website", "-w", default=None, help="Skip website discovery and use this URL")
@click.option("--output", "-o", default=None, help="Write the full result as JSON to this file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose debug logging")
def research(company_name: str, website: str | None, output: str | None, verbose: bool) -> None:
    """Research a single company.

    Example: prospect-research research "Acme Labs" -w https://acmelabs.com
    """
    config = _setup(verbose)

    async def _run() -> ResearchResult:
        async with ResearchPipeline(config, console=console) as pipeline:
            return await pipeline.research_company(company_name, website)

    try:
        result = asyncio.run(_run())
    except ResearchError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    console.print(render_summary_table([result]))
    _print_details(result)

    if output:
        path = write_json_report([result], output)
        console.print(f"\n[bold]Report: {path}[/bold]")


@main.command()
@click.argument("company_names", nargs=-1)
@click.option(
    "--file", "-f", "input_file",
    default=None,
    type=click.Path(exists=True),
    help="CSV/Excel file with a company column (and optional website column)",
)
@click.option(
    "--max-concurrent", "-c",
    default=None,
    type=int,
    help="Companies researched at once (default: 3)",
)
@click.option(
    "--delay", "-d",
    default=None,
    type=float,
    help="Seconds to wait between batches (default: 2)",
)
@click.option(
    "--max-companies",
    default=None,
    type=int,
    help="Limit number of companies to process",
)
@click.option("--output", "-o", default=None, help="Write all results as JSON to this file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose debug logging")
def batch(
    company_names: tuple[str, ...],
    input_file: str | None,
    max_concurrent: int | None,
    delay: float | None,
    max_companies: int | None,
    output: str | None,
    verbose: bool,
) -> None:
    """Research many companies and rank them by fit score.

    Example: prospect-research batch Airtable Webflow "Acme Labs" -c 2
    """
    config = _setup(verbose)

    companies: list[CompanyInput] = [CompanyInput(name=name) for name in company_names]
    if input_file:
        try:
            companies.extend(read_input_file(input_file))
        except (FileNotFoundError, ValueError) as e:
            console.print(f"[red]Input error: {escape(str(e))}[/red]")
            sys.exit(1)
        console.print(f"Loaded {len(companies)} companies from {input_file}")

    if not companies:
        console.print("[red]No companies given. Pass names or --file.[/red]")
        sys.exit(1)

    if max_companies:
        companies = companies[:max_companies]
        console.print(f"Limited to first {max_companies} companies")

    async def _run() -> list[ResearchResult | BatchError]:
        async with ResearchPipeline(config, console=console) as pipeline:
            return await pipeline.batch_research(
                companies, delay=delay, max_concurrent=max_concurrent,
            )

    results = asyncio.run(_run())

    console.print()
    console.print(render_summary_table(results))

    hot = sum(1 for r in results if r.recommendation == "HOT_PROSPECT")
    warm = sum(1 for r in results if r.recommendation == "WARM_PROSPECT")
    cold = sum(1 for r in results if r.recommendation == "COLD_PROSPECT")
    errors = [r for r in results if isinstance(r, BatchError)]

    console.print(f"\n  Companies: {len(results)}")
    console.print(f"  Fit: [green]{hot} Hot[/green] / [yellow]{warm} Warm[/yellow] / [cyan]{cold} Cold[/cyan]")
    if errors:
        console.print(f"  [red]Errors: {len(errors)}[/red]")
        for r in errors:
            console.print(f"    [red]- {escape(r.input.name)}: {escape(r.error)}[/red]")

    if output:
        path = write_json_report(results, output)
        console.print(f"\n[bold]Report: {path}[/bold]")
    console.print()


def _print_details(result: ResearchResult) -> None:
    insights = result.insights
    for label, items, style in (
        ("Strengths", insights.strengths, "green"),
        ("Concerns", insights.concerns, "yellow"),
        ("Recommendations", insights.recommendations, "bold"),
        ("Email hooks", insights.email_hooks, "cyan"),
    ):
        if items:
            console.print(f"\n[{style}]{label}[/{style}]")
            for item in items:
                console.print(f"  - {escape(item)}")

    console.print("\n[bold]Contacts[/bold]")
    for contact in result.contacts:
        quality = contact.quality_score.percentage if contact.quality_score else 0
        email = contact.email or "no email"
        if contact.email_provenance == "synthesized":
            email += " (guessed)"
        flag = "[green]ready[/green]" if contact.recommended_for_outreach else "[dim]not ready[/dim]"
        console.print(
            f"  {escape(contact.name)} - {escape(contact.title)} - "
            f"{escape(email)} - quality {quality}% - {flag}"
        )


if __name__ == "__main__":
    main()
