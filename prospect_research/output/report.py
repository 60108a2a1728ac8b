"""Render research results as a terminal table and a JSON report."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence, Union

from rich.markup import escape
from rich.table import Table

from prospect_research.models import BatchError, ResearchResult

TIER_STYLES = {
    "HOT_PROSPECT": "bold green",
    "WARM_PROSPECT": "yellow",
    "COLD_PROSPECT": "cyan",
    "NOT_QUALIFIED": "dim",
    "RESEARCH_FAILED": "red",
}

ReportItem = Union[ResearchResult, BatchError]


def results_to_json(results: Sequence[ReportItem]) -> list[dict]:
    """Serialize with the camelCase contact field names the dashboard expects."""
    return [item.model_dump(mode="json", by_alias=True) for item in results]


def write_json_report(results: Sequence[ReportItem], output_path: str) -> Path:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(results_to_json(results), indent=2), encoding="utf-8")
    return path


def render_summary_table(results: Sequence[ReportItem]) -> Table:
    table = Table(title="Prospect Research", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Company")
    table.add_column("Website")
    table.add_column("Platform")
    table.add_column("Score", justify="right")
    table.add_column("Tier")
    table.add_column("Top contact")
    table.add_column("Ready", justify="right")

    for rank, item in enumerate(results, start=1):
        style = TIER_STYLES.get(item.recommendation, "")
        if isinstance(item, BatchError):
            table.add_row(
                str(rank),
                escape(item.input.name),
                escape(item.input.website or "-"),
                "-",
                "-",
                f"[{style}]{item.recommendation}[/{style}]",
                escape(item.error[:60]),
                "0",
            )
            continue

        company = item.company
        platform = company.platform_type.type if company.platform_type else "-"
        top = item.contacts[0] if item.contacts else None
        top_label = f"{top.name} ({top.title})" if top else "-"
        ready = [c for c in item.contacts if c.recommended_for_outreach]
        guessed = sum(1 for c in ready if c.email_provenance == "synthesized")
        ready_label = f"{len(ready)} ({guessed} guessed)" if guessed else str(len(ready))
        table.add_row(
            str(rank),
            escape(company.name),
            escape(company.website or "-"),
            platform,
            f"{item.scoring.total_score}/{item.scoring.max_possible}",
            f"[{style}]{item.recommendation}[/{style}]",
            escape(top_label),
            ready_label,
        )

    return table
