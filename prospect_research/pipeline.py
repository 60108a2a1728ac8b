"""Async research orchestration with concurrency control."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Iterable, Union

import httpx
from rich.console import Console
from rich.markup import escape

from prospect_research.analysis.insights import generate_company_insights
from prospect_research.analysis.intelligence import gather_company_intelligence
from prospect_research.analysis.scoring import qualification_tier, score_company_fit
from prospect_research.cache.store import ResearchCache
from prospect_research.config import Config
from prospect_research.contacts.extractor import find_key_contacts
from prospect_research.models import (
    BatchError,
    CompanyInput,
    CompanyRecord,
    ResearchResult,
    WebsiteProvenance,
)
from prospect_research.scrape.content_analyzer import analyze_website
from prospect_research.scrape.http_scraper import build_client
from prospect_research.search.website_resolver import find_company_website

logger = logging.getLogger(__name__)

BatchItem = Union[ResearchResult, BatchError]
CompanyLike = Union[CompanyInput, dict, str]


class ResearchError(Exception):
    """Research for a single company failed outright."""


class ResearchPipeline:
    """Research prospects one at a time or in throttled batches.

    The HTTP client is injected (or created and owned here), so tests can
    swap in ``httpx.MockTransport``. Use as an async context manager to
    release the owned client.
    """

    def __init__(
        self,
        config: Config | None = None,
        client: httpx.AsyncClient | None = None,
        cache: ResearchCache | None = None,
        console: Console | None = None,
    ):
        self.config = config or Config()
        self._owns_client = client is None
        if client is None:
            client = build_client(
                user_agent=self.config.user_agent,
                max_redirects=self.config.max_redirects,
            )
        self.client = client
        # An empty ResearchCache is falsy, so test for None explicitly
        if cache is None:
            cache = ResearchCache(ttl_hours=self.config.cache_ttl_hours)
        self.cache = cache
        self.console = console if console is not None else Console(stderr=True)

    async def __aenter__(self) -> ResearchPipeline:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    # ------------------------------------------------------------------
    # Single company
    # ------------------------------------------------------------------

    async def research_company(
        self, company_name: str, website: str | None = None,
    ) -> ResearchResult:
        """Resolve, analyze, extract contacts, score, and summarize one company.

        Source failures degrade to empty data. Anything else is raised as
        ``ResearchError``.
        """
        logger.info("Starting research for %s", company_name)
        try:
            provenance: WebsiteProvenance = "supplied"
            if not website:
                website, provenance = await find_company_website(
                    self.client, company_name, timeout=self.config.resolver_timeout,
                )

            analysis, intelligence, contacts = await asyncio.gather(
                analyze_website(
                    self.client, website, timeout=self.config.analysis_timeout,
                ),
                gather_company_intelligence(company_name),
                find_key_contacts(
                    self.client,
                    company_name,
                    website,
                    team_page_timeout=self.config.team_page_timeout,
                    contact_page_timeout=self.config.contact_page_timeout,
                    max_contacts=self.config.max_contacts,
                ),
            )

            scoring = score_company_fit(analysis)
            insights = generate_company_insights(analysis, scoring)

            result = ResearchResult(
                company=CompanyRecord(
                    name=company_name,
                    website=website,
                    website_provenance=provenance,
                    title=analysis.title,
                    description=analysis.description,
                    platform_type=analysis.platform_type,
                    business_indicators=analysis.business_indicators,
                    tech_stack=analysis.tech_stack,
                    pricing_info=analysis.pricing_info,
                    content_analysis=analysis.content_analysis,
                    intelligence=intelligence,
                ),
                contacts=contacts,
                scoring=scoring,
                insights=insights,
                recommendation=qualification_tier(scoring.total_score),
            )
        except Exception as e:
            logger.error("Research failed for %s: %s", company_name, e)
            raise ResearchError(f"Research failed for {company_name}: {e}") from e

        logger.info(
            "Research complete for %s: %s (%d points)",
            company_name, result.recommendation, scoring.total_score,
        )
        return result

    async def research_cached(
        self,
        company_name: str,
        website: str | None = None,
        force_refresh: bool = False,
    ) -> ResearchResult:
        """``research_company`` behind the in-memory TTL cache."""
        if not force_refresh:
            cached = self.cache.get_company(company_name)
            if cached is not None:
                logger.info("Using cached research for %s", company_name)
                return cached.model_copy(update={"from_cache": True})

        result = await self.research_company(company_name, website)
        self.cache.set_company(company_name, result)
        return result

    # ------------------------------------------------------------------
    # Batch
    # ------------------------------------------------------------------

    async def batch_research(
        self,
        companies: Iterable[CompanyLike],
        delay: float | None = None,
        max_concurrent: int | None = None,
        progress_callback: Callable[[int, str], None] | None = None,
    ) -> list[BatchItem]:
        """Research many companies in chunks of ``max_concurrent``.

        Chunks run one after another with ``delay`` seconds between them.
        A failing company becomes a ``BatchError`` and never stops the
        batch. Results come back sorted by total score, highest first,
        with errors after successes of equal score.

        Args:
            progress_callback: Optional callable(pct: int, msg: str) called
                after each chunk.
        """
        delay = self.config.batch_delay if delay is None else delay
        chunk_size = max(1, max_concurrent or self.config.max_concurrent)
        inputs = [_coerce_input(company) for company in companies]
        total = len(inputs)

        logger.info("Starting batch research for %d companies", total)
        self.console.print(
            f"\nResearching {total} companies "
            f"({chunk_size} at a time, {delay:g}s between batches)...\n"
        )

        results: list[BatchItem] = []
        for start in range(0, total, chunk_size):
            chunk = inputs[start:start + chunk_size]
            chunk_results = await asyncio.gather(
                *(self._research_safe(company) for company in chunk)
            )
            results.extend(chunk_results)

            for offset, item in enumerate(chunk_results, start=start + 1):
                self._print_item(offset, total, item)
            if progress_callback:
                done = start + len(chunk)
                progress_callback(int(done / total * 100), f"{done}/{total} companies researched")

            if start + chunk_size < total:
                await asyncio.sleep(delay)

        results.sort(
            key=lambda item: (item.total_score, isinstance(item, ResearchResult)),
            reverse=True,
        )
        logger.info("Batch research complete: %d companies analyzed", len(results))
        return results

    async def _research_safe(self, company: CompanyInput) -> BatchItem:
        try:
            result = await self.research_company(company.name, company.website)
        except Exception as e:
            logger.error("Batch research failed for %s: %s", company.name, e)
            return BatchError(input=company, error=str(e))
        return result.model_copy(update={"input": company})

    def _print_item(self, position: int, total: int, item: BatchItem) -> None:
        if isinstance(item, BatchError):
            self.console.print(
                f"  [red][{position}/{total}] {escape(item.input.name)} - {escape(item.error)}[/red]"
            )
            return
        self.console.print(
            f"  [{position}/{total}] {escape(item.company.name)} - "
            f"{item.recommendation} ({item.total_score} points)"
        )


def _coerce_input(company: CompanyLike) -> CompanyInput:
    if isinstance(company, CompanyInput):
        return company
    if isinstance(company, str):
        return CompanyInput(name=company)
    return CompanyInput.model_validate(company)
