"""Home-page analysis: platform category, business signals, tech stack, pricing.

The classifiers below are pure functions over the lookup tables in
``analysis.rubrics`` and a parsed document, so they run without network
access. ``analyze_website`` is the only coroutine; it never raises.
"""

from __future__ import annotations

import logging
import re

import httpx
from bs4 import BeautifulSoup

from prospect_research.analysis.rubrics import PLATFORM_KEYWORDS
from prospect_research.models import (
    BusinessIndicators,
    ContentAnalysis,
    PlatformType,
    PricingInfo,
    TechStack,
    WebsiteAnalysis,
)
from prospect_research.scrape.http_scraper import fetch_page

logger = logging.getLogger(__name__)

CUSTOMER_PATTERN = re.compile(
    r"(\d+[\d,]*)\s*(customers|users|companies|businesses)", re.IGNORECASE,
)

FRONTEND_SCRIPTS = {"react": "React", "vue": "Vue.js", "angular": "Angular"}
ANALYTICS_SCRIPTS = {
    "google-analytics": "Google Analytics",
    "mixpanel": "Mixpanel",
    "segment": "Segment",
}
SERVER_HEADERS = {"nginx": "Nginx", "apache": "Apache"}
POWERED_BY_HEADERS = {
    "php": "PHP",
    "express": "Express",
    "next.js": "Next.js",
    "asp.net": "ASP.NET",
}


async def analyze_website(
    client: httpx.AsyncClient,
    website_url: str | None,
    timeout: float = 10.0,
) -> WebsiteAnalysis:
    """Fetch and analyze a company's home page.

    Returns an empty ``WebsiteAnalysis`` when there is no URL or when the
    page cannot be fetched or parsed.
    """
    if not website_url:
        return WebsiteAnalysis()

    page, error = await fetch_page(client, website_url, timeout=timeout)
    if page is None:
        logger.warning("Website analysis failed for %s: %s", website_url, error)
        return WebsiteAnalysis()

    try:
        analysis = analyze_html(page.html, website_url, page.headers)
    except Exception as e:
        logger.warning("Website analysis failed for %s: %s", website_url, e)
        return WebsiteAnalysis()

    logger.debug(
        "Analyzed %s: title=%r platform=%s (%d)",
        website_url,
        analysis.title,
        analysis.platform_type.type,
        analysis.platform_type.confidence,
    )
    return analysis


def analyze_html(
    html: str, website_url: str | None = None, headers: dict[str, str] | None = None,
) -> WebsiteAnalysis:
    """Derive every website signal from raw HTML."""
    soup = BeautifulSoup(html, "html.parser")

    title = soup.title.get_text().strip() if soup.title else ""
    description = _meta_content(soup, "description")
    keywords = _meta_content(soup, "keywords")
    body = soup.body if soup.body is not None else soup
    body_text = body.get_text().lower()

    return WebsiteAnalysis(
        website=website_url,
        title=title,
        description=description,
        keywords=keywords,
        platform_type=detect_platform_type(
            body_text, title.lower(), description.lower(),
        ),
        business_indicators=extract_business_indicators(body_text, soup),
        tech_stack=detect_tech_stack(soup, headers or {}),
        pricing_info=extract_pricing_info(body_text, soup),
        content_analysis=analyze_content(body_text),
    )


def _meta_content(soup: BeautifulSoup, name: str) -> str:
    tag = soup.find("meta", attrs={"name": name})
    if tag is None:
        return ""
    return (tag.get("content") or "").strip()


def detect_platform_type(content: str, title: str = "", description: str = "") -> PlatformType:
    """Classify by keyword occurrence counts across all page text.

    The category with the highest count wins. On a tie the category
    declared first in ``PLATFORM_KEYWORDS`` keeps the win. All-zero
    counts classify as "unknown".
    """
    all_text = f"{content} {title} {description}"

    detected = "unknown"
    max_score = 0
    for category, keywords in PLATFORM_KEYWORDS.items():
        score = sum(
            len(re.findall(re.escape(keyword), all_text, re.IGNORECASE))
            for keyword in keywords
        )
        if score > max_score:
            max_score = score
            detected = category

    return PlatformType(type=detected, confidence=max_score, keywords_found=max_score)


def extract_business_indicators(content: str, soup: BeautifulSoup) -> BusinessIndicators:
    indicators = BusinessIndicators()

    match = CUSTOMER_PATTERN.search(content)
    if match:
        indicators.has_customers = True
        indicators.customer_count = match.group(0)

    if "funding" in content or "raised" in content or "series" in content:
        indicators.has_funding = True
        indicators.growth_indicators.append("funding")

    if soup.select('a[href*="team"], a[href*="about"]'):
        indicators.has_team_page = True

    if soup.select('a[href*="careers"]') or "we're hiring" in content:
        indicators.has_careers = True
        indicators.growth_indicators.append("hiring")

    if soup.select('a[href*="press"], a[href*="news"]'):
        indicators.has_press = True
        indicators.growth_indicators.append("press")

    if "case study" in content or "success story" in content:
        indicators.has_case_studies = True
        indicators.growth_indicators.append("case_studies")

    return indicators


def detect_tech_stack(soup: BeautifulSoup, headers: dict[str, str]) -> TechStack:
    stack = TechStack()

    script_sources = [
        script["src"].lower() for script in soup.find_all("script", src=True)
    ]

    def _has_script(fragment: str) -> bool:
        return any(fragment in src for src in script_sources)

    for fragment, name in FRONTEND_SCRIPTS.items():
        if _has_script(fragment):
            stack.frontend.append(name)
    for fragment, name in ANALYTICS_SCRIPTS.items():
        if _has_script(fragment):
            stack.analytics.append(name)

    lowered = {k.lower(): v.lower() for k, v in headers.items()}
    server = lowered.get("server", "")
    for fragment, name in SERVER_HEADERS.items():
        if fragment in server:
            stack.hosting.append(name)
    powered_by = lowered.get("x-powered-by", "")
    for fragment, name in POWERED_BY_HEADERS.items():
        if fragment in powered_by:
            stack.backend.append(name)

    return stack


def extract_pricing_info(content: str, soup: BeautifulSoup) -> PricingInfo:
    pricing = PricingInfo()

    if soup.select('a[href*="pricing"], a[href*="plans"]'):
        pricing.has_pricing = True

    if "per month" in content or "monthly" in content:
        pricing.pricing_model = "subscription"
        pricing.price_indicators.append("monthly_subscription")

    if "per user" in content or "per seat" in content:
        pricing.pricing_model = "per_user"
        pricing.price_indicators.append("per_user_pricing")

    if "enterprise" in content and "contact" in content:
        pricing.price_indicators.append("enterprise_pricing")

    return pricing


def analyze_content(content: str) -> ContentAnalysis:
    return ContentAnalysis(
        has_api="api" in content or "integration" in content,
        has_developers="developer" in content or "documentation" in content,
        has_enterprise="enterprise" in content or "business" in content,
        has_pricing="pricing" in content or "plans" in content,
    )
