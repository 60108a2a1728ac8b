"""Algorithmic fit scoring: deterministic, no network or LLM involvement."""

from __future__ import annotations

import math

from prospect_research.analysis.rubrics import (
    BUSINESS_INDICATOR_POINTS,
    DEFAULT_PLATFORM_TYPE_POINTS,
    FACTOR_CAPS,
    GROWTH_POINTS_PER_TAG,
    MAJOR_PLATFORMS,
    MAX_FIT_SCORE,
    NOT_QUALIFIED,
    PLATFORM_TYPE_POINTS,
    PRICING_POINTS,
    QUALIFICATION_TIERS,
    TECHNICAL_FIT_POINTS,
)
from prospect_research.models import (
    Recommendation,
    ScoringBreakdown,
    ScoringResult,
    WebsiteAnalysis,
)


def score_company_fit(analysis: WebsiteAnalysis) -> ScoringResult:
    """Compute a 0-120 fit score from the website analysis.

    Six factors, each capped:
    - Platform recognition (20): well-known platform in title or URL
    - Platform type (30): category match
    - Business indicators (25): customers, funding, hiring, case studies
    - Technical fit (20): API, developer docs, enterprise focus
    - Pricing model (15): public pricing, subscription, enterprise plans
    - Growth indicators (10): 3 points per growth tag

    Missing sections score 0, so an empty analysis scores 0 overall.
    """
    breakdown = ScoringBreakdown(
        platform_recognition=_platform_recognition(analysis),
        platform_type=_platform_type(analysis),
        business_indicators=_business_indicators(analysis),
        technical_fit=_technical_fit(analysis),
        pricing_model=_pricing_model(analysis),
        growth_indicators=_growth_indicators(analysis),
    )
    total = sum(breakdown.model_dump().values())

    return ScoringResult(
        total_score=total,
        breakdown=breakdown,
        max_possible=MAX_FIT_SCORE,
        percentage=math.floor(total * 100 / MAX_FIT_SCORE + 0.5),
    )


def qualification_tier(total_score: int) -> Recommendation:
    for min_score, tier in QUALIFICATION_TIERS:
        if total_score >= min_score:
            return tier
    return NOT_QUALIFIED


def _cap(factor: str, points: int) -> int:
    return min(points, FACTOR_CAPS[factor])


def _platform_recognition(analysis: WebsiteAnalysis) -> int:
    title = (analysis.title or "").lower()
    website = (analysis.website or "").lower()
    for platform, boost in MAJOR_PLATFORMS.items():
        if platform in title or platform in website:
            return _cap("platform_recognition", boost)
    return 0


def _platform_type(analysis: WebsiteAnalysis) -> int:
    if analysis.platform_type is None:
        return 0
    points = PLATFORM_TYPE_POINTS.get(
        analysis.platform_type.type, DEFAULT_PLATFORM_TYPE_POINTS,
    )
    return _cap("platform_type", points)


def _business_indicators(analysis: WebsiteAnalysis) -> int:
    indicators = analysis.business_indicators
    if indicators is None:
        return 0
    points = sum(
        value for flag, value in BUSINESS_INDICATOR_POINTS.items()
        if getattr(indicators, flag)
    )
    return _cap("business_indicators", points)


def _technical_fit(analysis: WebsiteAnalysis) -> int:
    content = analysis.content_analysis
    if content is None:
        return 0
    points = sum(
        value for flag, value in TECHNICAL_FIT_POINTS.items()
        if getattr(content, flag)
    )
    return _cap("technical_fit", points)


def _pricing_model(analysis: WebsiteAnalysis) -> int:
    pricing = analysis.pricing_info
    if pricing is None:
        return 0
    points = 0
    if pricing.has_pricing:
        points += PRICING_POINTS["has_pricing"]
    if pricing.pricing_model == "subscription":
        points += PRICING_POINTS["subscription"]
    if "enterprise_pricing" in pricing.price_indicators:
        points += PRICING_POINTS["enterprise_pricing"]
    return _cap("pricing_model", points)


def _growth_indicators(analysis: WebsiteAnalysis) -> int:
    indicators = analysis.business_indicators
    if indicators is None:
        return 0
    return _cap("growth_indicators", len(indicators.growth_indicators) * GROWTH_POINTS_PER_TAG)
