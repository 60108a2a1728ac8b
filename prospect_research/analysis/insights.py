"""Human-readable strengths, concerns, next steps, and email hooks."""

from __future__ import annotations

from prospect_research.models import Insights, ScoringResult, WebsiteAnalysis

PLATFORM_EMAIL_HOOKS: dict[str, list[str]] = {
    "no-code": [
        "user project completion rates",
        "strategic guidance for non-technical users",
    ],
    "crm": [
        "deal closure rates and sales strategy",
        "user adoption and feature utilization",
    ],
}


def generate_company_insights(
    analysis: WebsiteAnalysis, scoring: ScoringResult,
) -> Insights:
    insights = Insights()
    indicators = analysis.business_indicators
    content = analysis.content_analysis

    if scoring.breakdown.platform_type >= 20:
        insights.strengths.append("Strong platform type match for strategic guidance APIs")

    if indicators is not None and indicators.has_customers:
        insights.strengths.append("Has established customer base")
        insights.email_hooks.append("user engagement and retention challenges")

    if content is not None and content.has_api:
        insights.strengths.append("API-first platform - technical integration feasible")

    if scoring.breakdown.technical_fit < 10:
        insights.concerns.append("Limited technical integration capabilities")

    if indicators is None or not indicators.has_funding:
        insights.concerns.append("No clear funding/growth indicators")

    if scoring.total_score >= 80:
        insights.recommendations.append("HIGH PRIORITY: Immediate outreach recommended")
        insights.recommendations.append("Focus on strategic guidance and user success metrics")
    elif scoring.total_score >= 60:
        insights.recommendations.append("MEDIUM PRIORITY: Research more before outreach")
        insights.recommendations.append("Investigate recent growth and funding status")
    else:
        insights.recommendations.append("LOW PRIORITY: Consider for nurture campaign")

    if analysis.platform_type is not None:
        insights.email_hooks.extend(PLATFORM_EMAIL_HOOKS.get(analysis.platform_type.type, []))

    return insights
