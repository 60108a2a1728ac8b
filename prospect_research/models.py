"""Pydantic data models for the prospect research pipeline."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PlatformCategory = Literal[
    "no-code",
    "crm",
    "project-management",
    "ecommerce",
    "automation",
    "analytics",
    "communication",
    "unknown",
]
ContactSource = Literal[
    "website_team_page",
    "contact_page",
    "text_extraction",
    "research_needed",
    "research_failed",
]
ContactPriority = Literal["critical", "high", "medium", "low"]
Risk = Literal["low", "medium", "high"]
EmailProvenance = Literal["scraped", "synthesized", "none"]
WebsiteProvenance = Literal["supplied", "alias", "domain_guess", "none"]
Recommendation = Literal[
    "HOT_PROSPECT", "WARM_PROSPECT", "COLD_PROSPECT", "NOT_QUALIFIED",
]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Input models
# ---------------------------------------------------------------------------

class CompanyInput(BaseModel):
    """A company to research, optionally with a known website."""
    name: str
    website: str | None = None


# ---------------------------------------------------------------------------
# Website analysis models
# ---------------------------------------------------------------------------

class PlatformType(BaseModel):
    type: PlatformCategory = "unknown"
    confidence: int = 0
    keywords_found: int = 0


class BusinessIndicators(BaseModel):
    has_customers: bool = False
    customer_count: str | None = None  # Raw match, e.g. "10,000 customers"
    has_funding: bool = False
    has_team_page: bool = False
    has_careers: bool = False
    has_press: bool = False
    has_case_studies: bool = False
    growth_indicators: list[str] = Field(default_factory=list)


class TechStack(BaseModel):
    frontend: list[str] = Field(default_factory=list)
    backend: list[str] = Field(default_factory=list)
    analytics: list[str] = Field(default_factory=list)
    hosting: list[str] = Field(default_factory=list)


class PricingInfo(BaseModel):
    has_pricing: bool = False
    pricing_model: Literal["subscription", "per_user"] | None = None
    price_indicators: list[str] = Field(default_factory=list)


class ContentAnalysis(BaseModel):
    has_api: bool = False
    has_developers: bool = False
    has_enterprise: bool = False
    has_pricing: bool = False


class WebsiteAnalysis(BaseModel):
    """Signals derived from a company's home page.

    Every field is optional. ``WebsiteAnalysis()`` is the "no data" result
    returned when there is no website or the page could not be fetched.
    """
    website: str | None = None
    title: str | None = None
    description: str | None = None
    keywords: str | None = None
    platform_type: PlatformType | None = None
    business_indicators: BusinessIndicators | None = None
    tech_stack: TechStack | None = None
    pricing_info: PricingInfo | None = None
    content_analysis: ContentAnalysis | None = None

    @property
    def is_empty(self) -> bool:
        return not any(
            value is not None for value in self.model_dump().values()
        )


class CompanyIntelligence(BaseModel):
    """Third-party company data. Not sourced yet, so always empty."""
    funding_info: str | None = None
    employee_count: str | None = None
    founded_year: str | None = None
    location: str | None = None
    industry: str | None = None
    competitors: list[str] = Field(default_factory=list)
    recent_news: list[str] = Field(default_factory=list)


class CompanyRecord(BaseModel):
    """Everything learned about one company during a single research call."""
    model_config = ConfigDict(frozen=True)

    name: str
    website: str | None = None
    website_provenance: WebsiteProvenance = "none"
    title: str | None = None
    description: str | None = None
    platform_type: PlatformType | None = None
    business_indicators: BusinessIndicators | None = None
    tech_stack: TechStack | None = None
    pricing_info: PricingInfo | None = None
    content_analysis: ContentAnalysis | None = None
    intelligence: CompanyIntelligence = Field(default_factory=CompanyIntelligence)


# ---------------------------------------------------------------------------
# Contact models
# ---------------------------------------------------------------------------

class QualityBreakdown(BaseModel):
    title_priority: int = 0
    email_verification: int = 0
    source_quality: int = 0
    linkedin_profile: int = 0
    recency: int = 0


class QualityScore(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    score: int = 0
    max_score: int = Field(default=100, alias="maxScore")
    percentage: int = 0
    breakdown: QualityBreakdown | None = None  # None for placeholder sentinels


class Deliverability(BaseModel):
    risk: Risk = "high"
    reason: str = ""


class EmailValidation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_valid: bool = Field(default=False, alias="isValid")
    deliverability: Deliverability = Field(default_factory=Deliverability)


class Contact(BaseModel):
    """A person (or placeholder) to approach at a prospect company.

    ``email_provenance`` separates addresses read from the page from
    guessed ``first.last@domain`` ones. ``is_placeholder`` marks the
    synthesized "research needed" entries whose scores are sentinels.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: str
    title: str = "Team Member"
    email: str | None = None
    linkedin: str | None = None
    source: ContactSource = "text_extraction"
    priority: ContactPriority = "medium"
    verified: bool = False
    email_provenance: EmailProvenance = Field(default="none", alias="emailProvenance")
    note: str | None = None
    extracted_at: datetime | None = Field(default=None, alias="extractedAt")
    quality_score: QualityScore | None = Field(default=None, alias="qualityScore")
    email_validation: EmailValidation | None = Field(default=None, alias="emailValidation")
    recommended_for_outreach: bool = Field(default=False, alias="recommendedForOutreach")
    outreach_risk: Risk | None = Field(default=None, alias="outreachRisk")
    is_placeholder: bool = Field(default=False, alias="isPlaceholder")


# ---------------------------------------------------------------------------
# Fit scoring
# ---------------------------------------------------------------------------

class ScoringBreakdown(BaseModel):
    platform_recognition: int = 0
    platform_type: int = 0
    business_indicators: int = 0
    technical_fit: int = 0
    pricing_model: int = 0
    growth_indicators: int = 0


class ScoringResult(BaseModel):
    total_score: int = 0
    breakdown: ScoringBreakdown = Field(default_factory=ScoringBreakdown)
    max_possible: int = 120
    percentage: int = 0


class Insights(BaseModel):
    strengths: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    email_hooks: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Final result models
# ---------------------------------------------------------------------------

class ResearchResult(BaseModel):
    """Complete result for one company after the full pipeline."""
    company: CompanyRecord
    contacts: list[Contact] = Field(default_factory=list)
    scoring: ScoringResult = Field(default_factory=ScoringResult)
    insights: Insights = Field(default_factory=Insights)
    recommendation: Recommendation = "NOT_QUALIFIED"
    research_date: str = Field(default_factory=lambda: utc_now().isoformat())
    input: CompanyInput | None = None  # Set in batch mode
    from_cache: bool = False

    @property
    def total_score(self) -> int:
        return self.scoring.total_score


class BatchError(BaseModel):
    """Per-company failure record produced by batch research."""
    input: CompanyInput
    error: str
    recommendation: Literal["RESEARCH_FAILED"] = "RESEARCH_FAILED"

    @property
    def total_score(self) -> int:
        return 0
