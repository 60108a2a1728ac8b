"""Contact quality scoring, email validation, and deliverability estimation.

Deterministic: every point value comes from ``analysis.rubrics``.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

from prospect_research.analysis.rubrics import (
    DEFAULT_SOURCE_POINTS,
    DEFAULT_TITLE_POINTS,
    EMAIL_POINTS,
    LINKEDIN_POINTS,
    OUTREACH_MIN_PERCENTAGE,
    PERSONAL_EMAIL_PROVIDERS,
    RECENCY_POINTS,
    SOURCE_POINTS,
    TITLE_PRIORITY_RANK,
    TITLE_SENIORITY_POINTS,
    UNRANKED_TITLE,
)
from prospect_research.models import (
    Contact,
    ContactPriority,
    Deliverability,
    EmailValidation,
    QualityBreakdown,
    QualityScore,
    utc_now,
)

EMAIL_FORMAT = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def mentions(text: str, keyword: str) -> bool:
    """Whole-word keyword match, so "director" does not mention "cto"."""
    return re.search(rf"\b{re.escape(keyword)}\b", text) is not None


def title_priority_rank(title: str | None) -> int:
    """Seniority rank for ordering contacts: 1 (CEO) .. 9 (other/unknown)."""
    if not title:
        return UNRANKED_TITLE
    title_lower = title.lower()
    for keyword, rank in TITLE_PRIORITY_RANK:
        if mentions(title_lower, keyword):
            return rank
    return UNRANKED_TITLE


def contact_priority_label(title: str | None) -> ContactPriority:
    if not title:
        return "low"
    title_lower = title.lower()
    if any(mentions(title_lower, k) for k in ("ceo", "chief executive", "founder")):
        return "critical"
    if any(mentions(title_lower, k) for k in (
        "cto", "cpo", "chief technology", "chief product", "vp", "vice president",
    )):
        return "high"
    return "medium"


def website_domain(website: str | None) -> str | None:
    """e.g. "https://www.acme.com/about" -> "acme.com"."""
    if not website:
        return None
    domain = re.sub(r"^https?://(www\.)?", "", website.strip(), flags=re.IGNORECASE)
    domain = domain.split("/")[0].lower()
    return domain or None


def calculate_contact_quality_score(
    contact: Contact, now: datetime | None = None,
) -> QualityScore:
    """Score a contact 0-100 for outreach usefulness."""
    rank = title_priority_rank(contact.title)
    title_points = DEFAULT_TITLE_POINTS
    for max_rank, points in TITLE_SENIORITY_POINTS:
        if rank <= max_rank:
            title_points = points
            break

    if contact.email and contact.verified:
        email_points = EMAIL_POINTS["verified"]
    elif contact.email:
        email_points = EMAIL_POINTS["unverified"]
    else:
        email_points = EMAIL_POINTS["absent"]

    source_points = SOURCE_POINTS.get(contact.source, DEFAULT_SOURCE_POINTS)
    linkedin_points = LINKEDIN_POINTS if contact.linkedin else 0
    recency_points = _recency_points(contact.extracted_at, now or utc_now())

    breakdown = QualityBreakdown(
        title_priority=title_points,
        email_verification=email_points,
        source_quality=source_points,
        linkedin_profile=linkedin_points,
        recency=recency_points,
    )
    score = min(
        title_points + email_points + source_points + linkedin_points + recency_points,
        100,
    )
    return QualityScore(
        score=score,
        max_score=100,
        percentage=round(score / 100 * 100),
        breakdown=breakdown,
    )


def _recency_points(extracted_at: datetime | None, now: datetime) -> int:
    if extracted_at is None:
        return 0
    # Naive timestamps are taken as UTC
    if extracted_at.tzinfo is None:
        extracted_at = extracted_at.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    days = (now - extracted_at).total_seconds() / 86400
    for max_days, points in RECENCY_POINTS:
        if days <= max_days:
            return points
    return 0


def validate_email_format(email: str | None) -> bool:
    if not email:
        return False
    return bool(EMAIL_FORMAT.match(email))


def estimate_email_deliverability(
    email: str | None, company_website: str | None,
) -> Deliverability:
    if not email or not validate_email_format(email):
        return Deliverability(risk="high", reason="Invalid email format")

    email_domain = email.split("@")[1].lower()

    if email_domain == website_domain(company_website):
        return Deliverability(risk="low", reason="Email domain matches company website")

    if email_domain in PERSONAL_EMAIL_PROVIDERS:
        return Deliverability(risk="medium", reason="Personal email provider")

    return Deliverability(risk="low", reason="Custom business domain")


def score_and_verify_contacts(
    contacts: list[Contact],
    company_website: str | None,
    now: datetime | None = None,
) -> list[Contact]:
    """Attach quality, validation, and outreach flags; sort best first.

    Placeholders keep their sentinel scores untouched.
    """
    scored = []
    for contact in contacts:
        if contact.is_placeholder:
            scored.append(contact)
            continue

        quality = calculate_contact_quality_score(contact, now=now)
        is_valid = validate_email_format(contact.email)
        deliverability = estimate_email_deliverability(contact.email, company_website)

        scored.append(contact.model_copy(update={
            "quality_score": quality,
            "email_validation": EmailValidation(
                is_valid=is_valid, deliverability=deliverability,
            ),
            "recommended_for_outreach": (
                quality.percentage >= OUTREACH_MIN_PERCENTAGE and is_valid
            ),
            "outreach_risk": deliverability.risk,
        }))

    return sorted(
        scored,
        key=lambda c: c.quality_score.score if c.quality_score else 0,
        reverse=True,
    )
