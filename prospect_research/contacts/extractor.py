"""Decision-maker discovery from a company's own website.

Team/about/leadership pages are probed in order and the first page that
yields people wins. Structured cards (CSS class patterns) are preferred;
free-text "Name ... CEO" lines are the fallback. Contact pages add any
non-generic mailto addresses.
"""

from __future__ import annotations

import logging
import re

import httpx
from bs4 import BeautifulSoup, Tag

from prospect_research.analysis.rubrics import (
    PLACEHOLDER_SCORES,
    TITLE_EXPANSIONS,
    TITLE_KEYWORDS,
)
from prospect_research.contacts.quality import (
    contact_priority_label,
    mentions,
    score_and_verify_contacts,
    title_priority_rank,
    website_domain,
)
from prospect_research.models import (
    Contact,
    ContactSource,
    Deliverability,
    EmailProvenance,
    EmailValidation,
    QualityScore,
    utc_now,
)
from prospect_research.scrape.http_scraper import fetch_page

logger = logging.getLogger(__name__)

TEAM_PAGE_PATHS = [
    "/team",
    "/about",
    "/leadership",
    "/about-us",
    "/our-team",
    "/founders",
    "/management",
    "/executive-team",
    "/people",
    "/company/team",
    "/company/leadership",
]

CONTACT_PAGE_PATHS = ["/contact", "/contact-us", "/contacts"]

TEAM_MEMBER_SELECTORS = [
    ".team-member", ".person", ".employee", ".staff-member",
    ".team-card", ".bio", ".profile", ".member", ".founder",
    ".leadership-member", ".executive", ".team-item",
    '[class*="team"]', '[class*="member"]', '[class*="person"]',
    '[class*="founder"]', '[class*="leadership"]',
]

NAME_SELECTORS = [
    "h1", "h2", "h3", "h4", "h5",
    ".name", ".full-name", ".person-name", ".member-name", ".title",
    '[class*="name"]',
]

TITLE_SELECTORS = [
    ".title", ".position", ".role", ".job-title", ".designation", ".job",
    '[class*="title"]', '[class*="role"]', '[class*="position"]',
]

# Lines containing these are navigation, not names
NAME_STOP_WORDS = ["press kit", "careers", "about", "contact", "menu", "navigation"]
NAME_CHARS = re.compile(r"^[a-zA-Z\s\-'.]+$")

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
GENERIC_EMAIL = re.compile(r"^(info|hello|contact|support|sales)@", re.IGNORECASE)

EXECUTIVE_PATTERNS = [
    re.compile(r"(\w+\s+\w+).*?\b(ceo|chief executive officer)\b", re.IGNORECASE),
    re.compile(r"(\w+\s+\w+).*?\b(founder)\b", re.IGNORECASE),
    re.compile(r"(\w+\s+\w+).*?\b(cto|chief technology officer)\b", re.IGNORECASE),
    re.compile(r"(\w+\s+\w+).*?\b(cpo|chief product officer)\b", re.IGNORECASE),
    re.compile(r"(\w+\s+\w+).*?\b(vp|vice president)\b", re.IGNORECASE),
]

DEFAULT_TITLE = "Team Member"


async def find_key_contacts(
    client: httpx.AsyncClient,
    company_name: str,
    website_url: str | None,
    team_page_timeout: float = 8.0,
    contact_page_timeout: float = 5.0,
    max_contacts: int = 5,
) -> list[Contact]:
    """Find, rank, and score the people worth contacting at a company.

    Returns at most ``max_contacts`` contacts ordered by title seniority
    (best quality first within a rank). Seniority is the primary key
    because outreach starts with the decision maker, even when a junior
    contact has a better-verified email. When nothing is found, two
    "research needed" placeholders are returned instead; when extraction
    itself breaks, a single "research failed" placeholder.
    """
    try:
        contacts: list[Contact] = []
        if website_url:
            base_url = website_url.rstrip("/")
            contacts.extend(await _scan_team_pages(
                client, base_url, website_url, team_page_timeout,
            ))
            contacts.extend(await find_contact_info_from_pages(
                client, base_url, timeout=contact_page_timeout,
            ))

        prioritized = prioritize_contacts(contacts, limit=max_contacts)
        scored = score_and_verify_contacts(prioritized, website_url)
        ordered = sorted(scored, key=lambda c: title_priority_rank(c.title))

        if not ordered:
            logger.info("No contacts found for %s, adding research placeholders", company_name)
            return research_needed_placeholders()

        logger.info(
            "Found %d contacts for %s (%d ready for outreach)",
            len(ordered),
            company_name,
            sum(1 for c in ordered if c.recommended_for_outreach),
        )
        return ordered

    except Exception as e:
        logger.warning("Contact search failed for %s: %s", company_name, e)
        return [research_failed_placeholder()]


async def _scan_team_pages(
    client: httpx.AsyncClient,
    base_url: str,
    website_url: str,
    timeout: float,
) -> list[Contact]:
    """Probe team page paths in order, stopping at the first with people."""
    for path in TEAM_PAGE_PATHS:
        team_url = f"{base_url}{path}"
        page, error = await fetch_page(client, team_url, timeout=timeout)
        if page is None:
            logger.debug("Team page %s unavailable: %s", team_url, error)
            continue

        soup = BeautifulSoup(page.html, "html.parser")
        found = extract_team_members(soup, website_url)
        if not found:
            body = soup.body if soup.body is not None else soup
            found = extract_contacts_from_text(body.get_text("\n").lower())

        if found:
            logger.debug("Found %d contacts on %s", len(found), team_url)
            return found

    return []


def extract_team_members(soup: BeautifulSoup, website_url: str | None = None) -> list[Contact]:
    """Run the member-card selectors and collect unique (name, title) pairs."""
    contacts: list[Contact] = []
    seen: set[tuple[str, str]] = set()

    for selector in TEAM_MEMBER_SELECTORS:
        for element in soup.select(selector):
            contact = extract_contact_from_element(element, "website_team_page", website_url)
            if contact is None:
                continue
            key = (contact.name.lower(), contact.title.lower())
            if key in seen:
                continue
            seen.add(key)
            contacts.append(contact)

    # Inner fragments of a card (e.g. a bare name heading) come back as
    # "Team Member"; drop them when the same person was found with a title.
    titled = {c.name.lower() for c in contacts if c.title != DEFAULT_TITLE}
    return [
        c for c in contacts
        if c.title != DEFAULT_TITLE or c.name.lower() not in titled
    ]


def extract_contact_from_element(
    element: Tag, source: ContactSource, website_url: str | None = None,
) -> Contact | None:
    """Build a contact from one member card, or None if no name is found."""
    name = _extract_name(element)
    if not name or len(name) <= 2:
        return None

    title = _first_text(element, TITLE_SELECTORS, min_length=3)
    if not title:
        title = infer_title(element.get_text(" ").lower())

    email, provenance = _extract_email(element, name, website_url)

    linkedin_link = element.select_one('a[href*="linkedin.com"]')
    linkedin = linkedin_link.get("href") if linkedin_link is not None else None

    return Contact(
        name=clean_name(name),
        title=title or DEFAULT_TITLE,
        email=email,
        linkedin=linkedin or None,
        source=source,
        priority=contact_priority_label(title),
        verified=provenance == "scraped",
        email_provenance=provenance,
        extracted_at=utc_now(),
    )


def _first_text(element: Tag, selectors: list[str], min_length: int, max_length: int | None = None) -> str:
    for selector in selectors:
        found = element.select_one(selector)
        if found is None:
            continue
        text = found.get_text().strip()
        if len(text) >= min_length and (max_length is None or len(text) < max_length):
            return text
    return ""


def _extract_name(element: Tag) -> str:
    name = _first_text(element, NAME_SELECTORS, min_length=3, max_length=50)
    if name:
        return name

    # No name-like child: take the first plausible line of the card itself
    lines = [line.strip() for line in element.get_text("\n").split("\n")]
    for line in lines:
        if is_plausible_name(line):
            return line
    return ""


def is_plausible_name(line: str) -> bool:
    lower_line = line.lower()
    if any(word in lower_line for word in NAME_STOP_WORDS):
        return False
    if not 2 < len(line) < 50 or "@" in line:
        return False
    return bool(NAME_CHARS.match(line))


def infer_title(text: str) -> str:
    """Map the first seniority keyword in lower-cased text to a title."""
    for keyword, title in TITLE_KEYWORDS:
        if mentions(text, keyword):
            return title
    return ""


def _extract_email(
    element: Tag, name: str, website_url: str | None,
) -> tuple[str | None, EmailProvenance]:
    mailto = element.select_one('a[href^="mailto:"]')
    if mailto is not None:
        email = _mailto_address(mailto.get("href", ""))
        if email:
            return email, "scraped"

    match = EMAIL_PATTERN.search(element.get_text(" "))
    if match:
        return match.group(0), "scraped"

    guessed = synthesize_email(name, website_url)
    if guessed:
        return guessed, "synthesized"
    return None, "none"


def _mailto_address(href: str) -> str:
    return href.replace("mailto:", "", 1).split("?")[0].strip()


def synthesize_email(name: str, website_url: str | None) -> str | None:
    """Guess firstname.lastname@domain. Speculative, never verified."""
    domain = website_domain(website_url)
    if not domain:
        return None
    parts = [
        part for part in re.sub(r"[^a-z\s]", "", name.lower()).split()
        if len(part) > 1
    ]
    if len(parts) < 2:
        return None
    return f"{parts[0]}.{parts[-1]}@{domain}"


def extract_contacts_from_text(text: str) -> list[Contact]:
    """Fallback: find "first last ... ceo" style mentions line by line."""
    contacts: list[Contact] = []
    seen: set[tuple[str, str]] = set()

    for line in (line.strip() for line in text.split("\n")):
        if not line:
            continue
        for pattern in EXECUTIVE_PATTERNS:
            match = pattern.search(line)
            if not match:
                continue
            name = match.group(1).strip()
            raw_title = match.group(2).strip()
            if not 3 < len(name) < 30:
                continue

            contact = Contact(
                name=clean_name(name),
                title=normalize_title(raw_title),
                source="text_extraction",
                priority=contact_priority_label(raw_title),
                verified=False,
                extracted_at=utc_now(),
            )
            key = (contact.name.lower(), contact.title.lower())
            if key not in seen:
                seen.add(key)
                contacts.append(contact)

    return contacts


async def find_contact_info_from_pages(
    client: httpx.AsyncClient, base_url: str, timeout: float = 5.0,
) -> list[Contact]:
    """Collect non-generic mailto addresses from the first contact page that loads."""
    contacts: list[Contact] = []

    for path in CONTACT_PAGE_PATHS:
        contact_url = f"{base_url.rstrip('/')}{path}"
        page, error = await fetch_page(client, contact_url, timeout=timeout)
        if page is None:
            logger.debug("Contact page %s unavailable: %s", contact_url, error)
            continue

        soup = BeautifulSoup(page.html, "html.parser")
        seen: set[str] = set()
        for link in soup.select('a[href^="mailto:"]'):
            email = _mailto_address(link.get("href", ""))
            if not email or GENERIC_EMAIL.match(email) or email.lower() in seen:
                continue
            seen.add(email.lower())
            context = link.get_text().strip()
            if not context and link.parent is not None:
                context = link.parent.get_text().strip()
            contacts.append(Contact(
                name="Contact from website",
                title=DEFAULT_TITLE,
                email=email,
                source="contact_page",
                priority="medium",
                verified=True,
                email_provenance="scraped",
                note=f"Found on contact page: {context}",
                extracted_at=utc_now(),
            ))
        break

    return contacts


def prioritize_contacts(contacts: list[Contact], limit: int = 5) -> list[Contact]:
    """Order by title seniority (CEO first) and keep the top ``limit``."""
    return sorted(contacts, key=lambda c: title_priority_rank(c.title))[:limit]


def clean_name(name: str) -> str:
    """e.g. "  jane   O'NEIL!" -> "Jane O'neil"."""
    cleaned = re.sub(r"[^\w\s\-'.]", " ", name)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    return " ".join(word[:1].upper() + word[1:].lower() for word in cleaned.split(" "))


def normalize_title(title: str) -> str:
    return TITLE_EXPANSIONS.get(title.lower(), title)


def research_needed_placeholders() -> list[Contact]:
    """The two sentinel contacts used when no real person could be found."""
    no_email = EmailValidation(
        is_valid=False,
        deliverability=Deliverability(risk="high", reason="No email found"),
    )
    return [
        Contact(
            name="CEO/Founder",
            title="Chief Executive Officer",
            source="research_needed",
            priority="critical",
            note="Research CEO contact via LinkedIn or company directory",
            quality_score=_placeholder_score("CEO/Founder"),
            email_validation=no_email,
            recommended_for_outreach=False,
            outreach_risk="high",
            is_placeholder=True,
        ),
        Contact(
            name="CTO/VP Engineering",
            title="Chief Technology Officer",
            source="research_needed",
            priority="high",
            note="Research technical decision maker contact",
            quality_score=_placeholder_score("CTO/VP Engineering"),
            email_validation=no_email,
            recommended_for_outreach=False,
            outreach_risk="high",
            is_placeholder=True,
        ),
    ]


def _placeholder_score(name: str) -> QualityScore:
    score = PLACEHOLDER_SCORES[name]
    return QualityScore(score=score, percentage=score, breakdown=None)


def research_failed_placeholder() -> Contact:
    return Contact(
        name="Contact Research Needed",
        title="Decision Maker",
        source="research_failed",
        priority="high",
        note="Manual research required due to technical error",
        email_validation=EmailValidation(
            is_valid=False,
            deliverability=Deliverability(risk="high", reason="No email found"),
        ),
        recommended_for_outreach=False,
        outreach_risk="high",
        is_placeholder=True,
    )
