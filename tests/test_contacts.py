"""Tests for decision-maker extraction from team and contact pages."""

from __future__ import annotations

import httpx
from bs4 import BeautifulSoup

from prospect_research.contacts import extractor
from prospect_research.contacts.extractor import (
    clean_name,
    extract_contact_from_element,
    extract_contacts_from_text,
    extract_team_members,
    find_contact_info_from_pages,
    find_key_contacts,
    is_plausible_name,
    normalize_title,
    synthesize_email,
)

SITE = "https://acme.com"

TEXT_ONLY_TEAM_PAGE = """
<html><body>
  <h2>Leadership</h2>
  <p>Maria Garcia, CEO</p>
  <p>Tom Lee - Founder</p>
</body></html>
"""

CONTACT_PAGE = """
<html><body>
  <a href="mailto:info@acme.com">info@acme.com</a>
  <a href="mailto:sales@acme.com">Sales</a>
  <p>Partnerships: <a href="mailto:partners@acme.com?subject=Hi"></a></p>
  <a href="mailto:press@acme.com">Press</a>
  <a href="mailto:Press@acme.com">Press again</a>
</body></html>
"""


def _card_page(people: list[tuple[str, str]]) -> str:
    cards = "".join(
        f'<div class="team-member"><h3>{name}</h3><p class="role">{title}</p></div>'
        for name, title in people
    )
    return f"<html><body>{cards}</body></html>"


class TestFindKeyContacts:
    """End-to-end contact discovery against a fake site."""

    async def test_team_page_cards(self, fake_web, team_page_html):
        web = fake_web({f"{SITE}/team": team_page_html})
        async with web.client() as client:
            contacts = await find_key_contacts(client, "Acme", SITE)

        assert [c.name for c in contacts] == ["Jane Doe", "Alice Brown", "John Smith"]

        jane = contacts[0]
        assert jane.title == "CEO & Co-Founder"
        assert jane.email == "jane@acme.com"
        assert jane.email_provenance == "scraped"
        assert jane.verified is True
        assert jane.linkedin == "https://www.linkedin.com/in/janedoe"
        assert jane.priority == "critical"
        assert jane.source == "website_team_page"
        assert jane.quality_score.score == 100
        assert jane.recommended_for_outreach is True
        assert jane.outreach_risk == "low"

    async def test_missing_emails_are_synthesized_and_unverified(self, fake_web, team_page_html):
        web = fake_web({f"{SITE}/team": team_page_html})
        async with web.client() as client:
            contacts = await find_key_contacts(client, "Acme", SITE)

        john = next(c for c in contacts if c.name == "John Smith")
        assert john.email == "john.smith@acme.com"
        assert john.email_provenance == "synthesized"
        assert john.verified is False
        assert john.quality_score.breakdown.email_verification == 15

    async def test_first_team_page_with_people_wins(self, fake_web, team_page_html):
        web = fake_web({
            f"{SITE}/team": "<html><body><p>Nothing here</p></body></html>",
            f"{SITE}/about": team_page_html,
            f"{SITE}/leadership": _card_page([("Other Person", "CEO")]),
        })
        async with web.client() as client:
            contacts = await find_key_contacts(client, "Acme", SITE)

        assert "Other Person" not in [c.name for c in contacts]
        assert f"{SITE}/leadership" not in web.requested

    async def test_text_fallback(self, fake_web):
        web = fake_web({f"{SITE}/team": TEXT_ONLY_TEAM_PAGE})
        async with web.client() as client:
            contacts = await find_key_contacts(client, "Acme", SITE)

        assert [(c.name, c.title) for c in contacts] == [
            ("Maria Garcia", "Chief Executive Officer"),
            ("Tom Lee", "Founder"),
        ]
        assert all(c.source == "text_extraction" for c in contacts)
        assert all(c.email is None for c in contacts)
        assert not any(c.recommended_for_outreach for c in contacts)

    async def test_limited_and_ordered_by_seniority(self, fake_web):
        page = _card_page([
            ("Amy Adams", "Office Manager"),
            ("Ben Brooks", "Engineer"),
            ("Cara Cole", "Director of Marketing"),
            ("Dan Dunn", "CEO"),
            ("Eve Evans", "CTO"),
            ("Fay Ford", "VP Sales"),
            ("Gus Green", "Founder"),
        ])
        web = fake_web({f"{SITE}/team": page})
        async with web.client() as client:
            contacts = await find_key_contacts(client, "Acme", SITE)

        assert [c.title for c in contacts] == [
            "CEO", "Founder", "CTO", "VP Sales", "Director of Marketing",
        ]

    async def test_max_contacts_is_configurable(self, fake_web, team_page_html):
        web = fake_web({f"{SITE}/team": team_page_html})
        async with web.client() as client:
            contacts = await find_key_contacts(client, "Acme", SITE, max_contacts=1)

        assert [c.name for c in contacts] == ["Jane Doe"]

    async def test_nothing_found_returns_research_placeholders(self, fake_web):
        web = fake_web()
        async with web.client() as client:
            contacts = await find_key_contacts(client, "Acme", SITE)

        assert [c.name for c in contacts] == ["CEO/Founder", "CTO/VP Engineering"]
        assert [c.quality_score.score for c in contacts] == [40, 35]
        assert all(c.is_placeholder for c in contacts)
        assert all(c.source == "research_needed" for c in contacts)
        assert not any(c.recommended_for_outreach for c in contacts)

    async def test_no_website_returns_research_placeholders(self, fake_web):
        web = fake_web()
        async with web.client() as client:
            contacts = await find_key_contacts(client, "Acme", None)

        assert len(contacts) == 2
        assert web.requested == []

    async def test_extraction_error_returns_failed_placeholder(
        self, fake_web, team_page_html, monkeypatch,
    ):
        def _boom(*args, **kwargs):
            raise RuntimeError("parser exploded")

        monkeypatch.setattr(extractor, "extract_team_members", _boom)
        web = fake_web({f"{SITE}/team": team_page_html})
        async with web.client() as client:
            contacts = await find_key_contacts(client, "Acme", SITE)

        assert len(contacts) == 1
        assert contacts[0].name == "Contact Research Needed"
        assert contacts[0].source == "research_failed"
        assert contacts[0].is_placeholder is True
        assert contacts[0].recommended_for_outreach is False

    async def test_unreachable_team_page_is_skipped(self, fake_web, team_page_html):
        web = fake_web({
            f"{SITE}/team": httpx.ConnectError("refused"),
            f"{SITE}/about": team_page_html,
        })
        async with web.client() as client:
            contacts = await find_key_contacts(client, "Acme", SITE)

        assert contacts[0].name == "Jane Doe"


class TestContactPages:
    async def test_skips_generic_and_duplicate_addresses(self, fake_web):
        web = fake_web({f"{SITE}/contact": CONTACT_PAGE})
        async with web.client() as client:
            contacts = await find_contact_info_from_pages(client, SITE)

        assert [c.email for c in contacts] == ["partners@acme.com", "press@acme.com"]
        assert contacts[0].note == "Found on contact page: Partnerships:"
        assert all(c.source == "contact_page" for c in contacts)
        assert all(c.verified for c in contacts)

    async def test_only_first_loaded_page_is_used(self, fake_web):
        web = fake_web({
            f"{SITE}/contact-us": "<html><body>Write to us</body></html>",
            f"{SITE}/contacts": CONTACT_PAGE,
        })
        async with web.client() as client:
            contacts = await find_contact_info_from_pages(client, SITE)

        assert contacts == []
        assert f"{SITE}/contacts" not in web.requested


class TestElementParsing:
    def test_name_and_title_from_plain_lines(self):
        soup = BeautifulSoup('<div class="person">Jane Doe<br>Head of Product</div>', "html.parser")
        contact = extract_contact_from_element(soup.div, "website_team_page", SITE)

        assert contact.name == "Jane Doe"
        assert contact.title == "Head of"
        assert contact.email == "jane.doe@acme.com"

    def test_email_found_in_card_text(self):
        soup = BeautifulSoup(
            '<div class="team-member"><h4>Jane Doe</h4><span class="role">CTO</span>'
            "<p>jane.d@acme.com</p></div>",
            "html.parser",
        )
        contact = extract_contact_from_element(soup.div, "website_team_page", SITE)

        assert contact.email == "jane.d@acme.com"
        assert contact.email_provenance == "scraped"
        assert contact.priority == "high"

    def test_card_without_name_is_ignored(self):
        soup = BeautifulSoup('<div class="member"><a href="/contact">Contact</a></div>', "html.parser")
        assert extract_contact_from_element(soup.div, "website_team_page") is None

    def test_bare_name_fragment_dropped_when_titled_card_exists(self):
        soup = BeautifulSoup(
            '<div class="team-member"><div class="member-name"><h3>Jane Doe</h3></div>'
            '<span class="position">CEO</span></div>',
            "html.parser",
        )
        contacts = extract_team_members(soup, SITE)

        assert [(c.name, c.title) for c in contacts] == [("Jane Doe", "CEO")]

    def test_director_is_not_mistaken_for_cto(self):
        contacts = extract_contacts_from_text("jane doe, director of sales")
        assert contacts == []


class TestTextHelpers:
    def test_extract_contacts_from_text_dedupes(self):
        text = "maria garcia, ceo\nmaria garcia, ceo\nmax power is our vp"
        contacts = extract_contacts_from_text(text)

        assert [(c.name, c.title) for c in contacts] == [
            ("Maria Garcia", "Chief Executive Officer"),
            ("Max Power", "Vice President"),
        ]

    def test_clean_name(self):
        assert clean_name("  jane   O'NEIL!") == "Jane O'neil"

    def test_normalize_title(self):
        assert normalize_title("cto") == "Chief Technology Officer"
        assert normalize_title("Head of Sales") == "Head of Sales"

    def test_plausible_names(self):
        assert is_plausible_name("Jane Doe")
        assert not is_plausible_name("About us")
        assert not is_plausible_name("jane@acme.com")
        assert not is_plausible_name("JD")
        assert not is_plausible_name("Team 2024")

    def test_synthesize_email(self):
        assert synthesize_email("Mary-Jane O'Neil", "https://www.acme.com") == "maryjane.oneil@acme.com"
        assert synthesize_email("Cher", "https://acme.com") is None
        assert synthesize_email("Jane Doe", None) is None
