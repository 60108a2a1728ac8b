"""Resolve a company name to its website: alias table first, then domain guessing."""

from __future__ import annotations

import logging
import re

import httpx

from prospect_research.models import WebsiteProvenance
from prospect_research.scrape.http_scraper import probe_url

logger = logging.getLogger(__name__)

# Substring of the lower-cased company name -> website. First match wins.
KNOWN_WEBSITES: dict[str, str] = {
    "monday.com": "https://monday.com",
    "airtable": "https://airtable.com",
    "notion": "https://notion.so",
    "zapier": "https://zapier.com",
    "bubble": "https://bubble.io",
    "webflow": "https://webflow.com",
    "retool": "https://retool.com",
    "hubspot": "https://hubspot.com",
    "pipedrive": "https://pipedrive.com",
    "salesforce": "https://salesforce.com",
    "zoho crm": "https://zoho.com/crm",
    "zoho": "https://zoho.com/crm",
    "freshworks": "https://freshworks.com",
    "insightly": "https://insightly.com",
    "activecampaign": "https://activecampaign.com",
    "copper": "https://copper.com",
    "sugarcrm": "https://sugarcrm.com",
    "zendesk sell": "https://zendesk.com/sell",
    "asana": "https://asana.com",
    "clickup": "https://clickup.com",
    "shopify": "https://shopify.com",
    "woocommerce": "https://woocommerce.com",
}


def lookup_known_website(company_name: str) -> str | None:
    lower_name = company_name.lower()
    for key, website in KNOWN_WEBSITES.items():
        if key in lower_name:
            return website
    return None


def guess_domain_candidates(company_name: str) -> list[str]:
    """Build the ordered list of URLs to probe for a company.

    e.g. "Acme Labs" -> https://acmelabs.com, https://www.acmelabs.com,
         https://acmelabs.io, https://www.acmelabs.io
    """
    token = re.sub(r"[^a-z0-9]", "", company_name.lower())
    if not token:
        return []
    return [
        f"https://{token}.com",
        f"https://www.{token}.com",
        f"https://{token}.io",
        f"https://www.{token}.io",
    ]


async def find_company_website(
    client: httpx.AsyncClient,
    company_name: str,
    timeout: float = 5.0,
) -> tuple[str | None, WebsiteProvenance]:
    """Return (website, provenance) for a company, or (None, "none").

    Probes run one after another; the first candidate answering with a
    status below 400 wins.
    """
    known = lookup_known_website(company_name)
    if known:
        logger.info("Found known website for %s: %s", company_name, known)
        return known, "alias"

    for candidate in guess_domain_candidates(company_name):
        logger.debug("Probing %s for %s", candidate, company_name)
        if await probe_url(client, candidate, timeout=timeout):
            logger.info("Found website for %s: %s", company_name, candidate)
            return candidate, "domain_guess"

    logger.warning("Could not find website for %s", company_name)
    return None, "none"
