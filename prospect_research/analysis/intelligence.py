"""Third-party company intelligence (funding, headcount, news).

No provider is wired in yet; the pipeline still awaits this step so a
real source can slot in without changing the orchestration.
"""

from __future__ import annotations

import logging

from prospect_research.models import CompanyIntelligence

logger = logging.getLogger(__name__)


async def gather_company_intelligence(company_name: str) -> CompanyIntelligence:
    logger.debug("No intelligence provider configured for %s", company_name)
    return CompanyIntelligence()
