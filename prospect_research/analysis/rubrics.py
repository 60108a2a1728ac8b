"""Fixed lookup tables for classification, contact ranking, and scoring.

Any change to a table that alters scores must bump ``RUBRIC_VERSION`` so
stored results can be traced back to the rubric that produced them.
"""

from __future__ import annotations

RUBRIC_VERSION = "2024.1"

# ---------------------------------------------------------------------------
# Platform classification
# ---------------------------------------------------------------------------

# Declaration order is the tie-break: on equal counts the earlier category wins.
PLATFORM_KEYWORDS: dict[str, list[str]] = {
    "no-code": [
        "no-code", "low-code", "visual", "drag-and-drop",
        "app builder", "website builder",
    ],
    "crm": [
        "crm", "customer relationship", "sales pipeline", "lead management",
        "sales automation", "contact management", "deal tracking",
        "sales funnel", "customer database", "sales tracking",
        "prospect management", "sales process", "customer data",
        "sales performance", "revenue tracking",
    ],
    "project-management": [
        "project management", "task management", "team collaboration",
        "workflow",
    ],
    "ecommerce": [
        "ecommerce", "e-commerce", "online store", "shopping cart",
        "payment processing",
    ],
    "automation": [
        "automation", "workflow", "zapier", "integration", "business process",
    ],
    "analytics": [
        "analytics", "data visualization", "reporting", "business intelligence",
    ],
    "communication": [
        "communication", "messaging", "chat", "video conferencing",
        "collaboration",
    ],
}

# ---------------------------------------------------------------------------
# Fit scoring
# ---------------------------------------------------------------------------

MAX_FIT_SCORE = 120

FACTOR_CAPS: dict[str, int] = {
    "platform_recognition": 20,
    "platform_type": 30,
    "business_indicators": 25,
    "technical_fit": 20,
    "pricing_model": 15,
    "growth_indicators": 10,
}

# First match wins, so order matters.
MAJOR_PLATFORMS: dict[str, int] = {
    "bubble": 20,
    "webflow": 20,
    "airtable": 18,
    "zapier": 18,
    "notion": 15,
    "outsystems": 18,
    "adalo": 15,
    "glide": 12,
    "retool": 18,
    "monday.com": 15,
}

PLATFORM_TYPE_POINTS: dict[str, int] = {
    "no-code": 30,
    "crm": 25,
    "project-management": 20,
    "ecommerce": 20,
    "automation": 25,
    "analytics": 15,
}
DEFAULT_PLATFORM_TYPE_POINTS = 5

BUSINESS_INDICATOR_POINTS: dict[str, int] = {
    "has_customers": 10,
    "has_funding": 15,
    "has_careers": 10,
    "has_case_studies": 5,
}

TECHNICAL_FIT_POINTS: dict[str, int] = {
    "has_api": 15,
    "has_developers": 10,
    "has_enterprise": 5,
}

PRICING_POINTS = {
    "has_pricing": 10,
    "subscription": 5,
    "enterprise_pricing": 10,
}

GROWTH_POINTS_PER_TAG = 3

# Evaluated top-down; ties resolve to the higher tier.
QUALIFICATION_TIERS: list[tuple[int, str]] = [
    (80, "HOT_PROSPECT"),
    (60, "WARM_PROSPECT"),
    (40, "COLD_PROSPECT"),
]
NOT_QUALIFIED = "NOT_QUALIFIED"

# ---------------------------------------------------------------------------
# Contact ranking and quality
# ---------------------------------------------------------------------------

# Whole word checked against the lower-cased title, in this order.
TITLE_PRIORITY_RANK: list[tuple[str, int]] = [
    ("ceo", 1),
    ("chief executive officer", 1),
    ("founder", 2),
    ("cto", 3),
    ("chief technology officer", 3),
    ("cpo", 4),
    ("chief product officer", 4),
    ("vp", 5),
    ("vice president", 5),
    ("director", 6),
    ("head", 7),
    ("manager", 8),
]
UNRANKED_TITLE = 9

# (max rank, points)
TITLE_SENIORITY_POINTS: list[tuple[int, int]] = [
    (2, 40),
    (4, 35),
    (5, 25),
    (6, 15),
]
DEFAULT_TITLE_POINTS = 5

EMAIL_POINTS = {"verified": 25, "unverified": 15, "absent": 0}

SOURCE_POINTS: dict[str, int] = {
    "website_team_page": 20,
    "contact_page": 15,
    "text_extraction": 10,
}
DEFAULT_SOURCE_POINTS = 5

LINKEDIN_POINTS = 10

# (max age in days, points)
RECENCY_POINTS: list[tuple[float, int]] = [
    (1, 5),
    (7, 3),
    (30, 1),
]

OUTREACH_MIN_PERCENTAGE = 60

PERSONAL_EMAIL_PROVIDERS = ["gmail.com", "outlook.com", "hotmail.com", "yahoo.com"]

# Sentinel scores carried by "research needed" placeholders.
PLACEHOLDER_SCORES = {"CEO/Founder": 40, "CTO/VP Engineering": 35}

# Keyword found in an element's text -> canonical title. First match wins.
TITLE_KEYWORDS: list[tuple[str, str]] = [
    ("ceo", "CEO"),
    ("founder", "Founder"),
    ("cto", "CTO"),
    ("cpo", "CPO"),
    ("vp", "VP"),
    ("director", "Director"),
    ("head of", "Head of"),
    ("chief", "Chief"),
    ("president", "President"),
    ("manager", "Manager"),
]

# Abbreviations captured by free-text extraction -> full title.
TITLE_EXPANSIONS: dict[str, str] = {
    "ceo": "Chief Executive Officer",
    "cto": "Chief Technology Officer",
    "cpo": "Chief Product Officer",
    "founder": "Founder",
    "vp": "Vice President",
}
