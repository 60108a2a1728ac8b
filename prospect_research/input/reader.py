"""Read CSV/Excel company lists for batch research."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from prospect_research.models import CompanyInput

# Flexible column name matching
COMPANY_COLUMNS = [
    "company",
    "company name",
    "name",
    "account",
    "organization",
    "firm",
]

WEBSITE_COLUMNS = ["website", "company website", "url", "domain", "site"]


class InputFileError(ValueError):
    """The batch input file cannot be used."""


def read_input_file(file_path: str) -> list[CompanyInput]:
    """Read a CSV or Excel file into a deduplicated list of companies.

    Rows keep their file order; a repeated company (case-insensitive)
    keeps its first row, but picks up a website from a later row if the
    first had none.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {file_path}")

    ext = path.suffix.lower()
    if ext == ".csv":
        df = pd.read_csv(path, dtype=str).fillna("")
    elif ext in (".xlsx", ".xls"):
        df = pd.read_excel(path, dtype=str, engine="openpyxl").fillna("")
    else:
        raise InputFileError(
            f"Unsupported file format: {ext}. Use .csv, .xlsx, or .xls"
        )

    if df.empty:
        raise InputFileError("Input file is empty")

    company_col, website_col = _detect_columns(list(df.columns))

    companies: dict[str, CompanyInput] = {}
    for _, row in df.iterrows():
        name = str(row[company_col]).strip()
        if not name or name.lower() in ("unknown", "nan"):
            continue

        website = str(row[website_col]).strip() if website_col else ""
        website = _normalize_website(website)

        key = name.lower()
        existing = companies.get(key)
        if existing is None:
            companies[key] = CompanyInput(name=name, website=website)
        elif existing.website is None and website:
            companies[key] = CompanyInput(name=existing.name, website=website)

    if not companies:
        raise InputFileError(
            f"No company names found in column '{company_col}'"
        )

    return list(companies.values())


def _detect_columns(columns: list[str]) -> tuple[str, str | None]:
    """Return (company_col, website_col); the website column is optional."""
    normalized = {str(col).strip().lower(): col for col in columns}

    company_col = next(
        (normalized[c] for c in COMPANY_COLUMNS if c in normalized), None,
    )
    if company_col is None:
        raise InputFileError(
            f"Could not find company column. "
            f"Expected one of: {COMPANY_COLUMNS}. "
            f"Found: {columns}"
        )

    website_col = next(
        (normalized[c] for c in WEBSITE_COLUMNS if c in normalized), None,
    )
    return company_col, website_col


def _normalize_website(website: str) -> str | None:
    """e.g. "acme.com" -> "https://acme.com"; blanks become None."""
    if not website or website.lower() == "nan":
        return None
    if not website.startswith(("http://", "https://")):
        website = f"https://{website}"
    return website.rstrip("/")
