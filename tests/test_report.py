"""Tests for the JSON report and the terminal summary table."""

from __future__ import annotations

import io
import json

from rich.console import Console

from prospect_research.contacts.extractor import research_needed_placeholders
from prospect_research.models import BatchError, CompanyInput, Contact
from prospect_research.output.report import render_summary_table, write_json_report


class TestJsonReport:
    def test_contact_fields_use_camel_case(self, tmp_path, make_result):
        result = make_result("Acme", 85, "https://acme.com").model_copy(
            update={"contacts": research_needed_placeholders()},
        )
        path = write_json_report([result], str(tmp_path / "reports" / "acme.json"))

        data = json.loads(path.read_text(encoding="utf-8"))
        contact = data[0]["contacts"][0]
        assert data[0]["recommendation"] == "HOT_PROSPECT"
        assert data[0]["scoring"]["total_score"] == 85
        assert contact["qualityScore"] == {
            "score": 40, "maxScore": 100, "percentage": 40, "breakdown": None,
        }
        assert contact["recommendedForOutreach"] is False
        assert contact["isPlaceholder"] is True
        assert contact["emailValidation"]["isValid"] is False

    def test_batch_errors_are_serialized(self, tmp_path):
        error = BatchError(input=CompanyInput(name="Broken"), error="timeout")
        path = write_json_report([error], str(tmp_path / "batch.json"))

        assert json.loads(path.read_text(encoding="utf-8")) == [{
            "input": {"name": "Broken", "website": None},
            "error": "timeout",
            "recommendation": "RESEARCH_FAILED",
        }]


class TestSummaryTable:
    def test_one_row_per_result(self, make_result):
        results = [
            make_result("Acme [beta]", 90),
            BatchError(input=CompanyInput(name="Broken"), error="boom"),
        ]
        table = render_summary_table(results)

        assert table.row_count == 2
        assert len(table.columns) == 8

    def test_ready_count_flags_guessed_emails(self, make_result):
        scraped = Contact(
            name="Jane Doe", email="jane@acme.com", email_provenance="scraped",
            recommended_for_outreach=True,
        )
        guessed = Contact(
            name="John Smith", email="john.smith@acme.com", email_provenance="synthesized",
            recommended_for_outreach=True,
        )
        result = make_result("Acme", 90).model_copy(update={"contacts": [scraped, guessed]})

        console = Console(file=io.StringIO(), width=200)
        console.print(render_summary_table([result]))

        assert "2 (1 guessed)" in console.file.getvalue()
