"""
Unit Tests for User Export Rendering

Tests CSV layout and that the PDF renderer produces a readable document
containing every user.
"""

import csv
import io

import fitz  # PyMuPDF
import pytest

from scholar_graph.services.export import render_users_csv, render_users_pdf


@pytest.fixture
def user_rows() -> list[dict]:
    return [
        {"name": "Ana", "role": "estudiante", "university": "UNAM", "reputation": 12},
        {"name": "Luis", "role": "docente", "university": None, "reputation": 40.5},
    ]


class TestCsvExport:
    def test_header_row(self, user_rows: list[dict]) -> None:
        text = render_users_csv(user_rows)

        assert text.splitlines()[0] == "Name,Role,University,Reputation"

    def test_rows_in_order(self, user_rows: list[dict]) -> None:
        rows = list(csv.DictReader(io.StringIO(render_users_csv(user_rows))))

        assert [row["Name"] for row in rows] == ["Ana", "Luis"]
        assert rows[0]["Reputation"] == "12"

    def test_null_becomes_empty_cell(self, user_rows: list[dict]) -> None:
        rows = list(csv.DictReader(io.StringIO(render_users_csv(user_rows))))

        assert rows[1]["University"] == ""

    def test_commas_are_quoted(self) -> None:
        text = render_users_csv(
            [{"name": "Pérez, Ana", "role": "x", "university": "y", "reputation": 1}]
        )

        rows = list(csv.DictReader(io.StringIO(text)))
        assert rows[0]["Name"] == "Pérez, Ana"

    def test_no_users_only_header(self) -> None:
        assert render_users_csv([]).strip() == "Name,Role,University,Reputation"


class TestPdfExport:
    def test_produces_pdf(self, user_rows: list[dict]) -> None:
        data = render_users_pdf(user_rows)

        assert data.startswith(b"%PDF")

    def test_contains_title_and_users(self, user_rows: list[dict]) -> None:
        with fitz.open(stream=render_users_pdf(user_rows), filetype="pdf") as doc:
            text = "".join(page.get_text() for page in doc)

        assert "User Report" in text
        assert "Name: Ana" in text
        assert "Name: Luis" in text

    def test_long_lists_span_pages(self) -> None:
        rows = [
            {"name": f"User {i}", "role": "r", "university": "u", "reputation": i}
            for i in range(120)
        ]

        with fitz.open(stream=render_users_pdf(rows), filetype="pdf") as doc:
            assert doc.page_count > 1
