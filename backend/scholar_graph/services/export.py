"""
User Export Rendering

Renders the rows of the user export query as CSV text or as a simple PDF
report built with PyMuPDF (fitz).

Functions:
    - render_users_csv: CSV with a header row
    - render_users_pdf: Paginated PDF listing one user per line

Usage:
    rows = await analytics.export_users()
    csv_text = render_users_csv(rows)
    pdf_bytes = render_users_pdf(rows)
"""

from __future__ import annotations

import csv
import io
from typing import Any, Iterable, Mapping

import fitz  # PyMuPDF

# Column key -> display name (CSV header, PDF labels), in output order
USER_EXPORT_FIELDS: dict[str, str] = {
    "name": "Name",
    "role": "Role",
    "university": "University",
    "reputation": "Reputation",
}

PDF_TITLE = "User Report"
PDF_FONT = "helv"
PDF_TITLE_SIZE = 18
PDF_BODY_SIZE = 11
PDF_MARGIN = 50
PDF_LINE_HEIGHT = 18


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def render_users_csv(rows: Iterable[Mapping[str, Any]]) -> str:
    """
    Render export rows as CSV.

    The header row holds the display names (Name, Role, University,
    Reputation). Missing or null fields become empty cells; extra keys
    are ignored.
    """
    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer, fieldnames=list(USER_EXPORT_FIELDS), extrasaction="ignore"
    )
    writer.writerow(USER_EXPORT_FIELDS)
    for row in rows:
        writer.writerow({key: _cell(row.get(key)) for key in USER_EXPORT_FIELDS})
    return buffer.getvalue()


def _format_user_line(row: Mapping[str, Any]) -> str:
    return ", ".join(
        f"{label}: {_cell(row.get(key))}" for key, label in USER_EXPORT_FIELDS.items()
    )


def render_users_pdf(rows: Iterable[Mapping[str, Any]]) -> bytes:
    """
    Render export rows as a PDF document.

    The first page carries a centered title; lines continue on new pages
    once the bottom margin is reached.

    Returns:
        The PDF file contents
    """
    doc = fitz.open()
    try:
        page = doc.new_page()
        width = page.rect.width
        bottom = page.rect.height - PDF_MARGIN

        title_width = fitz.get_text_length(
            PDF_TITLE, fontname=PDF_FONT, fontsize=PDF_TITLE_SIZE
        )
        y = PDF_MARGIN + PDF_TITLE_SIZE
        page.insert_text(
            ((width - title_width) / 2, y),
            PDF_TITLE,
            fontname=PDF_FONT,
            fontsize=PDF_TITLE_SIZE,
        )
        y += PDF_LINE_HEIGHT * 2

        for row in rows:
            if y > bottom:
                page = doc.new_page()
                y = PDF_MARGIN + PDF_BODY_SIZE
            page.insert_text(
                (PDF_MARGIN, y),
                _format_user_line(row),
                fontname=PDF_FONT,
                fontsize=PDF_BODY_SIZE,
            )
            y += PDF_LINE_HEIGHT

        return doc.tobytes()
    finally:
        doc.close()
