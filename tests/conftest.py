"""Shared test fixtures for note2anki tests."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import docx
import pymupdf
import pytest

from note2anki.config import AppConfig
from note2anki.schemas import Flashcard

TWO_CARDS = [
    {"front": "What is mitosis?", "back": "Cell division producing two identical cells."},
    {"front": "Where does photosynthesis occur?", "back": "In the chloroplasts."},
]


@pytest.fixture
def two_card_reply() -> MagicMock:
    """Mock Messages API response whose text is a two-card JSON array in a fence."""
    mock_response = MagicMock()
    mock_content_block = MagicMock()
    mock_content_block.type = "text"
    mock_content_block.text = f"Here are your cards:\n```json\n{json.dumps(TWO_CARDS)}\n```"
    mock_response.content = [mock_content_block]
    mock_response.model = "claude-3-5-haiku-20241022"
    mock_response.stop_reason = "end_turn"
    mock_response.usage.input_tokens = 500
    mock_response.usage.output_tokens = 300
    return mock_response


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(api_key="sk-ant-test")


@pytest.fixture
def sample_cards() -> list[Flashcard]:
    return [
        Flashcard(front="What is ATP?", back="The cell's energy currency.", tags=["energy"]),
        Flashcard(front="What is DNA?", back="Deoxyribonucleic acid."),
    ]


@pytest.fixture
def sample_md(tmp_path: Path) -> Path:
    """A small Markdown file named after its subject."""
    md_path = tmp_path / "biology.md"
    md_path.write_text(
        "# Cells\n\nThe **mitochondria** is the powerhouse of the cell.\n\n"
        "- ATP stores energy\n- DNA stores information\n",
        encoding="utf-8",
    )
    return md_path


@pytest.fixture
def sample_pdf(tmp_path: Path) -> Path:
    """A three-page PDF whose middle page is blank."""
    pdf_path = tmp_path / "chemistry.pdf"
    doc = pymupdf.Document()
    page = doc.new_page()
    page.insert_text((72, 72), "Atoms are made of protons and neutrons.", fontsize=12)
    doc.new_page()
    page = doc.new_page()
    page.insert_text((72, 72), "Electrons orbit the nucleus.", fontsize=12)
    doc.save(str(pdf_path))
    doc.close()
    return pdf_path


@pytest.fixture
def sample_docx(tmp_path: Path) -> Path:
    """A DOCX file with two paragraphs and a 2x2 table."""
    docx_path = tmp_path / "history.docx"
    document = docx.Document()
    document.add_paragraph("The Roman Empire fell in 476 AD.")
    document.add_paragraph("Charlemagne was crowned in 800 AD.")
    table = document.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Event"
    table.cell(0, 1).text = "Year"
    table.cell(1, 0).text = "Magna Carta"
    table.cell(1, 1).text = "1215"
    document.save(str(docx_path))
    return docx_path
