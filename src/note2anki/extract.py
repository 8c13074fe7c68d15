"""Text extraction from PDF, DOCX, and Markdown files.

Each supported suffix maps to an extractor that reduces the document to
one plain-text string:

  - PDF: per-page text via pymupdf (unreadable pages are skipped)
  - DOCX: paragraph and table text via python-docx
  - Markdown: rendered to HTML, then markup stripped

The extractor is chosen by suffix before the file is opened.
"""

from __future__ import annotations

import logging
import zipfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import docx
import markdown
import pymupdf
from docx.opc.exceptions import PackageNotFoundError
from lxml.etree import XMLSyntaxError

from note2anki.errors import EmptyContentError, ParseError, UnsupportedFormatError

logger = logging.getLogger(__name__)

Extractor = Callable[[Path], str]


@dataclass(frozen=True, slots=True)
class ExtractedDocument:
    """Result of text extraction from a single file."""

    source_path: str
    text: str
    file_type: str


def strip_markup(html: str) -> str:
    """Remove everything between '<' and '>' in a single pass.

    Keeps character order and whitespace as-is. Entities are not decoded.
    """
    result: list[str] = []
    in_tag = False

    for char in html:
        if char == "<":
            in_tag = True
        elif char == ">":
            in_tag = False
        elif not in_tag:
            result.append(char)

    return "".join(result)


def _extract_pdf(path: Path) -> str:
    """Concatenate the text of every page that has any."""
    parts: list[str] = []

    with pymupdf.open(path) as doc:
        for index, page in enumerate(doc):
            try:
                text = page.get_text()
            except Exception as e:  # noqa: BLE001
                logger.warning("Skipping page %d of %s: %s", index + 1, path.name, e)
                continue
            if not text.strip():
                continue
            parts.append(text)
            parts.append("\n")

    return "".join(parts)


def _extract_docx(path: Path) -> str:
    """Read body paragraphs, then table rows (cells joined by tabs)."""
    document = docx.Document(str(path))

    lines = [paragraph.text for paragraph in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            lines.append("\t".join(cell.text for cell in row.cells))

    return "\n".join(lines)


def _extract_markdown(path: Path) -> str:
    """Render Markdown to HTML and strip the tags."""
    source = path.read_text(encoding="utf-8")
    return strip_markup(markdown.markdown(source))


_EXTRACTORS: dict[str, Extractor] = {
    ".pdf": _extract_pdf,
    ".docx": _extract_docx,
    ".md": _extract_markdown,
    ".markdown": _extract_markdown,
}

SUPPORTED_EXTENSIONS = frozenset(_EXTRACTORS)

# Library and OS failures that mean "this file could not be read"
_PARSE_FAILURES = (
    OSError,
    ValueError,
    KeyError,
    RuntimeError,
    zipfile.BadZipFile,
    PackageNotFoundError,
    XMLSyntaxError,
)


def select_extractor(path: str | Path) -> Extractor:
    """Pick the extractor for *path* by its suffix (case-insensitive).

    Raises:
        UnsupportedFormatError: If the suffix has no extractor.
    """
    suffix = Path(path).suffix.lower()
    try:
        return _EXTRACTORS[suffix]
    except KeyError:
        raise UnsupportedFormatError(suffix) from None


def extract_text(file_path: str | Path) -> ExtractedDocument:
    """Extract plain text from a PDF, DOCX, or Markdown file.

    Args:
        file_path: Path to the input file.

    Returns:
        ExtractedDocument with the full document text.

    Raises:
        UnsupportedFormatError: If the suffix is not supported (no I/O done).
        ParseError: If the file cannot be opened or read.
        EmptyContentError: If the extracted text is blank.
    """
    path = Path(file_path)
    extractor = select_extractor(path)
    suffix = path.suffix.lower()
    file_type = "md" if suffix == ".markdown" else suffix.lstrip(".")

    try:
        text = extractor(path)
    except _PARSE_FAILURES as e:
        raise ParseError(path, e) from e

    if not text.strip():
        raise EmptyContentError(path)

    logger.info("Extracted %d characters from %s", len(text), path.name)

    return ExtractedDocument(
        source_path=str(file_path),
        text=text,
        file_type=file_type,
    )
