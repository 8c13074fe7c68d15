"""TSV and CSV output conversion for note2anki.

Converts Flashcard lists to Anki-importable text. The cards_to_* functions
are pure; write_* functions do the file I/O.

TSV format:
  - No header
  - Rows: front<TAB>back[<TAB>tags], tags space-joined
  - Tag column omitted for cards without tags
  - Tabs inside front/back -> single space

CSV format:
  - Header: Front,Back,Tags
  - Rows: front,back,tags with standard CSV quoting
"""

from __future__ import annotations

import csv
import io
import logging
from enum import StrEnum
from pathlib import Path

from note2anki.errors import ExportError
from note2anki.schemas import Flashcard

logger = logging.getLogger(__name__)

CSV_HEADER = ("Front", "Back", "Tags")


class OutputFormat(StrEnum):
    TSV = "tsv"
    CSV = "csv"


# ============================================================
# Internal helpers
# ============================================================


def _escape_tsv_field(text: str) -> str:
    """Replace tabs so the field delimiter stays unambiguous."""
    return text.replace("\t", " ")


def _join_tags(card: Flashcard) -> str:
    return " ".join(card.tags)


def _card_to_tsv_row(card: Flashcard) -> str:
    row = f"{_escape_tsv_field(card.front)}\t{_escape_tsv_field(card.back)}"
    if card.tags:
        row += f"\t{_join_tags(card)}"
    return row


def _write_file(path: Path, content: str) -> None:
    """Create or overwrite *path* with *content* (UTF-8, no newline translation)."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise ExportError(path, e) from e


# ============================================================
# Public API
# ============================================================


def cards_to_tsv(cards: list[Flashcard]) -> str:
    """Convert cards to a tab-separated string, one newline-terminated line each."""
    return "".join(f"{_card_to_tsv_row(card)}\n" for card in cards)


def cards_to_csv(cards: list[Flashcard]) -> str:
    """Convert cards to a CSV string with a Front,Back,Tags header."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for card in cards:
        writer.writerow([card.front, card.back, _join_tags(card)])
    return buffer.getvalue()


def write_tsv(cards: list[Flashcard], path: Path) -> None:
    """Write cards to a TSV file.

    Creates parent directories if they don't exist.

    Raises:
        ExportError: If the file cannot be created or written.
    """
    _write_file(path, cards_to_tsv(cards))


def write_csv(cards: list[Flashcard], path: Path) -> None:
    """Write cards to a CSV file.

    Creates parent directories if they don't exist.

    Raises:
        ExportError: If the file cannot be created or written.
    """
    _write_file(path, cards_to_csv(cards))


def resolve_output_format(path: str | Path) -> OutputFormat:
    """CSV for a .csv suffix (any case), TSV for everything else."""
    if Path(path).suffix.lower() == ".csv":
        return OutputFormat.CSV
    return OutputFormat.TSV


def export_cards(cards: list[Flashcard], path: str | Path) -> OutputFormat:
    """Write cards in the format implied by the output path's suffix.

    Returns:
        The format that was written.
    """
    out = Path(path)
    fmt = resolve_output_format(out)

    if fmt == OutputFormat.CSV:
        write_csv(cards, out)
    else:
        write_tsv(cards, out)

    logger.info("Wrote %d cards to %s (%s)", len(cards), out, fmt.value)
    return fmt
