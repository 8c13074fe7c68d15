"""Service layer for note2anki business logic.

Separates orchestration from CLI concerns: nothing here prints. The CLI
(or a test) gets a PipelineResult back and decides how to show it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import anthropic

from note2anki.config import AppConfig
from note2anki.convert import OutputFormat, export_cards
from note2anki.extract import extract_text
from note2anki.generate import generate_flashcards
from note2anki.schemas import Flashcard

logger = logging.getLogger(__name__)

PREVIEW_LIMIT = 5


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Outcome of one pipeline run."""

    subject: str
    file_type: str
    cards: tuple[Flashcard, ...]
    char_count: int
    preview: tuple[Flashcard, ...] = ()
    output_path: Path | None = None
    output_format: OutputFormat | None = None

    @property
    def card_count(self) -> int:
        return len(self.cards)

    @property
    def dry_run(self) -> bool:
        return self.output_path is None


def derive_subject(input_path: str | Path) -> str:
    """Return the input file name without its extension."""
    return Path(input_path).stem


def tag_with_subject(cards: list[Flashcard], subject: str) -> list[Flashcard]:
    """Append *subject* to every card's tags, after any model-provided tags."""
    return [card.with_tag(subject) for card in cards]


def run_pipeline(
    input_path: str | Path,
    output_path: str | Path,
    *,
    config: AppConfig,
    dry_run: bool = False,
    client: anthropic.Anthropic | None = None,
) -> PipelineResult:
    """Extract -> generate -> preview or export.

    Args:
        input_path: Source document (.pdf, .docx, .md, .markdown).
        output_path: Destination file; .csv selects CSV, anything else TSV.
        config: Application configuration.
        dry_run: Keep only a preview of the first cards; write nothing.
        client: Anthropic client to use instead of one built from config.

    Returns:
        PipelineResult describing the generated cards and the written file.

    Raises:
        UnsupportedFormatError: Input suffix is unknown (checked first).
        ParseError, EmptyContentError: Extraction failed.
        GenerationError: The completion call or its reply failed.
        ExportError: The output file could not be written.
    """
    doc = extract_text(input_path)
    subject = derive_subject(doc.source_path)

    logger.info("Generating flashcards for %s (subject %r)", doc.source_path, subject)
    cards = generate_flashcards(doc.text, subject, config=config, client=client)
    cards = tag_with_subject(cards, subject)
    logger.info("Generated %d flashcards", len(cards))

    if dry_run:
        return PipelineResult(
            subject=subject,
            file_type=doc.file_type,
            cards=tuple(cards),
            char_count=len(doc.text),
            preview=tuple(cards[:PREVIEW_LIMIT]),
        )

    destination = Path(output_path)
    fmt = export_cards(cards, destination)

    return PipelineResult(
        subject=subject,
        file_type=doc.file_type,
        cards=tuple(cards),
        char_count=len(doc.text),
        output_path=destination,
        output_format=fmt,
    )
