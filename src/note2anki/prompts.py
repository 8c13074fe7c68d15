"""Prompt templates for note2anki card generation.

Contains SYSTEM_PROMPT (the default instruction) and build_user_prompt()
for constructing the per-document user message.
"""

from __future__ import annotations

SYSTEM_PROMPT = """\
You are an expert educator creating Anki flashcards.

Follow these principles:
1. Create atomic cards (one concept per card)
2. Make questions clear and unambiguous
3. Keep answers concise but complete
4. Focus on key concepts, definitions, formulas, and relationships
5. Use active recall principles

CRITICAL: Respond ONLY with a valid JSON array. Do not include any \
explanatory text, introductions, or conclusions.
Output format: JSON array of objects with "front" (question) and \
"back" (answer) fields.
Generate comprehensive flashcards covering all important information.
"""


def resolve_system_prompt(override: str | None) -> str:
    """Return *override* when it has content, else SYSTEM_PROMPT."""
    if override is not None and override.strip():
        return override
    return SYSTEM_PROMPT


def build_user_prompt(text: str, subject: str) -> str:
    """Build the user message for one document.

    Args:
        text: Full extracted document text, embedded unchanged.
        subject: Subject label (the input file name without extension).

    Returns:
        Formatted user prompt string.

    Raises:
        ValueError: If text is empty or whitespace-only.
    """
    if not text.strip():
        raise ValueError("text must not be empty or whitespace-only")

    return (
        f"Convert the following {subject} notes into Anki flashcards:\n\n"
        f"{text}\n\n"
        "Create flashcards that cover all key concepts, ensuring each card "
        "tests a single piece of knowledge.\n"
        "Output as a JSON array."
    )
