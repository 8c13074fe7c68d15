"""LLM-based flashcard generation for note2anki.

Sends the whole document to Claude in a single Messages API call and
parses the JSON array in the reply into Flashcards. There is no retry:
a timeout, transport error, or unreadable reply fails the run.
"""

from __future__ import annotations

import logging

import anthropic
from anthropic.types import MessageParam
from pydantic import TypeAdapter, ValidationError

from note2anki.config import AppConfig
from note2anki.errors import GenerationError, ResponseFormatError
from note2anki.prompts import build_user_prompt, resolve_system_prompt
from note2anki.response import extract_json_array
from note2anki.schemas import Flashcard

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 60.0

_CARD_LIST = TypeAdapter(list[Flashcard])


def create_client(config: AppConfig) -> anthropic.Anthropic:
    """Build an Anthropic client with a fixed timeout and SDK retries off."""
    return anthropic.Anthropic(
        api_key=config.api_key,
        timeout=REQUEST_TIMEOUT_SECONDS,
        max_retries=0,
    )


def parse_flashcards_response(response_text: str) -> list[Flashcard]:
    """Parse a raw model reply into Flashcards.

    The JSON array is located first (see note2anki.response), then every
    element is validated. One invalid element rejects the whole reply.

    Args:
        response_text: Raw text response from the model.

    Returns:
        List of validated Flashcards, in reply order.

    Raises:
        GenerationError: If no valid array is found or an element is not a
            valid card. ``raw_response`` holds the offending text.
    """
    try:
        json_content = extract_json_array(response_text)
    except ResponseFormatError as e:
        raise GenerationError(
            f"failed to extract JSON from response: {e}\n"
            f"Actual response: {response_text}",
            raw_response=response_text,
        ) from e

    try:
        return _CARD_LIST.validate_json(json_content)
    except ValidationError as e:
        raise GenerationError(
            f"failed to parse extracted JSON: {e}\n"
            f"Extracted JSON: {json_content}",
            raw_response=json_content,
        ) from e


def _call_claude_api(
    *,
    client: anthropic.Anthropic,
    config: AppConfig,
    system_prompt: str,
    messages: list[MessageParam],
) -> anthropic.types.Message:
    """Issue one Messages API request with the configured model settings."""
    return client.messages.create(
        model=config.model,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
        system=system_prompt,
        messages=messages,
    )


def generate_flashcards(
    text: str,
    subject: str,
    *,
    config: AppConfig,
    client: anthropic.Anthropic | None = None,
) -> list[Flashcard]:
    """Generate flashcards for one document.

    Args:
        text: Extracted document text.
        subject: Subject label embedded in the prompt.
        config: Application configuration (model, limits, prompt override).
        client: Anthropic client; one is created from config if omitted.

    Returns:
        Flashcards in the order the model produced them.

    Raises:
        GenerationError: On blank text, timeout/transport/API failure, an
            empty reply, or a reply that does not parse into cards.
    """
    try:
        user_prompt = build_user_prompt(text, subject)
    except ValueError as e:
        raise GenerationError(f"cannot build prompt: {e}") from e

    api_client = client if client is not None else create_client(config)

    messages: list[MessageParam] = [{"role": "user", "content": user_prompt}]

    logger.debug("Requesting cards from %s for subject %r", config.model, subject)

    try:
        response = _call_claude_api(
            client=api_client,
            config=config,
            system_prompt=resolve_system_prompt(config.system_prompt),
            messages=messages,
        )
    except anthropic.APIError as e:
        raise GenerationError(f"LLM request failed: {e}") from e

    if not response.content:
        raise GenerationError("no response from completion service")

    first_block = response.content[0]
    if not hasattr(first_block, "text"):
        raise GenerationError(
            f"unexpected response block type: {type(first_block).__name__}"
        )

    logger.info(
        "Completion used %d input / %d output tokens",
        response.usage.input_tokens,
        response.usage.output_tokens,
    )
    if response.stop_reason == "max_tokens":
        logger.warning(
            "Response hit max_tokens=%d; the card array may be truncated",
            config.max_tokens,
        )

    return parse_flashcards_response(first_block.text)
