"""Pydantic schemas for note2anki.

Defines Flashcard, the unit exported to Anki. Immutable (frozen=True).
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator


class Flashcard(BaseModel, frozen=True):
    """A single Anki flashcard. Immutable.

    Accepts ``question``/``answer`` as input keys in place of
    ``front``/``back``; models use both spellings.
    """

    front: str = Field(validation_alias=AliasChoices("front", "question"))
    back: str = Field(validation_alias=AliasChoices("back", "answer"))
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def _null_tags(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="after")
    def _front_or_back(self) -> Flashcard:
        if not self.front.strip() and not self.back.strip():
            raise ValueError("front and back must not both be empty")
        return self

    def with_tag(self, tag: str) -> Flashcard:
        """Return a copy with *tag* appended to the tag list."""
        return self.model_copy(update={"tags": [*self.tags, tag]})
