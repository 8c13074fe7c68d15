"""Exception hierarchy for note2anki.

Every stage of the pipeline fails fast with one of these. The CLI turns
any Note2AnkiError into a message and a non-zero exit status.
"""

from __future__ import annotations

from pathlib import Path


class Note2AnkiError(Exception):
    """Base class for all note2anki errors."""


class ConfigError(Note2AnkiError, ValueError):
    """Configuration file is unreadable/invalid, or no API key is set."""


class UnsupportedFormatError(Note2AnkiError, ValueError):
    """Input file extension has no registered extractor."""

    def __init__(self, suffix: str) -> None:
        self.suffix = suffix
        super().__init__(f"Unsupported file format: {suffix or '(none)'}")


class ParseError(Note2AnkiError):
    """A format-specific extractor could not read the document."""

    def __init__(self, path: str | Path, cause: object) -> None:
        self.path = str(path)
        super().__init__(f"Failed to parse {self.path}: {cause}")


class EmptyContentError(Note2AnkiError):
    """Extraction succeeded but produced no text."""

    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        super().__init__(f"No text content found in {self.path}")


class ResponseFormatError(Note2AnkiError, ValueError):
    """Model response does not contain a usable JSON array."""


class NoArrayFoundError(ResponseFormatError):
    """No '[' in the response."""


class MalformedArrayError(ResponseFormatError):
    """No ']' in the response, or the last ']' precedes the first '['."""


class InvalidJSONError(ResponseFormatError):
    """The bracketed slice is not valid JSON."""


class GenerationError(Note2AnkiError, RuntimeError):
    """Card generation failed.

    ``raw_response`` holds the model text (or extracted JSON) when the
    failure happened while reading the response, so malformed output can
    be inspected.
    """

    def __init__(self, message: str, *, raw_response: str | None = None) -> None:
        self.raw_response = raw_response
        super().__init__(message)


class ExportError(Note2AnkiError):
    """Output file could not be created or written."""

    def __init__(self, path: str | Path, cause: object) -> None:
        self.path = str(path)
        super().__init__(f"Failed to write {self.path}: {cause}")
