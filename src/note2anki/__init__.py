"""note2anki: convert study notes to Anki flashcards with Claude."""

__version__ = "0.1.0"
