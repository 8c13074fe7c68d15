"""Locate the JSON array inside a free-text model response.

Models often prepend an acknowledgement or wrap the array in a ```json
fence. The array is taken to run from the first '[' to the last ']' and
is then checked with json.loads. A '[' appearing in prose before the real
array defeats this.
"""

from __future__ import annotations

import json

from note2anki.errors import InvalidJSONError, MalformedArrayError, NoArrayFoundError

_FENCE_OPEN = "```json"
_FENCE_CLOSE = "```"


def extract_json_array(response: str) -> str:
    """Return the substring of *response* holding a JSON array.

    Args:
        response: Raw text returned by the model.

    Returns:
        The slice from the first '[' through the last ']', inclusive.

    Raises:
        NoArrayFoundError: If there is no '['.
        MalformedArrayError: If there is no ']' after the first '['.
        InvalidJSONError: If the slice does not parse as JSON.
    """
    text = response.removeprefix(_FENCE_OPEN).removesuffix(_FENCE_CLOSE).strip()

    start = text.find("[")
    if start == -1:
        raise NoArrayFoundError("no JSON array found in response")

    end = text.rfind("]")
    if end == -1 or end < start:
        raise MalformedArrayError("malformed JSON array in response")

    candidate = text[start : end + 1]

    try:
        json.loads(candidate)
    except json.JSONDecodeError as e:
        raise InvalidJSONError(f"extracted content is not valid JSON: {e}") from e

    return candidate
