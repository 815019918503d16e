"""
Normalization of LLM gateway responses into the canonical flashcard shape.

Models do not reliably follow the requested output schema. The content may be
wrapped in markdown code fences, and the flashcard list may come back at the
top level or nested under an arbitrary key. Every accepted shape is reduced to
``{"flashcards": [{"front": ..., "back": ...}, ...]}``.
"""

import json
from collections.abc import Callable
from typing import Any

FlashcardList = list[dict[str, Any]]
ExtractionStrategy = Callable[[Any], FlashcardList | None]


def extract_message_content(body: Any) -> str | None:
    """
    Pull the assistant message text out of a chat-completions body.

    Looks at ``choices[0].message.content``, then ``message.content``, then
    ``content``.
    """
    if not isinstance(body, dict):
        return None

    choices = body.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        message = choices[0].get("message")
        if isinstance(message, dict) and isinstance(message.get("content"), str):
            return message["content"]

    message = body.get("message")
    if isinstance(message, dict) and isinstance(message.get("content"), str):
        return message["content"]

    content = body.get("content")
    if isinstance(content, str):
        return content
    return None


def strip_markdown_fences(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def parse_json_content(content: str) -> Any:
    """
    Decode message content as JSON, tolerating markdown code fences.

    Raises:
        ValueError: If the content is not valid JSON
    """
    try:
        return json.loads(strip_markdown_fences(content))
    except json.JSONDecodeError as e:
        raise ValueError(f"Response content is not valid JSON: {e.msg}") from e


def _is_flashcard(item: Any) -> bool:
    return isinstance(item, dict) and "front" in item and "back" in item


def _as_flashcard_list(value: Any) -> FlashcardList | None:
    """Return the flashcard-shaped entries of a list, or None if it holds none."""
    if not isinstance(value, list) or not value:
        return None
    flashcards = [item for item in value if _is_flashcard(item)]
    return flashcards or None


def _from_canonical(value: Any) -> FlashcardList | None:
    if not isinstance(value, dict) or not isinstance(value.get("flashcards"), list):
        return None
    # An empty list under the canonical key is a valid answer with no cards.
    # A list with no usable entries is not, and later strategies get a turn.
    if not value["flashcards"]:
        return []
    return _as_flashcard_list(value["flashcards"])


def _from_top_level_array(value: Any) -> FlashcardList | None:
    return _as_flashcard_list(value)


def _from_any_key(value: Any) -> FlashcardList | None:
    if not isinstance(value, dict):
        return None
    for nested in value.values():
        flashcards = _as_flashcard_list(nested)
        if flashcards is not None:
            return flashcards
    return None


def _from_nested_object(value: Any) -> FlashcardList | None:
    if not isinstance(value, dict):
        return None
    for nested in value.values():
        flashcards = _from_canonical(nested) or _from_any_key(nested)
        if flashcards:
            return flashcards
    return None


# Tried in order, first match wins
EXTRACTION_STRATEGIES: list[ExtractionStrategy] = [
    _from_canonical,
    _from_top_level_array,
    _from_any_key,
    _from_nested_object,
]


def normalize_flashcards(parsed: Any) -> dict[str, FlashcardList] | None:
    """
    Reduce a decoded model answer to ``{"flashcards": [...]}``.

    Returns None when no strategy recognises the shape. Normalizing an
    already canonical value returns an equal value.
    """
    for strategy in EXTRACTION_STRATEGIES:
        flashcards = strategy(parsed)
        if flashcards is not None:
            return {"flashcards": flashcards}
    return None
