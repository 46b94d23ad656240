"""Parser for free-form emotional-state annotations."""
import json
from collections.abc import Mapping
from typing import Any

from src.journal.models import ParsedEmotionalState


def normalize_tag(value: Any) -> str | None:
    """Upper-case and strip a tag, returning None for non-strings or blanks."""
    if not isinstance(value, str):
        return None
    tag = value.strip().upper()
    return tag or None


def is_blank(raw: Any) -> bool:
    """True when an emotional_state carries nothing at all."""
    if raw is None:
        return True
    if isinstance(raw, str):
        return not raw.strip()
    if isinstance(raw, (list, tuple, Mapping)):
        return len(raw) == 0
    return False


def parse_emotional_state(raw: Any) -> ParsedEmotionalState | None:
    """Parse a trade's emotional_state into primary/secondary tags.

    Accepted shapes:
        - a mapping with primary_emotion / secondary_emotion keys
        - a list or tuple of tags (the first two are used)
        - a JSON-encoded array, object or string
        - a bare tag string

    Args:
        raw: The emotional_state value exactly as stored on the trade.

    Returns:
        ParsedEmotionalState, or None when the value is empty or has an
        unrecognised shape. Never raises.
    """
    return _parse(raw, decode_json=True)


def _parse(raw: Any, decode_json: bool) -> ParsedEmotionalState | None:
    if is_blank(raw):
        return None

    if isinstance(raw, ParsedEmotionalState):
        return raw if raw.tags else None

    if isinstance(raw, Mapping):
        return _from_tags(raw.get("primary_emotion"), raw.get("secondary_emotion"))

    if isinstance(raw, (list, tuple)):
        first = raw[0] if len(raw) > 0 else None
        second = raw[1] if len(raw) > 1 else None
        return _from_tags(first, second)

    if isinstance(raw, str):
        text = raw.strip()
        if decode_json and text[:1] in ("[", "{", '"'):
            try:
                decoded = json.loads(text)
            except ValueError:
                return None
            return _parse(decoded, decode_json=False)
        return _from_tags(text, None)

    return None


def _from_tags(primary: Any, secondary: Any) -> ParsedEmotionalState | None:
    parsed = ParsedEmotionalState(
        primary_emotion=normalize_tag(primary),
        secondary_emotion=normalize_tag(secondary),
    )
    return parsed if parsed.tags else None
