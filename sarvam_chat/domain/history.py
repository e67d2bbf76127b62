from collections.abc import Mapping
from typing import Any, List, Optional

from sarvam_chat.domain.models import ALLOWED_ROLES, DEFAULT_LANGUAGE, Message
from sarvam_chat.utils.text import clean_text


def _coerce_entry(item: Any, default_language: str) -> Optional[Message]:
    if isinstance(item, Message):
        item = item.model_dump()
    if not isinstance(item, Mapping):
        return None

    role = item.get('role')
    if not isinstance(role, str) or role not in ALLOWED_ROLES:
        return None

    content = clean_text(item.get('content'))
    if content is None:
        return None

    language = clean_text(item.get('language')) or default_language
    return Message(role=role, content=content, language=language)


def sanitize_history(
    history: Any,
    max_size: int,
    default_language: str = DEFAULT_LANGUAGE,
) -> List[Message]:
    """
    Bound the conversation history forwarded upstream.

    Malformed input never raises: anything that is not a list/tuple yields
    an empty history, and entries without an allowed role or with blank
    content are dropped. Surviving content is trimmed and a missing language
    becomes `default_language`. Only the most recent `max_size` entries are
    kept, in their original order.
    """
    if not isinstance(history, (list, tuple)) or max_size <= 0:
        return []

    cleaned = [
        msg
        for msg in (_coerce_entry(item, default_language) for item in history)
        if msg is not None
    ]
    return cleaned[-max_size:]
