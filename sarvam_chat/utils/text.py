import re
from typing import Any, Optional

WS_RX = re.compile(r'\s+')


def clean_text(value: Any) -> Optional[str]:
    """
    Return the trimmed string, or None when `value` is not a string
    or is blank after trimming.
    """
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def trunc(s: str, n: int = 120) -> str:
    return s if len(s) <= n else s[:n] + '…'


def normalize_spaces(s: str) -> str:
    return WS_RX.sub(' ', s).strip()
