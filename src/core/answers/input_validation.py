import re
from typing import Optional

from src.core.utils.configs import engine_config

# Patterns that must never reach the matcher, checked on raw and sanitized text
DANGEROUS_PATTERNS = (
    re.compile(r"<script", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"on\w+=", re.IGNORECASE),
    re.compile(r"data:text/html", re.IGNORECASE),
    re.compile(r"vbscript:", re.IGNORECASE),
)

_ANGLE_BRACKETS = re.compile(r"[<>]")
_JAVASCRIPT_PROTOCOL = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on\w+=", re.IGNORECASE)
_IDENTIFIER = re.compile(r"^[a-zA-Z0-9_-]+$")

MAX_USER_ID_LENGTH = 100


def sanitize_input(value: Optional[str]) -> str:
    """
    Strip markup from user text.

    Removes "<" and ">", the "javascript:" protocol and inline event
    handlers such as "onclick=", then trims whitespace. Non-strings become "".
    """
    if not value or not isinstance(value, str):
        return ""
    cleaned = _ANGLE_BRACKETS.sub("", value)
    cleaned = _JAVASCRIPT_PROTOCOL.sub("", cleaned)
    cleaned = _EVENT_HANDLER.sub("", cleaned)
    return cleaned.strip()


def _is_dangerous(text: str) -> bool:
    return any(pattern.search(text) for pattern in DANGEROUS_PATTERNS)


def validate_user_answer(answer: Optional[str], max_length: Optional[int] = None) -> bool:
    """
    Basic safety check for a riddle answer.

    The answer is rejected when it is empty after sanitizing, longer than
    ``max_length`` (ANSWER_MAX_LENGTH, 500 by default) or contains a
    script-injection pattern before or after sanitizing.
    """
    if not answer or not isinstance(answer, str):
        return False

    if max_length is None:
        max_length = engine_config().answer_max_length

    sanitized = sanitize_input(answer)
    if not 1 <= len(sanitized) <= max_length:
        return False

    return not (_is_dangerous(answer) or _is_dangerous(sanitized))


def validate_crawl_id(crawl_id: Optional[str]) -> bool:
    if not crawl_id or not isinstance(crawl_id, str):
        return False
    return bool(_IDENTIFIER.match(crawl_id.strip()))


def validate_user_id(user_id: Optional[str]) -> bool:
    if not user_id or not isinstance(user_id, str):
        return False
    return bool(_IDENTIFIER.match(user_id.strip())) and len(user_id) < MAX_USER_ID_LENGTH
