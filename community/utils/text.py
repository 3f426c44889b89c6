"""Text helpers applied to user-submitted content before it is stored."""

import re

_SCRIPT_TAG = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_JS_SCHEME = re.compile(r"javascript:", re.IGNORECASE)
# only inside a tag, so plain text such as "onion=" or "lesson1=" survives
_INLINE_HANDLER = re.compile(r"(<[^>]*?)\s+on\w+\s*=", re.IGNORECASE)


def _strip_handlers(text):
    cleaned, count = _INLINE_HANDLER.subn(r"\1 ", text)
    while count:
        cleaned, count = _INLINE_HANDLER.subn(r"\1 ", cleaned)
    return cleaned


def sanitize_content(text):
    """
    Trim the text and strip script blocks, ``javascript:`` URLs and inline
    event handlers inside tags (``onclick=`` and friends).
    """
    if text is None:
        return ""
    cleaned = str(text).strip()
    cleaned = _SCRIPT_TAG.sub("", cleaned)
    cleaned = _JS_SCHEME.sub("", cleaned)
    cleaned = _strip_handlers(cleaned)
    return cleaned.strip()


def truncate_text(text, max_length=100):
    """Shorten text for list displays and log lines."""
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."
