"""Automated content pre-screen run when posts, comments and competitions are written.

The screen is advisory: a hit moves new or edited content to ``flagged`` for
an admin to look at, it never approves or rejects anything.

Two layers:
1. local patterns (leftover script markup, threats and self-harm
   incitement, personal data that would de-anonymise someone),
2. the OpenAI moderation endpoint, only when ``OPENAI_API_KEY`` is set.
   Failures there are logged and treated as "not flagged" so an outage of
   the screening service never blocks posting.
"""

import logging
import re
from dataclasses import dataclass

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScreenResult:
    """Outcome of screening one piece of content."""

    flagged: bool
    reason: str = ""


CLEAN = ScreenResult(flagged=False)

# Markup that survives sanitising but has no place in a text post
_INJECTION_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in [
        r"<\s*iframe\b",
        r"<\s*object\b",
        r"<\s*embed\b",
        r"data:text/html",
        r"document\.cookie",
        r"\beval\s*\(",
    ]
]

# Threats and incitement (case-insensitive, word-bounded)
_THREAT_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in [
        r"\bkill\s+yourself\b",
        r"\bkys\b",
        r"\bi(?:'m| am)?\s+(?:going\s+to|gonna|will)\s+(?:kill|shoot|stab)\b",
        r"\bbomb\s+threat\b",
        r"\bshoot\s+up\s+the\s+(?:school|campus|college)\b",
    ]
]

# Personal data that would break anonymity
_PERSONAL_DATA_PATTERNS = [
    ("phone number", re.compile(r"(?<!\d)(?:\+?\d{1,3}[\s-]?)?\(?\d{3}\)?[\s-]\d{3}[\s-]\d{4}(?!\d)")),
    ("SSN", re.compile(r"\b\d{3}-\d{2}-\d{4}\b")),
    ("credit card", re.compile(r"\b(?:\d{4}[-\s]?){3}\d{4}\b")),
    ("home address", re.compile(r"\b\d{1,5}\s+\w+(?:\s\w+)?\s+(?:street|st|avenue|ave|road|rd|lane|ln)\b\.?", re.IGNORECASE)),
]


def _join(title, content):
    if title:
        return f"Title: {title}\n\nContent: {content}"
    return content or ""


def _check_injection(text):
    for pattern in _INJECTION_PATTERNS:
        if pattern.search(text):
            return "Content contains disallowed markup or script."
    return None


def _check_threats(text):
    for pattern in _THREAT_PATTERNS:
        if pattern.search(text):
            return "Content contains threatening or harmful language."
    return None


def _check_personal_data(text):
    for label, pattern in _PERSONAL_DATA_PATTERNS:
        if pattern.search(text):
            return f"Content appears to contain personal information ({label})."
    return None


def local_screen(text):
    """Pattern-based screen that needs no network."""
    reason = _check_injection(text) or _check_threats(text) or _check_personal_data(text)
    if reason:
        return ScreenResult(flagged=True, reason=reason)
    return CLEAN


def remote_screen(text):
    """Ask the OpenAI moderation endpoint about ``text``."""
    try:
        response = requests.post(
            settings.OPENAI_MODERATION_URL,
            json={"input": text},
            headers={"Authorization": f"Bearer {settings.OPENAI_API_KEY}"},
            timeout=settings.PRESCREEN_TIMEOUT,
        )
        response.raise_for_status()
        result = response.json()["results"][0]
    except (requests.RequestException, ValueError, KeyError, IndexError) as e:
        logger.warning("Moderation service unavailable, skipping remote screen: %s", e)
        return CLEAN

    if not result.get("flagged"):
        return CLEAN
    categories = sorted(name for name, hit in (result.get("categories") or {}).items() if hit)
    reason = "Content flagged for: " + (", ".join(categories) or "policy violation")
    return ScreenResult(flagged=True, reason=reason)


def screen(title="", content=""):
    """Screen a title/body pair and return a ScreenResult."""
    text = _join(title, content)
    result = local_screen(text)
    if result.flagged:
        return result
    if settings.OPENAI_API_KEY:
        return remote_screen(text)
    return CLEAN
