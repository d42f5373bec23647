"""
Log-safe helpers.

Rule text and document names may carry confidential content, so logs only
ever see masked or truncated versions of them.
"""

from typing import Optional


def sanitize_filename(name: Optional[str]) -> str:
    """
    Mask a document name for logs.

    Rules:
    - None / empty -> "***"
    - Keeps the first 2 chars of the stem and the extension
    """
    if not name:
        return "***"

    name = name.strip()
    stem, dot, ext = name.rpartition(".")
    if not dot:
        stem, ext = name, ""
    if len(stem) < 4:
        masked = "***"
    else:
        masked = f"{stem[:2]}***"
    return f"{masked}.{ext}" if ext else masked


def preview_rule(rule: Optional[str], limit: int = 12) -> str:
    """
    Shorten a rule to a fixed-length preview.
    """
    if not rule or not rule.strip():
        return "<blank>"
    rule = " ".join(rule.split())
    if len(rule) <= limit:
        return rule
    return f"{rule[:limit]}…"
