"""Input sanitizers shared by services."""

from __future__ import annotations

LIKE_ESCAPE = "\\"


def sanitize_text(value: str | None, max_len: int = 20000) -> str:
    """Sanitize free-form content before persistence/display."""
    if value is None:
        return ""
    cleaned = str(value).replace("\x00", "").strip()
    cleaned = cleaned[:max_len]
    return cleaned


def like_pattern(term: str) -> str:
    """Build a `%term%` pattern with LIKE wildcards in the term escaped."""
    escaped = (
        sanitize_text(term, max_len=200)
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"
