"""Text helpers for table cells and status lines."""

from __future__ import annotations

ELLIPSIS = "..."


def truncate(text: str, max_len: int) -> str:
    """Shorten text to at most ``max_len`` characters.

    Longer strings keep their first ``max_len - 3`` characters followed by
    ``...``. Lengths are counted in characters, never bytes.

    Args:
        text: Text to shorten.
        max_len: Maximum length of the result.

    Returns:
        The original text, or its shortened form.

    Example:
        >>> truncate("reconciliation succeeded", 10)
        'reconci...'
    """
    if len(text) <= max_len:
        return text
    if max_len <= len(ELLIPSIS):
        return text[:max_len]
    return text[: max_len - len(ELLIPSIS)] + ELLIPSIS
