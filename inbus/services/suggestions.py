"""Typo hints for unknown names."""

from __future__ import annotations

from difflib import get_close_matches


def did_you_mean(name: object, candidates: list[str]) -> str | None:
    """Return the known name closest to *name*, or ``None`` if nothing is close.

    Non-string names never get a suggestion.
    """
    if not isinstance(name, str) or not candidates:
        return None
    matches = get_close_matches(name, candidates, n=1, cutoff=0.6)
    return matches[0] if matches else None
