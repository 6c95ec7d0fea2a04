from __future__ import annotations

from collections.abc import Iterable

from ..errors import InvalidInputError


def normalize_label(value: str) -> str:
    return value.strip().lower()


def split_ingredients(text: str | None) -> list[str]:
    """Split a comma-separated ingredient string into normalised entries."""
    if not text:
        return []
    return [n for n in (normalize_label(part) for part in text.split(",")) if n]


def normalize_ingredients(
    text: str | None = None,
    labels: Iterable[str] | None = None,
) -> list[str]:
    """
    Merge typed and recognised ingredients into one de-duplicated list.

    Typed entries come first, then recognised labels; duplicates keep their
    first position. Raises :class:`InvalidInputError` if nothing usable is left.
    """
    merged: dict[str, None] = {}
    for item in split_ingredients(text):
        merged.setdefault(item, None)
    for label in labels or []:
        item = normalize_label(label)
        if item:
            merged.setdefault(item, None)

    if not merged:
        raise InvalidInputError("No ingredients provided")
    return list(merged)
