"""Helpers shared by the categories services."""

from typing import Any, Iterable, List


def normalize_name(item: Any) -> str:
    """Comparable name of a category or a raw category string."""
    if item is None:
        return ""
    return str(item).strip()


def as_list(items: Any) -> List[Any]:
    """Accept a single category/string or any iterable of them."""
    if items is None:
        return []
    if isinstance(items, (str, bytes)) or not isinstance(items, Iterable):
        return [items]
    return list(items)


def split_names(text: str, separator: str) -> List[str]:
    """Split ``text`` on ``separator`` and drop blank names."""
    if not text:
        return []
    return [name.strip() for name in text.split(separator) if name.strip()]


def unique_names(items: Any) -> List[str]:
    """Normalized, non-blank names of ``items`` in first-seen order."""
    names: List[str] = []
    for item in as_list(items):
        name = normalize_name(item)
        if name and name not in names:
            names.append(name)
    return names
