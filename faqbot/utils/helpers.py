"""
Shared Utility Functions

Helpers for reading Notion property values.
"""

from typing import Any, Dict, List, Optional


def join_plain_text(items: Any) -> str:
    """
    Concatenate the ``plain_text`` of a Notion rich-text (or title) array.

    Handles various formats:
    - Rich text array: [{"plain_text": "a"}, {"plain_text": "b"}] → "ab"
    - None/empty: None → ""
    - Single string: "a" → "a"

    Args:
        items: Value of a Notion ``rich_text`` or ``title`` property

    Returns:
        Concatenated text
    """
    if not items:
        return ""

    if isinstance(items, str):
        return items

    if not isinstance(items, list):
        return str(items)

    parts = []
    for item in items:
        if isinstance(item, dict):
            parts.append(item.get("plain_text") or "")
        elif isinstance(item, str):
            parts.append(item)
    return "".join(parts)


def first_plain_text(items: Optional[List[Dict[str, Any]]]) -> str:
    """Return the ``plain_text`` of the first element of a title array."""
    if not items or not isinstance(items, list):
        return ""
    first = items[0]
    if not isinstance(first, dict):
        return ""
    return first.get("plain_text") or ""


def empty_to_none(value: Optional[str]) -> Optional[str]:
    """Map empty strings to None so absent attachments stay absent."""
    return value if value else None
