# campus_league/utils/misc_utils.py
from typing import Any, Optional


def ref_id(ref: Any) -> Optional[str]:
    """Extracts the document id from a reference-style pointer.

    Accepts a path string (``"teams/abc"`` -> ``"abc"``), a mapping with an
    ``id`` or ``path`` key, or any object exposing an ``id`` attribute.
    """
    if ref is None:
        return None
    if isinstance(ref, str):
        segment = ref.rstrip("/").rsplit("/", 1)[-1]
        return segment or None
    if isinstance(ref, dict):
        if ref.get("id"):
            return str(ref["id"])
        return ref_id(ref.get("path"))
    value = getattr(ref, "id", None)
    return str(value) if value else None


def count_or_zero(value: Optional[int]) -> int:
    """Missing numeric fields count as zero."""
    return value if value is not None else 0
