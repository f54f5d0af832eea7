"""Single validity predicate applied to every survey field before it is emitted."""

from __future__ import annotations

from typing import Any, Mapping, Optional

DEFAULT_SENTINEL = "null"


def is_valid(value: Any, sentinel: Optional[str] = DEFAULT_SENTINEL) -> bool:
    """Return False for absent, empty, whitespace-only or sentinel values.

    The sentinel comparison is exact and case-sensitive: ``"null"`` is the
    survey system's "no value" marker, ``"Null"`` is a real answer. Boolean-like
    strings (``"true"``/``"false"``) are valid; their truthiness is decided by
    the directive that reads them.
    """
    if value is None:
        return False
    if isinstance(value, str):
        if not value.strip():
            return False
        if sentinel is not None and value == sentinel:
            return False
    return True


def resolve_field(record: Mapping[str, Any], path: str) -> Any:
    """Walk a dotted path through nested mappings; None when any step is missing."""
    node: Any = record
    for part in path.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return None
        node = node[part]
    return node


def flag_matches(value: Any, expected: str) -> bool:
    """Compare a boolean-like survey answer with the expected sentinel string."""
    if isinstance(value, bool):
        return ("true" if value else "false") == expected
    if isinstance(value, str):
        return value.strip() == expected
    return False


__all__ = ["DEFAULT_SENTINEL", "is_valid", "resolve_field", "flag_matches"]
