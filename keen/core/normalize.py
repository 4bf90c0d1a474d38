"""Key normalisation for ticker, field and column identifiers."""

from __future__ import annotations

from typing import Any


def normalize_key(raw: Any) -> str:
    """Canonical form used for case and whitespace insensitive comparison.

    ``None`` and empty values normalise to ``""``. Integral floats (as
    produced by spreadsheet readers for year headers) lose their ``.0``.
    """
    if raw is None:
        return ""
    if isinstance(raw, float):
        if raw != raw:
            return ""
        if raw.is_integer():
            raw = int(raw)
    return str(raw).strip().lower()


def keys_match(left: Any, right: Any) -> bool:
    return normalize_key(left) == normalize_key(right)


__all__ = ["normalize_key", "keys_match"]
