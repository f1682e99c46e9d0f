from __future__ import annotations

from collections.abc import Iterable


def _sanitize_header(name: str, value: str) -> tuple[str, str]:
    """
    Sanitize header name and value to prevent HTTP header injection (CRLF injection).
    Strips CR, LF, and null bytes from both name and value.
    """
    clean_name = name.replace("\r", "").replace("\n", "").replace("\x00", "")
    clean_value = value.replace("\r", "").replace("\n", "").replace("\x00", "")
    return clean_name, clean_value


def headers(pairs: Iterable[tuple[str, str]]) -> dict[str, str]:
    """
    Build a header map from (name, value) pairs.
    Names keep their case and are sorted; a repeated name keeps its last value.
    """
    merged: dict[str, str] = {}
    for name, value in pairs:
        name, value = _sanitize_header(name, value)
        merged[name] = value
    return dict(sorted(merged.items()))
