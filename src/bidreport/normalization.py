"""Deterministic line-ending normalization for report text."""

from __future__ import annotations

from dataclasses import dataclass


_BOM = "\ufeff"


@dataclass(frozen=True, slots=True)
class NormalizedReport:
    """Normalized report text plus the transforms that fired."""

    raw_text: str
    normalized_text: str
    normalization_flags: dict[str, bool]


def normalize_report_text(text: str) -> NormalizedReport:
    """Normalize report text before line splitting.

    Current deterministic transforms:
    1. Drop a single leading byte-order mark.
    2. Collapse CRLF and CR to LF.

    Every other character, zero-width joiners included, is kept as is.
    """

    raw = text or ""
    chars: list[str] = []
    flags = {
        "bom_removed": False,
        "crlf_normalized": False,
        "cr_normalized": False,
    }

    i = 0
    if raw.startswith(_BOM):
        flags["bom_removed"] = True
        i = 1
    while i < len(raw):
        ch = raw[i]
        if ch == "\r" and i + 1 < len(raw) and raw[i + 1] == "\n":
            chars.append("\n")
            flags["crlf_normalized"] = True
            i += 2
            continue
        if ch == "\r":
            chars.append("\n")
            flags["cr_normalized"] = True
        else:
            chars.append(ch)
        i += 1

    return NormalizedReport(
        raw_text=raw,
        normalized_text="".join(chars),
        normalization_flags=flags,
    )


def normalize_newlines(text: str) -> str:
    """Shortcut returning only the normalized text."""
    return normalize_report_text(text).normalized_text
