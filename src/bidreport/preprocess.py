"""Noise removal for model-generated reports.

Strips markdown heading hashes and horizontal-rule separators so the
segmenter sees plain "1. TITLE" headings. Everything else, including the
original line endings, passes through untouched.
"""
from __future__ import annotations

import re


# "## 1. PROJECT BASICS" -> "1. PROJECT BASICS". Repeated runs ("# # X")
# go in one pass so that clean() stays idempotent.
_HEADING_HASH_RE = re.compile(r"^(?:#+[ \t]+)+(?=\S)", re.MULTILINE)

# "---", "  -----  " on a line of their own, terminator included.
_RULE_LINE_RE = re.compile(r"^[ \t]*-{3,}[ \t]*\r?(?:\n|\Z)", re.MULTILINE)


def clean(raw: str) -> str:
    """Remove heading markers and horizontal rules from ``raw``.

    Heading markers are stripped before rules are removed, so a line like
    "# ---" disappears in a single call.
    """
    if not raw:
        return ""
    text = _HEADING_HASH_RE.sub("", raw)
    return _RULE_LINE_RE.sub("", text)
