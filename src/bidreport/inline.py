"""Inline emphasis resolution: ``**bold**`` and ``*italic*`` runs.

Bold is resolved first over the whole line; italic is then resolved only in
the plain gaps between bold runs, so ``**x**`` is never read as two italic
markers. Delimiters without a partner stay in the text as literal asterisks.
"""
from __future__ import annotations

import re

from bidreport.report_types import InlineText, Span


# Non-greedy: "**a** and **b**" is two bold runs, not one.
_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")
# Italic content never contains an asterisk ("****" stays literal).
_ITALIC_RE = re.compile(r"\*([^*]+?)\*")


def _append_plain(spans: list[Span], text: str) -> None:
    if text:
        spans.append(Span(text=text, emphasis="plain"))


def _append_italic_runs(spans: list[Span], segment: str) -> None:
    pos = 0
    for m in _ITALIC_RE.finditer(segment):
        _append_plain(spans, segment[pos:m.start()])
        spans.append(Span(text=m.group(1), emphasis="italic"))
        pos = m.end()
    _append_plain(spans, segment[pos:])


def resolve_inline(line: str) -> InlineText:
    """Decompose one line into plain, bold and italic spans.

    Usage::

        resolve_inline("This is **bold** and *italic*.")
        # plain "This is ", bold "bold", plain " and ", italic "italic", plain "."
    """
    if not line:
        return ()

    spans: list[Span] = []
    pos = 0
    for m in _BOLD_RE.finditer(line):
        _append_italic_runs(spans, line[pos:m.start()])
        spans.append(Span(text=m.group(1), emphasis="bold"))
        pos = m.end()
    _append_italic_runs(spans, line[pos:])
    return tuple(spans)
