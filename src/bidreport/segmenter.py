"""Section segmenter for model-generated bid reports.

Splits report text into numbered, ALL-CAPS titled sections and parses each
section body into blocks:

    1. Normalize line endings (CRLF / CR -> LF) and drop a leading BOM.
    2. Find heading boundaries ("1. PROJECT BASICS") using regex. A boundary
       may sit anywhere in the text unless ``anchor_headings`` is set.
    3. Cut the text at every boundary; text before the first boundary is
       dropped unless ``keep_preamble`` is set.
    4. Parse each body with the block parser and tag the section from its
       title.

Text without a single heading becomes one untitled section (ordinal 0), so a
non-empty report never yields an empty document.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from bidreport.blocks import parse_blocks
from bidreport.config import DEFAULT_CONFIG, SegmenterConfig
from bidreport.normalization import normalize_newlines
from bidreport.preprocess import clean
from bidreport.report_types import AnalysisDocument, Section, SectionTag


# Heading: "3. BID DECISION", "Due 2024. 2. CRITICAL CONTRACT TERMS".
# The title is a run of capitals and spaces; it stops at the first lowercase
# letter, digit, punctuation mark or newline. A capital directly followed by
# a lowercase letter starts an ordinary word ("1. Project name"), so the run
# must end on a capital that is not followed by [a-z]. Two characters minimum
# keeps "1. I think" from reading as a heading.
# The ordinal is a whole digit run of at most 4300 digits, the longest string
# int() converts by default; longer runs are not headings.
_NUMBERED_TITLE = r"(\d{1,4300})\.[ \t]+([A-Z][A-Z ]*[A-Z])(?![a-z])"
_HEADING_RE = re.compile(r"(?<!\d)" + _NUMBERED_TITLE)

# Line-start variant for SegmenterConfig.anchor_headings: leading blanks and
# a "*"/"**" bold marker may precede the number.
_ANCHORED_HEADING_RE = re.compile(r"^[ \t]*(?:\*{1,2})?" + _NUMBERED_TITLE, re.MULTILINE)


@dataclass(frozen=True, slots=True)
class HeadingMatch:
    """A detected heading boundary, offsets in normalized text."""

    ordinal: int
    title: str
    char_start: int     # Start of the heading match
    char_end: int       # Start of the next heading, or end of text
    body_start: int     # First char after the heading line


def find_headings(text: str, *, anchored: bool = False) -> list[HeadingMatch]:
    """Find all heading boundaries in normalized text, in source order.

    With ``anchored`` a heading must open its line; otherwise any position
    where the text matches the heading shape is a boundary.
    """
    if not text:
        return []

    pattern = _ANCHORED_HEADING_RE if anchored else _HEADING_RE
    matches = list(pattern.finditer(text))
    results: list[HeadingMatch] = []
    for i, m in enumerate(matches):
        char_end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        nl_pos = text.find("\n", m.end())
        body_start = nl_pos + 1 if 0 <= nl_pos < char_end else char_end
        results.append(HeadingMatch(
            ordinal=int(m.group(1)),
            title=m.group(2).strip(),
            char_start=m.start(),
            char_end=char_end,
            body_start=body_start,
        ))
    return results


def section_tag(title: str, config: SegmenterConfig | None = None) -> SectionTag:
    """Presentation tag for a section title.

    Case-insensitive substring match; decision markers are checked before
    risk markers.
    """
    cfg = config or DEFAULT_CONFIG
    upper = title.upper()
    if any(marker.upper() in upper for marker in cfg.decision_markers):
        return "decision"
    if any(marker.upper() in upper for marker in cfg.risk_markers):
        return "risk"
    return "normal"


def segment(text: str, config: SegmenterConfig | None = None) -> AnalysisDocument:
    """Split cleaned report text into an AnalysisDocument.

    Args:
        text: Report text, normally the output of ``clean``.
        config: Segmenter options; defaults to ``DEFAULT_CONFIG``.

    Returns:
        AnalysisDocument. Empty only when ``text`` is the empty string.
    """
    if not text:
        return AnalysisDocument()

    cfg = config or DEFAULT_CONFIG
    normalized = normalize_newlines(text)
    headings = find_headings(normalized, anchored=cfg.anchor_headings)

    if not headings:
        return AnalysisDocument(sections=(
            _untitled_section(normalized, cfg),
        ))

    sections: list[Section] = []
    preamble = normalized[:headings[0].char_start]
    if cfg.keep_preamble and preamble.strip():
        sections.append(_untitled_section(preamble, cfg))

    for h in headings:
        body = normalized[h.body_start:h.char_end]
        sections.append(Section(
            ordinal=h.ordinal,
            title=h.title,
            tag=section_tag(h.title, cfg),
            blocks=parse_blocks(body, merge_wrapped_lines=cfg.merge_wrapped_lines),
        ))

    return AnalysisDocument(sections=tuple(sections))


def analyze_report(raw: str, config: SegmenterConfig | None = None) -> AnalysisDocument:
    """Clean and segment a raw model report in one call."""
    return segment(clean(raw), config)


def _untitled_section(body: str, cfg: SegmenterConfig) -> Section:
    return Section(
        ordinal=0,
        title="",
        tag="normal",
        blocks=parse_blocks(body, merge_wrapped_lines=cfg.merge_wrapped_lines),
    )
