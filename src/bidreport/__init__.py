"""Bid report formatter: turns a model-written bid analysis into sections."""

from bidreport.blocks import parse_blocks
from bidreport.config import DEFAULT_CONFIG, SegmenterConfig
from bidreport.inline import resolve_inline
from bidreport.preprocess import clean
from bidreport.report_types import (
    AnalysisDocument,
    Block,
    InlineText,
    ListBlock,
    Paragraph,
    Section,
    Span,
)
from bidreport.segmenter import analyze_report, find_headings, section_tag, segment

__all__ = [
    "DEFAULT_CONFIG",
    "AnalysisDocument",
    "Block",
    "InlineText",
    "ListBlock",
    "Paragraph",
    "Section",
    "SegmenterConfig",
    "Span",
    "analyze_report",
    "clean",
    "find_headings",
    "parse_blocks",
    "resolve_inline",
    "section_tag",
    "segment",
]
