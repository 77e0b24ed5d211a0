"""Core types for the report formatter.

Every stage shares these types. All dataclasses are frozen and use
slots=True, so two parses of the same text compare equal field by field.

Type hierarchy:
  Span             : One run of text with a single emphasis
  InlineText       : A line decomposed into spans
  Paragraph        : Block holding one line of inline text
  ListBlock        : Block holding consecutive list items
  Block            : Paragraph | ListBlock
  Section          : Numbered, titled unit of the report
  AnalysisDocument : Ordered sections of one report
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Literal

import orjson


type Emphasis = Literal["plain", "bold", "italic"]
type SectionTag = Literal["normal", "decision", "risk"]

EMPHASES: frozenset[str] = frozenset({"plain", "bold", "italic"})
SECTION_TAGS: frozenset[str] = frozenset({"normal", "decision", "risk"})


# ---------------------------------------------------------------------------
# Inline text
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Span:
    """A run of text carrying one emphasis (no nesting)."""

    text: str
    emphasis: Emphasis = "plain"

    def __post_init__(self) -> None:
        if self.emphasis not in EMPHASES:
            raise ValueError(f"unknown emphasis {self.emphasis!r}")


type InlineText = tuple[Span, ...]


def inline_plain_text(spans: InlineText) -> str:
    """Concatenate span texts, dropping emphasis."""
    return "".join(span.text for span in spans)


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Paragraph:
    """A single source line rendered as a paragraph."""

    text: InlineText
    kind: Literal["paragraph"] = "paragraph"


@dataclass(frozen=True, slots=True)
class ListBlock:
    """Consecutive list-item lines, markers stripped."""

    items: tuple[InlineText, ...]
    kind: Literal["list"] = "list"


type Block = Paragraph | ListBlock


# ---------------------------------------------------------------------------
# Sections and documents
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Section:
    """A numbered report section (e.g., "3. BID DECISION").

    ``ordinal`` is the heading number exactly as written in the report; it
    is never renumbered. The fallback section has ``ordinal=0`` and an empty
    title.
    """

    ordinal: int
    title: str
    tag: SectionTag = "normal"
    blocks: tuple[Block, ...] = ()

    def __post_init__(self) -> None:
        if self.ordinal < 0:
            raise ValueError(f"Section.ordinal must be >= 0, got {self.ordinal}")
        if self.tag not in SECTION_TAGS:
            raise ValueError(f"unknown section tag {self.tag!r}")

    @property
    def is_fallback(self) -> bool:
        return self.ordinal == 0 and not self.title


@dataclass(frozen=True, slots=True)
class AnalysisDocument:
    """One fully parsed report: ordered sections, immutable."""

    sections: tuple[Section, ...] = ()

    def __len__(self) -> int:
        return len(self.sections)

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    @property
    def titles(self) -> list[str]:
        return [s.title for s in self.sections]

    def find(self, tag: SectionTag) -> Section | None:
        """First section carrying ``tag``, or None."""
        for section in self.sections:
            if section.tag == tag:
                return section
        return None

    def to_dict(self) -> dict[str, Any]:
        return {"sections": [_section_to_dict(s) for s in self.sections]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisDocument:
        return cls(sections=tuple(
            _section_from_dict(s) for s in data.get("sections", [])
        ))

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict())

    @classmethod
    def from_json(cls, raw: bytes | str) -> AnalysisDocument:
        return cls.from_dict(orjson.loads(raw))


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _spans_to_list(spans: InlineText) -> list[dict[str, str]]:
    return [{"text": s.text, "emphasis": s.emphasis} for s in spans]


def _spans_from_list(rows: list[dict[str, str]]) -> InlineText:
    return tuple(
        Span(text=row["text"], emphasis=row.get("emphasis", "plain"))  # type: ignore[arg-type]
        for row in rows
    )


def _block_to_dict(block: Block) -> dict[str, Any]:
    if isinstance(block, ListBlock):
        return {"kind": "list", "items": [_spans_to_list(i) for i in block.items]}
    return {"kind": "paragraph", "text": _spans_to_list(block.text)}


def _block_from_dict(data: dict[str, Any]) -> Block:
    kind = data.get("kind")
    if kind == "list":
        return ListBlock(items=tuple(_spans_from_list(i) for i in data.get("items", [])))
    if kind == "paragraph":
        return Paragraph(text=_spans_from_list(data.get("text", [])))
    raise ValueError(f"unknown block kind {kind!r}")


def _section_to_dict(section: Section) -> dict[str, Any]:
    return {
        "ordinal": section.ordinal,
        "title": section.title,
        "tag": section.tag,
        "blocks": [_block_to_dict(b) for b in section.blocks],
    }


def _section_from_dict(data: dict[str, Any]) -> Section:
    return Section(
        ordinal=int(data["ordinal"]),
        title=str(data.get("title", "")),
        tag=data.get("tag", "normal"),
        blocks=tuple(_block_from_dict(b) for b in data.get("blocks", [])),
    )
