"""Block parser for a section body: paragraphs and lists.

Works line by line with a single "list open" flag:

    ListClosed --list item--> ListOpen   (new ListBlock, first item)
    ListOpen   --list item--> ListOpen   (item appended)
    ListOpen   --blank line-> ListClosed (list flushed, line dropped)
    ListOpen   --prose line-> ListClosed (list flushed, Paragraph emitted)

Each prose line becomes its own Paragraph. Models wrap long sentences over
several lines, so this fragments them; ``merge_wrapped_lines=True`` joins
consecutive prose lines instead.
"""
from __future__ import annotations

import re

from bidreport.inline import resolve_inline
from bidreport.report_types import Block, InlineText, ListBlock, Paragraph


# "- item", "• item", "* item", "12. item"
_LIST_ITEM_RE = re.compile(r"^(?:[-\u2022*]|\d+\.)\s+")


def list_item_text(line: str) -> str | None:
    """Return the item text when ``line`` is a list item, else None.

    ``line`` must already be stripped.
    """
    m = _LIST_ITEM_RE.match(line)
    if m is None:
        return None
    return line[m.end():]


def parse_blocks(body: str, *, merge_wrapped_lines: bool = False) -> tuple[Block, ...]:
    """Parse a section body into ordered blocks.

    Args:
        body: Section text after the heading line. LF or CRLF line endings.
        merge_wrapped_lines: Join consecutive prose lines with a space into a
            single Paragraph instead of one Paragraph per line.

    Returns:
        Tuple of Paragraph / ListBlock in source order.
    """
    blocks: list[Block] = []
    items: list[InlineText] = []
    prose: list[str] = []
    list_open = False

    def _close_list() -> None:
        nonlocal list_open
        if list_open:
            blocks.append(ListBlock(items=tuple(items)))
            items.clear()
            list_open = False

    def _flush_prose() -> None:
        if prose:
            blocks.append(Paragraph(text=resolve_inline(" ".join(prose))))
            prose.clear()

    for raw_line in body.split("\n"):
        line = raw_line.strip()
        if not line:
            _flush_prose()
            _close_list()
            continue

        item = list_item_text(line)
        if item is not None:
            _flush_prose()
            list_open = True
            items.append(resolve_inline(item))
            continue

        _close_list()
        if merge_wrapped_lines:
            prose.append(line)
        else:
            blocks.append(Paragraph(text=resolve_inline(line)))

    _flush_prose()
    _close_list()
    return tuple(blocks)
