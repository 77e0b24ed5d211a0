"""Render an AnalysisDocument as HTML or as a plain-text outline.

HTML is built with BeautifulSoup so every piece of report text is escaped on
output. Markup follows the report page layout:

    <div class="analysis-content">
      <nav class="section-tabs"> one <button> per section </nav>
      <div class="section bid-decision"> <h3> <p> <ul><li> ... </div>
    </div>

Only the active section is visible; the others carry ``hidden``.
"""
from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.element import Tag

from bidreport.navigation import TabState, section_label
from bidreport.report_types import (
    AnalysisDocument,
    InlineText,
    ListBlock,
    Section,
    SectionTag,
    inline_plain_text,
)


SECTION_CLASSES: dict[SectionTag, str] = {
    "normal": "section",
    "decision": "section bid-decision",
    "risk": "section risks",
}

_EMPHASIS_TAGS = {"bold": "strong", "italic": "em"}


def _append_inline(soup: BeautifulSoup, parent: Tag, spans: InlineText) -> None:
    for span in spans:
        tag_name = _EMPHASIS_TAGS.get(span.emphasis)
        if tag_name is None:
            parent.append(span.text)
            continue
        child = soup.new_tag(tag_name)
        child.string = span.text
        parent.append(child)


def _section_tag(soup: BeautifulSoup, section: Section, index: int) -> Tag:
    div = soup.new_tag("div", attrs={
        "class": SECTION_CLASSES[section.tag],
        "data-section": str(index),
    })
    if section.title:
        h3 = soup.new_tag("h3")
        h3.string = section.title
        div.append(h3)

    for block in section.blocks:
        if isinstance(block, ListBlock):
            ul = soup.new_tag("ul")
            for item in block.items:
                li = soup.new_tag("li")
                _append_inline(soup, li, item)
                ul.append(li)
            div.append(ul)
        else:
            p = soup.new_tag("p")
            _append_inline(soup, p, block.text)
            div.append(p)
    return div


def render_html(document: AnalysisDocument, *, active: int = 0, tabs: bool = True) -> str:
    """Render ``document`` to an HTML fragment.

    Args:
        document: Parsed report.
        active: Index of the visible section when ``tabs`` is set.
        tabs: Emit the tab bar and hide inactive sections. With ``tabs=False``
            every section is rendered visible, one after another.

    Raises:
        IndexError: ``active`` is out of range for a non-empty document.
    """
    state = TabState(document=document, active=active)
    soup = BeautifulSoup("", "html.parser")
    root = soup.new_tag("div", attrs={"class": "analysis-content"})
    soup.append(root)

    if tabs and document.sections:
        nav = soup.new_tag("nav", attrs={"class": "section-tabs"})
        for i, (label, is_active) in enumerate(state.tabs()):
            button = soup.new_tag("button", attrs={
                "class": "tab active" if is_active else "tab",
                "data-section": str(i),
                "type": "button",
            })
            button.string = label
            nav.append(button)
        root.append(nav)

    for i, section in enumerate(document.sections):
        div = _section_tag(soup, section, i)
        if tabs and i != state.active:
            div["hidden"] = ""
        root.append(div)

    return str(root)


def render_outline(document: AnalysisDocument) -> str:
    """Plain-text outline: one heading line per section, indented blocks."""
    lines: list[str] = []
    for section in document.sections:
        lines.append(section_label(section))
        for block in section.blocks:
            if isinstance(block, ListBlock):
                lines.extend(f"  - {inline_plain_text(item)}" for item in block.items)
            else:
                lines.append(f"  {inline_plain_text(block.text)}")
    return "\n".join(lines)
