"""Explicit tab state for showing one section at a time."""
from __future__ import annotations

from dataclasses import dataclass, replace

from bidreport.report_types import AnalysisDocument, Section


FALLBACK_LABEL = "Report"


def section_label(section: Section) -> str:
    """Tab label: "3. BID DECISION", or "Report" for the untitled section."""
    if not section.title:
        return FALLBACK_LABEL
    return f"{section.ordinal}. {section.title}"


@dataclass(frozen=True, slots=True)
class TabState:
    """Which section of a document is visible.

    Selection is exclusive and never re-parses: ``select`` returns a new
    state pointing at the same document.
    """

    document: AnalysisDocument
    active: int = 0

    def __post_init__(self) -> None:
        if self.document.sections and not 0 <= self.active < len(self.document.sections):
            raise IndexError(
                f"active tab {self.active} out of range for "
                f"{len(self.document.sections)} sections"
            )

    def select(self, index: int) -> TabState:
        return replace(self, active=index)

    @property
    def active_section(self) -> Section | None:
        if not self.document.sections:
            return None
        return self.document.sections[self.active]

    def tabs(self) -> list[tuple[str, bool]]:
        """(label, is_active) per section, in document order."""
        return [
            (section_label(s), i == self.active)
            for i, s in enumerate(self.document.sections)
        ]
