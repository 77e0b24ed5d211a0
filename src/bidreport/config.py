"""Segmenter configuration, loadable from a JSON file."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import orjson


@dataclass(frozen=True, slots=True)
class SegmenterConfig:
    """Knobs for how a report is split into sections and blocks.

    Defaults reproduce the stock behaviour: wrapped prose lines stay separate
    paragraphs, text before the first heading is dropped, and a heading may
    start anywhere in the text. ``anchor_headings`` restricts headings to the
    start of a line.
    """

    merge_wrapped_lines: bool = False
    keep_preamble: bool = False
    anchor_headings: bool = False
    decision_markers: tuple[str, ...] = ("BID DECISION",)
    risk_markers: tuple[str, ...] = ("RISKS",)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SegmenterConfig:
        if not isinstance(data, dict):
            raise ValueError(
                f"segmenter config must be a JSON object, got {type(data).__name__}"
            )
        defaults = cls()
        return cls(
            merge_wrapped_lines=bool(data.get("merge_wrapped_lines", defaults.merge_wrapped_lines)),
            keep_preamble=bool(data.get("keep_preamble", defaults.keep_preamble)),
            anchor_headings=bool(data.get("anchor_headings", defaults.anchor_headings)),
            decision_markers=tuple(
                str(m) for m in data.get("decision_markers", defaults.decision_markers)
            ),
            risk_markers=tuple(
                str(m) for m in data.get("risk_markers", defaults.risk_markers)
            ),
        )

    @classmethod
    def from_json(cls, path: Path) -> SegmenterConfig:
        """Load from a segmenter config JSON file."""
        return cls.from_dict(orjson.loads(path.read_bytes()))

    def to_dict(self) -> dict[str, Any]:
        return {
            "merge_wrapped_lines": self.merge_wrapped_lines,
            "keep_preamble": self.keep_preamble,
            "anchor_headings": self.anchor_headings,
            "decision_markers": list(self.decision_markers),
            "risk_markers": list(self.risk_markers),
        }


DEFAULT_CONFIG = SegmenterConfig()
