"""I/O utilities for JSON, report text, and parsed documents.

orjson-backed JSON I/O plus helpers to persist an AnalysisDocument and to
read model reports saved as text files.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson

from bidreport.report_types import AnalysisDocument


def load_json(path: Path) -> Any:
    """Load JSON from a file."""
    return orjson.loads(path.read_bytes())


def save_json(obj: Any, path: Path, *, pretty: bool = True) -> None:
    """Save an object as JSON with sorted keys."""
    path.parent.mkdir(parents=True, exist_ok=True)
    opts = orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS if pretty else orjson.OPT_SORT_KEYS
    path.write_bytes(orjson.dumps(obj, option=opts))


def save_document(document: AnalysisDocument, path: Path, *, pretty: bool = True) -> None:
    """Write a parsed document as JSON."""
    save_json(document.to_dict(), path, pretty=pretty)


def load_document(path: Path) -> AnalysisDocument:
    """Read a document written by ``save_document``."""
    return AnalysisDocument.from_dict(load_json(path))


def read_report_text(fpath: Path) -> str:
    """Read a report text file with encoding fallback: UTF-8 -> CP1252 -> replace.

    Line endings are preserved; the segmenter accepts LF and CRLF.

    Raises:
        OSError: The file cannot be opened.
    """
    raw = fpath.read_bytes()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        try:
            return raw.decode("cp1252")
        except UnicodeDecodeError:
            return raw.decode("utf-8", errors="replace")
