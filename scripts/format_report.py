#!/usr/bin/env python3
"""Format a model-written bid analysis into sections.

Reads the report text (a file, or stdin with ``--input -``), cleans and
segments it, and writes the result as JSON, HTML, or a plain-text outline.

Usage::

    python3 scripts/format_report.py --input report.txt
    python3 scripts/format_report.py --input report.txt --format html --output report.html
    cat report.txt | python3 scripts/format_report.py --input - --format outline

Structured output goes to stdout (or ``--output``); human messages go to stderr.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import orjson

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from bidreport.config import SegmenterConfig
from bidreport.io_utils import read_report_text
from bidreport.render import render_html, render_outline
from bidreport.report_types import AnalysisDocument
from bidreport.segmenter import analyze_report

log = logging.getLogger("format_report")

_FORMATS = ("json", "html", "outline")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Format a bid analysis report into titled sections.",
    )
    parser.add_argument(
        "--input", required=True,
        help="Report text file, or '-' for stdin",
    )
    parser.add_argument(
        "--format", choices=_FORMATS, default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--output", default=None,
        help="Write to this path instead of stdout",
    )
    parser.add_argument(
        "--config", default=None,
        help="Segmenter config JSON (merge_wrapped_lines, keep_preamble, anchor_headings, markers)",
    )
    parser.add_argument(
        "--merge-wrapped-lines", action="store_true",
        help="Join consecutive prose lines into one paragraph",
    )
    parser.add_argument(
        "--keep-preamble", action="store_true",
        help="Keep text before the first heading as an untitled section",
    )
    parser.add_argument(
        "--anchor-headings", action="store_true",
        help="Only accept headings at the start of a line",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def load_config(args: argparse.Namespace) -> SegmenterConfig:
    """Config file values, overridden by command-line flags."""
    data: dict[str, Any] = {}
    if args.config:
        data = SegmenterConfig.from_json(Path(args.config)).to_dict()
    if args.merge_wrapped_lines:
        data["merge_wrapped_lines"] = True
    if args.keep_preamble:
        data["keep_preamble"] = True
    if args.anchor_headings:
        data["anchor_headings"] = True
    return SegmenterConfig.from_dict(data)


def format_document(document: AnalysisDocument, fmt: str) -> bytes:
    if fmt == "html":
        return render_html(document, tabs=True).encode("utf-8") + b"\n"
    if fmt == "outline":
        return render_outline(document).encode("utf-8") + b"\n"
    payload = document.to_dict()
    payload["section_count"] = len(document)
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2) + b"\n"


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.input == "-":
            raw = sys.stdin.read()
        else:
            raw = read_report_text(Path(args.input))
        config = load_config(args)
    except (OSError, ValueError) as exc:
        log.error("Could not read input: %s", exc)
        return 1

    document = analyze_report(raw, config)
    log.info("Parsed %d sections from %d chars", len(document), len(raw))
    for section in document:
        log.debug(
            "  %d. %s [%s] %d blocks",
            section.ordinal, section.title or "(untitled)", section.tag, len(section.blocks),
        )

    out = format_document(document, args.format)
    if args.output:
        path = Path(args.output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(out)
        log.info("Wrote %s", path)
    else:
        sys.stdout.buffer.write(out)
        sys.stdout.buffer.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
