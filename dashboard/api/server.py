"""FastAPI server for the bid report formatter.

Takes the model's free-text bid analysis and returns it as structured
sections (JSON) or as the tabbed HTML fragment the report page embeds. Also
builds the Messages-API request body for a bid document so the frontend and
the formatter share one prompt.

Usage:
    cd dashboard
    PYTHONPATH=../src uvicorn api.server:app --reload --port 8000

Set BIDREPORT_CONFIG to a segmenter config JSON to change the defaults.
"""
from __future__ import annotations

import logging
import os
import sys
from contextlib import asynccontextmanager
from dataclasses import replace
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, ORJSONResponse
from pydantic import BaseModel, Field

# Add src to path so we can import bidreport modules
_src = Path(__file__).resolve().parents[2] / "src"
if str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

from bidreport.config import DEFAULT_CONFIG, SegmenterConfig  # noqa: E402
from bidreport.render import render_html  # noqa: E402
from bidreport.segmenter import analyze_report  # noqa: E402
from bidreport.wire import (  # noqa: E402
    ANALYSIS_FIELD,
    PDF_TEXT_FIELD,
    InvalidRequestError,
    build_messages_request,
)

log = logging.getLogger("bidreport.dashboard")

# ---------------------------------------------------------------------------
# Globals
#
# Only the segmenter config lives here; it is replaced once at startup and
# read-only afterwards. Parsing is pure, so any number of workers is fine.
# ---------------------------------------------------------------------------
_CONFIG_ENV = "BIDREPORT_CONFIG"
_config: SegmenterConfig = DEFAULT_CONFIG


def _load_config() -> SegmenterConfig:
    """Config from $BIDREPORT_CONFIG, or defaults when unset or unreadable."""
    raw_path = os.environ.get(_CONFIG_ENV, "").strip()
    if not raw_path:
        return DEFAULT_CONFIG
    path = Path(raw_path)
    try:
        return SegmenterConfig.from_json(path)
    except (OSError, ValueError) as e:
        log.warning("could not load config %s: %s; using defaults", path, e)
        return DEFAULT_CONFIG


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: ARG001
    global _config  # noqa: PLW0603
    _config = _load_config()
    log.info("formatter config: %s", _config.to_dict())
    yield


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Bid Report Formatter API",
    version="0.1.0",
    default_response_class=ORJSONResponse,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------
class FormatRequest(BaseModel):
    analysis: str
    merge_wrapped_lines: bool | None = None
    keep_preamble: bool | None = None
    anchor_headings: bool | None = None


class HtmlFormatRequest(FormatRequest):
    active: int = Field(default=0, ge=0)
    tabs: bool = True


class PromptRequest(BaseModel):
    pdf_text: str | None = Field(default=None, alias=PDF_TEXT_FIELD)


def _effective_config(req: FormatRequest) -> SegmenterConfig:
    """Startup config with per-request overrides applied."""
    cfg = _config
    if req.merge_wrapped_lines is not None:
        cfg = replace(cfg, merge_wrapped_lines=req.merge_wrapped_lines)
    if req.keep_preamble is not None:
        cfg = replace(cfg, keep_preamble=req.keep_preamble)
    if req.anchor_headings is not None:
        cfg = replace(cfg, anchor_headings=req.anchor_headings)
    return cfg


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
@app.get("/api/health")
async def health():
    return {"status": "ok", "config": _config.to_dict()}


@app.post("/api/format")
async def format_analysis(req: FormatRequest):
    document = analyze_report(req.analysis, _effective_config(req))
    log.info("format: %d chars -> %d sections", len(req.analysis), len(document))
    payload = document.to_dict()
    payload["section_count"] = len(document)
    return payload


@app.post("/api/format/html", response_class=HTMLResponse)
async def format_analysis_html(req: HtmlFormatRequest):
    document = analyze_report(req.analysis, _effective_config(req))
    try:
        html = render_html(document, active=req.active, tabs=req.tabs)
    except IndexError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return HTMLResponse(content=html)


@app.post("/api/prompt")
async def prompt(req: PromptRequest):
    try:
        body = build_messages_request(req.pdf_text)  # type: ignore[arg-type]
    except InvalidRequestError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"request": body, "response_field": ANALYSIS_FIELD}
