"""Wire contract around the formatter.

The formatter itself never talks to the network. This module holds what the
collaborators on either side agree on: the request/response field names, the
bid-analysis prompt, the Messages-API request body, and how the model's
answer is pulled back out of a response payload.
"""
from __future__ import annotations

from typing import Any


PDF_TEXT_FIELD = "pdfText"
ANALYSIS_FIELD = "analysis"

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
DEFAULT_MAX_TOKENS = 4000
MESSAGES_API_VERSION = "2023-06-01"

BID_ANALYSIS_SYSTEM_PROMPT = """\
You are a top 0.1% construction project manager with 20 years of experience analyzing bid packages.

Analyze this bid document and provide a structured report covering:

1. PROJECT BASICS
- Project name, location, owner
- Bid due date and timeline
- Architect/engineer

2. CRITICAL CONTRACT TERMS
- Contract duration (substantial + final completion)
- Liquidated damages (both amounts, calculate total per day)
- Retainage percentage
- Performance/payment bond requirements
- Insurance requirements

3. BID DECISION
- Should we bid? (BID / NO-BID / CLARIFY)
- Confidence level (0-100%)
- 2-3 sentence explanation

4. TOP RISKS
- List 3-5 highest risks

5. QUESTIONS TO ASK
- List 3-5 critical questions before bidding

Be thorough but concise. Focus on what actually matters for the bid/no-bid decision."""

_USER_MESSAGE_PREFIX = "Please analyze this construction bid document:\n\n"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ReportError(Exception):
    """Base class for failures reported around the formatter."""


class InvalidRequestError(ReportError, ValueError):
    """Request payload failed validation before the formatter ran."""


class UpstreamResponseError(ReportError):
    """Model response did not carry a usable answer."""


# ---------------------------------------------------------------------------
# Request side
# ---------------------------------------------------------------------------

def validate_pdf_text(value: Any) -> str:
    """Return ``value`` when it is a non-blank string, else raise."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidRequestError(f"Invalid or missing {PDF_TEXT_FIELD}")
    return value


def build_messages_request(
    pdf_text: str,
    *,
    model: str = DEFAULT_MODEL,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> dict[str, Any]:
    """Build the Messages-API request body for one bid document."""
    text = validate_pdf_text(pdf_text)
    return {
        "model": model,
        "max_tokens": max_tokens,
        "system": BID_ANALYSIS_SYSTEM_PROMPT,
        "messages": [
            {"role": "user", "content": _USER_MESSAGE_PREFIX + text},
        ],
    }


# ---------------------------------------------------------------------------
# Response side
# ---------------------------------------------------------------------------

def extract_analysis_text(response: dict[str, Any]) -> str:
    """Pull the answer text out of a Messages-API response (``content[0].text``)."""
    content = response.get("content")
    if not isinstance(content, list) or not content:
        raise UpstreamResponseError("response has no content blocks")
    first = content[0]
    text = first.get("text") if isinstance(first, dict) else None
    if not isinstance(text, str):
        raise UpstreamResponseError("first content block has no text")
    return text


def error_message(response: dict[str, Any] | None, status: int) -> str:
    """Human-readable message for a failed model call."""
    if isinstance(response, dict):
        error = response.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return f"API request failed with status {status}"


def analysis_from_payload(payload: dict[str, Any]) -> str:
    """Read the ``analysis`` field of a formatter request/response mapping."""
    value = payload.get(ANALYSIS_FIELD)
    if not isinstance(value, str):
        raise InvalidRequestError(f"Invalid or missing {ANALYSIS_FIELD}")
    return value
