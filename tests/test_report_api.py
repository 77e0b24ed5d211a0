"""Unit tests for the formatter API endpoints."""
from __future__ import annotations

import asyncio
from pathlib import Path

import orjson
import pytest
from bs4 import BeautifulSoup
from fastapi import HTTPException

from dashboard.api import server


REPORT = "Intro line.\n1. PROJECT BASICS\n- Owner: City\nWrapped\nline\n4. TOP RISKS\n- Weather"


class TestLoadConfig:
    def test_unset_env_uses_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("BIDREPORT_CONFIG", raising=False)
        assert server._load_config() == server.DEFAULT_CONFIG

    def test_env_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "cfg.json"
        path.write_bytes(orjson.dumps({"merge_wrapped_lines": True}))
        monkeypatch.setenv("BIDREPORT_CONFIG", str(path))
        assert server._load_config().merge_wrapped_lines is True

    def test_unreadable_path_falls_back(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BIDREPORT_CONFIG", str(tmp_path / "missing.json"))
        assert server._load_config() == server.DEFAULT_CONFIG

    def test_non_object_json_falls_back(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "cfg.json"
        path.write_bytes(b"[]")
        monkeypatch.setenv("BIDREPORT_CONFIG", str(path))
        assert server._load_config() == server.DEFAULT_CONFIG


class TestFormatEndpoints:
    def test_health(self) -> None:
        result = asyncio.run(server.health())
        assert result["status"] == "ok"
        assert result["config"]["merge_wrapped_lines"] is False

    def test_format(self) -> None:
        req = server.FormatRequest(analysis=REPORT)
        payload = asyncio.run(server.format_analysis(req))
        assert payload["section_count"] == 2
        assert [s["tag"] for s in payload["sections"]] == ["normal", "risk"]
        assert [b["kind"] for b in payload["sections"][0]["blocks"]] == [
            "list", "paragraph", "paragraph",
        ]

    def test_format_overrides(self) -> None:
        req = server.FormatRequest(analysis=REPORT, merge_wrapped_lines=True, keep_preamble=True)
        payload = asyncio.run(server.format_analysis(req))
        assert payload["section_count"] == 3
        assert payload["sections"][0]["ordinal"] == 0
        assert [b["kind"] for b in payload["sections"][1]["blocks"]] == ["list", "paragraph"]

    def test_format_anchor_override(self) -> None:
        text = "1. PROJECT BASICS\nDue 2024. 2. BID DECISION\nBID"
        loose = asyncio.run(server.format_analysis(server.FormatRequest(analysis=text)))
        assert loose["section_count"] == 2
        req = server.FormatRequest(analysis=text, anchor_headings=True)
        anchored = asyncio.run(server.format_analysis(req))
        assert anchored["section_count"] == 1

    def test_format_empty(self) -> None:
        payload = asyncio.run(server.format_analysis(server.FormatRequest(analysis="")))
        assert payload == {"sections": [], "section_count": 0}

    def test_format_html(self) -> None:
        req = server.HtmlFormatRequest(analysis=REPORT, active=1)
        response = asyncio.run(server.format_analysis_html(req))
        soup = BeautifulSoup(response.body.decode("utf-8"), "html.parser")
        assert soup.select_one("button.active").get_text() == "4. TOP RISKS"
        assert soup.select_one("div.risks").has_attr("hidden") is False

    def test_format_html_bad_tab(self) -> None:
        req = server.HtmlFormatRequest(analysis=REPORT, active=9)
        with pytest.raises(HTTPException) as exc:
            asyncio.run(server.format_analysis_html(req))
        assert exc.value.status_code == 400


class TestPromptEndpoint:
    def test_prompt(self) -> None:
        req = server.PromptRequest(pdfText="Invitation to Bid")
        result = asyncio.run(server.prompt(req))
        assert result["response_field"] == "analysis"
        assert result["request"]["messages"][0]["content"].endswith("Invitation to Bid")

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_prompt_rejects_blank(self, text: str | None) -> None:
        req = server.PromptRequest(pdfText=text)
        with pytest.raises(HTTPException) as exc:
            asyncio.run(server.prompt(req))
        assert exc.value.status_code == 400
        assert exc.value.detail == "Invalid or missing pdfText"
