"""Tests for log utilities, the dashboard and the console logger."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest
from rich.console import Console

from core.config import Config, ProxySettings
from core.headers import HeaderBuilder
from ui import log_utils
from ui.console_logger import ConsoleLogger
from ui.dashboard import Dashboard
from ui.log_utils import clear_logs, extract_prompt, mask_secret, write_cli_log, write_request_log


class TestExtractPrompt:
    def test_last_user_message(self) -> None:
        body = {
            "messages": [
                {"role": "system", "content": "be nice"},
                {"role": "user", "content": "first"},
                {"role": "assistant", "content": "ok"},
                {"role": "user", "content": "second\nline"},
            ]
        }

        assert extract_prompt(body) == "second line"

    def test_multipart_content(self) -> None:
        body = {
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": "describe"},
                        {"type": "image_url", "image_url": {"url": "http://x"}},
                        {"type": "text", "text": "this"},
                    ],
                }
            ]
        }

        assert extract_prompt(body) == "describe this"

    @pytest.mark.parametrize("body", [{}, {"messages": "nope"}, {"messages": [{"role": "user"}]}])
    def test_missing_prompt(self, body) -> None:
        assert extract_prompt(body) == ""


def test_mask_secret() -> None:
    assert mask_secret("short") == "***"
    assert mask_secret("sk-abcdefghijklmnop") == "sk-abc...mnop"


def test_write_cli_log_appends(tmp_path: Path) -> None:
    log_file = tmp_path / "proxy.log"

    write_cli_log("INFO", "first", log_file=log_file)
    write_cli_log("ERROR", "second", log_file=log_file, status=500)

    lines = log_file.read_text().splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("INFO: first")
    assert lines[1].endswith("ERROR: second status=500")


def test_write_request_log_and_clear(tmp_path: Path) -> None:
    path = write_request_log("gpt-x", {"model": "gpt-x"}, log_root=tmp_path)

    payload = json.loads(path.read_text())
    assert payload["model"] == "gpt-x"
    assert payload["body"] == {"model": "gpt-x"}
    assert "headers" not in payload

    assert clear_logs(tmp_path) == 1
    assert list((tmp_path / "requests").glob("*.json")) == []


def test_header_builder_injects_bearer() -> None:
    headers = HeaderBuilder().build_upstream_headers("sk-secret")

    assert headers == {"Content-Type": "application/json", "Authorization": "Bearer sk-secret"}


class TestDashboard:
    @pytest.fixture
    def dashboard(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Dashboard:
        monkeypatch.setattr(log_utils, "CLI_LOG_FILE", tmp_path / "proxy.log")
        return Dashboard(Config(proxy=ProxySettings(debug=False)))

    def test_counts(self, dashboard: Dashboard) -> None:
        body = {"model": "gpt-x", "messages": [{"role": "user", "content": "hi"}]}

        dashboard.log_request("gpt-x", body)
        dashboard.log_success("gpt-x")
        dashboard.log_request("gpt-x", body)
        dashboard.log_upstream_error(429, "slow down")

        assert dashboard.counts == {"forwarded": 2, "ok": 1, "failed": 1}
        assert dashboard.errors == ["upstream 429: slow down"]

    def test_errors_are_truncated_and_capped(self, dashboard: Dashboard) -> None:
        for i in range(5):
            dashboard.log_error(f"failure {i} " + "x" * 60)

        errors = dashboard.errors
        assert len(errors) == 3
        assert errors[0].startswith("internal 500: failure 4")
        assert errors[0].endswith("...")

    def test_writes_cli_log(self, dashboard: Dashboard, tmp_path: Path) -> None:
        dashboard.log_error("boom")

        assert "ERROR: boom status=500" in (tmp_path / "proxy.log").read_text()

    def test_layout_renders(self, dashboard: Dashboard) -> None:
        dashboard.log_request("gpt-[x]", {"messages": [{"role": "user", "content": "[bold]hi"}]})
        out = Console(file=io.StringIO(), width=120)

        out.print(dashboard._build_layout())


class TestConsoleLogger:
    def test_errors_printed_without_markup(self) -> None:
        buffer = io.StringIO()
        logger = ConsoleLogger(out=Console(file=buffer, width=200))

        logger.log_upstream_error(400, "bad [request]")
        logger.log_error("kaput")

        output = buffer.getvalue()
        assert "OpenAI API Error: 400 bad [request]" in output
        assert "Proxy function error: kaput" in output

    def test_requests_silent_unless_verbose(self) -> None:
        buffer = io.StringIO()
        ConsoleLogger(out=Console(file=buffer)).log_request("gpt-x", {})
        assert buffer.getvalue() == ""

        ConsoleLogger(verbose=True, out=Console(file=buffer)).log_request("gpt-x", {})
        assert "Forwarding model=gpt-x" in buffer.getvalue()
