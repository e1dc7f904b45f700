"""Shared logging utilities."""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

LOG_ROOT = Path.cwd() / "logs"
CLI_LOG_FILE = LOG_ROOT / "proxy.log"


def extract_prompt(body: dict[str, Any]) -> str:
    """Return the text of the last user message in a chat-completion body."""
    messages = body.get("messages", [])
    if not isinstance(messages, list):
        return ""

    last_user_msg = next(
        (m for m in reversed(messages) if isinstance(m, dict) and m.get("role") == "user"),
        None,
    )
    if not last_user_msg:
        return ""

    content = last_user_msg.get("content", "")
    if isinstance(content, list):
        # Multi-part content: keep only the text parts
        texts = [
            part.get("text", "")
            for part in content
            if isinstance(part, dict) and part.get("type") == "text"
        ]
        content = " ".join(texts)
    if not isinstance(content, str):
        return ""
    return content.replace("\n", " ").strip()


def write_request_log(
    model: str,
    body: Any,
    *,
    log_root: Path = LOG_ROOT,
) -> Path:
    """Write a single forwarded request log entry."""
    payload = {
        "timestamp": _utc_now(),
        "target": "OpenAI",
        "model": model,
        "body": body,
    }
    return _write_json(log_root / "requests", payload)


def write_cli_log(
    level: str,
    message: str,
    *,
    log_file: Path | None = None,
    **extra: Any,
) -> None:
    """Append a line to the rolling CLI log file."""
    log_file = log_file or CLI_LOG_FILE
    log_file.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
    extra_str = " ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""
    line = f"[{timestamp}] {level}: {message}"
    if extra_str:
        line += f" {extra_str}"
    line += "\n"
    with log_file.open("a") as f:
        f.write(line)


def clear_logs(log_root: Path = LOG_ROOT) -> int:
    """Delete per-request JSON logs from a previous run."""
    folder = log_root / "requests"
    if not folder.exists():
        return 0

    deleted = 0
    for old_file in folder.glob("*.json"):
        try:
            old_file.unlink()
            deleted += 1
        except OSError:
            pass
    return deleted


def mask_secret(value: str) -> str:
    """Mask a credential for display."""
    if len(value) <= 10:
        return "***"
    return value[:6] + "..." + value[-4:]


def _write_json(folder: Path, payload: dict[str, Any]) -> Path:
    """Write payload to a unique JSON file in the given folder."""
    folder.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S.%fZ")
    file_path = folder / f"{timestamp}_{uuid4().hex}.json"
    file_path.write_text(json.dumps(payload, indent=2, default=str))
    return file_path


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()
