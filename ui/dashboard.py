"""Real-time CLI dashboard for proxy monitoring."""

from datetime import datetime
from threading import Lock
from typing import Any

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import extract_prompt, write_cli_log, write_request_log

console = Console()


class RequestInfo:
    """Info about a single request."""

    def __init__(self, model: str, prompt: str, timestamp: datetime):
        self.model = model
        self.prompt = prompt[:60] + "..." if len(prompt) > 60 else prompt
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing forwarded requests and errors."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._recent: list[RequestInfo] = []
        self._max_recent = 6
        self._counts = {"forwarded": 0, "ok": 0, "failed": 0}
        self._errors: list[str] = []
        self._live: Live | None = None

    @property
    def counts(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)

    @property
    def errors(self) -> list[str]:
        with self._lock:
            return list(self._errors)

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    def log_request(self, model: str, body: dict[str, Any]) -> None:
        """Log a request about to be forwarded upstream."""
        with self._lock:
            self._counts["forwarded"] += 1
            prompt = extract_prompt(body) if isinstance(body, dict) else ""
            self._recent.insert(0, RequestInfo(model=model, prompt=prompt, timestamp=datetime.now()))
            self._recent = self._recent[: self._max_recent]
            self._refresh()

            if self.config.proxy.debug:
                write_request_log(model, body)
            write_cli_log("REQUEST", prompt[:200], model=model)

    def log_success(self, model: str) -> None:
        with self._lock:
            self._counts["ok"] += 1
            self._refresh()

    def log_upstream_error(self, status: int, message: str) -> None:
        """Log a non-success upstream response."""
        self._record_error(f"upstream {status}", message, status=status)

    def log_error(self, message: str) -> None:
        """Log an internal error."""
        self._record_error("internal 500", message, status=500)

    def _record_error(self, label: str, message: str, *, status: int) -> None:
        with self._lock:
            self._counts["failed"] += 1
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{label}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log("ERROR", message[:200], status=status)

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=5),
        )

        layout["header"].update(self._build_header())
        layout["body"].update(self._build_requests_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("OpenAI Key Proxy", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Forwarded: {self._counts['forwarded']}", style="blue")
        stats.append("  |  ")
        stats.append(f"OK: {self._counts['ok']}", style="green")
        stats.append("  |  ")
        stats.append(f"Failed: {self._counts['failed']}", style="red")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_requests_panel(self) -> Panel:
        """Build recent requests panel."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Model", width=24)
            table.add_column("Prompt", ratio=2)

            for req in self._recent:
                table.add_row(
                    req.timestamp.strftime("%H:%M:%S"),
                    Text(req.model[:24]),
                    Text(req.prompt) if req.prompt else Text("-", style="dim"),
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Recent Requests[/blue]", border_style="blue")

    def _build_footer(self) -> Panel:
        """Build footer with errors and help."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            content = Text(
                f"POST chat completions to http://{self.config.proxy.host}:"
                f"{self.config.proxy.port}{self.config.proxy.path}",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
