"""Plain console request logger for headless (serverless) runs."""

from typing import Any

from rich.console import Console
from rich.markup import escape

console = Console(stderr=True)


class ConsoleLogger:
    """Print diagnostics to stderr; nothing is written to disk."""

    def __init__(self, verbose: bool = False, out: Console | None = None):
        self._verbose = verbose
        self._console = out or console

    def log_request(self, model: str, body: dict[str, Any]) -> None:
        if self._verbose:
            self._console.print(f"[blue]Forwarding[/blue] model={escape(model)}")

    def log_success(self, model: str) -> None:
        if self._verbose:
            self._console.print(f"[green]OK[/green] model={escape(model)}")

    def log_upstream_error(self, status: int, message: str) -> None:
        self._console.print(f"[red]OpenAI API Error:[/red] {status} {escape(message)}", highlight=False)

    def log_error(self, message: str) -> None:
        self._console.print(f"[red]Proxy function error:[/red] {escape(message)}", highlight=False)
