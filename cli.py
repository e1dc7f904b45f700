"""CLI entry point for openai-key-proxy."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from core.config import API_KEY_ENV, CONFIG_FILE, Config, load_config, write_default_config
from ui.dashboard import Dashboard
from ui.log_utils import CLI_LOG_FILE, clear_logs, mask_secret, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    config = load_config()

    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--check":
            print_key_status(config)
            return

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            console.print(f"[bold]Log:[/bold] {CLI_LOG_FILE}")
            return

        if arg == "--init":
            write_default_config()
            console.print(f"[green]Wrote[/green] {CONFIG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

        console.print(f"[red][ERROR][/red] Unknown argument: {arg}")
        _print_help()
        sys.exit(2)

    # A missing key is reported per request (500), so only warn here
    if not config.upstream.api_key:
        console.print("[yellow]Warning:[/yellow] OpenAI API key not configured")
        console.print(f"[dim]Set {API_KEY_ENV} or edit {CONFIG_FILE}[/dim]")

    # Clear previous logs and start dashboard
    clear_logs()
    dashboard = Dashboard(config)

    import uvicorn

    app = create_app(config, dashboard)

    # Run with dashboard
    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
    )
    server = uvicorn.Server(uvicorn_config)

    dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Proxy started", port=config.proxy.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Proxy stopped", duration=str(duration))
        dashboard.stop()


def print_key_status(config: Config) -> bool:
    """Report whether an upstream key is configured, masked."""
    api_key = config.upstream.api_key
    if api_key:
        console.print(f"[green]API key configured[/green] ({mask_secret(api_key)})")
        console.print(f"[dim]Upstream:[/dim] {config.upstream.chat_url}")
        return True

    console.print("[yellow]API key not configured[/yellow]")
    console.print(f"\n[dim]Set the {API_KEY_ENV} environment variable or edit:[/dim] {CONFIG_FILE}")
    return False


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]OpenAI Key Proxy[/bold cyan]

Forwards chat-completion requests to OpenAI with a server-held API key.

[bold]Usage:[/bold]
    openai-key-proxy              Start with live dashboard
    openai-key-proxy --check      Check API key status
    openai-key-proxy --config     Show config locations
    openai-key-proxy --init       Write a default config file
    openai-key-proxy --help       Show this help

[bold]Credential:[/bold]
    Read from OPENAI_API_KEY, falling back to upstream.api_key in the config file.
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
