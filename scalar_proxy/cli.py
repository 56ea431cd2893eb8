"""CLI entry point for scalar-proxy."""

import sys
from datetime import datetime

from rich.console import Console

from scalar_proxy.app import create_app
from scalar_proxy.core.config import CONFIG_FILE, ProxyConfig, load_config
from scalar_proxy.core.exceptions import ConfigurationError
from scalar_proxy.ui.dashboard import Dashboard
from scalar_proxy.ui.log_utils import clear_logs, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

    # Configuration errors must stop startup
    try:
        config = load_config()
        public_url = config.server.public_url or f"http://{config.server.host}:{config.server.port}"
        proxy_config = ProxyConfig.from_settings(config, public_url=public_url)
    except ConfigurationError as e:
        console.print(f"[red][ERROR][/red] {e.code}: {e.message}")
        console.print(f"[dim]Edit {CONFIG_FILE} and set scalar.base_url[/dim]")
        sys.exit(1)

    # Clear previous logs and start dashboard
    clear_logs()
    dashboard = Dashboard(proxy_config, port=config.server.port)

    import uvicorn

    app = create_app(proxy_config, dashboard)

    # Run with dashboard
    uvicorn_config = uvicorn.Config(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level="warning",
    )
    server = uvicorn.Server(uvicorn_config)

    dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Proxy started", port=config.server.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Proxy stopped", duration=str(duration))
        dashboard.stop()


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Scalar Proxy[/bold cyan]

Serves Scalar API docs and proxies their requests to your API spec server.

[bold]Usage:[/bold]
    scalar-proxy              Start with live dashboard
    scalar-proxy --config     Show config location
    scalar-proxy --help       Show this help

[bold]Environment:[/bold]
    DEBUG=true|1              Print verbose debug traces
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
