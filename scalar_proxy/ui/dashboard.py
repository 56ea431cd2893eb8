"""Real-time CLI dashboard for proxy monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from scalar_proxy.core.config import ProxyConfig
from scalar_proxy.ui.log_utils import write_cli_log

console = Console()


class RequestInfo:
    """Info about a single forwarded request."""

    def __init__(self, method: str, target_url: str, timestamp: datetime):
        self.method = method
        self.url = target_url
        self.display_url = target_url[:80] + "..." if len(target_url) > 80 else target_url
        self.status: int | None = None
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing recent proxied requests."""

    def __init__(self, config: ProxyConfig, port: int):
        self.config = config
        self.port = port
        self._lock = Lock()
        self._requests: list[RequestInfo] = []
        self._max_requests = 10
        self._counts = {"forwarded": 0, "blocked": 0, "failed": 0}
        self._errors: list[str] = []
        self._live: Live | None = None

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

    def log_request(self, method: str, target_url: str) -> None:
        """Log a request about to be forwarded upstream."""
        with self._lock:
            self._counts["forwarded"] += 1
            self._requests.insert(0, RequestInfo(method, target_url, datetime.now()))
            self._requests = self._requests[: self._max_requests]
            self._refresh()
            write_cli_log("PROXY", f"{method} {target_url}")

    def log_response(self, method: str, target_url: str, status: int) -> None:
        """Record the upstream status for the most recent matching request."""
        with self._lock:
            for info in self._requests:
                if info.status is None and info.method == method and info.url == target_url:
                    info.status = status
                    break
            self._refresh()
            write_cli_log("RESPONSE", f"{method} {target_url}", status=status)

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            if status == 403:
                self._counts["blocked"] += 1
            else:
                self._counts["failed"] += 1
            truncated = message[:60] + "..." if len(message) > 60 else message
            self._errors.insert(0, f"{route} {status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log("ERROR", message[:200], route=route, status=status)

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
        stats.append("Scalar Proxy", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Forwarded: {self._counts['forwarded']}", style="green")
        stats.append("  |  ")
        stats.append(f"Blocked: {self._counts['blocked']}", style="yellow")
        stats.append("  |  ")
        stats.append(f"Failed: {self._counts['failed']}", style="red")
        stats.append("  |  ")
        stats.append(f"Port: {self.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_requests_panel(self) -> Panel:
        """Build the recent requests panel."""
        if self._requests:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Method", width=8)
            table.add_column("Status", width=6)
            table.add_column("Target", ratio=1)

            for info in self._requests:
                status = str(info.status) if info.status is not None else "..."
                style = "red" if info.status and info.status >= 400 else ""
                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.method,
                    Text(status, style=style),
                    Text(info.display_url),
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[green]Proxied Requests[/green]", border_style="green")

    def _build_footer(self) -> Panel:
        """Build footer with errors and the docs location."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            content = Text(
                f"Docs: http://localhost:{self.port}{self.config.doc_path}\n"
                f"Spec: {self.config.api_spec_url}",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
