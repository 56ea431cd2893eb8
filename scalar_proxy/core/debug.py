"""Debug tracing, printed only when DEBUG is 'true' or '1'."""

import os
from typing import Any

from rich.console import Console
from rich.markup import escape

console = Console(stderr=True)


def is_debug_enabled() -> bool:
    return os.environ.get("DEBUG") in ("true", "1")


def debug(message: str, *args: Any) -> None:
    """Print a [DEBUG] trace line when debug tracing is enabled."""
    if not is_debug_enabled():
        return
    extra = " ".join(str(arg) for arg in args)
    line = f"{message} {extra}" if extra else message
    console.print(f"[dim][DEBUG][/dim] {escape(line)}", highlight=False)
