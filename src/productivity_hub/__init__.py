"""Productivity Hub: pomodoro timer, to-do list and study-spot finder with optional cloud sync."""

from __future__ import annotations

from .services import ServiceContext as ServiceContext

__all__ = ["ServiceContext", "main"]


def main() -> None:
    from .cli import main as cli_main

    cli_main()
