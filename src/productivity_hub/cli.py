from __future__ import annotations

import argparse
import logging
import time
from typing import Optional

from .bootstrap import configure_logging
from .config import get_settings
from .services import PomodoroTimer, ServiceContext, TerminalBellNotifier, format_time
from .services.http import run_local_server
from .services.mcp import run_mcp_server
from .services.timer import Ticker


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings().server
    parser = argparse.ArgumentParser(description="Productivity Hub command line interface.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    api_parser = subparsers.add_parser("api", help="Start the FastAPI server exposing the hub functions.")
    api_parser.add_argument("--host", default=settings.host)
    api_parser.add_argument("--port", type=int, default=settings.port)

    mcp_parser = subparsers.add_parser("mcp", help="Start the FastMCP server exposing the hub functions as tools.")
    mcp_parser.add_argument("--host", default=settings.host)
    mcp_parser.add_argument("--port", type=int, default=settings.mcp_port)

    timer_parser = subparsers.add_parser("timer", help="Run a pomodoro countdown in the terminal.")
    timer_parser.add_argument(
        "--auto-continue",
        action="store_true",
        help="Start the next mode automatically instead of exiting when one finishes.",
    )

    return parser


def _render(timer: PomodoroTimer) -> None:
    line = f"{timer.mode.label:<12} {format_time(timer.remaining)}  sessions: {timer.completed_sessions}"
    print(f"\r{line}", end="", flush=True)


def run_console_timer(
    *,
    auto_continue: bool = False,
    context: Optional[ServiceContext] = None,
    ticker: Optional[Ticker] = None,
) -> None:
    owns_context = context is None
    context = context or ServiceContext()
    context.start()
    timer = PomodoroTimer(
        context.timer_settings.get(),
        ticker=ticker,
        notifier=TerminalBellNotifier(),
        on_change=_render,
    )
    timer.start()
    try:
        while True:
            time.sleep(0.2)
            if timer.is_active:
                continue
            if not auto_continue:
                break
            timer.start()
    except KeyboardInterrupt:
        pass
    finally:
        timer.close()
        if owns_context:
            context.close()
        print()


def main() -> None:
    configure_logging()
    logging.getLogger(__name__).info("Productivity Hub CLI starting")
    parser = build_parser()
    args = parser.parse_args()

    if args.command == "api":
        run_local_server(host=args.host, port=args.port)
    elif args.command == "mcp":
        run_mcp_server(host=args.host, port=args.port)
    elif args.command == "timer":
        run_console_timer(auto_continue=args.auto_continue)
    else:  # pragma: no cover - argparse enforces choices
        parser.print_help()


if __name__ == "__main__":
    main()
