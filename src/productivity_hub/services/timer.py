"""Pomodoro countdown with work, short-break and long-break modes."""

from __future__ import annotations

import logging
import sys
import threading
from functools import partial
from typing import Any, Callable, Dict, Optional, Protocol, TextIO

from ..domain import TimerMode, TimerSettings

logger = logging.getLogger(__name__)

TICK_SECONDS = 1.0


class Notifier(Protocol):
    def notify(self, mode: TimerMode) -> None:
        """Signal that ``mode`` just ran out."""


class Ticker(Protocol):
    @property
    def running(self) -> bool: ...

    def start(self, callback: Callable[[], None]) -> None: ...

    def stop(self) -> None: ...


class NullNotifier:
    def notify(self, mode: TimerMode) -> None:
        return None


class TerminalBellNotifier:
    """Rings the terminal bell when a mode completes."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    def notify(self, mode: TimerMode) -> None:
        stream = self._stream or sys.stdout
        stream.write("\a")
        stream.flush()


class IntervalTicker:
    """Calls ``callback`` every ``interval`` seconds on a daemon thread until stopped."""

    def __init__(self, interval: float = TICK_SECONDS) -> None:
        self._interval = interval
        self._thread: Optional[threading.Thread] = None
        self._stopped = threading.Event()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stopped.is_set()

    def start(self, callback: Callable[[], None]) -> None:
        if self.running:
            return
        stopped = threading.Event()
        self._stopped = stopped
        self._thread = threading.Thread(
            target=self._run,
            args=(callback, stopped),
            name="pomodoro-tick",
            daemon=True,
        )
        self._thread.start()

    def _run(self, callback: Callable[[], None], stopped: threading.Event) -> None:
        while not stopped.wait(self._interval):
            callback()

    def stop(self) -> None:
        # No join: a callback may be blocked on a lock held by the caller.
        self._stopped.set()
        self._thread = None


def format_time(seconds: int) -> str:
    minutes, secs = divmod(max(int(seconds), 0), 60)
    return f"{minutes:02d}:{secs:02d}"


class PomodoroTimer:
    def __init__(
        self,
        settings: Optional[TimerSettings] = None,
        *,
        ticker: Optional[Ticker] = None,
        notifier: Optional[Notifier] = None,
        on_change: Optional[Callable[["PomodoroTimer"], None]] = None,
    ) -> None:
        self._settings = settings or TimerSettings()
        self._ticker = ticker or IntervalTicker()
        self._notifier = notifier or NullNotifier()
        self._on_change = on_change
        self._lock = threading.RLock()
        self._mode = TimerMode.WORK
        self._remaining = self._settings.work_duration
        self._active = False
        self._completed_sessions = 0
        self._run_id = 0

    # State -------------------------------------------------------------------

    @property
    def settings(self) -> TimerSettings:
        return self._settings

    @property
    def mode(self) -> TimerMode:
        return self._mode

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def completed_sessions(self) -> int:
        return self._completed_sessions

    def duration_for(self, mode: TimerMode) -> int:
        if mode is TimerMode.WORK:
            return self._settings.work_duration
        if mode is TimerMode.SHORT_BREAK:
            return self._settings.short_break_duration
        return self._settings.long_break_duration

    @property
    def total_time(self) -> int:
        return self.duration_for(self._mode)

    @property
    def progress(self) -> float:
        total = self.total_time
        return (total - self._remaining) / total * 100 if total else 0.0

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "mode": self._mode.value,
                "mode_label": self._mode.label,
                "remaining": self._remaining,
                "display": format_time(self._remaining),
                "total_time": self.total_time,
                "progress": round(self.progress, 2),
                "is_active": self._active,
                "completed_sessions": self._completed_sessions,
            }

    # Controls ----------------------------------------------------------------

    def start(self) -> None:
        with self._lock:
            if self._active:
                return
            self._active = True
            self._run_id += 1
            self._ticker.start(partial(self._advance, self._run_id))
        self._changed()

    def pause(self) -> None:
        with self._lock:
            if not self._active:
                return
            self._active = False
            self._ticker.stop()
        self._changed()

    def toggle(self) -> bool:
        if self._active:
            self.pause()
        else:
            self.start()
        return self._active

    def reset(self) -> None:
        """Stop the countdown and restore the full duration of the current mode."""

        with self._lock:
            self._active = False
            self._ticker.stop()
            self._remaining = self.duration_for(self._mode)
        self._changed()

    def apply_settings(self, settings: TimerSettings) -> None:
        """Use new durations; a running countdown keeps its remaining time."""

        with self._lock:
            self._settings = settings
            if not self._active:
                self._remaining = self.duration_for(self._mode)
        self._changed()

    def tick(self) -> None:
        self._advance(self._run_id)

    def _advance(self, run_id: int) -> None:
        # Ticks queued by an earlier start are dropped.
        with self._lock:
            if not self._active or run_id != self._run_id:
                return
            self._remaining -= 1
            if self._remaining <= 0:
                self._remaining = 0
                self._complete()
        self._changed()

    def close(self) -> None:
        with self._lock:
            self._active = False
            self._ticker.stop()

    # Transitions -------------------------------------------------------------

    def _complete(self) -> None:
        finished = self._mode
        self._active = False
        self._ticker.stop()
        try:
            self._notifier.notify(finished)
        except Exception:  # noqa: BLE001
            logger.warning("Completion notification failed", exc_info=True)

        if finished is TimerMode.WORK:
            self._completed_sessions += 1
            if self._completed_sessions % self._settings.sessions_until_long_break == 0:
                self._mode = TimerMode.LONG_BREAK
            else:
                self._mode = TimerMode.SHORT_BREAK
        else:
            self._mode = TimerMode.WORK
        self._remaining = self.duration_for(self._mode)
        logger.info("%s finished; next up: %s", finished.label, self._mode.label)

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self)
