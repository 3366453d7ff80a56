"""
src/data/streaming.py
─────────────────────
Periodic tick scheduler for the live stream.

One worker thread per running stream calls `tick()` every `interval_ms`.
Ticks run back to back on that thread, so they can never overlap. Changing
the cadence stops (and joins) the current worker before a fresh one starts,
so no orphaned timer keeps mutating state. A failing tick is logged and
recorded in `last_error`; the loop keeps running.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from config.settings import settings

logger = logging.getLogger(__name__)

TICK_FAILURE_NOTICE = "An unexpected error occurred while updating devices."


class LiveStream:

    def __init__(
        self,
        tick: Callable[[], Any],
        interval_ms: int = settings.UPDATE_INTERVAL_MS,
        min_interval_ms: int = settings.MIN_INTERVAL_MS,
        max_interval_ms: int = settings.MAX_INTERVAL_MS,
    ):
        self._tick = tick
        self.min_interval_ms = min_interval_ms
        self.max_interval_ms = max_interval_ms
        self._interval_ms = self._validate(interval_ms)
        self._lock = threading.Lock()
        self._tick_lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._stop_event: threading.Event | None = None
        self.update_count = 0
        self.error_count = 0
        self.last_error: str | None = None

    def _validate(self, interval_ms: int) -> int:
        interval_ms = int(interval_ms)
        if not self.min_interval_ms <= interval_ms <= self.max_interval_ms:
            raise ValueError(
                f"interval must be within [{self.min_interval_ms}, {self.max_interval_ms}] ms, got {interval_ms}"
            )
        return interval_ms

    # ── State ─────────────────────────────────────────────────────────────────

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def updates_per_minute(self) -> int:
        return round(60_000 / self._interval_ms)

    # ── Control ───────────────────────────────────────────────────────────────

    def start(self) -> bool:
        """Start ticking. Returns False if already running."""
        with self._lock:
            if self.is_running:
                return False
            self._start_worker()
        logger.info("Live streaming started (%.1fs interval)", self._interval_ms / 1000)
        return True

    def stop(self) -> bool:
        """Suspend future ticks. An in-flight tick completes first."""
        with self._lock:
            if not self.is_running:
                return False
            self._stop_worker()
        logger.info("Live streaming stopped")
        return True

    def toggle(self) -> bool:
        """Start if stopped, stop if running. Returns the new running state."""
        with self._lock:
            running = not self.is_running
            if running:
                self._start_worker()
            else:
                self._stop_worker()
        logger.info("Live streaming %s", "started" if running else "stopped")
        return running

    def set_interval(self, interval_ms: int) -> None:
        """Change the cadence; a running stream is restarted on a fresh timer."""
        interval_ms = self._validate(interval_ms)
        with self._lock:
            self._interval_ms = interval_ms
            if self.is_running:
                self._stop_worker()
                self._start_worker()
        logger.info("Stream interval set to %.1fs", interval_ms / 1000)

    def clear_error(self) -> None:
        self.last_error = None

    def run_once(self) -> Any:
        """Run a single tick now (serialized against the worker)."""
        with self._tick_lock:
            result = self._tick()
            self.update_count += 1
            return result

    # ── Worker ────────────────────────────────────────────────────────────────

    def _start_worker(self) -> None:
        stop_event = threading.Event()
        interval_s = self._interval_ms / 1000
        thread = threading.Thread(
            target=self._run,
            args=(stop_event, interval_s),
            name="live-stream",
            daemon=True,
        )
        self._stop_event = stop_event
        self._thread = thread
        thread.start()

    def _stop_worker(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None
        self._stop_event = None

    def _run(self, stop_event: threading.Event, interval_s: float) -> None:
        while not stop_event.wait(interval_s):
            try:
                self.run_once()
            except Exception as exc:
                self.error_count += 1
                self.last_error = TICK_FAILURE_NOTICE
                logger.exception("Tick failed: %s", exc)


# ── Process-wide instance ─────────────────────────────────────────────────────

_STREAM: LiveStream | None = None


def initialize_stream(
    tick: Callable[[], Any],
    interval_ms: int = settings.UPDATE_INTERVAL_MS,
    autostart: bool = settings.AUTOSTART_STREAM,
) -> LiveStream:
    """Create the app's live stream, stopping any previous one first."""
    global _STREAM
    if _STREAM is not None:
        _STREAM.stop()
    _STREAM = LiveStream(tick, interval_ms=interval_ms)
    if autostart:
        _STREAM.start()
    return _STREAM


def get_stream() -> LiveStream | None:
    return _STREAM
