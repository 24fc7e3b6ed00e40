"""A thread-safe in-memory cache whose entries expire after a fixed interval."""

from __future__ import annotations

import threading
import time


class Cache:
    """Maps keys to bytes, dropping entries older than ``interval`` seconds.

    Stale entries are removed on lookup and by a background reaper thread
    that runs until :meth:`close` is called.
    """

    def __init__(self, interval: float) -> None:
        if interval <= 0:
            raise ValueError("cache interval must be positive")
        self.interval = float(interval)
        self._entries: dict[str, tuple[float, bytes]] = {}
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        self._reaper = threading.Thread(target=self._reap_loop, daemon=True)
        self._reaper.start()

    def add(self, key: str, val: bytes) -> None:
        """Store ``val`` under ``key``."""
        with self._lock:
            self._entries[key] = (time.monotonic(), bytes(val))

    def get(self, key: str) -> bytes | None:
        """Return the value under ``key``, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            created_at, val = entry
            if time.monotonic() - created_at > self.interval:
                del self._entries[key]
                return None
            return val

    def close(self) -> None:
        """Stop the background reaper."""
        self._stopped.set()
        if self._reaper is not threading.current_thread():
            self._reaper.join()

    def __enter__(self) -> Cache:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _reap_loop(self) -> None:
        while not self._stopped.wait(self.interval):
            now = time.monotonic()
            with self._lock:
                self._entries = {
                    key: entry
                    for key, entry in self._entries.items()
                    if now - entry[0] <= self.interval
                }