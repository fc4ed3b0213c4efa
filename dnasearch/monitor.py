"""Resource sampling for search calls.

A monitor is created by the caller and handed to `search`; searches only read
the latest sample, so concurrent searches with separate monitors never share
state.
"""
import os
import threading
import time
from collections import deque
from typing import Deque, List, Optional

import psutil

from .models import ResourceSample


def get_memory_usage() -> float:
    """Current resident set size of this process in MiB."""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


class ResourceMonitor:
    """Periodic memory/CPU sampler running on its own daemon thread."""

    def __init__(self, algorithm: str = "", interval: float = 0.05, max_samples: int = 100):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        if max_samples < 1:
            raise ValueError(f"max_samples must be at least 1, got {max_samples}")
        self.algorithm = algorithm
        self.interval = interval
        self._process = psutil.Process(os.getpid())
        self._samples: Deque[ResourceSample] = deque(maxlen=max_samples)
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        # first cpu_percent() call only primes the counter
        self._process.cpu_percent(interval=None)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def sample(self) -> ResourceSample:
        """Take one reading now and keep it."""
        reading = ResourceSample(
            timestamp=time.time(),
            memory_usage=self._process.memory_info().rss / 1024 / 1024,
            cpu_usage=self._process.cpu_percent(interval=None),
            algorithm=self.algorithm,
        )
        with self._lock:
            self._samples.append(reading)
        return reading

    def _run(self):
        while not self._stop_event.is_set():
            self.sample()
            self._stop_event.wait(self.interval)

    def start(self) -> 'ResourceMonitor':
        """Start sampling; a second call while running is a no-op."""
        if self.running:
            return self
        self._stop_event.clear()
        with self._lock:
            self._samples.clear()
        self._thread = threading.Thread(
            target=self._run, name=f"resource-monitor-{self.algorithm or 'search'}", daemon=True
        )
        self._thread.start()
        return self

    def stop(self) -> List[ResourceSample]:
        """Stop sampling and return the collected samples."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        return self.samples()

    def latest(self) -> Optional[ResourceSample]:
        with self._lock:
            return self._samples[-1] if self._samples else None

    def samples(self) -> List[ResourceSample]:
        with self._lock:
            return list(self._samples)

    def __enter__(self) -> 'ResourceMonitor':
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False
