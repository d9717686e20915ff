"""
Timing Utilities.

Used to attach per-step durations (synthesis, upload) to log lines and
to SpeechResult.timings.

Example Usage:
    with timeit("upload") as t:
        s3.put_object(...)
    print(f"Took {t.timing.seconds:.3f}s")
"""
from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter


@dataclass
class Timing:
    """
    Timing measurement result.

    Attributes:
        name: Identifier for what was timed (e.g., "synthesis", "upload").
        seconds: Duration in seconds.
    """
    name: str
    seconds: float


class timeit:
    """
    Context manager for timing code blocks.

    The timing is recorded even when the block raises, so a failed
    attempt still reports how long it took.
    """

    def __init__(self, name: str):
        self.name = name
        self._t0: float | None = None
        self.timing: Timing | None = None

    def __enter__(self) -> "timeit":
        self._t0 = perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        t1 = perf_counter()
        assert self._t0 is not None
        self.timing = Timing(name=self.name, seconds=(t1 - self._t0))

    @property
    def seconds(self) -> float:
        """Elapsed seconds, 0.0 until the block has exited."""
        return self.timing.seconds if self.timing is not None else 0.0
