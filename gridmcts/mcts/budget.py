"""Stopping predicate shared by both search drivers."""

from __future__ import annotations

import time


class SearchBudget:
    """Iteration budget with an optional wall-clock cap.

    Checked only between iterations, so an iteration that has started
    always completes.
    """

    def __init__(self, max_iterations: int, time_budget_ms: float | None = None) -> None:
        self.max_iterations = max_iterations
        self.time_budget_ms = time_budget_ms
        self._start = time.perf_counter()

    def start(self) -> None:
        """Reset the wall-clock origin."""
        self._start = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        """Milliseconds since start()."""
        return (time.perf_counter() - self._start) * 1000.0

    def exhausted(self, iterations: int) -> bool:
        """Whether the search should stop after ``iterations`` completed iterations."""
        if iterations >= self.max_iterations:
            return True
        return self.time_budget_ms is not None and self.elapsed_ms >= self.time_budget_ms
