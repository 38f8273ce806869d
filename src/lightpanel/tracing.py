from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class EliminationTracer(Protocol):
    """Receives elimination events. Must not touch the matrix."""

    def on_pivot(self, row: int, col: int) -> None: ...
    def on_swap(self, row_a: int, row_b: int) -> None: ...
    def on_xor(self, target_row: int, source_row: int, col: int) -> None: ...
    def on_free(self, col: int) -> None: ...


class LoggingTracer:
    """Writes every elimination step to the log at DEBUG level."""

    def __init__(self, log: logging.Logger | None = None):
        self.log = log or logger

    def on_pivot(self, row: int, col: int) -> None:
        self.log.debug("pivot: row %d -> column %d", row, col)

    def on_swap(self, row_a: int, row_b: int) -> None:
        self.log.debug("swap rows %d and %d", row_a, row_b)

    def on_xor(self, target_row: int, source_row: int, col: int) -> None:
        self.log.debug(
            "row %d ^= row %d (clears column %d)", target_row, source_row, col
        )

    def on_free(self, col: int) -> None:
        self.log.debug("column %d has no pivot (free)", col)


class RecordingTracer:
    """Keeps events as tuples, e.g. ("pivot", row, col); picklable, see replay()."""

    def __init__(self):
        self.events: list[tuple] = []

    def on_pivot(self, row: int, col: int) -> None:
        self.events.append(("pivot", row, col))

    def on_swap(self, row_a: int, row_b: int) -> None:
        self.events.append(("swap", row_a, row_b))

    def on_xor(self, target_row: int, source_row: int, col: int) -> None:
        self.events.append(("xor", target_row, source_row, col))

    def on_free(self, col: int) -> None:
        self.events.append(("free", col))


def replay(events, tracer: EliminationTracer) -> None:
    """Feed recorded events to another tracer, e.g. a LoggingTracer."""
    for kind, *args in events:
        getattr(tracer, f"on_{kind}")(*args)
