"""Errors raised by the fan-out runner."""

from __future__ import annotations

from framework.schemas import FailedItem


class InvalidArgument(ValueError):
    """Malformed call; raised before any worker is invoked."""


class AggregateFailure(Exception):
    """One or more items failed after every item in the run had settled.

    ``failed`` and ``errors`` are in completion order, not input order.
    Partial results of the run are not attached.
    """

    def __init__(self, failed: list[FailedItem], total: int, label: str = "tasks"):
        self.failed = list(failed)
        self.errors = [f.error for f in self.failed]
        self.total = total
        super().__init__(f"{len(self.failed)} of {total} {label} failed")

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    def failed_indices(self) -> set[int]:
        return {f.index for f in self.failed}
