"""Small async orchestration helpers (fan-out + concurrency limits)."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

from framework.errors import AggregateFailure, InvalidArgument
from framework.schemas import FailedItem

T = TypeVar("T")
U = TypeVar("U")

logger = logging.getLogger(__name__)


@dataclass
class _RunState:
    """Bookkeeping for one call; only touched between awaits."""

    total: int
    limit: int
    results: list[Any] = field(init=False)
    failures: list[FailedItem] = field(default_factory=list)
    in_flight: int = 0
    next_index: int = 0
    completed: int = 0

    def __post_init__(self) -> None:
        self.results = [None] * self.total


def ensure_sequence(value: Any, name: str = "items") -> None:
    """Reject anything that is not an ordered, indexable sequence of items."""
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
        raise InvalidArgument(f"{name} must be a sequence")


def ensure_positive_int(value: Any, name: str = "concurrency") -> None:
    """Reject bools, floats and anything below one."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidArgument(f"{name} must be a positive integer")


async def map_with_limit(
    items: Sequence[U],
    worker: Callable[[U], Awaitable[T]],
    concurrency: int,
    label: str = "tasks",
) -> list[T]:
    """Run worker(item) across items with at most `concurrency` in flight.

    Preserves input order. Items are admitted in input order through a single
    cursor; every completion frees one slot and admits at most one new item.

    A worker that raises before returning an awaitable is treated the same as
    one whose awaitable raises. Failures never stop the run: once every item
    has settled, either the full result list is returned or AggregateFailure
    is raised with every (index, error) pair in completion order.

    Raises InvalidArgument before any worker call for a malformed call.
    """
    ensure_sequence(items, "items")
    ensure_positive_int(concurrency, "concurrency")
    if not callable(worker):
        raise InvalidArgument("worker must be callable")

    if len(items) == 0:
        return []

    state = _RunState(total=len(items), limit=min(concurrency, len(items)))
    loop = asyncio.get_running_loop()
    outcome: asyncio.Future[list[T]] = loop.create_future()
    tasks: set[asyncio.Task] = set()

    logger.debug(f"fan-out start label={label} n={state.total} limit={state.limit}")

    def _admit() -> None:
        while state.in_flight < state.limit and state.next_index < state.total:
            idx = state.next_index
            state.next_index += 1
            state.in_flight += 1
            logger.debug(f"fan-out admit label={label} idx={idx} in_flight={state.in_flight}")
            task = loop.create_task(_execute(idx))
            tasks.add(task)
            task.add_done_callback(tasks.discard)

    async def _execute(idx: int) -> None:
        try:
            value = worker(items[idx])
            if inspect.isawaitable(value):
                value = await value
            state.results[idx] = value
        except (Exception, asyncio.CancelledError) as e:
            # A cancelled worker is a failed item; nothing cancels the run itself.
            logger.warning(f"fan-out item failed label={label} idx={idx} error={e!r}")
            state.failures.append(FailedItem(index=idx, error=e))
        except BaseException as e:
            if not outcome.done():
                outcome.set_exception(e)
            raise
        finally:
            state.in_flight -= 1
            state.completed += 1
            if state.completed == state.total:
                _finish()
            else:
                _admit()

    def _finish() -> None:
        # The caller may have stopped waiting; in-flight work still settles.
        if outcome.done():
            return
        if state.failures:
            error = AggregateFailure(state.failures, state.total, label=label)
            logger.info(f"fan-out finished label={label}: {error}")
            outcome.set_exception(error)
        else:
            outcome.set_result(state.results)

    _admit()
    return await outcome


async def gather_with_limit(
    awaitables: Sequence[Awaitable[T]],
    concurrency: int,
    label: str = "tasks",
) -> list[T]:
    """Await pre-built awaitables with an upper bound on in-flight tasks.

    Preserves input order. Coroutines are not started until admitted.
    """

    async def _await(aw: Awaitable[T]) -> T:
        return await aw

    return await map_with_limit(awaitables, _await, concurrency, label=label)
