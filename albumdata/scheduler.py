"""
Scheduling of per-album work items.

The active plan decides how ``map_albums`` dispatches its work:
one call at a time, over a thread pool, or from an asyncio event loop that
hands the blocking calls to a thread pool. ``plan()`` installs a strategy for
the duration of a ``with`` block and always restores the previous one. The
plan lives in a context variable, so runs in different threads (or asyncio
tasks) each see their own plan.

Every ``map_albums`` call is a stage barrier: it returns only once all work
items finished, and the pool it created is shut down before it returns.
"""

import asyncio
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple

from .errors import InvalidInputError

logger = logging.getLogger("albumdata.scheduler")

STRATEGIES = ("sequential", "threads", "asyncio")
ALIASES = {"default": "threads"}


@dataclass(frozen=True)
class Plan:
    """Active scheduling strategy."""

    strategy: str = "sequential"
    max_workers: Optional[int] = None


_active_plan: ContextVar[Plan] = ContextVar("albumdata_plan", default=Plan())


def resolve_strategy(name: str) -> str:
    """Map a strategy name (or alias) to a known strategy."""
    key = (name or "default").strip().lower()
    key = ALIASES.get(key, key)
    if key not in STRATEGIES:
        raise InvalidInputError(
            f"Unknown concurrency strategy {name!r}; expected one of {sorted(STRATEGIES + tuple(ALIASES))}"
        )
    return key


def current_plan() -> Plan:
    """Return the plan currently in effect."""
    return _active_plan.get()


@contextmanager
def plan(strategy: str, max_workers: Optional[int] = None) -> Iterator[Plan]:
    """Install ``strategy`` for the enclosed block and restore the previous plan afterwards."""
    new_plan = Plan(strategy=resolve_strategy(strategy), max_workers=max_workers)
    if new_plan.strategy == "asyncio" and _loop_running():
        raise InvalidInputError(
            "The asyncio strategy cannot run inside a running event loop; use \"threads\" or call from a worker thread"
        )
    if max_workers is not None and max_workers < 1:
        raise InvalidInputError(f"max_workers must be at least 1, got {max_workers}")

    previous = _active_plan.get()
    token = _active_plan.set(new_plan)
    logger.debug("Scheduling plan %s (previous %s)", new_plan, previous)
    try:
        yield new_plan
    finally:
        _active_plan.reset(token)


def _loop_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def worker_count(active: Plan, n_items: int) -> int:
    """Pool size: the configured worker count or the CPU count, capped by the work."""
    workers = active.max_workers or os.cpu_count() or 1
    return max(1, min(workers, n_items))


def map_albums(func: Callable[..., Any], items: Sequence[Tuple[Any, ...]]) -> List[Any]:
    """Apply ``func(*item)`` to every item under the active plan.

    Results are returned in the order of ``items`` whatever order the work
    completed in.
    """
    items = list(items)
    if not items:
        return []

    active = current_plan()
    if active.strategy == "sequential":
        return [func(*item) for item in items]

    workers = worker_count(active, len(items))
    logger.debug("Dispatching %d work items on %d %s workers", len(items), workers, active.strategy)

    if active.strategy == "threads":
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="albumdata") as executor:
            futures = [executor.submit(func, *item) for item in items]
            return [future.result() for future in futures]

    return asyncio.run(_gather(func, items, workers))


async def _gather(func: Callable[..., Any], items: List[Tuple[Any, ...]], workers: int) -> List[Any]:
    loop = asyncio.get_running_loop()
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="albumdata") as executor:
        tasks = [loop.run_in_executor(executor, func, *item) for item in items]
        return list(await asyncio.gather(*tasks))
