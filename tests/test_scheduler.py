"""
Tests for the scheduling plans.
"""

import asyncio
import threading
import time

import pytest

from albumdata import scheduler
from albumdata.errors import InvalidInputError
from albumdata.scheduler import Plan, current_plan, map_albums, plan, resolve_strategy, worker_count


def test_default_plan_is_sequential():
    assert current_plan().strategy == "sequential"


@pytest.mark.parametrize(
    "name,expected",
    [("default", "threads"), ("THREADS", "threads"), ("asyncio", "asyncio"), ("sequential", "sequential")],
)
def test_resolve_strategy(name, expected):
    assert resolve_strategy(name) == expected


def test_resolve_unknown_strategy():
    with pytest.raises(InvalidInputError, match="Unknown concurrency strategy"):
        resolve_strategy("multiprocess")


def test_plan_restores_previous():
    before = current_plan()
    with plan("threads", max_workers=3) as active:
        assert current_plan() == active == Plan("threads", 3)
        with plan("asyncio"):
            assert current_plan().strategy == "asyncio"
        assert current_plan() == active
    assert current_plan() == before


def test_plan_restores_on_error():
    before = current_plan()
    with pytest.raises(RuntimeError):
        with plan("threads"):
            raise RuntimeError("stage failed")
    assert current_plan() == before


def test_worker_count():
    assert worker_count(Plan("threads", 8), 3) == 3
    assert worker_count(Plan("threads", 2), 10) == 2
    assert worker_count(Plan("threads", None), 1) == 1


def test_sequential_runs_in_caller_thread():
    threads = []
    map_albums(lambda x: threads.append(threading.current_thread()), [(1,), (2,)])
    assert set(threads) == {threading.current_thread()}


@pytest.mark.parametrize("strategy", ["threads", "asyncio"])
def test_results_keep_input_order(strategy):
    def work(delay, value):
        time.sleep(delay)
        return value

    with plan(strategy, max_workers=3):
        results = map_albums(work, [(0.05, "a"), (0.0, "b"), (0.02, "c")])

    assert results == ["a", "b", "c"]


@pytest.mark.parametrize("strategy", ["threads", "asyncio"])
def test_parallel_uses_worker_threads(strategy):
    names = []
    lock = threading.Lock()

    def work(value):
        with lock:
            names.append(threading.current_thread().name)
        return value

    with plan(strategy, max_workers=2):
        map_albums(work, [(1,), (2,), (3,)])

    assert all(name.startswith("albumdata") for name in names)


def test_empty_items():
    with plan("threads"):
        assert map_albums(lambda x: x, []) == []


def test_worker_exception_propagates():
    def work(value):
        raise ValueError(value)

    with plan("threads"):
        with pytest.raises(ValueError):
            map_albums(work, [("bad",)])
    assert scheduler.current_plan().strategy == "sequential"


def test_plan_is_local_to_each_thread():
    seen = {}
    inside = threading.Event()
    release = threading.Event()

    def run_with_plan():
        with plan("threads", max_workers=4):
            inside.set()
            release.wait(timeout=5)
            seen["worker"] = current_plan()

    worker = threading.Thread(target=run_with_plan)
    worker.start()
    assert inside.wait(timeout=5)
    seen["main"] = current_plan()
    release.set()
    worker.join(timeout=5)

    assert seen["main"] == Plan()
    assert seen["worker"] == Plan("threads", 4)


def test_asyncio_strategy_inside_running_loop():
    async def run():
        with plan("asyncio"):
            pass

    with pytest.raises(InvalidInputError, match="running event loop"):
        asyncio.run(run())
    assert current_plan() == Plan()


def test_threads_strategy_inside_running_loop():
    async def run():
        with plan("threads", max_workers=2):
            return map_albums(lambda x: x * 2, [(1,), (2,)])

    assert asyncio.run(run()) == [2, 4]


def test_invalid_worker_count():
    with pytest.raises(InvalidInputError, match="max_workers"):
        with plan("threads", max_workers=0):
            pass
