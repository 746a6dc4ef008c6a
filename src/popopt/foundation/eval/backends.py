from __future__ import annotations

import os
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Callable, Sequence

import numpy as np

if TYPE_CHECKING:
    from . import Evaluable, EvaluationFunction


class CountDownLatch:
    """Blocks waiters until ``count_down()`` has been called ``count`` times."""

    def __init__(self, count: int) -> None:
        if count < 0:
            raise ValueError("count must be non-negative.")
        self._count = int(count)
        self._cond = threading.Condition()

    @property
    def count(self) -> int:
        with self._cond:
            return self._count

    def count_down(self) -> None:
        with self._cond:
            if self._count > 0:
                self._count -= 1
                if self._count == 0:
                    self._cond.notify_all()

    def wait(self, timeout: float | None = None) -> bool:
        with self._cond:
            return self._cond.wait_for(lambda: self._count == 0, timeout=timeout)


class ThreadedFitnessBackend:
    """
    Scores a population on a thread pool, one task per individual.

    The calling thread is held on a count-down latch until every task has
    finished; fitness writes go through a single lock. Exceptions raised by
    the evaluation function are re-raised on the calling thread, in
    population order, once the latch releases.

    Notes:
        - Threads suit evaluation functions that release the GIL (numpy, I/O,
          subprocesses). Pure-Python functions gain little from the pool.
    """

    def __init__(self, n_workers: int | None = None) -> None:
        self.n_workers = max(1, n_workers or os.cpu_count() or 1)
        self._executor: ThreadPoolExecutor | None = None
        self._write_lock = threading.Lock()

    def __enter__(self) -> "ThreadedFitnessBackend":
        self._executor = ThreadPoolExecutor(max_workers=self.n_workers, thread_name_prefix="popopt-eval")
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def evaluate(self, population: Sequence["Evaluable"], func: "EvaluationFunction", expected: int | None = None) -> None:
        if self._executor is None:
            raise RuntimeError("ThreadedFitnessBackend must be used as a context manager.")
        latch = CountDownLatch(len(population) if expected is None else expected)

        def task(individual: "Evaluable") -> None:
            try:
                value = func(individual.genotype)
                with self._write_lock:
                    individual.assign_fitness(value)
            finally:
                latch.count_down()

        futures = [self._executor.submit(task, individual) for individual in population]
        latch.wait()
        for fut in futures:
            fut.result()


def evaluate_rows(
    X: np.ndarray,
    func: Callable[[np.ndarray], float],
    executor: Executor | None = None,
) -> np.ndarray:
    """
    Score every row of ``X``; with an executor each row becomes a future.

    Results are gathered positionally, so completion order does not matter.
    """
    if executor is None:
        return np.asarray([func(row) for row in X], dtype=float)
    futures: list[Future] = [executor.submit(func, row) for row in X]
    return np.asarray([fut.result() for fut in futures], dtype=float)


__all__ = ["CountDownLatch", "ThreadedFitnessBackend", "evaluate_rows"]
