from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Tuple

import numpy as np
from numpy.random import default_rng

from triearray import PersistentArray, from_sequence
from triearray.logging import get_logger

LOGGER = get_logger("cli.bench")


@dataclass(frozen=True)
class OperationBenchmarkResult:
    operation: str
    operations: int
    elapsed_seconds: float
    operations_per_second: float

    def as_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation,
            "operations": self.operations,
            "elapsed_seconds": self.elapsed_seconds,
            "operations_per_second": self.operations_per_second,
        }


def _timed(operation: str, count: int, body: Callable[[], Any]) -> Tuple[Any, OperationBenchmarkResult]:
    start = time.perf_counter()
    outcome = body()
    elapsed = time.perf_counter() - start
    throughput = count / elapsed if elapsed > 0 else float("inf")
    LOGGER.debug("%s: %d operations in %.6fs", operation, count, elapsed)
    return outcome, OperationBenchmarkResult(
        operation=operation,
        operations=count,
        elapsed_seconds=elapsed,
        operations_per_second=throughput,
    )


def run_operation_benchmark(
    *,
    size: int,
    operations: int,
    seed: int,
    bits: int | None = None,
) -> Tuple[PersistentArray, Tuple[OperationBenchmarkResult, ...]]:
    """Time the core operations on an array of `size` generated integers."""

    if size < 1:
        raise ValueError("size must be positive")
    if operations < 0:
        raise ValueError("operations must be non-negative")

    rng = default_rng(seed)
    values = rng.integers(0, 1_000_000, size=size, dtype=np.int64).tolist()
    indices = rng.integers(0, size, size=operations, dtype=np.int64).tolist()

    base, build = _timed("from_sequence", size, lambda: from_sequence(values, bits=bits))

    def _append() -> PersistentArray:
        arr = base
        for value in range(operations):
            arr = arr.append(value)
        return arr

    def _prepend() -> PersistentArray:
        arr = base
        for value in range(operations):
            arr = arr.prepend(value)
        return arr

    def _set() -> PersistentArray:
        arr = base
        for position, index in enumerate(indices):
            arr = arr.set(index, position)
        return arr

    def _get() -> int:
        total = 0
        for index in indices:
            total += base.get(index)
        return total

    _, append = _timed("append", operations, _append)
    prepended, prepend = _timed("prepend", operations, _prepend)
    _, set_result = _timed("set", operations, _set)
    _, get = _timed("get", operations, _get)
    _, fold = _timed("fold", prepended.length, lambda: prepended.fold(lambda acc, _: acc + 1, 0))

    return prepended, (build, append, prepend, set_result, get, fold)


__all__ = ["OperationBenchmarkResult", "run_operation_benchmark"]
