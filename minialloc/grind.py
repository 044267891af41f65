"""Timing workloads for the simulated heap allocator."""

from __future__ import annotations

import argparse
import os
import random
import sys
import time
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .heap import Heap

DEFAULT_OPERATIONS = 120
MIXED_ALLOCATIONS = 64


def _site() -> Tuple[str, int]:
    frame = sys._getframe(1)
    return os.path.basename(frame.f_code.co_filename), frame.f_lineno


def _churn(heap: Heap, rng: random.Random, count: int, pick_size: Callable[[], int]) -> None:
    """Randomly allocate or free until ``count`` allocations were made, then free the rest."""
    live: List[int] = []
    allocated = 0
    while allocated < count:
        if rng.randrange(2) == 0 or not live:
            live.append(heap.malloc(pick_size(), *_site()))
            allocated += 1
        else:
            index = rng.randrange(len(live))
            heap.free(live[index], *_site())
            live[index] = live[-1]
            live.pop()
    while live:
        heap.free(live.pop(), *_site())


def _one_at_a_time(heap: Heap, operations: int) -> None:
    for _ in range(operations):
        heap.free(heap.malloc(1, *_site()), *_site())


def _all_then_free(heap: Heap, operations: int) -> None:
    ptrs = [heap.malloc(1, *_site()) for _ in range(operations)]
    for ptr in ptrs:
        heap.free(ptr, *_site())


def _mixed_sizes(heap: Heap, operations: int) -> None:
    for _ in range(operations):
        small = heap.malloc(1, *_site())
        medium = heap.malloc(10, *_site())
        large = heap.malloc(100, *_site())
        heap.free(small, *_site())
        heap.free(medium, *_site())
        heap.free(large, *_site())


def run_benchmarks(
    heap: Heap, rng: random.Random, operations: int = DEFAULT_OPERATIONS
) -> Dict[str, float]:
    """Run the five workloads on ``heap`` and return seconds taken by each, in order."""
    workloads: List[Tuple[str, Callable[[], None]]] = [
        ("Task 1", lambda: _one_at_a_time(heap, operations)),
        ("Task 2", lambda: _all_then_free(heap, operations)),
        ("Task 3", lambda: _churn(heap, rng, operations, lambda: 1)),
        ("Test 4", lambda: _mixed_sizes(heap, operations)),
        (
            "Test 5",
            lambda: _churn(
                heap, rng, MIXED_ALLOCATIONS, lambda: 24 if rng.randrange(2) == 0 else 56
            ),
        ),
    ]
    timings: Dict[str, float] = {}
    for name, workload in workloads:
        start = time.perf_counter()
        workload()
        timings[name] = time.perf_counter() - start
    return timings


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the workloads and print how long each took."""
    parser = argparse.ArgumentParser(description="Time allocation workloads on a simulated heap.")
    parser.add_argument("--operations", type=int, default=DEFAULT_OPERATIONS)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    heap = Heap()
    rng = random.Random(args.seed)
    for name, seconds in run_benchmarks(heap, rng, args.operations).items():
        print(f"{name} Time: {seconds:f} seconds")
    report = heap.leak_report()
    if report:
        print(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())