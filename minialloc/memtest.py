"""Correctness checks for the simulated heap allocator."""

from __future__ import annotations

import argparse
import enum
import os
import sys
from typing import Iterator, Optional, Sequence, Tuple

from .heap import HEADER_SIZE, Heap, InappropriatePointerError

OBJECTS = 64


class ErrorCase(enum.IntEnum):
    """Misuse to provoke after the regular checks."""

    INAPPROPRIATE_POINTER = 0
    DOUBLE_FREE = 1
    LEAK = 2


def _site() -> Tuple[str, int]:
    frame = sys._getframe(1)
    return os.path.basename(frame.f_code.co_filename), frame.f_lineno


def run_checks(
    heap: Heap, error_case: Optional[ErrorCase] = ErrorCase.INAPPROPRIATE_POINTER
) -> Iterator[str]:
    """Exercise ``heap`` and yield progress lines.

    Raises MemoryError if the objects cannot be allocated and
    InappropriatePointerError for the pointer misuse cases.
    """
    objsize = heap.size // OBJECTS - HEADER_SIZE

    objects = []
    for i in range(OBJECTS):
        try:
            ptr = heap.malloc(objsize, *_site())
        except MemoryError as exc:
            raise MemoryError(f"{exc}\nUnable to allocate object {i}") from exc
        objects.append(ptr)
        yield f"malloc address is {ptr:#x}"

    for i, ptr in enumerate(objects):
        heap.buffer(ptr, objsize)[:] = bytes([i]) * objsize

    errors = 0
    for i, ptr in enumerate(objects):
        for j, value in enumerate(heap.buffer(ptr, objsize)):
            if value != i:
                errors += 1
                yield f"Object {i} byte {j} incorrect: {value}"

    for ptr in objects:
        heap.free(ptr, *_site())
    yield f"{errors} incorrect bytes"

    heap.free(heap.malloc(64, *_site()), *_site())
    yield "Task2 PASS!!!"

    half = heap.size // 2 - HEADER_SIZE
    first = heap.malloc(half, *_site())
    second = heap.malloc(half, *_site())
    heap.free(first, *_site())
    heap.free(second, *_site())
    heap.free(heap.malloc(heap.size - HEADER_SIZE, *_site()), *_site())
    yield "Congratulation!! Task3 PASS"

    if error_case == ErrorCase.INAPPROPRIATE_POINTER:
        heap.free(heap.malloc(10, *_site()) + 1, *_site())
    elif error_case == ErrorCase.DOUBLE_FREE:
        ptr = heap.malloc(heap.size - HEADER_SIZE, *_site())
        heap.free(ptr, *_site())
        heap.free(ptr, *_site())
    elif error_case == ErrorCase.LEAK:
        heap.malloc(64, *_site())


_CASE_NAMES = {case.name.lower().replace("_", "-"): case for case in ErrorCase}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the checks, print their output and any leaks; return the exit status."""
    parser = argparse.ArgumentParser(description="Check the simulated heap allocator.")
    parser.add_argument(
        "--error-case",
        choices=[*_CASE_NAMES, "none"],
        default="inappropriate-pointer",
    )
    args = parser.parse_args(argv)
    error_case = _CASE_NAMES.get(args.error_case)

    heap = Heap()
    status = 0
    try:
        for line in run_checks(heap, error_case):
            print(line)
    except InappropriatePointerError as exc:
        print(exc)
        status = 2
    except MemoryError as exc:
        print(exc)
        status = 1
    report = heap.leak_report()
    if report:
        print(report)
    return status


if __name__ == "__main__":
    sys.exit(main())