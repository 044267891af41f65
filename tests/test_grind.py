import random

import pytest

from minialloc.grind import main, run_benchmarks
from minialloc.heap import Heap


@pytest.mark.parametrize("seed", [0, 1, 7, 42])
def test_workloads_run_in_order_and_leave_heap_clean(seed):
    heap = Heap()
    timings = run_benchmarks(heap, random.Random(seed), 120)
    assert list(timings) == ["Task 1", "Task 2", "Task 3", "Test 4", "Test 5"]
    assert all(seconds >= 0 for seconds in timings.values())
    assert heap.leaks() == []
    assert len(list(heap.chunks())) == 1


def test_too_many_operations_exhaust_the_heap():
    with pytest.raises(MemoryError):
        run_benchmarks(Heap(), random.Random(3), 1000)


def test_main_prints_one_line_per_workload(capsys):
    assert main(["--seed", "5"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert [line.split(" Time:")[0] for line in lines] == [
        "Task 1",
        "Task 2",
        "Task 3",
        "Test 4",
        "Test 5",
    ]
    assert all(line.endswith(" seconds") for line in lines)


def test_main_with_fewer_operations(capsys):
    assert main(["--operations", "10", "--seed", "2"]) == 0
    out = capsys.readouterr().out
    assert "leaked" not in out
    assert out.count("Time:") == 5