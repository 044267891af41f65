# minialloc

A small first-fit allocator that works on a fixed-size simulated byte heap
(4096 bytes by default). Each chunk carries an 8-byte header that holds its
size, whether it is free and the size of the chunk before it. Requests are
rounded up to multiples of 8. A free chunk that is too large gets split, and
when memory is freed it is merged with free neighbours on both sides.

Pointers are integer offsets of payloads within the heap.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Using the heap

```python
from minialloc.heap import Heap, InappropriatePointerError

heap = Heap(4096)
ptr = heap.malloc(10, "example.py", 1)      # payload offset
view = heap.buffer(ptr, 10)                 # writable memoryview of the payload
view[:] = b"0123456789"

for chunk in heap.chunks():                 # Chunk(offset, size, is_free, prev_size)
    print(chunk)

heap.free(ptr, "example.py", 2)

try:
    heap.free(ptr, "example.py", 3)         # double free
except InappropriatePointerError as exc:
    print(exc)                              # free: Inappropriate pointer (example.py:3)

print(heap.leaks())                         # chunks still allocated
print(heap.leak_report())                   # None when nothing is allocated
```

- `Heap(size)` takes a size that is a multiple of 8 between 16 and 32760;
  anything else raises `ValueError`.
- `malloc(size, file, line)` returns the payload offset of the first free
  chunk that is large enough. It raises `MemoryError` when no chunk fits and
  `ValueError` for a negative size. `file` and `line` only appear in error
  messages.
- `free(ptr, file, line)` raises `InappropriatePointerError` (a `ValueError`)
  for a pointer that was never handed out or that is already free.
- `buffer(ptr, length)` raises `InappropriatePointerError` for a pointer that
  is not a live allocation and `IndexError` when `length` exceeds the chunk's
  usable bytes.
- `leak_report()` returns a line such as
  `mymalloc: 16 bytes leaked in 1 objects.`, counting header bytes too.

`Chunk` also offers `payload`, `capacity` and `end` properties.

## Commands

Time five allocation workloads (one-at-a-time, batched, random churn, mixed
sizes, and a fragmentation run), then print a leak report if anything is left:

```
minialloc-grind [--operations N] [--seed SEED]
```

Check that allocations do not overlap, that freed memory can be used again,
and that adjacent free chunks get merged, then provoke one kind of misuse:

```
minialloc-memtest [--error-case {inappropriate-pointer,double-free,leak,none}]
```

The default error case, `inappropriate-pointer`, frees a pointer one byte past
an allocation, so the command prints the error and exits with status 2. A
double free does the same. With `leak`, it exits with status 0 and prints the
leak report. An allocation failure during the checks gives status 1.

From code, the same work is available as
`minialloc.grind.run_benchmarks(heap, rng, operations)`, which returns a
dictionary of seconds per workload, and
`minialloc.memtest.run_checks(heap, error_case)`, a generator of progress
lines that takes an `ErrorCase` member or `None`.

## What it does not do

The heap is a simulation held in a Python `bytearray`. It does not replace
Python's own memory management or allocate real process memory.