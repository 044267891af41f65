"""A first-fit allocator over a fixed-size simulated byte heap, with a benchmark and a checker."""

__version__ = "0.1.0"
__all__ = ["heap", "grind", "memtest"]