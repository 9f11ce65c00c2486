"""
Rough and messy basic benchmarking code, measuring the per-item overhead of the adaptors
against iteration of a plain list iterator.

Note that HintSize allocates a fresh SizeHint on every step, while ExactLen only decrements a counter.
Prints one line per case, in ns per item, as "<ns>ns/item <label> (<nitems> items)".
"""

import random
from time import time, perf_counter

from typing import Any, Callable, Iterator, List

from size_hinter import ExactLen, HintSize, SequenceIter, next_back

def _rand_ints(nvals: int, seed: int = 0) -> List[int]:
    random.seed(seed)
    return [random.randrange(-1_000_000, 1_000_000) for _ in range(nvals)]

def _consume(it: Iterator[Any]) -> None:
    for _ in it:
        pass

def _consume_back(it: Any) -> None:
    while next_back(it, None) is not None:
        pass

def benchmark(label: str, make: Callable[[List[int]], Any], nitems: int, seed: int = 0, *,
              consume: Callable[[Any], None] = _consume) -> None:
    vals = _rand_ints(nitems, seed=seed)
    it = make(vals)
    start = perf_counter()
    consume(it)
    end = perf_counter()
    ns = (end-start)*1e9/nitems
    print(f"{ns:5.1f}ns/item {label} ({nitems} items)")

if __name__ == "__main__":
    benchmark("iter", iter, 100_000, seed=int(time()))
    benchmark("SequenceIter", SequenceIter, 100_000, seed=int(time()))
    benchmark("SequenceIter next_back", SequenceIter, 100_000, seed=int(time()), consume=_consume_back)
    benchmark("HintSize", lambda vals: HintSize.new(vals, len(vals), len(vals)), 100_000, seed=int(time()))
    benchmark("HintSize hide", HintSize.hide, 100_000, seed=int(time()))
    benchmark("ExactLen", lambda vals: ExactLen.new(vals, len(vals)), 100_000, seed=int(time()))
    benchmark("ExactLen rev", lambda vals: reversed(ExactLen.new(vals, len(vals))), 100_000, seed=int(time()))
