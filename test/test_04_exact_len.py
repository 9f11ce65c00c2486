# pylint: disable = missing-docstring

import operator
from typing import Any, List, Optional, Tuple

import pytest

from size_hinter import (
    ExactLen,
    InvalidSizeHint,
    SequenceIter,
    SizeHintContractError,
    exact_len,
    hide_size,
)
from size_hinter.testing import TestIterator

_TEST_ITER = range(1, 5)
_TEST_LEN = 4


def test_initial_state() -> None:
    it = ExactLen.new(_TEST_ITER, _TEST_LEN)
    assert len(it) == _TEST_LEN
    assert it.length == _TEST_LEN
    assert it.size_hint() == (_TEST_LEN, _TEST_LEN)
    assert operator.length_hint(it) == _TEST_LEN
    assert isinstance(it.into_inner(), SequenceIter)


@pytest.mark.parametrize("length", [0, 2, 3, 5, 6])
def test_len_outside_wrapped_bounds(length: int) -> None:
    with pytest.raises(InvalidSizeHint) as exc_info:
        ExactLen.try_new(_TEST_ITER, length)
    assert exc_info.value.failure.adaptor is ExactLen
    with pytest.raises(SizeHintContractError):
        ExactLen.new(_TEST_ITER, length)


_len_rule_cases: List[Tuple[Tuple[int, Optional[int]], int, str]] = [
    ((2, 6), 1, "upper < wrapped lower"),
    ((2, 6), 7, "lower > wrapped upper"),
    ((3, None), 2, "upper < wrapped lower"),
    ((10, 5), 7, "wrapped lower > wrapped upper"),
]


@pytest.mark.parametrize("wrapped, length, rule", _len_rule_cases)
def test_len_rules(wrapped: Tuple[int, Optional[int]], length: int, rule: str) -> None:
    with pytest.raises(InvalidSizeHint) as exc_info:
        ExactLen(TestIterator(wrapped), length)
    assert exc_info.value.rule == rule


@pytest.mark.parametrize("wrapped, length", [((2, 6), 2), ((2, 6), 6), ((3, None), 1000), ((0, None), 0)])
def test_len_within_wrapped_bounds(wrapped: Tuple[int, Optional[int]], length: int) -> None:
    assert len(ExactLen(TestIterator(wrapped), length)) == length


def test_negative_len() -> None:
    with pytest.raises(ValueError):
        ExactLen([], -1)


def test_filtered() -> None:
    odds = exact_len([x for x in range(1, 6) if x % 2 == 1], 3)
    assert len(odds) == 3
    assert odds.size_hint() == (3, 3)
    assert next(odds) == 1
    assert len(odds) == 2
    assert odds.size_hint() == (2, 2)
    assert odds.next_back() == 5
    assert len(odds) == 1
    assert odds.size_hint() == (1, 1)
    assert list(odds) == [3]
    assert len(odds) == 0


def test_filtered_generator() -> None:
    odds = ExactLen.new((x for x in range(1, 6) if x % 2 == 1), 3)
    assert odds.size_hint() == (3, 3)
    assert list(odds) == [1, 3, 5]
    assert odds.size_hint() == (0, 0)


_iter_cases: List[Tuple[str, List[Tuple[str, Any, int]]]] = [
    ("forward", [
        ("next", 1, 3),
        ("next", 2, 2),
        ("next", 3, 1),
    ]),
    ("backward", [
        ("next_back", 4, 3),
        ("next_back", 3, 2),
        ("next_back", 2, 1),
    ]),
    ("forward_fused", [
        ("next", 1, 3),
        ("next", 2, 2),
        ("next", 3, 1),
        ("next", 4, 0),
        ("next", None, 0),
        ("next", None, 0),
    ]),
    ("backward_fused", [
        ("next_back", 4, 3),
        ("next_back", 3, 2),
        ("next_back", 2, 1),
        ("next_back", 1, 0),
        ("next_back", None, 0),
        ("next_back", None, 0),
    ]),
    ("both_ends", [
        ("next", 1, 3),
        ("next_back", 4, 2),
        ("next", 2, 1),
        ("next_back", 3, 0),
        ("next", None, 0),
        ("next_back", None, 0),
    ]),
]


def _step(it: Any, method: str) -> Any:
    try:
        if method == "next":
            return next(it)
        return it.next_back()
    except StopIteration:
        return None


@pytest.mark.parametrize("name, steps", _iter_cases, ids=[case[0] for case in _iter_cases])
def test_iteration(name: str, steps: List[Tuple[str, Any, int]]) -> None:
    it = ExactLen.new(_TEST_ITER, _TEST_LEN)
    for method, expected, remaining in steps:
        assert _step(it, method) == expected, f"{method} did not return {expected!r}"
        assert len(it) == remaining, f"len should be {remaining} after {method}"
        assert it.size_hint() == (remaining, remaining)


class _Resuming:
    """Iterator which resumes after raising StopIteration once."""

    def __init__(self) -> None:
        self._items = [1, None, 2]

    def __iter__(self) -> "_Resuming":
        return self

    def __next__(self) -> int:
        item = self._items.pop(0) if self._items else None
        if item is None:
            raise StopIteration
        return item


def test_fused_over_resuming_iterator() -> None:
    it = ExactLen.new(_Resuming(), 2)
    assert next(it) == 1
    assert next(it, None) is None
    assert next(it, None) is None
    assert len(it) == 1
    with pytest.raises(StopIteration):
        it.next_back()


def test_fused_across_ends() -> None:
    it = ExactLen.new([1], 1)
    assert next(it) == 1
    assert next(it, None) is None
    with pytest.raises(StopIteration):
        it.next_back()


def test_inaccurate_len_is_trusted() -> None:
    it = ExactLen.new(hide_size([1, 2, 3]), 1)
    assert next(it) == 1
    assert len(it) == 0
    assert next(it) == 2
    assert len(it) == 0
    assert it.size_hint() == (0, 0)


def test_next_back_not_double_ended() -> None:
    it = ExactLen.new(iter([1, 2]), 2)
    with pytest.raises(TypeError):
        it.next_back()
    assert len(it) == 2


def test_reversed() -> None:
    it = ExactLen.new([1, 2, 3], 3)
    assert list(reversed(it)) == [3, 2, 1]
    assert len(it) == 0


def test_readonly_attributes() -> None:
    it = ExactLen.new(_TEST_ITER, _TEST_LEN)
    with pytest.raises(AttributeError):
        it.length = 10
    next(it)
    assert it.length == 3


def test_repr() -> None:
    assert repr(ExactLen.new(TestIterator.exact(3), 3)) == "ExactLen(TestIterator((3, 3)), 3)"
