# pylint: disable = missing-docstring

from typing import Any, Callable, List, Tuple

import pytest

from size_hinter import (
    ExactLen,
    HintSize,
    InvalidSizeHint,
    Rev,
    SequenceIter,
    SizeHintContractError,
    exact_len,
    hide_size,
    hint_min,
    hint_size,
    try_exact_len,
    try_hint_min,
    try_hint_size,
)

_TEST_ITER = range(1, 5)


_valid_cases: List[Tuple[str, Callable[[], Any], type, Any]] = [
    ("hint_size", lambda: hint_size(_TEST_ITER, 2, 6), HintSize, (2, 6)),
    ("try_hint_size", lambda: try_hint_size(_TEST_ITER, 4, 4), HintSize, (4, 4)),
    ("hint_min", lambda: hint_min(_TEST_ITER, 3), HintSize, (3, None)),
    ("try_hint_min", lambda: try_hint_min(_TEST_ITER, 4), HintSize, (4, None)),
    ("hide_size", lambda: hide_size(_TEST_ITER), HintSize, (0, None)),
    ("exact_len", lambda: exact_len(_TEST_ITER, 4), ExactLen, (4, 4)),
    ("try_exact_len", lambda: try_exact_len(_TEST_ITER, 4), ExactLen, (4, 4)),
]


@pytest.mark.parametrize("name, make, cls, hint", _valid_cases,
                         ids=[case[0] for case in _valid_cases])
def test_free_functions(name: str, make: Callable[[], Any], cls: type, hint: Any) -> None:
    it = make()
    assert isinstance(it, cls), f"{name} should return {cls.__name__}"
    assert it.size_hint() == hint
    assert list(it) == [1, 2, 3, 4]


_invalid_cases: List[Tuple[str, Callable[[], Any], Callable[[], Any]]] = [
    ("hint_size", lambda: hint_size(_TEST_ITER, 5, 8), lambda: try_hint_size(_TEST_ITER, 5, 8)),
    ("hint_size_inverted", lambda: hint_size(_TEST_ITER, 4, 3),
     lambda: try_hint_size(_TEST_ITER, 4, 3)),
    ("hint_min", lambda: hint_min(_TEST_ITER, 5), lambda: try_hint_min(_TEST_ITER, 5)),
    ("exact_len", lambda: exact_len(_TEST_ITER, 3), lambda: try_exact_len(_TEST_ITER, 3)),
]


@pytest.mark.parametrize("name, fatal, fallible", _invalid_cases,
                         ids=[case[0] for case in _invalid_cases])
def test_free_functions_invalid(name: str, fatal: Callable[[], Any],
                                fallible: Callable[[], Any]) -> None:
    try:
        fatal()
        assert False, f"{name} should have raised SizeHintContractError."
    except SizeHintContractError as err:
        assert isinstance(err.__cause__, InvalidSizeHint)
    with pytest.raises(InvalidSizeHint):
        fallible()


def test_chaining() -> None:
    it = hide_size(_TEST_ITER).exact_len(4)
    assert isinstance(it, ExactLen)
    assert isinstance(it.into_inner(), HintSize)
    assert it.size_hint() == (4, 4)
    assert list(it) == [1, 2, 3, 4]


def test_chaining_narrows() -> None:
    it = hint_size(_TEST_ITER, 2, 6).hint_size(3, 5).hint_min(4)
    assert it.size_hint() == (4, None)
    with pytest.raises(InvalidSizeHint):
        hint_size(_TEST_ITER, 2, 6).try_hint_min(7)
    with pytest.raises(InvalidSizeHint):
        hint_size(_TEST_ITER, 2, 6).try_exact_len(1)
    assert hint_size(_TEST_ITER, 2, 6).try_hint_size(0, 2).size_hint() == (0, 2)


def test_chaining_hide_bypasses_validation() -> None:
    with pytest.raises(SizeHintContractError):
        exact_len(_TEST_ITER, 10)
    it = exact_len(_TEST_ITER, 4).hide_size().exact_len(10)
    assert len(it) == 10
    assert it.hide_size().size_hint() == (0, None)


def test_chaining_on_sequence_iter() -> None:
    it = SequenceIter([1, 2, 3]).try_hint_size(1, 3)
    assert it.size_hint() == (1, 3)


def test_rev_method() -> None:
    rev = hint_size(_TEST_ITER, 4, 4).rev()
    assert isinstance(rev, Rev)
    assert rev.size_hint() == (4, 4)
    assert list(rev) == [4, 3, 2, 1]
    assert list(exact_len(_TEST_ITER, 4).rev().rev()) == [1, 2, 3, 4]


def test_rev_method_chaining() -> None:
    it = exact_len(_TEST_ITER, 4).rev().exact_len(4)
    assert next(it) == 4
    assert len(it) == 3
