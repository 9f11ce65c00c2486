# pylint: disable = missing-docstring

import typing

import pytest

from size_hinter import (
    HintSize,
    InvalidSizeHint,
    SizeHint,
    SizeHintContractError,
    SizeHintFailure,
    get_size_hint_failure,
)
from size_hinter.size_hint_failure import (
    AdaptorFailure,
    InvertedBoundsFailure,
    LowerAboveWrappedUpperFailure,
    UpperBelowWrappedLowerFailure,
)


def _adaptor_error() -> InvalidSizeHint:
    try:
        HintSize.try_new(range(1, 5), 6, 10)
    except InvalidSizeHint as err:
        return err
    assert False, "HintSize.try_new(range(1, 5), 6, 10) should have raised."


def test_adaptor_failure_tree() -> None:
    err = _adaptor_error()
    failure = err.failure
    assert isinstance(failure, AdaptorFailure)
    assert failure.adaptor is HintSize
    assert failure.iterable == range(1, 5)
    assert (failure.lower, failure.upper) == (6, 10)
    assert len(failure.causes) == 1
    cause = failure.causes[0]
    assert isinstance(cause, LowerAboveWrappedUpperFailure)
    assert (cause.wrapped_lower, cause.wrapped_upper) == (4, 4)
    assert failure.root_cause is cause
    assert err.rule == cause.rule == "lower > wrapped upper"


def test_error_message() -> None:
    err = _adaptor_error()
    assert str(err).split("\n") == [
        "Invalid size hint, details below.",
        "HintSize over range: invalid size hint (6, 10)",
        "  lower bound 6 exceeds the wrapped upper bound 4",
    ]


def test_failure_repr() -> None:
    assert repr(InvertedBoundsFailure(10, 5)) == "InvertedBoundsFailure(10, 5)"
    assert repr(UpperBelowWrappedLowerFailure(1, 3, 4, 4)) == (
        "UpperBelowWrappedLowerFailure(1, 3, 4, 4)"
    )
    failure = _adaptor_error().failure
    assert repr(failure) == (
        "AdaptorFailure(6, 10, LowerAboveWrappedUpperFailure(6, 10, 4, 4))"
    )


def test_visit() -> None:
    failure = _adaptor_error().failure
    visited: typing.List[typing.Tuple[int, str]] = []

    def visitor(f: SizeHintFailure, depth: int) -> int:
        visited.append((depth, f.rule))
        return depth + 1

    failure.visit(visitor, 0)
    assert visited == [
        (0, "invalid adaptor size hint"),
        (1, "lower > wrapped upper"),
    ]


def test_rich_print(capsys: pytest.CaptureFixture[str]) -> None:
    pytest.importorskip("rich")
    _adaptor_error().failure.rich_print()
    out = capsys.readouterr().out
    assert "Failure tree" in out
    assert "lower bound 6 exceeds the wrapped upper bound 4" in out


def test_get_size_hint_failure() -> None:
    try:
        SizeHint.bounded(10, 5)
        assert False, "SizeHint.bounded(10, 5) should have raised."
    except SizeHintContractError as err:
        failure = get_size_hint_failure(err)
    assert isinstance(failure, InvertedBoundsFailure)


def test_get_size_hint_failure_wrong_error() -> None:
    with pytest.raises(TypeError):
        get_size_hint_failure(KeyError("x"))
    with pytest.raises(ValueError):
        get_size_hint_failure(SizeHintContractError("no cause"))


def test_invalid_size_hint_is_value_error() -> None:
    try:
        SizeHint.try_bounded(10, 5)
        assert False, "SizeHint.try_bounded(10, 5) should have raised."
    except ValueError as err:
        assert isinstance(err, InvalidSizeHint)
