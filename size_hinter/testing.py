"""
    Testing helpers: iterators reporting arbitrary size hints.
"""

from __future__ import annotations

import sys
import typing
from typing import TypeVar

from .size_hint import RawSizeHint, SizeHint

if sys.version_info[1] >= 11:
    from typing import Self
else:
    from typing_extensions import Self

T = TypeVar("T")


class TestIterator(typing.Generic[T]):
    """
    An iterator which cannot be iterated over, but reports an arbitrary
    raw size hint, valid or not. Useful for testing how consumers, such as
    the adaptors of this library, handle various size hints:

    >>> from size_hinter import HintSize
    >>> from size_hinter.testing import TestIterator
    >>> HintSize.try_min(TestIterator.invalid(), 0)
    Traceback (most recent call last):
        ...
    size_hinter.size_hint_failure.InvalidSizeHint: Invalid size hint, details below.
    HintSize over TestIterator: invalid size hint (0, None)
      wrapped size hint (10, 5) is itself invalid
    """

    __test__ = False

    __slots__ = ("_size_hint",)

    _size_hint: RawSizeHint

    def __init__(self, size_hint: RawSizeHint) -> None:
        """
        Creates an iterator reporting the given size hint, which is not
        validated.
        """
        lower, upper = size_hint
        self._size_hint = (lower, upper)

    @classmethod
    def exact(cls, n: int) -> Self:
        """An iterator reporting the size hint ``(n, n)``."""
        return cls((n, n))

    @classmethod
    def universal(cls) -> Self:
        """An iterator reporting the universal size hint ``(0, None)``."""
        return cls(SizeHint.UNIVERSAL.as_hint())

    @classmethod
    def zero(cls) -> Self:
        """An iterator reporting the size hint ``(0, 0)``."""
        return cls(SizeHint.ZERO.as_hint())

    @classmethod
    def invalid(cls) -> Self:
        """An iterator reporting the invalid size hint ``(10, 5)``."""
        return cls((10, 5))

    def size_hint(self) -> RawSizeHint:
        return self._size_hint

    def __iter__(self) -> TestIterator[T]:
        return self

    def __next__(self) -> T:
        raise NotImplementedError("TestIterator is not iterable")

    def next_back(self) -> T:
        raise NotImplementedError("TestIterator is not iterable")

    def __repr__(self) -> str:
        lower, upper = self._size_hint
        return f"TestIterator(({lower!r}, {upper!r}))"
