"""
    The :class:`ExactLen` adaptor, which gives an iterable an exact length.
"""

from __future__ import annotations

import sys
import typing
from typing import Iterable, Iterator, TypeVar

from .descriptor import Field
from .hinter import SizeHinter
from .iteration import Rev, into_iter, next_back
from .size_hint import SizeHint
from .size_hint_failure import InvalidSizeHint, _contract_violation
from .validation import validated_hint

if sys.version_info[1] >= 11:
    from typing import Self
else:
    from typing_extensions import Self

T = TypeVar("T")
""" Invariant type variable for the items of iterators. """


class ExactLen(SizeHinter, typing.Generic[T]):
    """
    A fused iterator adaptor with an exact length, for iterables whose
    number of elements is known but not reported, e.g. filtered ones:

    >>> from size_hinter import ExactLen
    >>> odds = ExactLen.new((x for x in range(1, 6) if x % 2 == 1), 3)
    >>> len(odds), odds.size_hint()
    (3, SizeHint(3, 3))
    >>> next(odds), len(odds), odds.size_hint()
    (1, 2, SizeHint(2, 2))

    The length is decremented by one for each element produced, from
    either end. It is validated against the size hint of the wrapped
    iterable on construction and never afterwards: the counter is trusted
    for :func:`len` and :meth:`size_hint`, the wrapped iterable for values.

    Once the wrapped iterator is exhausted, from either end, the adaptor
    keeps raising :obj:`StopIteration` without stepping it again.

    Both attributes are read-only.
    """

    iterator: Field[Iterator[T]] = Field(typing.Iterator)
    """ The wrapped iterator. """

    length: Field[int] = Field(int, lambda _, length: length >= 0,
                               "Length must be non-negative.")
    """ The number of elements left. """

    __slots__ = ("_iterator", "_length", "_exhausted")

    _exhausted: bool

    def __init__(self, iterable: Iterable[T], length: int) -> None:
        """
        Wraps ``iterable`` with the given exact length.

        :raises InvalidSizeHint: if ``length`` is outside the bounds of the
            size hint of ``iterable``, or if that size hint is itself invalid
        """
        self.length = length
        validated_hint(SizeHint.exact(length), iterable, type(self))
        self.iterator = into_iter(iterable)
        self._exhausted = False

    @classmethod
    def try_new(cls, iterable: Iterable[T], length: int) -> Self:
        """
        Wraps ``iterable`` with the given exact length.

        >>> from size_hinter import ExactLen
        >>> ExactLen.try_new(range(10, 20), 15)
        Traceback (most recent call last):
            ...
        size_hinter.size_hint_failure.InvalidSizeHint: Invalid size hint, details below.
        ExactLen over range: invalid size hint (15, 15)
          lower bound 15 exceeds the wrapped upper bound 10

        :raises InvalidSizeHint: if ``length`` is outside the bounds of the
            size hint of ``iterable``
        """
        return cls(iterable, length)

    @classmethod
    def new(cls, iterable: Iterable[T], length: int) -> Self:
        """
        Non-fallible version of :meth:`try_new`.

        :raises SizeHintContractError: if ``length`` is outside the bounds
            of the size hint of ``iterable``
        """
        try:
            return cls.try_new(iterable, length)
        except InvalidSizeHint as err:
            _contract_violation(err)

    def into_inner(self) -> Iterator[T]:
        """Returns the wrapped iterator."""
        return self._iterator

    def size_hint(self) -> SizeHint:
        """The exact size hint ``(len(self), len(self))``."""
        return SizeHint.exact(self._length)

    def __len__(self) -> int:
        return self._length

    def __length_hint__(self) -> int:
        return self._length

    def __iter__(self) -> ExactLen[T]:
        return self

    def __next__(self) -> T:
        if self._exhausted:
            raise StopIteration
        try:
            item = next(self._iterator)
        except StopIteration:
            self._exhausted = True
            raise
        self._length = max(self._length - 1, 0)
        return item

    def next_back(self) -> T:
        """
        Removes and returns an element from the back of the wrapped iterator.

        :raises TypeError: if the wrapped iterator is not double-ended
        :raises StopIteration: if no elements are left
        """
        if self._exhausted:
            raise StopIteration
        try:
            item: T = next_back(self._iterator)
        except StopIteration:
            self._exhausted = True
            raise
        self._length = max(self._length - 1, 0)
        return item

    def __reversed__(self) -> Rev[T]:
        return Rev(self)

    def __repr__(self) -> str:
        return f"ExactLen({self._iterator!r}, {self._length!r})"
