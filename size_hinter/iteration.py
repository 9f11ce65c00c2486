"""
    Iteration protocols and helpers: size hint queries, double-ended
    iteration and the iterators used to wrap sequences.
"""

from __future__ import annotations

import collections.abc as collections_abc
import operator
import typing
from typing import Any, Iterable, Iterator, Protocol, TypeVar, runtime_checkable

from .hinter import SizeHinter
from .size_hint import RawSizeHint, SizeHint

T = TypeVar("T")
""" Invariant type variable for the items of iterators. """

T_co = TypeVar("T_co", covariant=True)
""" Covariant type variable for the items of iterators. """

_MISSING: Any = object()

# indexing a deque, or an arbitrary Sequence, may not be constant-time
_INDEXABLE = (list, tuple, range, str, bytes, bytearray)


@runtime_checkable
class SupportsSizeHint(Protocol):
    """
    Structural type for objects reporting a size hint, either as a
    :class:`SizeHint` or in raw ``(lower, upper)`` pair form.
    """

    def size_hint(self) -> typing.Union[SizeHint, RawSizeHint]:
        ...


@runtime_checkable
class DoubleEndedIterator(Iterator[T_co], Protocol[T_co]):
    """
    Structural type for iterators which can also produce elements from
    the back, using :func:`next_back`.
    """

    def next_back(self) -> T_co:
        """
        Removes and returns an element from the back of the iteration.

        :raises StopIteration: if no elements are left
        """
        ...


def next_back(iterator: Any, default: Any = _MISSING) -> Any:
    """
    Retrieves the next item from the back of a double-ended iterator,
    mirroring the builtin :func:`next`.

    >>> from size_hinter import SequenceIter, next_back
    >>> it = SequenceIter([1, 2, 3])
    >>> next_back(it), next(it), next_back(it)
    (3, 1, 2)
    >>> next_back(it, None) is None
    True

    :raises TypeError: if the iterator is not double-ended
    :raises StopIteration: if the iterator is exhausted and no default is given
    """
    try:
        method = type(iterator).next_back
    except AttributeError:
        raise TypeError(
            f"{type(iterator).__name__!r} object is not a double-ended iterator"
        ) from None
    if default is _MISSING:
        return method(iterator)
    try:
        return method(iterator)
    except StopIteration:
        return default


def raw_size_hint(iterable: Any) -> RawSizeHint:
    """
    Returns the raw ``(lower, upper)`` size hint of an iterable, without
    validating it:

    - objects with a ``size_hint()`` method report their own hint;
    - sized objects report ``(len(obj), len(obj))``;
    - anything else reports the universal hint ``(0, None)``.

    The ``__length_hint__`` protocol is only an estimate, so it is never
    treated as a bound.
    """
    if isinstance(iterable, SupportsSizeHint):
        hint = iterable.size_hint()
        if isinstance(hint, SizeHint):
            return hint.as_hint()
        lower, upper = hint
        return (lower, upper)
    if isinstance(iterable, collections_abc.Sized):
        n = len(iterable)
        return (n, n)
    return (0, None)


def into_iter(iterable: Iterable[T]) -> Iterator[T]:
    """
    Returns an iterator over the given iterable. Builtin sequences with
    constant-time indexing are iterated by a double-ended
    :class:`SequenceIter`, everything else by :func:`iter`.
    """
    if isinstance(iterable, _INDEXABLE):
        return SequenceIter(iterable)
    return iter(iterable)


class SequenceIter(SizeHinter, typing.Generic[T]):
    """
    A double-ended, fused iterator over a sequence, with exact length.

    >>> from size_hinter import SequenceIter
    >>> it = SequenceIter(range(1, 5))
    >>> next(it), it.next_back(), len(it)
    (1, 4, 2)
    """

    __slots__ = ("_seq", "_front", "_back")

    _seq: typing.Sequence[T]
    _front: int
    _back: int

    def __init__(self, seq: typing.Sequence[T]) -> None:
        self._seq = seq
        self._front = 0
        self._back = len(seq)

    def __iter__(self) -> SequenceIter[T]:
        return self

    def __next__(self) -> T:
        if self._front >= self._back:
            raise StopIteration
        item = self._seq[self._front]
        self._front += 1
        return item

    def next_back(self) -> T:
        """Removes and returns the last remaining element."""
        if self._front >= self._back:
            raise StopIteration
        self._back -= 1
        return self._seq[self._back]

    def __len__(self) -> int:
        return self._back - self._front

    def __length_hint__(self) -> int:
        return len(self)

    def size_hint(self) -> SizeHint:
        return SizeHint.exact(len(self))

    def __repr__(self) -> str:
        return f"SequenceIter({self._seq!r}, front={self._front}, back={self._back})"


class Rev(SizeHinter, typing.Generic[T]):
    """
    A double-ended iterator with front and back swapped. Returned by
    :func:`reversed` on the adaptors of this library.
    """

    __slots__ = ("_iterator",)

    _iterator: Iterator[T]

    def __init__(self, iterator: Iterator[T]) -> None:
        self._iterator = iterator

    def __iter__(self) -> Rev[T]:
        return self

    def __next__(self) -> T:
        item: T = next_back(self._iterator)
        return item

    def next_back(self) -> T:
        return next(self._iterator)

    def __reversed__(self) -> Iterator[T]:
        return self._iterator

    def __length_hint__(self) -> int:
        return operator.length_hint(self._iterator)

    def size_hint(self) -> SizeHint:
        """
        The size hint of the reversed iterator.

        :raises SizeHintContractError: if the reversed iterator reports
            an invalid size hint
        """
        return SizeHint.from_hint(raw_size_hint(self._iterator))

    def __repr__(self) -> str:
        return f"Rev({self._iterator!r})"
