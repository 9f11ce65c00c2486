"""
    The :class:`HintSize` adaptor, which overrides the size hint of an
    iterable.
"""

from __future__ import annotations

import sys
import typing
from typing import Iterable, Iterator, Optional, TypeVar

from .descriptor import Field
from .hinter import SizeHinter
from .iteration import Rev, into_iter, next_back
from .size_hint import SizeHint, SizeHintLike
from .size_hint_failure import InvalidSizeHint, _contract_violation
from .validation import validated_hint

if sys.version_info[1] >= 11:
    from typing import Self
else:
    from typing_extensions import Self

T = TypeVar("T")
""" Invariant type variable for the items of iterators. """


class HintSize(SizeHinter, typing.Generic[T]):
    """
    An iterator adaptor reporting its own :class:`~size_hinter.size_hint.SizeHint`
    in place of the size hint of the wrapped iterable. The reported hint is
    decremented, saturating at zero, as elements are produced from either end.
    Values produced are those of the wrapped iterable, unchanged.

    Mostly useful for hiding a size hint in tests, or for providing a more
    accurate one. If the exact length is known, prefer
    :class:`~size_hinter.exact_len.ExactLen`.

    >>> from size_hinter import HintSize
    >>> it = HintSize.new(range(1, 5), 3, 6)
    >>> it.size_hint()
    SizeHint(3, 6)
    >>> next(it), it.next_back()
    (1, 4)
    >>> it.size_hint()
    SizeHint(1, 4)

    On construction, the hint is validated against the size hint of the
    wrapped iterable: it cannot claim a lower bound greater than the wrapped
    upper bound, nor an upper bound less than the wrapped lower bound.
    Nothing is validated after construction: keeping the hint accurate is
    the caller's responsibility. Validation can be bypassed by first
    wrapping with :meth:`hide`.

    Once the wrapped iterator is exhausted, from either end, the adaptor
    keeps raising :obj:`StopIteration` without stepping it again, so that
    an iterator resuming after exhaustion cannot outgrow the reported hint.

    No ``__len__`` is exposed, even if the wrapped iterable has one:
    consumers see the reported hint through :func:`operator.length_hint`.

    Both attributes are read-only.
    """

    iterator: Field[Iterator[T]] = Field(typing.Iterator)
    """ The wrapped iterator. """

    hint: Field[SizeHint] = Field(SizeHint)
    """ The current size hint. """

    __slots__ = ("_iterator", "_hint", "_exhausted")

    _exhausted: bool

    def __init__(self, iterable: Iterable[T],
                 hint: Optional[SizeHintLike] = None) -> None:
        """
        Wraps ``iterable`` with the given size hint. If no hint is given,
        the size hint is hidden as in :meth:`hide`.

        :raises InvalidSizeHint: if the hint is rejected, see
            :func:`~size_hinter.validation.validated_hint`
        """
        if hint is None:
            hint = SizeHint.UNIVERSAL
        else:
            hint = validated_hint(hint, iterable, type(self))
        self.iterator = into_iter(iterable)
        self.hint = hint
        self._exhausted = False

    @classmethod
    def try_new(cls, iterable: Iterable[T], lower: int, upper: int) -> Self:
        """
        Wraps ``iterable`` with the size hint ``(lower, upper)``.

        >>> from size_hinter import HintSize, InvalidSizeHint
        >>> HintSize.try_new(range(1, 5), 6, 10)
        Traceback (most recent call last):
            ...
        size_hinter.size_hint_failure.InvalidSizeHint: Invalid size hint, details below.
        HintSize over range: invalid size hint (6, 10)
          lower bound 6 exceeds the wrapped upper bound 4

        :raises InvalidSizeHint: if ``lower > upper``, if ``lower`` exceeds
            the wrapped upper bound, or if ``upper`` is below the wrapped
            lower bound
        """
        return cls(iterable, (lower, upper))

    @classmethod
    def new(cls, iterable: Iterable[T], lower: int, upper: int) -> Self:
        """
        Non-fallible version of :meth:`try_new`.

        :raises SizeHintContractError: in the cases where :meth:`try_new`
            raises :class:`InvalidSizeHint`
        """
        try:
            return cls.try_new(iterable, lower, upper)
        except InvalidSizeHint as err:
            _contract_violation(err)

    @classmethod
    def try_min(cls, iterable: Iterable[T], lower: int) -> Self:
        """
        Wraps ``iterable`` with the size hint ``(lower, None)``.

        :raises InvalidSizeHint: if ``lower`` exceeds the wrapped upper bound
        """
        return cls(iterable, (lower, None))

    @classmethod
    def min(cls, iterable: Iterable[T], lower: int) -> Self:
        """
        Non-fallible version of :meth:`try_min`.

        :raises SizeHintContractError: if ``lower`` exceeds the wrapped
            upper bound
        """
        try:
            return cls.try_min(iterable, lower)
        except InvalidSizeHint as err:
            _contract_violation(err)

    @classmethod
    def hide(cls, iterable: Iterable[T]) -> Self:
        """
        Wraps ``iterable`` with the universal size hint ``(0, None)``,
        which is always valid and never changes.

        >>> from size_hinter import HintSize
        >>> it = HintSize.hide([1, 2, 3])
        >>> next(it), it.size_hint()
        (1, SizeHint(0, None))
        """
        return cls(iterable)

    def into_inner(self) -> Iterator[T]:
        """Returns the wrapped iterator."""
        return self._iterator

    def size_hint(self) -> SizeHint:
        """The current size hint."""
        return self._hint

    def __length_hint__(self) -> int:
        return self._hint.lower

    def __iter__(self) -> HintSize[T]:
        return self

    def __next__(self) -> T:
        if self._exhausted:
            raise StopIteration
        try:
            item = next(self._iterator)
        except StopIteration:
            self._exhausted = True
            raise
        self._hint = self._hint.decrement()
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
        self._hint = self._hint.decrement()
        return item

    def __reversed__(self) -> Rev[T]:
        return Rev(self)

    def __repr__(self) -> str:
        return f"HintSize({self._iterator!r}, {self._hint!r})"
