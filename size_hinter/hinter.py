"""
    Fluent construction of the size hint adaptors, as free functions and as
    methods of the iterators returned by this library.
"""

from __future__ import annotations

import typing
from typing import Iterable, TypeVar

if typing.TYPE_CHECKING:
    from .exact_len import ExactLen
    from .hint_size import HintSize
    from .iteration import Rev

T = TypeVar("T")
""" Invariant type variable for the items of iterators. """

# pylint: disable = import-outside-toplevel


def hint_size(iterable: Iterable[T], lower: int, upper: int) -> HintSize[T]:
    """
    Wraps ``iterable`` in a :class:`~size_hinter.hint_size.HintSize`
    reporting the size hint ``(lower, upper)``.

    >>> from size_hinter import hint_size
    >>> it = hint_size(range(1, 5), 2, 6)
    >>> it.size_hint(), next(it), it.size_hint()
    (SizeHint(2, 6), 1, SizeHint(1, 5))

    :raises SizeHintContractError: if ``lower > upper``, if ``upper`` is
        less than the wrapped lower bound or if ``lower`` is greater than
        the wrapped upper bound
    """
    from .hint_size import HintSize
    return HintSize.new(iterable, lower, upper)


def try_hint_size(iterable: Iterable[T], lower: int, upper: int) -> HintSize[T]:
    """
    Fallible version of :func:`hint_size`.

    :raises InvalidSizeHint: in the cases where :func:`hint_size` raises
    """
    from .hint_size import HintSize
    return HintSize.try_new(iterable, lower, upper)


def hint_min(iterable: Iterable[T], lower: int) -> HintSize[T]:
    """
    Wraps ``iterable`` in a :class:`~size_hinter.hint_size.HintSize`
    reporting the size hint ``(lower, None)``.

    :raises SizeHintContractError: if ``lower`` is greater than the wrapped
        upper bound
    """
    from .hint_size import HintSize
    return HintSize.min(iterable, lower)


def try_hint_min(iterable: Iterable[T], lower: int) -> HintSize[T]:
    """
    Fallible version of :func:`hint_min`.

    :raises InvalidSizeHint: if ``lower`` is greater than the wrapped
        upper bound
    """
    from .hint_size import HintSize
    return HintSize.try_min(iterable, lower)


def hide_size(iterable: Iterable[T]) -> HintSize[T]:
    """
    Wraps ``iterable`` in a :class:`~size_hinter.hint_size.HintSize`
    reporting the universal size hint ``(0, None)``, which is always valid
    and never changes. Mostly useful in tests, to exercise the code paths
    of consumers which cannot rely on a size hint.
    """
    from .hint_size import HintSize
    return HintSize.hide(iterable)


def exact_len(iterable: Iterable[T], length: int) -> ExactLen[T]:
    """
    Wraps ``iterable`` in an :class:`~size_hinter.exact_len.ExactLen`
    with the given exact length.

    >>> from size_hinter import exact_len
    >>> odds = exact_len([x for x in range(1, 6) if x % 2 == 1], 3)
    >>> len(odds), next(odds), len(odds)
    (3, 1, 2)

    :raises SizeHintContractError: if ``length`` is outside the wrapped
        size hint bounds
    """
    from .exact_len import ExactLen
    return ExactLen.new(iterable, length)


def try_exact_len(iterable: Iterable[T], length: int) -> ExactLen[T]:
    """
    Fallible version of :func:`exact_len`.

    :raises InvalidSizeHint: if ``length`` is outside the wrapped
        size hint bounds
    """
    from .exact_len import ExactLen
    return ExactLen.try_new(iterable, length)


class SizeHinter:
    """
    Mixin for the iterators of this library, exposing the fluent
    constructors as methods:

    >>> from size_hinter import hide_size
    >>> it = hide_size(range(1, 5)).exact_len(4)
    >>> it.size_hint()
    SizeHint(4, 4)

    See the free functions of the same names for details.
    """

    __slots__ = ()

    def hint_size(self: Iterable[T], lower: int, upper: int) -> HintSize[T]:
        return hint_size(self, lower, upper)

    def try_hint_size(self: Iterable[T], lower: int, upper: int) -> HintSize[T]:
        return try_hint_size(self, lower, upper)

    def hint_min(self: Iterable[T], lower: int) -> HintSize[T]:
        return hint_min(self, lower)

    def try_hint_min(self: Iterable[T], lower: int) -> HintSize[T]:
        return try_hint_min(self, lower)

    def hide_size(self: Iterable[T]) -> HintSize[T]:
        return hide_size(self)

    def exact_len(self: Iterable[T], length: int) -> ExactLen[T]:
        return exact_len(self, length)

    def try_exact_len(self: Iterable[T], length: int) -> ExactLen[T]:
        return try_exact_len(self, length)

    def rev(self: Iterable[T]) -> Rev[T]:
        """
        Iterates this double-ended iterator from the back.
        """
        from .iteration import Rev
        return Rev(iter(self))
