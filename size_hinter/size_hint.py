"""
    The :class:`SizeHint` value type.
"""

from __future__ import annotations

import sys
from typing import Any, ClassVar, Iterator, Optional, Tuple, Union

from typing_validation import validate

from .descriptor import Field
from .size_hint_failure import (
    EmptyRangeFailure,
    InvalidSizeHint,
    _contract_violation,
    _inverted_bounds_error,
)

if sys.version_info[1] >= 11:
    from typing import Self
else:
    from typing_extensions import Self

RawSizeHint = Tuple[int, Optional[int]]
"""
    The raw ``(lower, upper)`` pair form of a size hint.
"""

SizeHintLike = Union["SizeHint", RawSizeHint]
"""
    Anything accepted where a size hint is expected: a :class:`SizeHint`
    or its raw pair form.
"""


class SizeHint:
    """
    A validated, immutable size hint: the lower bound and optional upper
    bound on the number of elements an iteration will yield.

    The lower bound never exceeds the upper bound (when present):

    >>> from size_hinter import SizeHint
    >>> hint = SizeHint.bounded(5, 10)
    >>> hint.lower, hint.upper
    (5, 10)
    >>> hint == (5, 10)
    True
    >>> SizeHint.try_bounded(10, 5)
    Traceback (most recent call last):
        ...
    size_hinter.size_hint_failure.InvalidSizeHint: Invalid size hint, details below.
    lower bound 10 exceeds upper bound 5

    Calling the class directly is the non-fallible form: it raises
    :class:`~size_hinter.size_hint_failure.SizeHintContractError` on
    inconsistent bounds.
    """

    UNIVERSAL: ClassVar[SizeHint]
    """
        The universal size hint ``(0, None)``: always valid, conveys no
        information.
    """

    ZERO: ClassVar[SizeHint]
    """
        The size hint ``(0, 0)`` of an exhausted iteration.
    """

    lower: Field[int] = Field(int, lambda _, lower: lower >= 0,
                              "Bounds must be non-negative.")
    upper: Field[Optional[int]] = Field(
        Optional[int],
        lambda _, upper: upper is None or upper >= 0,
        "Bounds must be non-negative.",
    )

    __slots__ = ("_lower", "_upper")

    def __init__(self, lower: int = 0, upper: Optional[int] = None) -> None:
        """
        Creates a size hint with the given bounds, defaulting to
        :attr:`UNIVERSAL`.

        :raises SizeHintContractError: if ``lower > upper``
        """
        self.lower = lower
        if upper is not None:
            validate(upper, int)
            if 0 <= upper < lower:
                _contract_violation(_inverted_bounds_error(lower, upper))
        self.upper = upper

    @classmethod
    def exact(cls, n: int) -> Self:
        """The size hint ``(n, n)`` of an iteration of exactly ``n`` elements."""
        return cls(n, n)

    @classmethod
    def unbounded(cls, lower: int) -> Self:
        """The size hint ``(lower, None)``, with no upper bound."""
        return cls(lower, None)

    @classmethod
    def at_most(cls, upper: int) -> Self:
        """The size hint ``(0, upper)``."""
        return cls(0, upper)

    @classmethod
    def try_bounded(cls, lower: int, upper: int) -> Self:
        """
        Creates the size hint ``(lower, upper)``.

        :raises ValueError: if either bound is negative
        :raises InvalidSizeHint: if ``lower > upper``
        """
        validate(lower, int)
        validate(upper, int)
        if lower < 0 or upper < 0:
            raise ValueError(f"Bounds must be non-negative, got ({lower}, {upper}).")
        if lower > upper:
            raise _inverted_bounds_error(lower, upper)
        return cls(lower, upper)

    @classmethod
    def bounded(cls, lower: int, upper: int) -> Self:
        """
        Non-fallible version of :meth:`try_bounded`.

        :raises SizeHintContractError: if ``lower > upper``
        """
        try:
            return cls.try_bounded(lower, upper)
        except InvalidSizeHint as err:
            _contract_violation(err)

    @classmethod
    def try_from_hint(cls, hint: SizeHintLike) -> Self:
        """
        Creates a size hint from its raw ``(lower, upper)`` pair form.
        Size hints are returned unchanged.

        :raises InvalidSizeHint: if ``lower > upper``
        """
        if isinstance(hint, cls):
            return hint
        validate(hint, RawSizeHint)
        lower, upper = hint
        if upper is None:
            return cls.unbounded(lower)
        return cls.try_bounded(lower, upper)

    @classmethod
    def from_hint(cls, hint: SizeHintLike) -> Self:
        """
        Non-fallible version of :meth:`try_from_hint`.

        :raises SizeHintContractError: if ``lower > upper``
        """
        try:
            return cls.try_from_hint(hint)
        except InvalidSizeHint as err:
            _contract_violation(err)

    @classmethod
    def try_from_range(cls, r: range) -> Self:
        """
        Creates the size hint admitting exactly the lengths in the given
        range, e.g. ``range(3, 8)`` gives ``(3, 7)``.

        :raises ValueError: if the range step is not 1
        :raises InvalidSizeHint: if the range is empty
        """
        validate(r, range)
        if r.step != 1:
            raise ValueError(f"Expected range with step 1, got {r!r}.")
        if not r:
            raise InvalidSizeHint(EmptyRangeFailure(r))
        return cls(r.start, r.stop - 1)

    @classmethod
    def from_range(cls, r: range) -> Self:
        """
        Non-fallible version of :meth:`try_from_range`.

        :raises SizeHintContractError: if the range is empty
        """
        try:
            return cls.try_from_range(r)
        except InvalidSizeHint as err:
            _contract_violation(err)

    def as_hint(self) -> RawSizeHint:
        """The raw ``(lower, upper)`` pair form of this size hint."""
        return (self.lower, self.upper)

    def decrement(self) -> SizeHint:
        """
        Returns the size hint after one element has been produced: both
        bounds are decremented by one, saturating at zero.
        """
        upper = self.upper
        return SizeHint(
            max(self.lower - 1, 0),
            None if upper is None else max(upper - 1, 0),
        )

    def overlaps(self, other: SizeHintLike) -> bool:
        """
        Whether some length is admitted by both size hints.

        >>> from size_hinter import SizeHint
        >>> SizeHint.bounded(3, 6).overlaps(SizeHint.bounded(5, 10))
        True
        >>> SizeHint.unbounded(11).overlaps(SizeHint.exact(5))
        False
        """
        other = SizeHint.try_from_hint(other)
        if self.upper is not None and self.upper < other.lower:
            return False
        if other.upper is not None and other.upper < self.lower:
            return False
        return True

    def disjoint(self, other: SizeHintLike) -> bool:
        """Whether no length is admitted by both size hints."""
        return not self.overlaps(other)

    def is_subset_of(self, other: SizeHintLike) -> bool:
        """Whether every length admitted by this size hint is admitted by ``other``."""
        other = SizeHint.try_from_hint(other)
        if self.lower < other.lower:
            return False
        if other.upper is None:
            return True
        return self.upper is not None and self.upper <= other.upper

    def __contains__(self, n: Any) -> bool:
        if not isinstance(n, int):
            return False
        return self.lower <= n and (self.upper is None or n <= self.upper)

    def __iter__(self) -> Iterator[Optional[int]]:
        yield self.lower
        yield self.upper

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, SizeHint):
            return self.as_hint() == other.as_hint()
        if isinstance(other, tuple):
            return self.as_hint() == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.as_hint())

    def __repr__(self) -> str:
        return f"SizeHint({self.lower!r}, {self.upper!r})"


SizeHint.UNIVERSAL = SizeHint()
SizeHint.ZERO = SizeHint.exact(0)
