"""
    Validation of proposed size hints against the size hint of a wrapped
    iterable, shared by all adaptors.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .iteration import raw_size_hint
from .size_hint import SizeHint, SizeHintLike
from .size_hint_failure import (
    AdaptorFailure,
    InvalidSizeHint,
    InvalidWrappedHintFailure,
    LowerAboveWrappedUpperFailure,
    SizeHintFailure,
    UpperBelowWrappedLowerFailure,
)

_logger = logging.getLogger(__name__)


def _check_against(
    lower: int, upper: Optional[int], wrapped_lower: int, wrapped_upper: Optional[int]
) -> Optional[SizeHintFailure]:
    """
    Returns the failure for the first rule violated by the proposed bounds,
    or :obj:`None` if they do not contradict the wrapped bounds.
    """
    if wrapped_upper is not None and wrapped_lower > wrapped_upper:
        return InvalidWrappedHintFailure(wrapped_lower, wrapped_upper)
    if wrapped_upper is not None and lower > wrapped_upper:
        return LowerAboveWrappedUpperFailure(lower, upper, wrapped_lower, wrapped_upper)
    if upper is not None and upper < wrapped_lower:
        return UpperBelowWrappedLowerFailure(lower, upper, wrapped_lower, wrapped_upper)
    return None


def is_compatible(hint: SizeHint, iterable: Any) -> bool:
    """
    Whether ``hint`` can be reported in place of the size hint of
    ``iterable``, i.e. whether it does not provably contradict it.

    Narrower and wider hints are both compatible:

    >>> from size_hinter import SizeHint
    >>> from size_hinter.validation import is_compatible
    >>> is_compatible(SizeHint.bounded(2, 3), [1, 2, 3])
    True
    >>> is_compatible(SizeHint.unbounded(0), [1, 2, 3])
    True
    >>> is_compatible(SizeHint.exact(4), [1, 2, 3])
    False
    """
    wrapped_lower, wrapped_upper = raw_size_hint(iterable)
    return _check_against(hint.lower, hint.upper, wrapped_lower, wrapped_upper) is None


def _reject(failure: SizeHintFailure, iterable: Any, adaptor: type) -> InvalidSizeHint:
    _logger.debug(
        "Rejected size hint (%s, %s) for %s over %s: %s",
        failure.lower, failure.upper, adaptor.__name__,
        type(iterable).__name__, failure.root_cause.rule,
    )
    return InvalidSizeHint(failure)


def validated_hint(hint: SizeHintLike, iterable: Any, adaptor: type) -> SizeHint:
    """
    Validates the size hint proposed for an ``adaptor`` over ``iterable``
    and returns it as a :class:`SizeHint`. The proposed hint is rejected if:

    - its lower bound exceeds its upper bound;
    - the size hint of ``iterable`` is itself invalid;
    - its lower bound exceeds the wrapped upper bound (if any);
    - its upper bound (if any) is below the wrapped lower bound.

    Hints which are merely imprecise, narrower or wider than the wrapped
    size hint are accepted.

    :raises InvalidSizeHint: if ``hint`` is rejected, with an
        :class:`~size_hinter.size_hint_failure.AdaptorFailure` whose cause
        names the violated rule
    """
    try:
        proposed = SizeHint.try_from_hint(hint)
    except InvalidSizeHint as err:
        lower, upper = hint
        raise _reject(
            AdaptorFailure(lower, upper, err.failure,
                           adaptor=adaptor, iterable=iterable),
            iterable, adaptor,
        ) from None
    wrapped_lower, wrapped_upper = raw_size_hint(iterable)
    cause = _check_against(proposed.lower, proposed.upper, wrapped_lower, wrapped_upper)
    if cause is not None:
        raise _reject(
            AdaptorFailure(proposed.lower, proposed.upper, cause,
                           adaptor=adaptor, iterable=iterable),
            iterable, adaptor,
        )
    return proposed
