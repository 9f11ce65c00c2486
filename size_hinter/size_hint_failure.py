"""
    Size hint failure tracking functionality.
"""

from __future__ import annotations

import sys
import typing
from typing import Any, NoReturn, Optional, Protocol, Tuple

if sys.version_info[1] >= 9:
    from collections.abc import Sequence
else:
    from typing import Sequence

if sys.version_info[1] >= 11:
    from typing import Self
else:
    from typing_extensions import Self


def _indent_lines(lines: Sequence[str], level: int = 1) -> list[str]:
    """Indent all given blocks of text."""
    if any("\n" in line for line in lines):
        lines = [l for line in lines for l in line.split("\n")]
    ind = " " * 2 * level
    return [ind + line for line in lines]


def _bounds_str(lower: int, upper: Optional[int]) -> str:
    return f"({lower}, {upper})"


Acc = typing.TypeVar("Acc")
"""
    Type variable for the accumulator in :meth:`SizeHintFailure.visit`.
"""


class FailureTreeVisitor(Protocol[Acc]):
    """
    Structural type for visitor functions that can be passed to
    :meth:`SizeHintFailure.visit`.
    """

    def __call__(self, failure: SizeHintFailure, acc: Acc) -> Acc:
        """
        See :meth:`SizeHintFailure.visit` for usage.
        """


class SizeHintFailure:
    """
    Generic size hint failures: the proposed bounds ``(lower, upper)``
    could not be accepted.
    """

    rule: typing.ClassVar[str] = "invalid size hint"
    """
        Short description of the violated rule, e.g. ``"lower > upper"``.
    """

    _lower: int
    _upper: Optional[int]
    _causes: Tuple[SizeHintFailure, ...]

    def __new__(
        cls,
        lower: int,
        upper: Optional[int],
        *causes: SizeHintFailure,
    ) -> Self:
        instance = super().__new__(cls)
        instance._lower = lower
        instance._upper = upper
        instance._causes = causes
        return instance

    @property
    def lower(self) -> int:
        """The proposed lower bound."""
        return self._lower

    @property
    def upper(self) -> Optional[int]:
        """The proposed upper bound, or :obj:`None` if unbounded."""
        return self._upper

    @property
    def causes(self) -> Tuple[SizeHintFailure, ...]:
        r"""
        Failures that in turn caused this failure (if any).

        :rtype: :obj:`~typing.Tuple`\ [:class:`SizeHintFailure`, ...]
        """
        return self._causes

    @property
    def root_cause(self) -> SizeHintFailure:
        """
        The innermost failure, following the first cause at every level.
        This is the failure whose :attr:`rule` was actually violated.
        """
        failure = self
        while failure.causes:
            failure = failure.causes[0]
        return failure

    def visit(self, fun: FailureTreeVisitor[Acc], acc: Acc) -> None:
        r"""
        Performs a pre-order visit of the failure tree:

        1. applies ``fun(self, acc)`` to the failure,
        2. saves the return value as ``new_acc``
        3. recurses on all causes using ``new_acc``.

        For example, collecting the violated rules:

        >>> from size_hinter import HintSize, InvalidSizeHint
        >>> try:
        ...     HintSize.try_new(range(1, 5), 6, 10)
        ... except InvalidSizeHint as err:
        ...     rules = []
        ...     err.failure.visit(lambda f, acc: acc.append(f.rule) or acc, rules)
        ...
        >>> rules
        ['invalid adaptor size hint', 'lower > wrapped upper']

        :param fun: the function called on each element of the failure tree
        :type fun: :obj:`~typing.Callable`\ [[:class:`SizeHintFailure`, ``Acc``], ``Acc``]
        :param acc: the initial value for the accumulator
        :type acc: any type ``Acc``
        """
        new_acc = fun(self, acc)
        for cause in self.causes:
            cause.visit(fun, new_acc)

    def rich_print(self) -> None:
        r"""
        Pretty-prints the failure tree using `rich <https://github.com/willmcgugan/rich>`_:

        >>> from size_hinter import HintSize, get_size_hint_failure
        >>> try:
        ...     HintSize.try_new(range(1, 5), 1, 3)
        ... except ValueError as err:
        ...     get_size_hint_failure(err).rich_print()
        ...
        Failure tree
        └── HintSize over range: invalid size hint (1, 3)
            └── upper bound 3 is below the wrapped lower bound 4

        Raises :obj:`ModuleNotFoundError` if `rich <https://github.com/willmcgugan/rich>`_ is not installed.
        """
        # pylint: disable = import-outside-toplevel
        import rich
        from rich.tree import Tree
        from rich.text import Text

        failure_tree = Tree("Failure tree")

        def tree_builder(failure: SizeHintFailure, acc: Tree) -> Tree:
            return acc.add(Text(failure._str_main_msg()))

        self.visit(tree_builder, failure_tree)
        rich.print(failure_tree)

    def __str__(self) -> str:
        return "\n".join(self._str_lines(top_level=True))

    def __repr__(self) -> str:
        causes_str = ""
        if self.causes:
            causes_str = ", " + ", ".join(repr(cause) for cause in self.causes)
        return f"{type(self).__name__}({self.lower!r}, {self.upper!r}{causes_str})"

    def _str_main_msg(self) -> str:
        return f"invalid size hint {_bounds_str(self.lower, self.upper)}"

    def _str_lines(self, *, top_level: bool) -> list[str]:
        lines = ["Invalid size hint, details below."] if top_level else []
        lines.append(self._str_main_msg())
        lines.extend(
            line
            for cause in self.causes
            for line in _indent_lines(cause._str_lines(top_level=False))
        )
        return lines


class InvertedBoundsFailure(SizeHintFailure):
    """
    Failures arising from a lower bound which exceeds the upper bound.
    """

    rule = "lower > upper"

    def __new__(cls, lower: int, upper: int) -> Self:
        assert lower > upper, (lower, upper)
        return super().__new__(cls, lower, upper)

    def _str_main_msg(self) -> str:
        return f"lower bound {self.lower} exceeds upper bound {self.upper}"


class EmptyRangeFailure(SizeHintFailure):
    """
    Failures arising from converting an empty :obj:`range` to a size hint:
    an empty range admits no length at all.
    """

    rule = "empty range"

    _range: range

    def __new__(cls, r: range) -> Self:
        assert len(r) == 0, r
        instance = super().__new__(cls, r.start, r.stop - 1)
        instance._range = r
        return instance

    @property
    def range(self) -> range:
        """The empty range which was converted."""
        return self._range

    def _str_main_msg(self) -> str:
        return f"{self.range!r} is empty and admits no length"


class WrappedBoundsFailure(SizeHintFailure):
    """
    Failures arising from a proposed size hint which contradicts the
    size hint reported by a wrapped iterable.
    """

    _wrapped_lower: int
    _wrapped_upper: Optional[int]

    def __new__(
        cls,
        lower: int,
        upper: Optional[int],
        wrapped_lower: int,
        wrapped_upper: Optional[int],
    ) -> Self:
        instance = super().__new__(cls, lower, upper)
        instance._wrapped_lower = wrapped_lower
        instance._wrapped_upper = wrapped_upper
        return instance

    @property
    def wrapped_lower(self) -> int:
        """The lower bound reported by the wrapped iterable."""
        return self._wrapped_lower

    @property
    def wrapped_upper(self) -> Optional[int]:
        """The upper bound reported by the wrapped iterable (if any)."""
        return self._wrapped_upper

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.lower!r}, {self.upper!r}, "
            f"{self.wrapped_lower!r}, {self.wrapped_upper!r})"
        )


class LowerAboveWrappedUpperFailure(WrappedBoundsFailure):
    """
    The proposed lower bound is greater than the wrapped upper bound.
    """

    rule = "lower > wrapped upper"

    def _str_main_msg(self) -> str:
        return (
            f"lower bound {self.lower} exceeds "
            f"the wrapped upper bound {self.wrapped_upper}"
        )


class UpperBelowWrappedLowerFailure(WrappedBoundsFailure):
    """
    The proposed upper bound is less than the wrapped lower bound.
    """

    rule = "upper < wrapped lower"

    def _str_main_msg(self) -> str:
        return (
            f"upper bound {self.upper} is below "
            f"the wrapped lower bound {self.wrapped_lower}"
        )


class InvalidWrappedHintFailure(SizeHintFailure):
    """
    The wrapped iterable itself reports an invalid size hint. The bounds
    of this failure are the wrapped bounds.
    """

    rule = "wrapped lower > wrapped upper"

    def _str_main_msg(self) -> str:
        return (
            f"wrapped size hint {_bounds_str(self.lower, self.upper)} "
            "is itself invalid"
        )


class AdaptorFailure(SizeHintFailure):
    """
    Failures arising when constructing an adaptor over an iterable.
    The specific violated rule is found in the single cause.
    """

    rule = "invalid adaptor size hint"

    _adaptor: type
    _iterable: Any

    def __new__(
        cls,
        lower: int,
        upper: Optional[int],
        cause: SizeHintFailure,
        *,
        adaptor: type,
        iterable: Any,
    ) -> Self:
        # pylint: disable = too-many-arguments
        instance = super().__new__(cls, lower, upper, cause)
        instance._adaptor = adaptor
        instance._iterable = iterable
        return instance

    @property
    def adaptor(self) -> type:
        """The adaptor class which refused construction."""
        return self._adaptor

    @property
    def iterable(self) -> Any:
        """The iterable which was to be wrapped."""
        return self._iterable

    def _str_main_msg(self) -> str:
        return (
            f"{self.adaptor.__name__} over {type(self.iterable).__name__}: "
            f"invalid size hint {_bounds_str(self.lower, self.upper)}"
        )


class InvalidSizeHint(ValueError):
    """
    Raised when proposed size hint bounds are inconsistent, either with
    each other or with the size hint of a wrapped iterable.

    Recoverable: raised by all fallible (``try_*``) constructors.
    """

    def __init__(self, failure: SizeHintFailure) -> None:
        super().__init__(str(failure))
        self._failure = failure

    @property
    def failure(self) -> SizeHintFailure:
        """The failure tree describing the violated rule."""
        return self._failure

    @property
    def rule(self) -> str:
        """The rule that was violated, see :attr:`SizeHintFailure.rule`."""
        return self._failure.root_cause.rule


class SizeHintContractError(AssertionError):
    """
    Raised by the non-fallible constructors when their size hint contract
    is violated. This signals a programming error at the call site: the
    :class:`InvalidSizeHint` with the details is chained as ``__cause__``.
    """


def _contract_violation(err: InvalidSizeHint) -> NoReturn:
    """
    Escalates a recoverable size hint error to a contract violation.
    """
    raise SizeHintContractError(f"Invalid size hint: {err}") from err


def _inverted_bounds_error(lower: int, upper: int) -> InvalidSizeHint:
    return InvalidSizeHint(InvertedBoundsFailure(lower, upper))


def get_size_hint_failure(err: BaseException) -> SizeHintFailure:
    """
    Programmatic access to the failure tree of a size hint error.

    >>> from size_hinter import SizeHint, get_size_hint_failure
    >>> try:
    ...     SizeHint.try_bounded(10, 5)
    ... except ValueError as err:
    ...     failure = get_size_hint_failure(err)
    ...
    >>> failure
    InvertedBoundsFailure(10, 5)

    :param err: error raised by a size hint or adaptor constructor
    :type err: :class:`InvalidSizeHint` or :class:`SizeHintContractError`

    Raises :obj:`TypeError` if ``err`` is neither kind of error.
    Raises :obj:`ValueError` if a contract error carries no failure data.
    """
    if isinstance(err, InvalidSizeHint):
        return err.failure
    if not isinstance(err, SizeHintContractError):
        raise TypeError(
            f"Expected InvalidSizeHint or SizeHintContractError, found {type(err)}"
        )
    cause = err.__cause__
    if not isinstance(cause, InvalidSizeHint):
        raise ValueError("SizeHintContractError given carries no failure data.")
    return cause.failure
