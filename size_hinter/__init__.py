"""
    Validated size hints, and iterator adaptors which override them.
"""

__version__ = "0.3.0"

from .size_hint import SizeHint, RawSizeHint, SizeHintLike
from .size_hint_failure import (
    InvalidSizeHint,
    SizeHintContractError,
    SizeHintFailure,
    get_size_hint_failure,
)
from .iteration import (
    DoubleEndedIterator,
    Rev,
    SequenceIter,
    SupportsSizeHint,
    next_back,
    raw_size_hint,
)
from .hint_size import HintSize
from .exact_len import ExactLen
from .hinter import (
    SizeHinter,
    hint_size,
    try_hint_size,
    hint_min,
    try_hint_min,
    hide_size,
    exact_len,
    try_exact_len,
)

# re-export all public names.
__all__ = [
    "SizeHint",
    "RawSizeHint",
    "SizeHintLike",
    "InvalidSizeHint",
    "SizeHintContractError",
    "SizeHintFailure",
    "get_size_hint_failure",
    "DoubleEndedIterator",
    "Rev",
    "SequenceIter",
    "SupportsSizeHint",
    "next_back",
    "raw_size_hint",
    "HintSize",
    "ExactLen",
    "SizeHinter",
    "hint_size",
    "try_hint_size",
    "hint_min",
    "try_hint_min",
    "hide_size",
    "exact_len",
    "try_exact_len",
]
