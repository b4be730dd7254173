"""
Formatter combinators and message helpers.

Combinators build ready-made formatters for the custom-formatter extension point of
PrintingConfig (per type or per member). The fmt_* helpers render values robustly inside
exception messages, where a broken __repr__ must never mask the original error.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Callable

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import InvalidArgumentError
from .utils import class_name

PRIMITIVE_TYPES = (
    type(None),
    bool,  # Comes before int (is subclass of int)
    int,
    float,
    complex,
    str,
    bytes,
)


# Methods --------------------------------------------------------------------------------------------------------------

def trimmed_to(length: int) -> Callable[[Any], str]:
    """
    Create a formatter which cuts the textual form of a value to at most `length` characters.

    Args:
        length: Maximum number of characters kept, must be >= 0.

    Returns:
        A formatter: None renders as "null", any other value as str(value)[:length].

    Raises:
        TypeError: If length is not an int.
        InvalidArgumentError: If length is negative.

    Examples:
        >>> trimmed_to(2)("Ben")
        'Be'
        >>> trimmed_to(5)(None)
        'null'
    """
    if isinstance(length, bool) or not isinstance(length, int):
        raise TypeError(f"length must be an int, but got {fmt_type(length)}")
    if length < 0:
        raise InvalidArgumentError(f"length must be >= 0, but got {fmt_value(length)}")

    def _trim(value: Any) -> str:
        if value is None:
            return "null"
        return str(value)[:length]

    return _trim


def fmt_type(obj: Any, *, fully_qualified: bool = False) -> str:
    """Format type information of an object or a class for exception messages.

    Examples:
        >>> fmt_type(42)
        '<int>'
        >>> fmt_type(int)
        '<int>'
    """
    return f"<{class_name(obj, fully_qualified=fully_qualified)}>"


def fmt_value(obj: Any, *, max_repr: int = 120, ellipsis: str = "...") -> str:
    """
    Format a single value as a type-value pair for exception messages.

    Primitives are shown by their repr only, everything else is labelled with its type.

    Examples:
        >>> fmt_value(-1)
        '-1'
        >>> fmt_value([1, 2, 3])
        '<list: [1, 2, 3]>'
    """
    repr_ = _fmt_truncate(_safe_repr(obj), max_repr, ellipsis=ellipsis)
    if type(obj) in PRIMITIVE_TYPES:
        return repr_
    return f"<{type(obj).__name__}: {repr_}>"


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_truncate(repr_: str, max_len: int, ellipsis: str = "...") -> str:
    """Keep at least one character of repr_ and append the ellipsis when it exceeds max_len."""
    if len(repr_) <= max_len:
        return repr_
    return repr_[:max(1, max_len)] + ellipsis


def _safe_repr(obj) -> str:
    """
    Defensive repr() call - handle broken __repr__ methods gracefully
    """
    try:
        repr_ = repr(obj)
    except Exception as e:
        exc_type = type(e).__name__
        repr_ = f"<{type(obj).__name__} object (repr failed: {exc_type})>"
    return repr_
