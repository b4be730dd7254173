"""
Printwise rendering engine.

Walks an object graph and produces an indented, human-readable text dump according to a
PrintingConfig. Rendering is lossy and one-directional: the output is meant for terminals,
logs and test assertions, never for parsing back.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import datetime
import logging
import uuid
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from itertools import islice
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .config import Formatter, PrintingConfig
from .formatters import fmt_type
from .locale import format_localized, is_localizable
from .members import Member, get_members
from .utils import class_name

MAX_COLLECTION_ITEMS = 100
INDENT = "\t"

SCALAR_TYPES = (
    bool,
    int,
    float,
    complex,
    Decimal,
    Fraction,
    str,
    bytes,
    uuid.UUID,
    datetime.date,  # Includes datetime.datetime
    datetime.time,
    datetime.timedelta,
    Enum,
)

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

class Renderer:
    """
    Single-use renderer bound to one configuration.

    Holds the ids of the objects currently on the recursion stack, so an instance must not be
    shared between concurrent calls. Use render() for one-off calls.

    Classification precedence for every visited value:
        1. None                              -> "null"
        2. Scalar of an excluded type        -> "<excluded TypeName>"
        3. Object already on the stack       -> "Cyclic reference detected: TypeName"
        4. Type formatter for runtime type   -> formatter output
        5. Scalar                            -> str() or locale-aware text
        6. Depth above max_depth             -> "... (max nesting level N reached)"
        7. Mapping / iterable / record       -> structural rendering
    """

    def __init__(self, config: PrintingConfig | None = None) -> None:
        if not isinstance(config, (PrintingConfig, type(None))):
            raise TypeError(f"config must be a PrintingConfig instance, but found {fmt_type(config)}")
        self.config = config or PrintingConfig()
        self._visiting: set[int] = set()

    def render(self, obj: Any) -> str:
        """Render obj as the root of the graph (depth 1)."""
        return self._render(obj, 1)

    def _render(self, obj: Any, depth: int) -> str:
        cfg = self.config

        if obj is None:
            return "null"

        obj_type = type(obj)
        is_scalar = isinstance(obj, SCALAR_TYPES)

        if is_scalar and cfg.is_type_excluded(obj_type):
            return f"<excluded {class_name(obj_type)}>"

        if id(obj) in self._visiting:
            logger.debug("cyclic reference to %s cut at depth %d", class_name(obj_type), depth)
            return f"Cyclic reference detected: {class_name(obj_type)}"

        if formatter := cfg.get_type_formatter(obj_type):
            return _call_formatter(formatter, obj)

        if is_scalar:
            return self._render_scalar(obj, obj_type)

        if depth > cfg.max_depth:
            logger.debug("max nesting level %d reached at %s", cfg.max_depth, class_name(obj_type))
            return f"... (max nesting level {cfg.max_depth} reached)"

        self._visiting.add(id(obj))
        try:
            if isinstance(obj, abc.Mapping):
                return self._render_mapping(obj, depth)
            if isinstance(obj, abc.Iterable):
                return self._render_sequence(obj, depth)
            return self._render_record(obj, depth)
        finally:
            self._visiting.discard(id(obj))

    def _render_scalar(self, obj: Any, obj_type: type) -> str:
        if isinstance(obj, str):
            return obj
        locale = self.config.get_locale(obj_type)
        if locale is not None and is_localizable(obj):
            return format_localized(obj, locale)
        return str(obj)

    def _render_record(self, obj: Any, depth: int) -> str:
        indent = INDENT * depth
        lines = [class_name(obj) + "\n"]
        for member in get_members(obj):
            value = member.get(obj)
            text = self._render_member(member, value, depth)
            if text is None:
                continue
            lines.append(f"{indent}{member.name} = {text}\n")
        return "".join(lines)

    def _render_member(self, member: Member, value: Any, depth: int) -> str | None:
        """Return the rendered member value or None when the member is excluded."""
        cfg = self.config
        member_type = member.type_of(value)

        if cfg.is_type_excluded(member_type) or cfg.is_member_excluded(member.key):
            return None

        if formatter := cfg.get_member_formatter(member.key):
            return _call_formatter(formatter, value)

        if value is not None and (formatter := cfg.get_type_formatter(member_type)):
            return _call_formatter(formatter, value)

        if is_localizable(value) and (locale := cfg.get_locale(member_type)) is not None:
            return format_localized(value, locale)

        return self._render(value, depth + 1)

    def _render_sequence(self, obj: abc.Iterable, depth: int) -> str:
        items, has_more = _head(obj, MAX_COLLECTION_ITEMS)
        if not items:
            return "[]"

        indent = INDENT * depth
        lines = ["[\n"]
        last = len(items) - 1
        for i, item in enumerate(items):
            separator = "\n" if i == last else ",\n"
            lines.append(f"{indent}{self._render(item, depth + 1)}{separator}")
        if has_more:
            logger.debug("%s truncated to %d items", class_name(obj), MAX_COLLECTION_ITEMS)
            lines.append(f"{indent}... (showing first {MAX_COLLECTION_ITEMS} items)\n")
        lines.append(INDENT * (depth - 1) + "]")
        return "".join(lines)

    def _render_mapping(self, obj: abc.Mapping, depth: int) -> str:
        entries, has_more = _head(obj.items(), MAX_COLLECTION_ITEMS)
        if not entries:
            return "[]"

        indent = INDENT * depth
        lines = ["[\n"]
        for key, value in entries:
            lines.append(f"{indent}{self._render(key, depth + 1)}: {self._render(value, depth + 1)}\n")
        if has_more:
            logger.debug("%s truncated to %d items", class_name(obj), MAX_COLLECTION_ITEMS)
            lines.append(f"{indent}... (showing first {MAX_COLLECTION_ITEMS} items)\n")
        lines.append(INDENT * (depth - 1) + "]")
        return "".join(lines)


# Methods --------------------------------------------------------------------------------------------------------------

def render(config: PrintingConfig | None, obj: Any) -> str:
    """
    Render obj as indented text according to config.

    Args:
        config: Rendering rules; default PrintingConfig() if None.
        obj: Root of the object graph.

    Returns:
        Text dump of obj. Cycles and depth overflow are marked in-band, they never raise.

    Raises:
        Any exception raised by a caller-supplied formatter or property getter.

    Examples:
        >>> render(PrintingConfig(), [1, 2])
        '[\\n\\t1,\\n\\t2\\n]'
        >>> render(PrintingConfig(), [])
        '[]'
    """
    return Renderer(config).render(obj)


# Private Methods ------------------------------------------------------------------------------------------------------

def _call_formatter(formatter: Formatter, value: Any) -> str:
    result = formatter(value)
    if result is None:
        return "null"
    return result if isinstance(result, str) else str(result)


def _head(iterable: abc.Iterable, n: int) -> tuple[list[Any], bool]:
    """Take up to n items and indicate whether there were more items."""
    buf = list(islice(iter(iterable), n + 1))
    if len(buf) <= n:
        return buf, False
    return buf[:n], True
