"""
Fluent builder surface over PrintingConfig.

Each call returns a new immutable object, so partially configured printers can be stored and
branched:

    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Person:
    ...     name: str = ""
    ...     age: int = 0
    >>> base = ObjectPrinter.for_type(Person).exclude(lambda p: p.age)
    >>> loud = base.printing(str).using(str.upper)
    >>> short = base.printing(lambda p: p.name).trimmed_to(1)
    >>> short.print_to_string(Person(name="Ben", age=20))
    'Person\\n\\tname = B\\n'
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Callable, Generic, TypeVar

# Local ----------------------------------------------------------------------------------------------------------------
from .config import Formatter, PrintingConfig
from .formatters import fmt_type, trimmed_to
from .locale import Localey
from .members import MemberKey, select_member
from .printing import render

T = TypeVar("T")


# Classes --------------------------------------------------------------------------------------------------------------

class ObjectPrinter(Generic[T]):
    """
    Immutable printer for objects of one owner class.

    Member selectors passed to exclude() and printing() start from the owner class and may be
    a member name ("age"), a dotted path ("best_friend.name"), a selector callable
    (lambda p: p.best_friend.name) or a MemberKey.

    Attributes:
        owner: Class member selectors are resolved against.
        config: Accumulated PrintingConfig.
    """

    __slots__ = ("_owner", "_config")

    def __init__(self, owner: type[T], config: PrintingConfig | None = None) -> None:
        if not isinstance(owner, type):
            raise TypeError(f"owner must be a class, but got {fmt_type(owner)}")
        if not isinstance(config, (PrintingConfig, type(None))):
            raise TypeError(f"config must be a PrintingConfig instance, but found {fmt_type(config)}")
        self._owner = owner
        self._config = config or PrintingConfig()

    def __repr__(self) -> str:
        return f"ObjectPrinter({self._owner.__name__}, max_depth={self._config.max_depth})"

    @classmethod
    def for_type(cls, owner: type[T]) -> "ObjectPrinter[T]":
        """Create a printer with the default configuration."""
        return cls(owner)

    @property
    def owner(self) -> type[T]:
        return self._owner

    @property
    def config(self) -> PrintingConfig:
        return self._config

    def with_config(self, config: PrintingConfig) -> "ObjectPrinter[T]":
        return type(self)(self._owner, config)

    def exclude(self, target: type | Any) -> "ObjectPrinter[T]":
        """Exclude a whole type (when target is a class) or a single member of the owner."""
        if isinstance(target, type):
            return self.with_config(self._config.exclude_type(target))
        return self.with_config(self._config.exclude_member(self._owner, target))

    def printing(self, target: type | Any) -> "TypePrintingConfig[T] | MemberPrintingConfig[T]":
        """Start a formatting rule for a whole type (when target is a class) or a single member."""
        if isinstance(target, type):
            return TypePrintingConfig(self, target)
        return MemberPrintingConfig(self, select_member(self._owner, target).key)

    def use_locale(self, typ: type, locale: Localey) -> "ObjectPrinter[T]":
        return self.with_config(self._config.set_locale(typ, locale))

    def set_max_nesting_level(self, max_depth: int) -> "ObjectPrinter[T]":
        return self.with_config(self._config.set_max_depth(max_depth))

    def print_to_string(self, obj: T) -> str:
        return render(self._config, obj)


class TypePrintingConfig(Generic[T]):
    """Pending formatting rule for every value of one type."""

    __slots__ = ("_printer", "_type")

    def __init__(self, printer: ObjectPrinter[T], typ: type) -> None:
        self._printer = printer
        self._type = typ

    def using(self, formatter: Formatter) -> ObjectPrinter[T]:
        """Format every value of the type with formatter; replaces an earlier rule for the type."""
        printer = self._printer
        return printer.with_config(printer.config.set_type_formatter(self._type, formatter))


class MemberPrintingConfig(Generic[T]):
    """Pending formatting rule for one member."""

    __slots__ = ("_printer", "_key")

    def __init__(self, printer: ObjectPrinter[T], key: MemberKey) -> None:
        self._printer = printer
        self._key = key

    @property
    def key(self) -> MemberKey:
        return self._key

    def using(self, formatter: Formatter) -> ObjectPrinter[T]:
        """Format the member with formatter; replaces an earlier rule for the member."""
        printer = self._printer
        config = printer.config.set_member_formatter(self._key.owner, self._key, formatter)
        return printer.with_config(config)

    def trimmed_to(self, length: int) -> ObjectPrinter[T]:
        """Print at most length characters of the member's text."""
        return self.using(trimmed_to(length))


# Methods --------------------------------------------------------------------------------------------------------------

def print_to_string(obj: Any,
                    configure: Callable[[ObjectPrinter], ObjectPrinter] | None = None) -> str:
    """
    Render obj with a printer built for its runtime type.

    Args:
        obj: Object to render.
        configure: Optional callable receiving the default printer and returning a configured one.

    Returns:
        Text dump of obj.

    Examples:
        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class Person:
        ...     name: str = ""
        ...     age: int = 0
        >>> print_to_string(Person(name="Ben", age=20), lambda c: c.exclude(lambda p: p.age))
        'Person\\n\\tname = Ben\\n'
    """
    printer = ObjectPrinter.for_type(type(obj))
    if configure is not None:
        printer = configure(printer)
        if not isinstance(printer, ObjectPrinter):
            raise TypeError(f"configure must return an ObjectPrinter, but got {fmt_type(printer)}")
    return printer.print_to_string(obj)
