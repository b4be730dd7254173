"""
Printwise printing configuration.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
from dataclasses import dataclass, field, replace as dataclasses_replace
from types import MappingProxyType
from typing import Any, Callable, Mapping

# Third party ----------------------------------------------------------------------------------------------------------
from babel import Locale

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import InvalidArgumentError, UnsupportedTypeError
from .formatters import fmt_type, fmt_value
from .locale import Localey, get_data, supports_locale
from .members import MemberKey, select_member

DEFAULT_MAX_DEPTH = 5

Formatter = Callable[[Any], Any]

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class PrintingConfig:
    """
    Immutable set of rendering rules.

    Every mutator returns a new PrintingConfig which shares the unmodified rule collections
    with the original; the original is never changed, so a chain of calls can be branched and
    reused freely.

    Attributes:
        excluded_types: Types whose values are never printed.
        excluded_members: Member identities (declaring class + name) never printed.
        type_formatters: Formatters applied to every value of an exact runtime type.
        member_formatters: Formatters applied only at a specific member site.
        locale_overrides: Locales used to format localizable values of a type.
        max_depth: Maximum nesting level expanded by the renderer, must be >= 0.

    Examples:
        >>> base = PrintingConfig().exclude_type(str)
        >>> shallow = base.set_max_depth(1)
        >>> base.max_depth, shallow.max_depth
        (5, 1)
    """
    excluded_types: frozenset[type] = frozenset()
    excluded_members: frozenset[MemberKey] = frozenset()
    type_formatters: Mapping[type, Formatter] = field(default_factory=lambda: MappingProxyType({}))
    member_formatters: Mapping[MemberKey, Formatter] = field(default_factory=lambda: MappingProxyType({}))
    locale_overrides: Mapping[type, Locale] = field(default_factory=lambda: MappingProxyType({}))
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        """Validate max_depth; runs for the constructor and for every replace()."""
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise TypeError(f"max_depth must be an int, but got {fmt_type(self.max_depth)}")
        if self.max_depth < 0:
            raise InvalidArgumentError(f"max_depth must be >= 0, but got {fmt_value(self.max_depth)}")

    # Mutators -----------------------------------------

    def exclude_type(self, typ: type) -> "PrintingConfig":
        """Never print values of typ."""
        _validate_type(typ)
        logger.debug("exclude type %s", typ.__name__)
        return dataclasses_replace(self, excluded_types=self.excluded_types | {typ})

    def exclude_member(self, owner: type, member: Any) -> "PrintingConfig":
        """
        Never print the member selected on owner.

        Args:
            owner: Class the selector starts from.
            member: Member name, dotted path, selector callable or MemberKey.

        Raises:
            InvalidSelectorError: If the selector does not resolve to a data member.
        """
        _validate_type(owner)
        key = select_member(owner, member).key
        logger.debug("exclude member %s", key)
        return dataclasses_replace(self, excluded_members=self.excluded_members | {key})

    def set_type_formatter(self, typ: type, formatter: Formatter) -> "PrintingConfig":
        """Format every value of typ with formatter, replacing a previous formatter for typ."""
        _validate_type(typ)
        _validate_formatter(formatter)
        logger.debug("set type formatter for %s", typ.__name__)
        return dataclasses_replace(self, type_formatters=_updated(self.type_formatters, typ, formatter))

    def set_member_formatter(self, owner: type, member: Any, formatter: Formatter) -> "PrintingConfig":
        """
        Format the member selected on owner with formatter, replacing a previous formatter for it.

        Raises:
            InvalidSelectorError: If the selector does not resolve to a data member.
        """
        _validate_type(owner)
        _validate_formatter(formatter)
        key = select_member(owner, member).key
        logger.debug("set member formatter for %s", key)
        return dataclasses_replace(self, member_formatters=_updated(self.member_formatters, key, formatter))

    def set_locale(self, typ: type, locale: Localey) -> "PrintingConfig":
        """
        Format localizable values of typ with the conventions of locale.

        Args:
            typ: A number, date or time type.
            locale: Babel Locale or identifier such as "en-US" or "de_DE".

        Raises:
            UnsupportedTypeError: If typ has no locale-aware conversion.
            LocaleNotFoundError: If the locale identifier is unknown.
        """
        _validate_type(typ)
        if not supports_locale(typ):
            raise UnsupportedTypeError(f"{fmt_type(typ)} has no locale-aware conversion")
        locale_data = get_data(locale)
        logger.debug("set locale %s for %s", locale_data, typ.__name__)
        return dataclasses_replace(self, locale_overrides=_updated(self.locale_overrides, typ, locale_data))

    def set_max_depth(self, max_depth: int) -> "PrintingConfig":
        """
        Limit the nesting level expanded by the renderer.

        Raises:
            InvalidArgumentError: If max_depth is negative.
        """
        return dataclasses_replace(self, max_depth=max_depth)

    # Lookups ------------------------------------------

    def is_type_excluded(self, typ: type | None) -> bool:
        return typ in self.excluded_types

    def is_member_excluded(self, key: MemberKey) -> bool:
        return key in self.excluded_members

    def get_type_formatter(self, typ: type | None) -> Formatter | None:
        return self.type_formatters.get(typ)

    def get_member_formatter(self, key: MemberKey) -> Formatter | None:
        return self.member_formatters.get(key)

    def get_locale(self, typ: type | None) -> Locale | None:
        return self.locale_overrides.get(typ)


# Private Methods ------------------------------------------------------------------------------------------------------

def _updated(mapping: Mapping, key: Any, value: Any) -> MappingProxyType:
    return MappingProxyType({**mapping, key: value})


def _validate_type(typ: Any) -> None:
    if not isinstance(typ, type):
        raise TypeError(f"expected a class, but got {fmt_type(typ)}")


def _validate_formatter(formatter: Any) -> None:
    if not callable(formatter):
        raise TypeError(f"formatter must be callable, but got {fmt_type(formatter)}")
