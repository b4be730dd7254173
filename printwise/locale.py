"""
Locale-aware conversion of scalar values, backed by Babel.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import datetime
from decimal import Decimal
from typing import Any, TypeAlias

# Third party ----------------------------------------------------------------------------------------------------------
from babel import Locale, UnknownLocaleError, dates, numbers

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import LocaleNotFoundError

Localey: TypeAlias = str | Locale

# datetime.datetime is a subclass of datetime.date
LOCALIZABLE_TYPES = (int, float, Decimal, datetime.date, datetime.time)


# Methods --------------------------------------------------------------------------------------------------------------

def to_babel_identifier(locale: Localey) -> str:
    """Return a Babel identifier ("en_US") for an IETF tag ("en-US"), a Babel identifier or a Locale."""
    if isinstance(locale, Locale):
        return str(locale)
    return locale.strip().replace("-", "_")


def get_data(locale: Localey) -> Locale:
    """
    Resolve a locale descriptor to Babel locale data.

    Raises:
        LocaleNotFoundError: If the identifier is malformed or unknown to Babel.
    """
    if isinstance(locale, Locale):
        return locale
    if not isinstance(locale, str):
        raise TypeError(f"locale must be a str or babel.Locale, but got {type(locale).__name__}")
    try:
        return Locale.parse(to_babel_identifier(locale))
    except (ValueError, TypeError, UnknownLocaleError) as e:
        raise LocaleNotFoundError(locale) from e


def supports_locale(typ: type) -> bool:
    """Check whether values of `typ` have a locale-aware textual conversion."""
    if not isinstance(typ, type) or issubclass(typ, bool):
        return False
    return issubclass(typ, LOCALIZABLE_TYPES)


def is_localizable(value: Any) -> bool:
    """Check whether a value has a locale-aware textual conversion."""
    return supports_locale(type(value))


def format_localized(value: Any, locale: Locale) -> str:
    """
    Format a number, date, datetime or time with the conventions of `locale`.

    Numbers keep their full precision and are printed without grouping, only the decimal
    symbol follows the locale. Dates and times use the locale's medium format.

    Examples:
        >>> format_localized(170.1, get_data("de-DE"))
        '170,1'
        >>> format_localized(datetime.date(2024, 1, 2), get_data("en-US"))
        'Jan 2, 2024'
    """
    if isinstance(value, datetime.datetime):
        return dates.format_datetime(value, locale=locale)
    if isinstance(value, datetime.date):
        return dates.format_date(value, locale=locale)
    if isinstance(value, datetime.time):
        return dates.format_time(value, locale=locale)
    if is_localizable(value):
        return numbers.format_decimal(value, locale=locale, decimal_quantization=False, group_separator=False)
    raise TypeError(f"{type(value).__name__} values have no locale-aware conversion")
