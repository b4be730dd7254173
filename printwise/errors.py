"""
Printwise error kinds.

All of them are raised synchronously by the configuration call that received the bad input,
never deferred to render time.
"""


class PrintingError(Exception):
    """Base class for printwise errors."""


class InvalidArgumentError(PrintingError, ValueError):
    """A configuration value is out of range, e.g. a negative max depth or trim length."""


class LocaleNotFoundError(InvalidArgumentError):
    def __init__(self, locale: str) -> None:
        super().__init__(f'Cannot find locale "{locale}"')
        self.locale = locale


class InvalidSelectorError(PrintingError, ValueError):
    """A member selector does not resolve to a data member."""


class UnsupportedTypeError(PrintingError, TypeError):
    """A type cannot take the requested rule, e.g. a locale override on a type without locale-aware conversion."""
