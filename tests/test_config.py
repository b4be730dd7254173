#
# Printwise - Config Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import datetime
import dataclasses
from decimal import Decimal

# Third party ----------------------------------------------------------------------------------------------------------
import pytest
from babel import Locale

# Local ----------------------------------------------------------------------------------------------------------------
from printwise.config import DEFAULT_MAX_DEPTH, PrintingConfig
from printwise.errors import (InvalidArgumentError, InvalidSelectorError, LocaleNotFoundError, PrintingError,
                              UnsupportedTypeError)
from printwise.members import MemberKey

from models import Animal, Dog, Family, Person


# Tests ----------------------------------------------------------------------------------------------------------------

class TestDefaults:
    def test_empty_rules(self):
        """Start with no rules and the default depth."""
        config = PrintingConfig()
        assert config.excluded_types == frozenset()
        assert config.excluded_members == frozenset()
        assert dict(config.type_formatters) == {}
        assert dict(config.member_formatters) == {}
        assert dict(config.locale_overrides) == {}
        assert config.max_depth == DEFAULT_MAX_DEPTH == 5


class TestImmutability:
    def test_mutators_return_new_config(self):
        """Leave the original configuration untouched."""
        base = PrintingConfig()
        changed = (base
                   .exclude_type(str)
                   .exclude_member(Person, "age")
                   .set_type_formatter(int, str)
                   .set_member_formatter(Person, "name", str)
                   .set_locale(float, "en-US")
                   .set_max_depth(2))
        assert base == PrintingConfig()
        assert changed is not base
        assert changed.max_depth == 2

    def test_branching(self):
        """Branch two independent configurations from one base."""
        base = PrintingConfig().exclude_type(str)
        left = base.set_type_formatter(int, lambda i: "L")
        right = base.set_type_formatter(int, lambda i: "R")
        assert left.get_type_formatter(int)(1) == "L"
        assert right.get_type_formatter(int)(1) == "R"
        assert base.get_type_formatter(int) is None
        assert left.excluded_types == right.excluded_types == frozenset({str})

    def test_frozen(self):
        """Reject attribute assignment."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            PrintingConfig().max_depth = 3  # type: ignore[misc]

    def test_read_only_maps(self):
        """Reject item assignment on the rule maps."""
        config = PrintingConfig().set_type_formatter(int, str)
        with pytest.raises(TypeError):
            config.type_formatters[float] = str  # type: ignore[index]

    def test_unmodified_maps_shared(self):
        """Share rule maps that a mutator did not touch."""
        base = PrintingConfig().set_type_formatter(int, str)
        changed = base.exclude_type(bytes)
        assert changed.type_formatters is base.type_formatters


class TestExcludeType:
    def test_adds_type(self):
        """Record the excluded type."""
        config = PrintingConfig().exclude_type(str).exclude_type(int)
        assert config.is_type_excluded(str)
        assert config.is_type_excluded(int)
        assert not config.is_type_excluded(bool)

    def test_rejects_non_type(self):
        """Raise TypeError for non-class arguments."""
        with pytest.raises(TypeError, match="expected a class"):
            PrintingConfig().exclude_type("str")  # type: ignore[arg-type]


class TestExcludeMember:
    @pytest.mark.parametrize(
        "selector",
        [
            pytest.param("age", id="name"),
            pytest.param(lambda p: p.age, id="lambda"),
            pytest.param(MemberKey(Person, "age"), id="member-key"),
        ],
    )
    def test_selector_kinds(self, selector):
        """Accept names, selector callables and member keys."""
        config = PrintingConfig().exclude_member(Person, selector)
        assert config.excluded_members == frozenset({MemberKey(Person, "age")})

    def test_nested_path(self):
        """Resolve a path to the member of the last hop."""
        config = PrintingConfig().exclude_member(Family, lambda f: f.mom.name)
        assert config.is_member_excluded(MemberKey(Person, "name"))

    def test_inherited_member_scoped_to_declaring_class(self):
        """Scope inherited members to the declaring class."""
        config = PrintingConfig().exclude_member(Dog, "name")
        assert config.is_member_excluded(MemberKey(Animal, "name"))

    @pytest.mark.parametrize(
        "selector, match",
        [
            pytest.param("nope", "has no data member", id="unknown"),
            pytest.param("greet", "is a method", id="method"),
            pytest.param(lambda p: p.greet(), "calls 'greet'", id="call"),
            pytest.param(lambda p: 42, "must return an attribute", id="constant"),
            pytest.param("_private", "not a public member", id="private"),
        ],
    )
    def test_invalid_selector(self, selector, match):
        """Raise InvalidSelectorError at configuration time."""
        with pytest.raises(InvalidSelectorError, match=match):
            PrintingConfig().exclude_member(Person, selector)


class TestFormatters:
    def test_type_formatter_last_write_wins(self):
        """Replace the formatter registered for the same type."""
        first, second = (lambda v: "1"), (lambda v: "2")
        config = PrintingConfig().set_type_formatter(int, first).set_type_formatter(int, second)
        assert config.get_type_formatter(int) is second
        assert len(config.type_formatters) == 1

    def test_member_formatter_last_write_wins(self):
        """Replace the formatter registered for the same member."""
        first, second = (lambda v: "1"), (lambda v: "2")
        config = (PrintingConfig()
                  .set_member_formatter(Person, "name", first)
                  .set_member_formatter(Person, lambda p: p.name, second))
        assert config.get_member_formatter(MemberKey(Person, "name")) is second
        assert len(config.member_formatters) == 1

    def test_exact_type_lookup(self):
        """Look up type formatters by exact type, bool is not int."""
        config = PrintingConfig().set_type_formatter(int, str)
        assert config.get_type_formatter(bool) is None

    def test_rejects_non_callable(self):
        """Raise TypeError for non-callable formatters."""
        with pytest.raises(TypeError, match="must be callable"):
            PrintingConfig().set_type_formatter(int, "fmt")  # type: ignore[arg-type]

    def test_member_formatter_invalid_selector(self):
        """Raise InvalidSelectorError for unknown members."""
        with pytest.raises(InvalidSelectorError):
            PrintingConfig().set_member_formatter(Person, "nickname", str)


class TestSetLocale:
    @pytest.mark.parametrize(
        "typ",
        [
            pytest.param(int, id="int"),
            pytest.param(float, id="float"),
            pytest.param(Decimal, id="decimal"),
            pytest.param(datetime.date, id="date"),
            pytest.param(datetime.datetime, id="datetime"),
            pytest.param(datetime.time, id="time"),
        ],
    )
    def test_supported(self, typ):
        """Store a parsed babel Locale for localizable types."""
        config = PrintingConfig().set_locale(typ, "de-DE")
        assert config.get_locale(typ) == Locale("de", "DE")

    def test_accepts_locale_object(self):
        """Accept babel Locale instances as-is."""
        locale = Locale("en", "US")
        assert PrintingConfig().set_locale(float, locale).get_locale(float) is locale

    @pytest.mark.parametrize(
        "typ",
        [
            pytest.param(str, id="str"),
            pytest.param(bool, id="bool"),
            pytest.param(complex, id="complex"),
            pytest.param(Person, id="record"),
        ],
    )
    def test_unsupported_type(self, typ):
        """Raise UnsupportedTypeError for types without locale-aware conversion."""
        with pytest.raises(UnsupportedTypeError):
            PrintingConfig().set_locale(typ, "en-US")

    def test_unknown_locale(self):
        """Raise LocaleNotFoundError for unknown identifiers."""
        with pytest.raises(LocaleNotFoundError):
            PrintingConfig().set_locale(float, "zz-ZZ")


class TestMaxDepth:
    @pytest.mark.parametrize("value", [0, 1, 5, 100])
    def test_valid(self, value):
        """Accept non-negative depths."""
        assert PrintingConfig().set_max_depth(value).max_depth == value

    def test_negative(self):
        """Raise InvalidArgumentError for negative depths."""
        with pytest.raises(InvalidArgumentError, match=">= 0"):
            PrintingConfig().set_max_depth(-1)

    def test_negative_in_constructor(self):
        """Validate max_depth passed to the constructor."""
        with pytest.raises(InvalidArgumentError):
            PrintingConfig(max_depth=-3)

    @pytest.mark.parametrize("value", ["3", 2.5, True, None])
    def test_non_int(self, value):
        """Raise TypeError for non-int depths."""
        with pytest.raises(TypeError):
            PrintingConfig().set_max_depth(value)

    def test_error_hierarchy(self):
        """Expose errors under the builtin exception they refine."""
        assert issubclass(InvalidArgumentError, ValueError)
        assert issubclass(InvalidSelectorError, ValueError)
        assert issubclass(UnsupportedTypeError, TypeError)
        assert issubclass(LocaleNotFoundError, InvalidArgumentError)
        assert all(issubclass(e, PrintingError) for e in (InvalidArgumentError, InvalidSelectorError,
                                                           UnsupportedTypeError))
