#
# Printwise - Utils Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import datetime
import uuid

# Third party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from printwise.utils import class_name

from models import Dog, Person


# Tests ----------------------------------------------------------------------------------------------------------------

class TestClassName:
    @pytest.mark.parametrize(
        "obj, fully_qualified_builtins, expected",
        [
            pytest.param(int, False, "int", id="builtin-class"),
            pytest.param(10, False, "int", id="builtin-instance"),
            pytest.param(int, True, "builtins.int", id="builtin-class-fq"),
            pytest.param([1], True, "builtins.list", id="builtin-list-fq"),
            pytest.param(None, False, "NoneType", id="none"),
        ],
    )
    def test_builtins(self, obj, fully_qualified_builtins, expected):
        """Qualify builtins only when fully_qualified_builtins is set."""
        assert class_name(obj, fully_qualified_builtins=fully_qualified_builtins) == expected

    def test_builtins_ignore_user_flag(self):
        """Keep builtins short when only fully_qualified is set."""
        assert class_name(3.5, fully_qualified=True) == "float"

    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(uuid.uuid4(), "uuid.UUID", id="uuid"),
            pytest.param(datetime.date(2024, 1, 2), "datetime.date", id="date"),
            pytest.param(Person, "models.Person", id="record-class"),
        ],
    )
    def test_fully_qualified(self, obj, expected):
        """Prefix non-builtin classes with their module."""
        assert class_name(obj, fully_qualified=True) == expected

    def test_record_instance(self):
        """Return the bare name for records and their instances."""
        assert class_name(Person()) == class_name(Person) == "Person"

    def test_subclass(self):
        """Name the runtime class, not the base."""
        assert class_name(Dog()) == "Dog"
