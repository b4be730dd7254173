#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import uuid

# Third party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from models import Family, Person

BEN_ID = uuid.UUID("6f1c2a4e-0d3b-4b7a-9e21-5c8d7f0a1b2c")


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def first_person() -> Person:
    """Fully populated person with a best friend, friends and a dictionary."""
    return Person(
        id=BEN_ID,
        name="Ben",
        surname="Big",
        height=170.1,
        age=20,
        best_friend=Person(name="Bob", surname="Boby", height=40, age=80),
        friends=[
            Person(name="Alice", surname="Sev", height=50, age=30),
            Person(name="Max", surname="Albor", height=10, age=9),
        ],
        body_parts={"Hand": 2, "Foot": 2, "Head": 1, "Tail": 0},
    )


@pytest.fixture
def second_person() -> Person:
    """Person with default values only."""
    return Person()


@pytest.fixture
def family(first_person, second_person) -> Family:
    """Family sharing the same Person objects between parents and children."""
    return Family(mom=first_person, dad=second_person, children=[first_person, second_person])
