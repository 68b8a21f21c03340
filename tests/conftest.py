import pytest

from scalargrad import use_tape


@pytest.fixture(autouse=True)
def tape():
    """Run every test on its own fresh tape."""
    with use_tape() as t:
        yield t
