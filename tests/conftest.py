import pytest

from inflector import Inflector


@pytest.fixture
def inst():
    """A fresh engine with the default tables, so registrations never leak."""
    return Inflector()


@pytest.fixture
def bare():
    return Inflector(defaults=False)
