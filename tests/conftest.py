"""Shared pytest fixtures for diatoms tests."""

import pytest

from diatoms._internal.introspection import TypeIntrospector
from diatoms.container import Container
from diatoms.lock_mode import LockMode


@pytest.fixture()
def container() -> Container:
    """Default container with thread locking enabled."""
    return Container()


@pytest.fixture()
def unlocked_container() -> Container:
    """Container with locking disabled."""
    return Container(lock_mode=LockMode.NONE)


@pytest.fixture()
def introspector() -> TypeIntrospector:
    """TypeIntrospector instance."""
    return TypeIntrospector()
