from __future__ import annotations

import pytest

from diatoms.container import Container


@pytest.fixture()
def diatoms_container() -> Container:
    """Create a per-test container.

    The fixture is function-scoped, so bindings and cached shared instances
    are isolated between tests unless users override the fixture scope.
    Override it in a ``conftest.py`` to pre-register test doubles.

    Returns:
        A new ``Container`` instance.

    """
    return Container()


@pytest.fixture()
def diatoms_instances(
    request: pytest.FixtureRequest,
    diatoms_container: Container,
) -> Container:
    """Return ``diatoms_container`` with instances from ``@pytest.mark.diatoms_instances``.

    The marker takes a mapping of identifier to pre-built value, each
    registered through ``Container.instance`` before the test runs::

        @pytest.mark.diatoms_instances({Clock: FrozenClock()})
        def test_expiry(diatoms_instances: Container) -> None: ...

    """
    for marker in reversed(list(request.node.iter_markers("diatoms_instances"))):
        for abstract, value in marker.args[0].items():
            diatoms_container.instance(abstract, value)
    return diatoms_container


def pytest_configure(config: pytest.Config) -> None:
    """Register the plugin marker."""
    config.addinivalue_line(
        "markers",
        "diatoms_instances(mapping): pre-register instances in the diatoms_instances fixture",
    )
