# Shared fixtures for script registry tests
# Created: 2026-10-12

from unittest.mock import AsyncMock

import pytest

from scriptregistry.config import Settings
from scriptregistry.coordinator import RegistryCoordinator
from scriptregistry.models import Directory, Script, Tree


def build_tree() -> Tree:
    """Sample registry used across tests.

    Scripts (1)
      Sub (2)
      Tools (3)
        Nested (4)
          Cleanup (13)
        Deploy (12)
      Foo (10)
      Bar (11)
    Archive (6)
      Old foo (14)
    """
    return Tree(
        directories=(
            Directory(
                id=1,
                name="Scripts",
                children=(
                    Directory(id=2, name="Sub"),
                    Directory(
                        id=3,
                        name="Tools",
                        children=(
                            Directory(id=4, name="Nested", scripts=(Script(13, "Cleanup"),)),
                        ),
                        scripts=(Script(12, "Deploy"),),
                    ),
                ),
                scripts=(Script(10, "Foo"), Script(11, "Bar")),
            ),
            Directory(id=6, name="Archive", scripts=(Script(14, "Old foo"),)),
        )
    )


@pytest.fixture
def tree():
    return build_tree()


@pytest.fixture
def settings():
    return Settings(api_base_url="http://registry.test/rest", request_timeout=5)


@pytest.fixture
def service():
    """Remote registry stand-in; every method is an AsyncMock."""
    return AsyncMock()


@pytest.fixture
def coordinator(service, tree):
    return RegistryCoordinator(service, tree=tree)
