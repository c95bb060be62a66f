from pathlib import Path

import pytest

from gitfacts.repository import FakeBackend, FakeRepositoryHandle


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def handle() -> FakeRepositoryHandle:
    """Create an empty in-memory repository at /fake/repo."""
    return FakeRepositoryHandle()


@pytest.fixture
def backend(handle: FakeRepositoryHandle) -> FakeBackend:
    """Create a backend that opens ``handle`` from /fake/repo."""
    fake = FakeBackend()
    _ = fake.add(handle)
    return fake
