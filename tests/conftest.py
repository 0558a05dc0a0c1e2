"""Shared test fixtures."""

from typing import Iterable, Tuple
from unittest.mock import AsyncMock

import pytest

from src.models import Entry, EntryKind, RepositoryRef, TreeSnapshot
from src.services import InMemorySessionStore, RepositoryBrowser
from src.services.github_client import GitHubClient
from src.services.telegram_client import TelegramClient

REPOSITORY = RepositoryRef(owner="octo", name="demo", branch="main", revision="abc123")


def make_snapshot(items: Iterable[Tuple[str, str]]) -> TreeSnapshot:
    """Build a snapshot from (path, "d"|"f") pairs."""
    entries = [
        Entry(path=path, kind=EntryKind.DIRECTORY if kind == "d" else EntryKind.FILE)
        for path, kind in items
    ]
    return TreeSnapshot(repository=REPOSITORY, entries=entries)


@pytest.fixture
def scenario_a_snapshot() -> TreeSnapshot:
    return make_snapshot([("src", "d"), ("src/a.txt", "f"), ("readme.md", "f")])


@pytest.fixture
def nested_snapshot() -> TreeSnapshot:
    return make_snapshot(
        [
            (".github", "d"),
            (".github/workflows", "d"),
            (".github/workflows/ci.yml", "f"),
            ("README.md", "f"),
            ("src", "d"),
            ("src/app.py", "f"),
            ("src/utils", "d"),
            ("src/utils/helpers.py", "f"),
            ("src/utils/deep", "d"),
            ("src/utils/deep/Test_Data.json", "f"),
            ("tests", "d"),
            ("tests/test_app.py", "f"),
        ]
    )


@pytest.fixture
def flat_snapshot() -> TreeSnapshot:
    return make_snapshot([(f"file{i:02d}.txt", "f") for i in range(20)])


@pytest.fixture
def repository_gateway() -> AsyncMock:
    gateway = AsyncMock(spec=GitHubClient)
    gateway.resolve_default_revision.return_value = REPOSITORY
    gateway.resolve_revision.return_value = REPOSITORY
    return gateway


@pytest.fixture
def delivery_gateway() -> AsyncMock:
    gateway = AsyncMock(spec=TelegramClient)
    gateway.send_keyboard.return_value = 100
    return gateway


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def browser(repository_gateway, delivery_gateway, session_store) -> RepositoryBrowser:
    return RepositoryBrowser(
        repository_gateway=repository_gateway,
        delivery_gateway=delivery_gateway,
        session_store=session_store,
        page_size=8,
    )


@pytest.fixture
def snapshot_factory():
    return make_snapshot
