"""Shared fixtures for weekly digest tests."""

import random
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

from weekly_digest.adapters.markdown import MarkdownWeeklyGenerator
from weekly_digest.core import (
    ChangeEntry,
    CreatedDiscussion,
    DiscussionCategory,
    DiscussionStore,
    ReleaseEntry,
    RepositoryInfo,
    WeeklyContext,
)


@pytest.fixture
def ctx() -> WeeklyContext:
    """Create a weekly context ending on 2026-01-20."""
    return WeeklyContext(
        start_date="2026-01-14",
        end_date="2026-01-20",
        auth_token="test-token",
        owner="acme",
        repo="changelog",
        category_name="General",
    )


@pytest.fixture
def renderer() -> MarkdownWeeklyGenerator:
    """Create a markdown renderer with the default title prefix."""
    return MarkdownWeeklyGenerator()


@pytest.fixture
def repository() -> RepositoryInfo:
    """Create a repository with one matching category and one label."""
    return RepositoryInfo(
        id="R_1",
        categories=[
            DiscussionCategory(id="C_ann", name="Announcements"),
            DiscussionCategory(id="C_gen", name="General"),
        ],
        labels={"github": "L_github"},
    )


@pytest.fixture
def store(repository: RepositoryInfo) -> AsyncMock:
    """Create a fake discussion store."""
    mock_store = AsyncMock(spec=DiscussionStore)
    mock_store.fetch_repository.return_value = repository
    mock_store.list_discussions.return_value = []
    mock_store.create_discussion.return_value = CreatedDiscussion(
        id="D_1", url="https://github.com/acme/changelog/discussions/1"
    )
    mock_store.create_label.side_effect = lambda repository_id, name, color: f"L_{name}"
    return mock_store


@pytest.fixture
def store_factory(store: AsyncMock) -> Mock:
    """Create a store factory always returning the fake store."""
    return Mock(return_value=store)


@pytest.fixture
def rng() -> random.Random:
    """Create a seeded random generator."""
    return random.Random(42)


@pytest.fixture
def github_entries() -> list[ChangeEntry]:
    """Create GitHub changelog entries, one of them muted."""
    return [
        ChangeEntry(
            title="Copilot code review is generally available",
            url="https://github.blog/changelog/2026-01-15-copilot-review",
            pub_date="2026-01-15",
            labels={"changes_type": ["release"], "changelog_label": ["copilot"]},
        ),
        ChangeEntry(
            title="Actions: new larger runners",
            url="https://github.blog/changelog/2026-01-16-actions-runners",
            pub_date="2026-01-16",
            labels={"changes_type": ["improvement"]},
        ),
        ChangeEntry(
            title="Deprecated: legacy webhooks",
            url="https://github.blog/changelog/2026-01-17-legacy-webhooks",
            pub_date="2026-01-17",
            muted=True,
            muted_by="deprecated",
            labels={"changes_type": ["deprecation"]},
        ),
    ]


@pytest.fixture
def release_entries() -> list[ReleaseEntry]:
    """Create release entries."""
    return [
        ReleaseEntry(
            version="v2.1.0",
            url="https://github.com/anthropics/claude-code/releases/tag/v2.1.0",
            published_at="2026-01-18",
        )
    ]


@pytest.fixture
def categorized_summary_data() -> dict[str, Any]:
    """Create a valid categorized summary payload."""
    return {
        "providerId": "github",
        "highlights": [
            "Copilot code review is now GA",
            "Larger Actions runners are available",
            "Legacy webhooks are being retired",
        ],
        "categories": [
            {
                "category": "release",
                "entries": [
                    {
                        "url": "https://github.blog/changelog/2026-01-15-copilot-review",
                        "title": "Copilot code review is generally available",
                    }
                ],
                "comment": "One notable GA release.",
                "historicalContext": "Continues last week's Copilot focus.",
            },
            {
                "category": "improvement",
                "entries": [
                    {
                        "url": "https://github.blog/changelog/2026-01-16-actions-runners",
                        "title": "Actions: new larger runners",
                    }
                ],
                "comment": "Actions keeps getting faster.",
                "historicalContext": "",
            },
        ],
    }


@pytest.fixture
def simple_summary_data() -> dict[str, Any]:
    """Create a valid simple summary payload."""
    return {
        "providerId": "claudeCode",
        "highlights": ["Version 2.1.0 ships new hooks"],
        "entries": [
            {
                "url": "https://github.com/anthropics/claude-code/releases/tag/v2.1.0",
                "title": "v2.1.0",
            }
        ],
        "overallComment": "A single feature release.",
        "historicalContext": "This is the first weekly report.",
    }
