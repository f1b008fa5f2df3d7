"""Tests for core entities."""

import pytest

from weekly_digest.core import (
    ChangeEntry,
    PastDiscussion,
    ReleaseEntry,
    SummarizeRequest,
    WeeklyContext,
    without_muted,
)


def test_change_entry_validation() -> None:
    """Test change entry validation."""
    with pytest.raises(ValueError, match="Title cannot be empty"):
        ChangeEntry(title="", url="https://example.com")

    with pytest.raises(ValueError, match="URL cannot be empty"):
        ChangeEntry(title="Test", url="")


def test_release_entry_validation() -> None:
    """Test release entry validation."""
    with pytest.raises(ValueError, match="Version cannot be empty"):
        ReleaseEntry(version="", url="https://example.com")


def test_change_entry_from_dict() -> None:
    """Test parsing a snapshot entry."""
    entry = ChangeEntry.from_dict(
        {
            "title": "New feature",
            "url": "https://example.com/1",
            "content": "Details",
            "pubDate": "2026-01-15",
            "muted": True,
            "mutedBy": "copilot",
            "labels": {"changes_type": ["improvement"]},
        }
    )

    assert entry.pub_date == "2026-01-15"
    assert entry.muted is True
    assert entry.muted_by == "copilot"
    assert entry.labels == {"changes_type": ["improvement"]}
    assert entry.display_title == "New feature"


def test_change_entry_to_dict_omits_unset_fields() -> None:
    """Test that muted and labels keys only appear when set."""
    data = ChangeEntry(title="A", url="https://example.com/a").to_dict()

    assert data == {"title": "A", "url": "https://example.com/a", "content": "", "pubDate": ""}


def test_release_entry_round_trip() -> None:
    """Test release entry serialization uses camelCase keys."""
    entry = ReleaseEntry(version="v1.0.0", url="https://example.com/v1", published_at="2026-01-18")
    data = entry.to_dict()

    assert data["publishedAt"] == "2026-01-18"
    assert ReleaseEntry.from_dict(data) == entry
    assert entry.display_title == "v1.0.0"


def test_without_muted(github_entries: list[ChangeEntry]) -> None:
    """Test that muted entries are dropped."""
    active = without_muted(github_entries)

    assert len(active) == 2
    assert all(not e.muted for e in active)


def test_weekly_context_for_week() -> None:
    """Test that the weekly period covers seven days including the end date."""
    ctx = WeeklyContext.for_week("2026-01-20", "token", "acme", "changelog", "General")

    assert ctx.start_date == "2026-01-14"
    assert ctx.end_date == "2026-01-20"
    assert ctx.dry_run is False
    assert ctx.auto_close is False


def test_weekly_context_is_immutable(ctx: WeeklyContext) -> None:
    """Test that a context cannot be modified."""
    with pytest.raises(AttributeError):
        ctx.owner = "other"  # type: ignore[misc]


def test_summarize_request_to_dict(github_entries: list[ChangeEntry]) -> None:
    """Test summarize request payload keys."""
    past = PastDiscussion(
        provider_id="github", date="2026-01-13", url="https://example.com/d/1", body="..."
    )
    request = SummarizeRequest(
        provider_id="github",
        current_entries=github_entries[:1],
        past_discussions=[past],
        json_schema={"type": "object"},
        prompt_template="{providerId}",
    )

    data = request.to_dict()

    assert set(data) == {
        "providerId",
        "currentData",
        "pastDiscussions",
        "jsonSchema",
        "promptTemplate",
    }
    assert data["currentData"][0]["url"] == github_entries[0].url
    assert data["pastDiscussions"] == [past.to_dict()]
    assert PastDiscussion.from_dict(data["pastDiscussions"][0]) == past
