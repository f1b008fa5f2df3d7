"""Core domain entities."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Any, ClassVar, Iterable, Optional, Union


class ProviderShape(str, Enum):
    """How a provider's weekly summary groups its entries."""

    CATEGORIZED = "categorized"
    SIMPLE = "simple"


class EntryKind(str, Enum):
    """Raw entry type produced by a provider feed."""

    CHANGE = "change"
    RELEASE = "release"


@dataclass
class ChangeEntry:
    """Changelog entry from an RSS or API feed."""

    title: str
    url: str
    content: str = ""
    pub_date: str = ""
    muted: bool = False
    muted_by: Optional[str] = None
    labels: dict[str, list[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError("Title cannot be empty")
        if not self.url:
            raise ValueError("URL cannot be empty")

    @property
    def display_title(self) -> str:
        return self.title

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChangeEntry":
        return cls(
            title=data.get("title", ""),
            url=data.get("url", ""),
            content=data.get("content", ""),
            pub_date=data.get("pubDate", ""),
            muted=bool(data.get("muted", False)),
            muted_by=data.get("mutedBy"),
            labels=dict(data.get("labels") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "title": self.title,
            "url": self.url,
            "content": self.content,
            "pubDate": self.pub_date,
        }
        if self.muted:
            data["muted"] = True
            data["mutedBy"] = self.muted_by
        if self.labels:
            data["labels"] = self.labels
        return data


@dataclass
class ReleaseEntry:
    """Versioned release entry (e.g. a GitHub release)."""

    version: str
    url: str
    body: str = ""
    published_at: str = ""
    muted: bool = False
    muted_by: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.version:
            raise ValueError("Version cannot be empty")
        if not self.url:
            raise ValueError("URL cannot be empty")

    @property
    def display_title(self) -> str:
        return self.version

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReleaseEntry":
        return cls(
            version=data.get("version", ""),
            url=data.get("url", ""),
            body=data.get("body", ""),
            published_at=data.get("publishedAt", ""),
            muted=bool(data.get("muted", False)),
            muted_by=data.get("mutedBy"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "version": self.version,
            "url": self.url,
            "body": self.body,
            "publishedAt": self.published_at,
        }
        if self.muted:
            data["muted"] = True
            data["mutedBy"] = self.muted_by
        return data


ProviderEntry = Union[ChangeEntry, ReleaseEntry]


def without_muted(entries: Iterable[ProviderEntry]) -> list[ProviderEntry]:
    """Drop entries an upstream filter marked as muted."""
    return [entry for entry in entries if not entry.muted]


@dataclass(frozen=True)
class WeeklyContext:
    """Read-only parameters shared by every step of one weekly run."""

    start_date: str
    end_date: str
    auth_token: str
    owner: str
    repo: str
    category_name: str
    dry_run: bool = False
    auto_close: bool = False

    @classmethod
    def for_week(
        cls,
        end_date: str,
        auth_token: str,
        owner: str,
        repo: str,
        category_name: str,
        dry_run: bool = False,
        auto_close: bool = False,
        period_days: int = 7,
    ) -> "WeeklyContext":
        """Build a context for the period ending on ``end_date`` (inclusive)."""
        end = date.fromisoformat(end_date)
        start = end - timedelta(days=period_days - 1)
        return cls(
            start_date=start.isoformat(),
            end_date=end_date,
            auth_token=auth_token,
            owner=owner,
            repo=repo,
            category_name=category_name,
            dry_run=dry_run,
            auto_close=auto_close,
        )


@dataclass
class PastDiscussion:
    """Previously published weekly discussion for one provider."""

    provider_id: str
    date: str
    url: str
    body: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PastDiscussion":
        return cls(
            provider_id=data["providerId"],
            date=data["date"],
            url=data["url"],
            body=data.get("body", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "providerId": self.provider_id,
            "date": self.date,
            "url": self.url,
            "body": self.body,
        }


@dataclass
class SummarizeRequest:
    """Self-contained payload for the summarization collaborator."""

    provider_id: str
    current_entries: list[ProviderEntry]
    past_discussions: list[PastDiscussion]
    json_schema: dict[str, Any]
    prompt_template: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "providerId": self.provider_id,
            "currentData": [entry.to_dict() for entry in self.current_entries],
            "pastDiscussions": [d.to_dict() for d in self.past_discussions],
            "jsonSchema": self.json_schema,
            "promptTemplate": self.prompt_template,
        }


@dataclass
class PublishOutcome:
    """Result of publishing one weekly discussion."""

    id: str
    url: str
    title: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "url": self.url, "title": self.title}


# Summary union: exactly one variant per shape.


@dataclass
class SummaryEntry:
    """Entry reference inside a summary (url + title only)."""

    url: str
    title: str


@dataclass
class CategoryGroup:
    """Category bucket of a categorized summary."""

    category: str
    entries: list[SummaryEntry]
    comment: str
    historical_context: str


@dataclass
class CategorizedSummary:
    """Weekly summary grouping entries into categories."""

    provider_id: str
    highlights: list[str]
    categories: list[CategoryGroup]

    shape: ClassVar[ProviderShape] = ProviderShape.CATEGORIZED


@dataclass
class SimpleSummary:
    """Weekly summary with a flat entry list and one overall comment."""

    provider_id: str
    highlights: list[str]
    entries: list[SummaryEntry]
    overall_comment: str
    historical_context: str

    shape: ClassVar[ProviderShape] = ProviderShape.SIMPLE


ProviderWeeklySummary = Union[CategorizedSummary, SimpleSummary]


# Remote discussion store records.


@dataclass
class DiscussionCategory:
    id: str
    name: str


@dataclass
class RepositoryInfo:
    """Repository identity with its discussion categories and labels."""

    id: str
    categories: list[DiscussionCategory]
    labels: dict[str, str]

    def find_category(self, name: str) -> Optional[DiscussionCategory]:
        return next((c for c in self.categories if c.name == name), None)


@dataclass
class DiscussionNode:
    title: str
    url: str
    body: str
    created_at: str


@dataclass
class CreatedDiscussion:
    id: str
    url: str
