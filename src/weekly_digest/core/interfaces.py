"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from weekly_digest.core.entities import (
    CreatedDiscussion,
    DiscussionNode,
    ProviderEntry,
    ProviderWeeklySummary,
    RepositoryInfo,
)
from weekly_digest.core.providers import ProviderInfo


class DiscussionStore(ABC):
    """Interface for the remote collaborative-discussion store."""

    @abstractmethod
    async def fetch_repository(self, owner: str, repo: str) -> RepositoryInfo:
        """Fetch repository id, discussion categories and labels in one call."""
        pass

    @abstractmethod
    async def list_discussions(
        self, owner: str, repo: str, limit: int = 50
    ) -> list[DiscussionNode]:
        """List the newest discussions, most recent first."""
        pass

    @abstractmethod
    async def create_discussion(
        self, repository_id: str, category_id: str, title: str, body: str
    ) -> CreatedDiscussion:
        """Create a discussion under a category."""
        pass

    @abstractmethod
    async def create_label(self, repository_id: str, name: str, color: str) -> str:
        """Create a label and return its id."""
        pass

    @abstractmethod
    async def add_labels(self, labelable_id: str, label_ids: list[str]) -> None:
        """Attach existing labels to a discussion."""
        pass

    @abstractmethod
    async def close_discussion(self, discussion_id: str) -> None:
        """Close a discussion."""
        pass


class WeeklyMarkdownRenderer(ABC):
    """Interface for rendering weekly discussion documents."""

    @abstractmethod
    def generate_title(self, provider: ProviderInfo, end_date: str) -> str:
        pass

    @abstractmethod
    def parse_title_date(self, title: str, provider: ProviderInfo) -> Optional[str]:
        """Return the period date if ``title`` is a weekly title for ``provider``."""
        pass

    @abstractmethod
    def generate_body(
        self,
        provider: ProviderInfo,
        entries: Sequence[ProviderEntry],
        summary: ProviderWeeklySummary,
        start_date: str,
        end_date: str,
    ) -> str:
        pass

    @abstractmethod
    def generate_mention(self) -> str:
        pass
