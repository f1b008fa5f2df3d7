"""Per-provider adapter for the weekly pipeline."""

import logging
import random
from typing import Any, Callable, Optional, Sequence

from weekly_digest.adapters.github.label_manager import attach_labels
from weekly_digest.core.entities import (
    PastDiscussion,
    ProviderEntry,
    ProviderWeeklySummary,
    PublishOutcome,
    WeeklyContext,
)
from weekly_digest.core.interfaces import DiscussionStore, WeeklyMarkdownRenderer
from weekly_digest.core.labels import determine_labels
from weekly_digest.core.providers import ProviderInfo, get_provider_info
from weekly_digest.core.results import Failure, PipelineResult, Success
from weekly_digest.weekly.strategies import ShapeStrategy, SummarizeConfig

logger = logging.getLogger(__name__)

StoreFactory = Callable[[str], DiscussionStore]

DRY_RUN_MARKER = "(dry-run)"


class ProviderAdapter:
    """Weekly pipeline operations for one provider.

    Shared behavior (history lookup, publishing, labels) lives here;
    shape-specific behavior comes from the injected ``strategy``. The
    store is created per call from ``ctx.auth_token`` via ``store_factory``.
    """

    def __init__(
        self,
        provider_id: str,
        strategy: ShapeStrategy,
        renderer: WeeklyMarkdownRenderer,
        store_factory: StoreFactory,
        rng: Optional[random.Random] = None,
        discussion_scan: int = 50,
    ) -> None:
        self.provider_id = provider_id
        self.strategy = strategy
        self.renderer = renderer
        self.store_factory = store_factory
        self.rng = rng
        self.discussion_scan = discussion_scan

    @property
    def info(self) -> Optional[ProviderInfo]:
        return get_provider_info(self.provider_id)

    def _require_info(self) -> ProviderInfo:
        info = self.info
        if info is None:
            raise ValueError(f"Unknown provider ID: {self.provider_id}")
        return info

    async def fetch_past_discussions(
        self, ctx: WeeklyContext, limit: int = 2
    ) -> PipelineResult[list[PastDiscussion]]:
        """Fetch up to ``limit`` earlier weekly discussions, newest first."""
        info = self.info
        if info is None:
            return Failure(f"Unknown provider ID: {self.provider_id}")

        try:
            store = self.store_factory(ctx.auth_token)
            nodes = await store.list_discussions(ctx.owner, ctx.repo, self.discussion_scan)
        except Exception as e:
            return Failure(f"Failed to fetch past discussions: {e}")

        matched: list[PastDiscussion] = []
        for node in nodes:
            period = self.renderer.parse_title_date(node.title, info)
            # Only periods before the current one count as history
            if period is None or period >= ctx.end_date:
                continue
            matched.append(
                PastDiscussion(
                    provider_id=self.provider_id,
                    date=period,
                    url=node.url,
                    body=node.body,
                )
            )

        matched.sort(key=lambda d: d.date, reverse=True)
        return Success(matched[:limit])

    def get_summarize_config(self) -> SummarizeConfig:
        return self.strategy.summarize_config()

    def parse_summary(self, data: Any) -> PipelineResult[ProviderWeeklySummary]:
        return self.strategy.parse_summary(data)

    def entries_from_summary(self, summary: ProviderWeeklySummary) -> list[ProviderEntry]:
        return self.strategy.entries_from_summary(summary, self._require_info())

    def generate_markdown(
        self,
        entries: Sequence[ProviderEntry],
        summary: ProviderWeeklySummary,
        ctx: WeeklyContext,
    ) -> str:
        info = self._require_info()
        body = self.renderer.generate_body(info, entries, summary, ctx.start_date, ctx.end_date)
        return body + self.renderer.generate_mention()

    def generate_title(self, ctx: WeeklyContext) -> str:
        return self.renderer.generate_title(self._require_info(), ctx.end_date)

    async def post_discussion(
        self,
        markdown: str,
        ctx: WeeklyContext,
        entries: Sequence[ProviderEntry],
    ) -> PipelineResult[PublishOutcome]:
        """Publish the discussion and attach labels derived from ``entries``."""
        if self.info is None:
            return Failure(f"Unknown provider ID: {self.provider_id}")

        title = self.generate_title(ctx)
        if ctx.dry_run:
            return Success(
                PublishOutcome(id=DRY_RUN_MARKER, url=f"{DRY_RUN_MARKER} {title}", title=title)
            )

        try:
            store = self.store_factory(ctx.auth_token)
            repository = await store.fetch_repository(ctx.owner, ctx.repo)

            category = repository.find_category(ctx.category_name)
            if category is None:
                available = ", ".join(c.name for c in repository.categories)
                return Failure(
                    f'Category "{ctx.category_name}" not found. Available: {available}'
                )

            created = await store.create_discussion(repository.id, category.id, title, markdown)
        except Exception as e:
            return Failure(f"Failed to post discussion: {e}")

        logger.info("Created discussion: %s (%s)", title, created.url)

        label_names = determine_labels({self.provider_id: entries})
        await attach_labels(
            store, repository.id, created.id, repository.labels, label_names, self.rng
        )

        if ctx.auto_close:
            await self._close_discussion(store, created.id)

        return Success(PublishOutcome(id=created.id, url=created.url, title=title))

    async def _close_discussion(self, store: DiscussionStore, discussion_id: str) -> None:
        try:
            await store.close_discussion(discussion_id)
            logger.info("Closed discussion %s", discussion_id)
        except Exception as e:
            logger.warning("Failed to close discussion %s: %s", discussion_id, e)
