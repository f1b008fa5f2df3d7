"""Weekly orchestrator: drives every provider adapter through the pipeline."""

import logging
import random
from functools import partial
from typing import Any, Iterable, Mapping, Optional, Sequence

from weekly_digest.adapters.github.graphql_client import GITHUB_GRAPHQL_URL, GitHubGraphQLClient
from weekly_digest.core.entities import (
    PastDiscussion,
    ProviderEntry,
    PublishOutcome,
    SummarizeRequest,
    WeeklyContext,
    without_muted,
)
from weekly_digest.core.interfaces import WeeklyMarkdownRenderer
from weekly_digest.core.providers import PROVIDER_IDS, get_provider_info
from weekly_digest.core.results import (
    Failure,
    OrchestratorResult,
    PipelineResult,
    gather_results,
)
from weekly_digest.core.snapshot import ChangelogSnapshot
from weekly_digest.weekly.adapter import ProviderAdapter, StoreFactory
from weekly_digest.weekly.strategies import strategy_for

logger = logging.getLogger(__name__)


def build_adapter(
    provider_id: str,
    renderer: WeeklyMarkdownRenderer,
    store_factory: StoreFactory,
    rng: Optional[random.Random] = None,
    discussion_scan: int = 50,
) -> Optional[ProviderAdapter]:
    """Compose the adapter for a registered provider (None if unknown)."""
    info = get_provider_info(provider_id)
    if info is None:
        return None
    return ProviderAdapter(
        provider_id=provider_id,
        strategy=strategy_for(info.shape),
        renderer=renderer,
        store_factory=store_factory,
        rng=rng,
        discussion_scan=discussion_scan,
    )


def build_all_adapters(
    renderer: WeeklyMarkdownRenderer,
    store_factory: StoreFactory,
    rng: Optional[random.Random] = None,
    discussion_scan: int = 50,
    provider_ids: Iterable[str] = PROVIDER_IDS,
) -> dict[str, ProviderAdapter]:
    adapters: dict[str, ProviderAdapter] = {}
    for provider_id in provider_ids:
        adapter = build_adapter(provider_id, renderer, store_factory, rng, discussion_scan)
        if adapter is not None:
            adapters[provider_id] = adapter
    return adapters


def github_store_factory(
    api_url: str = GITHUB_GRAPHQL_URL, timeout: float = 30.0
) -> StoreFactory:
    return partial(GitHubGraphQLClient, api_url=api_url, timeout=timeout)


class WeeklyOrchestrator:
    """Three-phase weekly pipeline over all registered adapters.

    Phases are invoked explicitly and in order by the caller:
    history fetch, summarize request preparation, publish.
    """

    def __init__(self, adapters: Mapping[str, ProviderAdapter]) -> None:
        self.adapters = dict(adapters)

    @classmethod
    def create(
        cls,
        renderer: WeeklyMarkdownRenderer,
        store_factory: Optional[StoreFactory] = None,
        rng: Optional[random.Random] = None,
        discussion_scan: int = 50,
    ) -> "WeeklyOrchestrator":
        factory = store_factory or github_store_factory()
        return cls(build_all_adapters(renderer, factory, rng, discussion_scan))

    def get_adapter(self, provider_id: str) -> Optional[ProviderAdapter]:
        return self.adapters.get(provider_id)

    async def fetch_all_past_discussions(
        self, ctx: WeeklyContext, limit: int = 2
    ) -> OrchestratorResult[list[PastDiscussion]]:
        """Phase 1: fetch history for every adapter concurrently."""
        return await gather_results(
            {
                provider_id: adapter.fetch_past_discussions(ctx, limit)
                for provider_id, adapter in self.adapters.items()
            }
        )

    def prepare_summarize_requests(
        self,
        snapshot: ChangelogSnapshot,
        past_discussions: Mapping[str, Sequence[PastDiscussion]],
    ) -> list[SummarizeRequest]:
        """Phase 2: build one request per provider with active entries."""
        requests: list[SummarizeRequest] = []

        for provider_id, adapter in self.adapters.items():
            active = without_muted(snapshot.entries_for(provider_id))
            if not active:
                logger.info("Skipping %s: no entries", provider_id)
                continue

            config = adapter.get_summarize_config()
            requests.append(
                SummarizeRequest(
                    provider_id=provider_id,
                    current_entries=active,
                    past_discussions=list(past_discussions.get(provider_id, [])),
                    json_schema=config.json_schema,
                    prompt_template=config.prompt_template,
                )
            )

        return requests

    async def post_all_discussions(
        self,
        snapshot: ChangelogSnapshot,
        summaries: Mapping[str, Any],
        ctx: WeeklyContext,
    ) -> OrchestratorResult[PublishOutcome]:
        """Phase 3: publish every provider present in ``summaries`` concurrently."""
        return await gather_results(
            {
                provider_id: self.run_single_provider(
                    provider_id, snapshot.entries_for(provider_id), summary, ctx
                )
                for provider_id, summary in summaries.items()
            }
        )

    async def run_single_provider(
        self,
        provider_id: str,
        entries: Sequence[ProviderEntry],
        summary_data: Any,
        ctx: WeeklyContext,
    ) -> PipelineResult[PublishOutcome]:
        """Validate, render and publish one provider's summary."""
        adapter = self.adapters.get(provider_id)
        if adapter is None:
            return Failure(f"Unknown provider: {provider_id}")

        parsed = adapter.parse_summary(summary_data)
        if isinstance(parsed, Failure):
            return Failure(f"Invalid summary for {provider_id}: {parsed.error}")

        active = without_muted(entries)
        markdown = adapter.generate_markdown(active, parsed.data, ctx)
        return await adapter.post_discussion(markdown, ctx, active)
