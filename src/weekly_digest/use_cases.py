"""Business logic use cases."""

import json
from pathlib import Path
from typing import Any, Mapping, Optional

from weekly_digest.core import (
    ChangelogSnapshot,
    Failure,
    OrchestratorResult,
    PastDiscussion,
    PipelineResult,
    PublishOutcome,
    Success,
    SummarizeRequest,
    WeeklyContext,
    without_muted,
)
from weekly_digest.weekly import WeeklyOrchestrator, render_prompt_template


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(title)
    print("=" * 70)


class WeeklyService:
    """Run the weekly pipeline phases and report them on the console."""

    def __init__(self, orchestrator: WeeklyOrchestrator) -> None:
        self.orchestrator = orchestrator

    async def fetch_past_all(
        self,
        ctx: WeeklyContext,
        limit: int = 2,
        output: Optional[Path] = None,
    ) -> OrchestratorResult[list[PastDiscussion]]:
        """Fetch past discussions for all providers."""
        _banner("📥 FETCHING PAST DISCUSSIONS")
        print(f"  • Period: {ctx.start_date} ~ {ctx.end_date}")
        print(f"  • Limit: {limit}")

        result = await self.orchestrator.fetch_all_past_discussions(ctx, limit)

        for provider_id, discussions in result.succeeded.items():
            print(f"\n✓ {provider_id}: {len(discussions)} discussions found")
            for discussion in discussions:
                print(f"  └─ {discussion.date}: {discussion.url}")
        self._print_failures(result)

        if output:
            self.save_json(
                {pid: [d.to_dict() for d in ds] for pid, ds in result.succeeded.items()},
                output,
            )
        return result

    async def prepare_summarize(
        self,
        snapshot: ChangelogSnapshot,
        ctx: WeeklyContext,
        limit: int = 2,
        output: Optional[Path] = None,
    ) -> list[SummarizeRequest]:
        """Fetch history and build summarize requests."""
        past = await self.fetch_past_all(ctx, limit)

        _banner("📝 PREPARING SUMMARIZE REQUESTS")
        requests = self.orchestrator.prepare_summarize_requests(snapshot, past.succeeded)

        print(f"✓ Requests: {len(requests)} providers")
        for request in requests:
            print(f"\n  • {request.provider_id}")
            print(f"    └─ Current entries: {len(request.current_entries)}")
            print(f"    └─ Past discussions: {len(request.past_discussions)}")

        if output:
            self.save_json([r.to_dict() for r in requests], output)
        return requests

    async def render_prompt(
        self,
        provider_id: str,
        snapshot: ChangelogSnapshot,
        ctx: WeeklyContext,
        limit: int = 2,
        output: Optional[Path] = None,
    ) -> PipelineResult[dict[str, Any]]:
        """Render the full prompt for a single provider."""
        adapter = self.orchestrator.get_adapter(provider_id)
        if adapter is None:
            return Failure(f"Unknown provider: {provider_id}")

        print(f"🔍 Fetching past discussions for {provider_id}...")
        past = await adapter.fetch_past_discussions(ctx, limit)
        if isinstance(past, Failure):
            print(f"  └─ ⚠️  {past.error} (continuing without history)")
            discussions: list[PastDiscussion] = []
        else:
            discussions = past.data

        config = adapter.get_summarize_config()
        prompt = render_prompt_template(
            config.prompt_template,
            provider_id,
            without_muted(snapshot.entries_for(provider_id)),
            discussions,
        )

        _banner("📐 JSON SCHEMA")
        print(json.dumps(config.json_schema, ensure_ascii=False, indent=2))
        _banner("💬 RENDERED PROMPT")
        print(prompt)

        payload = {"providerId": provider_id, "jsonSchema": config.json_schema, "prompt": prompt}
        if output:
            self.save_json(payload, output)
        return Success(payload)

    async def post_all(
        self,
        snapshot: ChangelogSnapshot,
        summaries: Mapping[str, Any],
        ctx: WeeklyContext,
        output: Optional[Path] = None,
    ) -> OrchestratorResult[PublishOutcome]:
        """Publish discussions for every summarized provider."""
        _banner("📤 POSTING DISCUSSIONS")
        print(f"  • Period: {ctx.start_date} ~ {ctx.end_date}")
        print(f"  • Dry run: {ctx.dry_run}")
        print(f"  • Providers: {', '.join(summaries) or '-'}")

        result = await self.orchestrator.post_all_discussions(snapshot, summaries, ctx)

        for provider_id, outcome in result.succeeded.items():
            print(f"\n✓ {provider_id}")
            print(f"  └─ Title: {outcome.title}")
            print(f"  └─ URL: {outcome.url}")
        self._print_failures(result)

        if not result.has_failures:
            print("\n✅ All discussions posted successfully!")

        if output:
            self.save_json(
                {
                    "succeeded": {pid: o.to_dict() for pid, o in result.succeeded.items()},
                    "failed": result.failed,
                },
                output,
            )
        return result

    async def post_provider(
        self,
        provider_id: str,
        summary_data: Any,
        ctx: WeeklyContext,
        snapshot: Optional[ChangelogSnapshot] = None,
        output: Optional[Path] = None,
    ) -> PipelineResult[Optional[PublishOutcome]]:
        """Publish a single provider's discussion.

        When the snapshot lists no entries for the provider (or no snapshot
        is given), entries are rebuilt from the summary itself. Entries that
        exist but are all muted skip the provider.
        """
        adapter = self.orchestrator.get_adapter(provider_id)
        if adapter is None:
            return Failure(f"Unknown provider: {provider_id}")

        parsed = adapter.parse_summary(summary_data)
        if isinstance(parsed, Failure):
            return Failure(f"Invalid summary for {provider_id}: {parsed.error}")

        raw_entries = snapshot.entries_for(provider_id) if snapshot is not None else []
        if raw_entries:
            entries = without_muted(raw_entries)
        else:
            entries = adapter.entries_from_summary(parsed.data)
        # A provider whose entries are all muted has no news this week
        if not entries:
            print(f"⚠️  No active entries for {provider_id}. Skipping.")
            return Success(None)

        _banner(f"📤 POSTING {provider_id}")
        print(f"  • Period: {ctx.start_date} ~ {ctx.end_date}")
        print(f"  • Active entries: {len(entries)}")
        print(f"  • Dry run: {ctx.dry_run}")

        result = await self.orchestrator.run_single_provider(provider_id, entries, summary_data, ctx)
        if isinstance(result, Success):
            print(f"\n✓ Title: {result.data.title}")
            print(f"✓ URL: {result.data.url}")
            if output:
                self.save_json(result.data.to_dict(), output)
        else:
            print(f"\n❌ {provider_id}: {result.error}")
        return result

    def _print_failures(self, result: OrchestratorResult[Any]) -> None:
        if not result.failed:
            return
        print("\n⚠️  Failures:")
        for provider_id, error in result.failed.items():
            print(f"  ✗ {provider_id}: {error}")

    def save_json(self, data: Any, output_path: Path) -> None:
        """Save JSON output to file."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        print(f"\n💾 Saved to {output_path}")
