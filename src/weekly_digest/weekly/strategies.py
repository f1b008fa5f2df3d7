"""Shape strategies: categorized vs. simple providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from weekly_digest.core.entities import (
    CategorizedSummary,
    ChangeEntry,
    EntryKind,
    ProviderEntry,
    ProviderShape,
    ProviderWeeklySummary,
    ReleaseEntry,
    SimpleSummary,
    SummaryEntry,
)
from weekly_digest.core.providers import ProviderInfo
from weekly_digest.core.results import PipelineResult
from weekly_digest.core.summary import parse_summary
from weekly_digest.weekly.prompts import (
    CATEGORIZED_PROMPT_TEMPLATE,
    CATEGORIZED_SUMMARY_SCHEMA,
    SIMPLE_PROMPT_TEMPLATE,
    SIMPLE_SUMMARY_SCHEMA,
)

SUMMARY_CATEGORY_DOMAIN = "category"


@dataclass(frozen=True)
class SummarizeConfig:
    """Schema and prompt template handed to the summarizer."""

    json_schema: dict[str, Any]
    prompt_template: str


class ShapeStrategy(ABC):
    """Shape-specific behavior of a provider adapter."""

    shape: ProviderShape

    @abstractmethod
    def summarize_config(self) -> SummarizeConfig:
        pass

    def parse_summary(self, data: Any) -> PipelineResult[ProviderWeeklySummary]:
        return parse_summary(data, self.shape)

    @abstractmethod
    def entries_from_summary(
        self, summary: ProviderWeeklySummary, provider: ProviderInfo
    ) -> list[ProviderEntry]:
        """Rebuild a minimal raw entry view from a summary (lossy)."""
        pass


def _to_entry(
    ref: SummaryEntry, provider: ProviderInfo, labels: dict[str, list[str]]
) -> ProviderEntry:
    if provider.entry_kind is EntryKind.RELEASE:
        return ReleaseEntry(version=ref.title, url=ref.url)
    return ChangeEntry(title=ref.title, url=ref.url, labels=labels)


class CategorizedShape(ShapeStrategy):
    """Entries grouped into category buckets, each with its own comment."""

    shape = ProviderShape.CATEGORIZED

    def summarize_config(self) -> SummarizeConfig:
        return SummarizeConfig(
            json_schema=CATEGORIZED_SUMMARY_SCHEMA,
            prompt_template=CATEGORIZED_PROMPT_TEMPLATE,
        )

    def entries_from_summary(
        self, summary: ProviderWeeklySummary, provider: ProviderInfo
    ) -> list[ProviderEntry]:
        """Rebuild entries with their summary categories as labels.

        Category names are free-form summarizer output stored under the
        ``category`` domain, so they surface as provider sub-labels (e.g.
        ``gh:Security & Compliance``) rather than the feed's own
        classification.
        """
        if not isinstance(summary, CategorizedSummary):
            raise TypeError(f"Expected a categorized summary, got {type(summary).__name__}")

        # An entry listed under several categories keeps one row with all of them
        by_url: dict[str, ProviderEntry] = {}
        for group in summary.categories:
            for ref in group.entries:
                entry = by_url.get(ref.url)
                if entry is None:
                    by_url[ref.url] = _to_entry(
                        ref, provider, {SUMMARY_CATEGORY_DOMAIN: [group.category]}
                    )
                elif isinstance(entry, ChangeEntry):
                    categories = entry.labels.setdefault(SUMMARY_CATEGORY_DOMAIN, [])
                    if group.category not in categories:
                        categories.append(group.category)
        return list(by_url.values())


class SimpleShape(ShapeStrategy):
    """Flat entry list with one overall comment."""

    shape = ProviderShape.SIMPLE

    def summarize_config(self) -> SummarizeConfig:
        return SummarizeConfig(
            json_schema=SIMPLE_SUMMARY_SCHEMA,
            prompt_template=SIMPLE_PROMPT_TEMPLATE,
        )

    def entries_from_summary(
        self, summary: ProviderWeeklySummary, provider: ProviderInfo
    ) -> list[ProviderEntry]:
        if not isinstance(summary, SimpleSummary):
            raise TypeError(f"Expected a simple summary, got {type(summary).__name__}")

        seen: set[str] = set()
        entries: list[ProviderEntry] = []
        for ref in summary.entries:
            if ref.url in seen:
                continue
            seen.add(ref.url)
            entries.append(_to_entry(ref, provider, {}))
        return entries


_STRATEGIES: dict[ProviderShape, ShapeStrategy] = {
    ProviderShape.CATEGORIZED: CategorizedShape(),
    ProviderShape.SIMPLE: SimpleShape(),
}


def strategy_for(shape: ProviderShape) -> ShapeStrategy:
    return _STRATEGIES[shape]
