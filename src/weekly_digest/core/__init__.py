"""Core domain layer."""

from weekly_digest.core.entities import (
    CategorizedSummary,
    CategoryGroup,
    ChangeEntry,
    CreatedDiscussion,
    DiscussionCategory,
    DiscussionNode,
    EntryKind,
    PastDiscussion,
    ProviderEntry,
    ProviderShape,
    ProviderWeeklySummary,
    PublishOutcome,
    ReleaseEntry,
    RepositoryInfo,
    SimpleSummary,
    SummarizeRequest,
    SummaryEntry,
    WeeklyContext,
    without_muted,
)
from weekly_digest.core.interfaces import DiscussionStore, WeeklyMarkdownRenderer
from weekly_digest.core.labels import determine_labels
from weekly_digest.core.providers import (
    PROVIDER_IDS,
    PROVIDERS,
    ProviderInfo,
    get_display_name,
    get_provider_info,
)
from weekly_digest.core.results import (
    Failure,
    OrchestratorResult,
    PipelineResult,
    Success,
    gather_results,
)
from weekly_digest.core.snapshot import ChangelogSnapshot
from weekly_digest.core.summary import is_valid_summary, parse_summary, summary_to_dict

__all__ = [
    "CategorizedSummary",
    "CategoryGroup",
    "ChangeEntry",
    "ChangelogSnapshot",
    "CreatedDiscussion",
    "DiscussionCategory",
    "DiscussionNode",
    "DiscussionStore",
    "EntryKind",
    "Failure",
    "OrchestratorResult",
    "PROVIDER_IDS",
    "PROVIDERS",
    "PastDiscussion",
    "PipelineResult",
    "ProviderEntry",
    "ProviderInfo",
    "ProviderShape",
    "ProviderWeeklySummary",
    "PublishOutcome",
    "ReleaseEntry",
    "RepositoryInfo",
    "SimpleSummary",
    "Success",
    "SummarizeRequest",
    "SummaryEntry",
    "WeeklyContext",
    "WeeklyMarkdownRenderer",
    "determine_labels",
    "gather_results",
    "get_display_name",
    "get_provider_info",
    "is_valid_summary",
    "parse_summary",
    "summary_to_dict",
    "without_muted",
]
