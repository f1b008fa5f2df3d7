"""Markdown renderer for weekly provider discussions."""

import re
from typing import Optional, Sequence

from weekly_digest.core.entities import (
    CategorizedSummary,
    CategoryGroup,
    EntryKind,
    ProviderEntry,
    ProviderWeeklySummary,
    SimpleSummary,
    SummaryEntry,
)
from weekly_digest.core.interfaces import WeeklyMarkdownRenderer
from weekly_digest.core.providers import ProviderInfo

DEFAULT_TITLE_PREFIX = "📰 Tech Changelog"


class MarkdownWeeklyGenerator(WeeklyMarkdownRenderer):
    """Render weekly discussions as GitHub-flavored markdown."""

    def __init__(
        self,
        title_prefix: str = DEFAULT_TITLE_PREFIX,
        mention_user: Optional[str] = None,
    ) -> None:
        self.title_prefix = title_prefix
        self.mention_user = mention_user

    def generate_title(self, provider: ProviderInfo, end_date: str) -> str:
        return f"{self.title_prefix} - Weekly [{provider.display_name}] ({end_date})"

    def parse_title_date(self, title: str, provider: ProviderInfo) -> Optional[str]:
        pattern = (
            rf"^{re.escape(self.title_prefix)} - Weekly "
            rf"\[{re.escape(provider.display_name)}\] \((\d{{4}}-\d{{2}}-\d{{2}})\)$"
        )
        match = re.match(pattern, title)
        return match.group(1) if match else None

    def generate_mention(self) -> str:
        if self.mention_user:
            return f"\n\n---\ncc: @{self.mention_user}"
        return "\n\n---\n_Generated automatically by weekly-digest._"

    def generate_body(
        self,
        provider: ProviderInfo,
        entries: Sequence[ProviderEntry],
        summary: ProviderWeeklySummary,
        start_date: str,
        end_date: str,
    ) -> str:
        lines = [
            f"# {provider.emoji} Weekly [{provider.display_name}]",
            "",
            f"📅 **Coverage period**: {start_date} ~ {end_date} (1 week)",
            "",
        ]

        if summary.highlights:
            lines.extend(["## 🌟 Highlights of the week", ""])
            lines.extend(f"- {highlight}" for highlight in summary.highlights)
            lines.append("")

        if isinstance(summary, CategorizedSummary):
            lines.extend(["## 📊 By category", ""])
            for group in summary.categories:
                lines.extend(self._format_category(group))
        elif isinstance(summary, SimpleSummary):
            lines.extend(self._format_simple(provider, entries, summary))
        else:
            raise TypeError(f"Unsupported summary type: {type(summary).__name__}")

        return "\n".join(lines)

    def _format_category(self, group: CategoryGroup) -> list[str]:
        lines = [f"### {group.category} ({len(group.entries)})"]
        lines.extend(self._format_links(group.entries))
        lines.extend(["", f"**Comment**: {group.comment}", ""])
        if group.historical_context:
            lines.extend([f"**Compared with past weeks**: {group.historical_context}", ""])
        lines.extend(["---", ""])
        return lines

    def _format_simple(
        self,
        provider: ProviderInfo,
        entries: Sequence[ProviderEntry],
        summary: SimpleSummary,
    ) -> list[str]:
        section = "Releases" if provider.entry_kind is EntryKind.RELEASE else "Entries"
        lines = [f"## 📊 {section}", ""]

        refs = summary.entries or [
            SummaryEntry(url=entry.url, title=entry.display_title) for entry in entries
        ]
        lines.extend(self._format_links(refs))
        lines.append("")

        if summary.overall_comment:
            lines.extend([f"**Comment**: {summary.overall_comment}", ""])
        if summary.historical_context:
            lines.extend([f"**Compared with past weeks**: {summary.historical_context}", ""])
        return lines

    def _format_links(self, refs: Sequence[SummaryEntry]) -> list[str]:
        return [f"- [{ref.title}]({ref.url})" for ref in refs]
