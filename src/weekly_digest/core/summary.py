"""Validation and parsing of summarizer responses."""

from typing import Any

from weekly_digest.core.entities import (
    CategorizedSummary,
    CategoryGroup,
    ProviderShape,
    ProviderWeeklySummary,
    SimpleSummary,
    SummaryEntry,
)
from weekly_digest.core.results import Failure, PipelineResult, Success

_CATEGORY_KEYS = ("category", "entries", "comment", "historicalContext")


def _is_entry_list(value: Any) -> bool:
    return isinstance(value, list) and all(
        isinstance(e, dict) and isinstance(e.get("url"), str) and isinstance(e.get("title"), str)
        for e in value
    )


def _is_category(value: Any) -> bool:
    if not isinstance(value, dict):
        return False
    if any(key not in value for key in _CATEGORY_KEYS):
        return False
    return (
        isinstance(value["category"], str)
        and _is_entry_list(value["entries"])
        and isinstance(value["comment"], str)
        and isinstance(value["historicalContext"], str)
    )


def validate_summary(data: Any, shape: ProviderShape) -> list[str]:
    """Return the list of structural problems (empty when valid)."""
    if not isinstance(data, dict):
        return ["summary must be a JSON object"]

    problems = []
    if not isinstance(data.get("providerId"), str):
        problems.append("missing providerId")

    highlights = data.get("highlights")
    if not isinstance(highlights, list) or not highlights:
        problems.append("highlights must be a non-empty list")
    elif not all(isinstance(h, str) for h in highlights):
        problems.append("highlights must contain strings")

    if shape is ProviderShape.CATEGORIZED:
        categories = data.get("categories")
        if not isinstance(categories, list):
            problems.append("missing categories")
        elif not all(_is_category(c) for c in categories):
            problems.append("each category needs category, entries, comment, historicalContext")
    else:
        if not _is_entry_list(data.get("entries")):
            problems.append("missing entries")
        if not isinstance(data.get("overallComment"), str):
            problems.append("missing overallComment")
        if not isinstance(data.get("historicalContext"), str):
            problems.append("missing historicalContext")

    return problems


def is_valid_summary(data: Any, shape: ProviderShape) -> bool:
    return not validate_summary(data, shape)


def _entries(raw: list[dict[str, Any]]) -> list[SummaryEntry]:
    return [SummaryEntry(url=e["url"], title=e["title"]) for e in raw]


def parse_summary(data: Any, shape: ProviderShape) -> PipelineResult[ProviderWeeklySummary]:
    """Parse a raw summary dict into the variant for ``shape``."""
    problems = validate_summary(data, shape)
    if problems:
        return Failure(f"Invalid {shape.value} summary: {'; '.join(problems)}")

    if shape is ProviderShape.CATEGORIZED:
        return Success(
            CategorizedSummary(
                provider_id=data["providerId"],
                highlights=list(data["highlights"]),
                categories=[
                    CategoryGroup(
                        category=c["category"],
                        entries=_entries(c["entries"]),
                        comment=c["comment"],
                        historical_context=c["historicalContext"],
                    )
                    for c in data["categories"]
                ],
            )
        )

    return Success(
        SimpleSummary(
            provider_id=data["providerId"],
            highlights=list(data["highlights"]),
            entries=_entries(data["entries"]),
            overall_comment=data["overallComment"],
            historical_context=data["historicalContext"],
        )
    )


def summary_to_dict(summary: ProviderWeeklySummary) -> dict[str, Any]:
    """Serialize a summary back to the collaborator's JSON shape."""
    if isinstance(summary, CategorizedSummary):
        return {
            "providerId": summary.provider_id,
            "highlights": list(summary.highlights),
            "categories": [
                {
                    "category": group.category,
                    "entries": [{"url": e.url, "title": e.title} for e in group.entries],
                    "comment": group.comment,
                    "historicalContext": group.historical_context,
                }
                for group in summary.categories
            ],
        }
    return {
        "providerId": summary.provider_id,
        "highlights": list(summary.highlights),
        "entries": [{"url": e.url, "title": e.title} for e in summary.entries],
        "overallComment": summary.overall_comment,
        "historicalContext": summary.historical_context,
    }
