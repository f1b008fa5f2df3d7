"""Prompt templates and JSON schemas for weekly summaries.

Templates use the placeholders ``{providerId}``, ``{currentData}`` and
``{pastDiscussions}``; they are substituted literally, not with
``str.format``, because the templates contain JSON braces.
"""

import json
from typing import Any, Sequence

from weekly_digest.core.entities import PastDiscussion, ProviderEntry

_ENTRY_REF_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "url": {"type": "string"},
        "title": {"type": "string"},
    },
    "required": ["url", "title"],
}

CATEGORIZED_SUMMARY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "providerId": {"type": "string"},
        "highlights": {
            "type": "array",
            "items": {"type": "string"},
            "minItems": 3,
            "maxItems": 5,
            "description": "Highlights of the week (3-5 bullet sentences)",
        },
        "categories": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "category": {"type": "string"},
                    "entries": {"type": "array", "items": _ENTRY_REF_SCHEMA},
                    "comment": {"type": "string", "description": "2-3 sentence comment"},
                    "historicalContext": {
                        "type": "string",
                        "description": "Comparison with past weeks (1-2 sentences)",
                    },
                },
                "required": ["category", "entries", "comment", "historicalContext"],
            },
        },
    },
    "required": ["providerId", "highlights", "categories"],
}

SIMPLE_SUMMARY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "providerId": {"type": "string"},
        "highlights": {
            "type": "array",
            "items": {"type": "string"},
            "minItems": 1,
            "maxItems": 5,
            "description": "Highlights of the week (1-5 bullet sentences)",
        },
        "entries": {"type": "array", "items": _ENTRY_REF_SCHEMA},
        "overallComment": {"type": "string", "description": "Overall comment (2-3 sentences)"},
        "historicalContext": {
            "type": "string",
            "description": "Comparison with past weeks (1-2 sentences)",
        },
    },
    "required": ["providerId", "highlights", "entries", "overallComment", "historicalContext"],
}

_PROMPT_HEADER = """
You are an assistant that writes weekly summaries of technical changelogs.

## Provider
Provider ID: {providerId}

## This week's changelog data
The following are this week's changelog entries for {providerId}:

```json
{currentData}
```

## Past discussions
The following are previous weekly discussions, for comparison:

```json
{pastDiscussions}
```
""".strip()

_PROMPT_NOTES = """
## Notes
- Skip entries where `muted` is true
- Use technical terms accurately
- Always use the URLs exactly as they appear in the source data
""".strip()

CATEGORIZED_PROMPT_TEMPLATE = f"""
{_PROMPT_HEADER}

## Task
Analyze the data above and produce a weekly summary in this format:

1. **highlights**: 3-5 bullet sentences with the most important points of the week
   - Emphasize changes that matter to engineers
   - Name concrete features and improvements

2. **categories**: group entries by category based on their `labels` field
   - List the url/title of each entry in the category
   - comment: summarize the category's changes in 2-3 sentences
   - historicalContext: compare with past discussions in 1-2 sentences (say "This is the first weekly report" when there is nothing to compare)

{_PROMPT_NOTES}
""".strip()

SIMPLE_PROMPT_TEMPLATE = f"""
{_PROMPT_HEADER}

## Task
Analyze the data above and produce a weekly summary in this format:

1. **highlights**: 1-5 bullet sentences with the most important points of the week
   - Emphasize changes that matter to engineers
   - Name concrete features and improvements
   - A single sentence is fine when there are few entries

2. **entries**: the url/title of every entry
   - Exclude entries where `muted` is true

3. **overallComment**: summarize the week's changes in 2-3 sentences

4. **historicalContext**: compare with past discussions in 1-2 sentences
   - Say "This is the first weekly report" when there is nothing to compare

{_PROMPT_NOTES}
""".strip()


def render_prompt_template(
    template: str,
    provider_id: str,
    entries: Sequence[ProviderEntry],
    past_discussions: Sequence[PastDiscussion],
) -> str:
    """Substitute the template placeholders with real data."""
    current_data = json.dumps([e.to_dict() for e in entries], ensure_ascii=False, indent=2)
    past_data = json.dumps([d.to_dict() for d in past_discussions], ensure_ascii=False, indent=2)
    return (
        template.replace("{providerId}", provider_id)
        .replace("{currentData}", current_data)
        .replace("{pastDiscussions}", past_data)
    )
