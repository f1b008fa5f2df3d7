from weekly_digest.adapters.markdown.weekly_generator import (
    DEFAULT_TITLE_PREFIX,
    MarkdownWeeklyGenerator,
)

__all__ = ["DEFAULT_TITLE_PREFIX", "MarkdownWeeklyGenerator"]
