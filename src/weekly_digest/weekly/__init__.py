"""Weekly multi-provider pipeline."""

from weekly_digest.weekly.adapter import DRY_RUN_MARKER, ProviderAdapter
from weekly_digest.weekly.orchestrator import (
    WeeklyOrchestrator,
    build_adapter,
    build_all_adapters,
    github_store_factory,
)
from weekly_digest.weekly.prompts import render_prompt_template
from weekly_digest.weekly.strategies import (
    CategorizedShape,
    ShapeStrategy,
    SimpleShape,
    SummarizeConfig,
    strategy_for,
)

__all__ = [
    "CategorizedShape",
    "DRY_RUN_MARKER",
    "ProviderAdapter",
    "ShapeStrategy",
    "SimpleShape",
    "SummarizeConfig",
    "WeeklyOrchestrator",
    "build_adapter",
    "build_all_adapters",
    "github_store_factory",
    "render_prompt_template",
    "strategy_for",
]
