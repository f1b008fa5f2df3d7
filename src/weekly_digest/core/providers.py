"""Registry of weekly providers."""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from weekly_digest.core.entities import EntryKind, ProviderShape


def strip_aws_prefix(label: str) -> str:
    """Drop a leading ``amazon-`` or ``aws-`` from a product label."""
    return re.sub(r"^(amazon-|aws-)", "", label)


def _identity(label: str) -> str:
    return label


@dataclass(frozen=True)
class ProviderInfo:
    """Static description of one provider."""

    id: str
    display_name: str
    shape: ProviderShape
    entry_kind: EntryKind
    emoji: str
    label_name: str
    # Sub-category labels are only derived when a prefix is set
    label_prefix: Optional[str] = None
    transform_label: Callable[[str], str] = _identity

    def sub_label(self, raw: str) -> Optional[str]:
        if self.label_prefix is None:
            return None
        return f"{self.label_prefix}{self.transform_label(raw)}"


PROVIDERS: tuple[ProviderInfo, ...] = (
    ProviderInfo(
        id="github",
        display_name="GitHub Changelog",
        shape=ProviderShape.CATEGORIZED,
        entry_kind=EntryKind.CHANGE,
        emoji="🐙",
        label_name="github",
        label_prefix="gh:",
    ),
    ProviderInfo(
        id="aws",
        display_name="AWS What's New",
        shape=ProviderShape.CATEGORIZED,
        entry_kind=EntryKind.CHANGE,
        emoji="☁️",
        label_name="aws",
        label_prefix="aws:",
        transform_label=strip_aws_prefix,
    ),
    ProviderInfo(
        id="claudeCode",
        display_name="Claude Code",
        shape=ProviderShape.SIMPLE,
        entry_kind=EntryKind.RELEASE,
        emoji="🤖",
        label_name="claude-code",
    ),
    ProviderInfo(
        id="linear",
        display_name="Linear Changelog",
        shape=ProviderShape.SIMPLE,
        entry_kind=EntryKind.CHANGE,
        emoji="📐",
        label_name="linear",
    ),
)

_REGISTRY: dict[str, ProviderInfo] = {p.id: p for p in PROVIDERS}

PROVIDER_IDS: tuple[str, ...] = tuple(p.id for p in PROVIDERS)


def get_provider_info(provider_id: str) -> Optional[ProviderInfo]:
    return _REGISTRY.get(provider_id)


def get_display_name(provider_id: str) -> Optional[str]:
    info = get_provider_info(provider_id)
    return info.display_name if info else None
