"""JSON snapshot of one period's provider entries."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from weekly_digest.core.entities import ChangeEntry, EntryKind, ProviderEntry, ReleaseEntry
from weekly_digest.core.providers import PROVIDERS, get_provider_info


@dataclass
class ChangelogSnapshot:
    """Entries per provider as written by the ingestion step."""

    date: str
    providers: dict[str, list[ProviderEntry]] = field(default_factory=dict)
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @property
    def is_weekly(self) -> bool:
        return bool(self.start_date and self.end_date)

    def entries_for(self, provider_id: str) -> list[ProviderEntry]:
        return list(self.providers.get(provider_id, []))

    @classmethod
    def from_dict(cls, data: Any) -> "ChangelogSnapshot":
        if not isinstance(data, dict):
            raise ValueError("Snapshot must be a JSON object")

        providers: dict[str, list[ProviderEntry]] = {}
        for info in PROVIDERS:
            raw_entries = data.get(info.id) or []
            if not isinstance(raw_entries, list):
                raise ValueError(f"Snapshot entries for {info.id} must be a list")
            providers[info.id] = [_parse_entry(info.id, raw) for raw in raw_entries]

        return cls(
            date=data.get("date", ""),
            providers=providers,
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"date": self.date}
        if self.is_weekly:
            data["startDate"] = self.start_date
            data["endDate"] = self.end_date
        for provider_id, entries in self.providers.items():
            data[provider_id] = [entry.to_dict() for entry in entries]
        return data


def _parse_entry(provider_id: str, raw: Any) -> ProviderEntry:
    if not isinstance(raw, dict):
        raise ValueError(f"Snapshot entry for {provider_id} must be a JSON object")
    info = get_provider_info(provider_id)
    if info is not None and info.entry_kind is EntryKind.RELEASE:
        return ReleaseEntry.from_dict(raw)
    return ChangeEntry.from_dict(raw)


def resolve_snapshot_path(file_or_date: str, changelog_dir: Path) -> Path:
    """Accept either a ``.json`` path or a ``YYYY-MM-DD`` date."""
    if file_or_date.endswith(".json"):
        return Path(file_or_date)
    return changelog_dir / f"{file_or_date}.json"


def load_snapshot(path: Path) -> ChangelogSnapshot:
    with open(path, "r", encoding="utf-8") as f:
        return ChangelogSnapshot.from_dict(json.load(f))


def load_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
