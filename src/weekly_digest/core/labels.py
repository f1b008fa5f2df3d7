"""Label derivation for published discussions."""

from typing import Mapping, Sequence

from weekly_digest.core.entities import ChangeEntry, ProviderEntry, without_muted
from weekly_digest.core.providers import get_provider_info


def determine_labels(
    entries_by_provider: Mapping[str, Sequence[ProviderEntry]],
    service_only: bool = False,
) -> set[str]:
    """Derive label names from provider entries.

    One label per provider with at least one non-muted entry. Unless
    ``service_only`` is set, each entry's own classification labels are
    added through the provider's prefix and transform.
    """
    labels: set[str] = set()

    for provider_id, entries in entries_by_provider.items():
        info = get_provider_info(provider_id)
        if info is None:
            continue

        active = without_muted(entries)
        if not active:
            continue

        labels.add(info.label_name)
        if service_only:
            continue

        for entry in active:
            if not isinstance(entry, ChangeEntry):
                continue
            for values in entry.labels.values():
                for raw in values:
                    name = info.sub_label(raw)
                    if name:
                        labels.add(name)

    return labels
