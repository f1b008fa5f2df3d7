"""Label reconciliation for published discussions."""

import logging
import random
from typing import Iterable, Optional

from weekly_digest.core.interfaces import DiscussionStore

logger = logging.getLogger(__name__)

# Colors with sufficient contrast against white label text
ACCESSIBLE_LABEL_COLORS: tuple[str, ...] = (
    "0e8a16",  # green
    "1d76db",  # blue
    "d93f0b",  # orange
    "6f42c1",  # purple
    "0052cc",  # dark blue
    "b60205",  # dark red
    "5319e7",  # indigo
    "0366d6",  # bright blue
    "22863a",  # dark green
    "b31d28",  # dark crimson
)


def pick_label_color(rng: Optional[random.Random] = None) -> str:
    """Pick a palette color using ``rng`` (module-level random when None)."""
    chooser = rng if rng is not None else random
    return chooser.choice(ACCESSIBLE_LABEL_COLORS)


async def ensure_labels_exist(
    store: DiscussionStore,
    repository_id: str,
    existing_labels: dict[str, str],
    label_names: Iterable[str],
    rng: Optional[random.Random] = None,
) -> list[str]:
    """Resolve label names to ids, creating the missing ones.

    Created labels are added to ``existing_labels`` so a name is never
    created twice within one call site. A failed creation is logged and
    skipped.
    """
    label_ids: list[str] = []

    for name in label_names:
        label_id = existing_labels.get(name)
        if label_id is None:
            logger.info('Label "%s" not found. Creating it...', name)
            try:
                label_id = await store.create_label(repository_id, name, pick_label_color(rng))
            except Exception as e:
                logger.warning('Failed to create label "%s": %s', name, e)
                continue
            existing_labels[name] = label_id
        label_ids.append(label_id)

    return label_ids


async def attach_labels(
    store: DiscussionStore,
    repository_id: str,
    discussion_id: str,
    existing_labels: dict[str, str],
    label_names: Iterable[str],
    rng: Optional[random.Random] = None,
) -> list[str]:
    """Ensure labels exist and attach them; returns the names attached.

    Never raises: label metadata is best-effort enrichment.
    """
    names = sorted(set(label_names))
    if not names:
        return []

    local_labels = dict(existing_labels)
    label_ids = await ensure_labels_exist(store, repository_id, local_labels, names, rng)
    if not label_ids:
        return []

    try:
        await store.add_labels(discussion_id, label_ids)
    except Exception as e:
        logger.warning("Failed to add labels to discussion %s: %s", discussion_id, e)
        return []

    attached = [name for name in names if name in local_labels]
    logger.info("Labels added: %s", ", ".join(attached))
    return attached
