"""Tests for label reconciliation."""

import random
from unittest.mock import AsyncMock

import pytest

from weekly_digest.adapters.github import (
    ACCESSIBLE_LABEL_COLORS,
    attach_labels,
    ensure_labels_exist,
    pick_label_color,
)


def test_pick_label_color_uses_palette(rng: random.Random) -> None:
    """Test that picked colors come from the accessible palette."""
    colors = {pick_label_color(rng) for _ in range(50)}

    assert colors <= set(ACCESSIBLE_LABEL_COLORS)


def test_pick_label_color_is_reproducible() -> None:
    """Test that a seeded generator gives a stable color sequence."""
    first = [pick_label_color(random.Random(7)) for _ in range(3)]
    second = [pick_label_color(random.Random(7)) for _ in range(3)]

    assert first == second


@pytest.mark.asyncio
async def test_ensure_labels_exist_creates_missing(store: AsyncMock) -> None:
    """Test that only missing labels are created."""
    existing = {"github": "L_github"}

    ids = await ensure_labels_exist(store, "R_1", existing, ["github", "gh:copilot"])

    assert ids == ["L_github", "L_gh:copilot"]
    assert existing["gh:copilot"] == "L_gh:copilot"
    store.create_label.assert_awaited_once()
    args = store.create_label.await_args.args
    assert args[0] == "R_1"
    assert args[1] == "gh:copilot"
    assert args[2] in ACCESSIBLE_LABEL_COLORS


@pytest.mark.asyncio
async def test_ensure_labels_exist_skips_failed_creation(store: AsyncMock) -> None:
    """Test that a failed creation is skipped, not raised."""
    store.create_label.side_effect = RuntimeError("forbidden")

    ids = await ensure_labels_exist(store, "R_1", {"github": "L_github"}, ["github", "gh:new"])

    assert ids == ["L_github"]


@pytest.mark.asyncio
async def test_attach_labels(store: AsyncMock) -> None:
    """Test attaching a mix of existing and new labels."""
    existing = {"github": "L_github"}

    attached = await attach_labels(
        store, "R_1", "D_1", existing, {"gh:release", "github", "gh:copilot"}
    )

    assert attached == ["gh:copilot", "gh:release", "github"]
    store.add_labels.assert_awaited_once_with(
        "D_1", ["L_gh:copilot", "L_gh:release", "L_github"]
    )
    # Caller's map is left untouched
    assert existing == {"github": "L_github"}


@pytest.mark.asyncio
async def test_attach_labels_idempotent_for_existing(store: AsyncMock) -> None:
    """Test that re-attaching existing labels creates nothing."""
    existing = {"github": "L_github", "gh:copilot": "L_copilot"}

    await attach_labels(store, "R_1", "D_1", existing, ["github", "gh:copilot"])
    await attach_labels(store, "R_1", "D_2", existing, ["github", "gh:copilot"])

    store.create_label.assert_not_awaited()
    assert store.add_labels.await_count == 2


@pytest.mark.asyncio
async def test_attach_labels_never_raises(store: AsyncMock) -> None:
    """Test that an add failure is swallowed."""
    store.add_labels.side_effect = RuntimeError("network down")

    attached = await attach_labels(store, "R_1", "D_1", {"github": "L_github"}, ["github"])

    assert attached == []


@pytest.mark.asyncio
async def test_attach_labels_empty(store: AsyncMock) -> None:
    """Test that no labels means no calls."""
    assert await attach_labels(store, "R_1", "D_1", {}, []) == []
    store.add_labels.assert_not_awaited()
