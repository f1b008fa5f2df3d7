"""Tests for pipeline result containers."""

import asyncio

import pytest

from weekly_digest.core import Failure, OrchestratorResult, Success, gather_results


def test_success_and_failure_flags() -> None:
    """Test that result variants expose their outcome."""
    assert Success(1).success is True
    assert Failure("boom").success is False


def test_orchestrator_result_partitions() -> None:
    """Test that add() routes results to succeeded or failed."""
    result: OrchestratorResult[int] = OrchestratorResult()
    result.add("a", Success(1))
    result.add("b", Failure("broken"))

    assert result.succeeded == {"a": 1}
    assert result.failed == {"b": "broken"}
    assert result.has_failures
    assert result.keys() == {"a", "b"}


@pytest.mark.asyncio
async def test_gather_results_records_every_key() -> None:
    """Test that a raising task becomes a failure without cancelling siblings."""
    finished = []

    async def ok(value: int) -> Success[int]:
        await asyncio.sleep(0.01)
        finished.append(value)
        return Success(value)

    async def failing() -> Success[int]:
        raise RuntimeError("boom")

    async def soft_failure() -> Failure:
        return Failure("nope")

    result = await gather_results(
        {"one": ok(1), "two": failing(), "three": soft_failure(), "four": ok(4)}
    )

    assert result.succeeded == {"one": 1, "four": 4}
    assert result.failed == {"two": "RuntimeError: boom", "three": "nope"}
    assert sorted(finished) == [1, 4]
    assert result.keys() == {"one", "two", "three", "four"}


@pytest.mark.asyncio
async def test_gather_results_empty() -> None:
    """Test joining no tasks."""
    result = await gather_results({})

    assert result.succeeded == {}
    assert not result.has_failures
