"""Success/failure containers for pipeline boundaries."""

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, ClassVar, Generic, Mapping, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome carrying data."""

    data: T
    success: ClassVar[bool] = True


@dataclass(frozen=True)
class Failure:
    """Failed outcome carrying an error message."""

    error: str
    success: ClassVar[bool] = False


PipelineResult = Union[Success[T], Failure]


@dataclass
class OrchestratorResult(Generic[T]):
    """Per-provider partition of outcomes."""

    succeeded: dict[str, T] = field(default_factory=dict)
    failed: dict[str, str] = field(default_factory=dict)

    def add(self, key: str, result: "PipelineResult[T]") -> None:
        if isinstance(result, Success):
            self.succeeded[key] = result.data
        else:
            self.failed[key] = result.error

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)

    def keys(self) -> set[str]:
        return set(self.succeeded) | set(self.failed)


async def gather_results(
    tasks: Mapping[str, Awaitable["PipelineResult[T]"]],
) -> OrchestratorResult[T]:
    """Run all awaitables concurrently and join them into one result.

    An exception escaping a single awaitable is recorded as that key's
    failure; siblings always run to completion.
    """
    keys = list(tasks)
    outcomes = await asyncio.gather(*(tasks[k] for k in keys), return_exceptions=True)

    result: OrchestratorResult[T] = OrchestratorResult()
    for key, outcome in zip(keys, outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            result.add(key, Failure(f"{type(outcome).__name__}: {outcome}"))
        else:
            result.add(key, outcome)
    return result
