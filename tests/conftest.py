"""Shared test fixtures."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

import pytest

from awfi.checkers import CheckOutcome, FailureCause


class ScriptedChecker:
    """Checker that replays a fixed sequence of results, then repeats the last one."""

    def __init__(self, results: Iterable[bool], delay: float = 0.0) -> None:
        self.results = list(results)
        self.delay = delay
        self.calls = 0

    async def check(self) -> CheckOutcome:
        idx = min(self.calls, len(self.results) - 1)
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.results[idx]:
            return CheckOutcome.success("scripted")
        return CheckOutcome.failure(FailureCause.CONNECTION, f"scripted failure #{self.calls}")


@pytest.fixture
def always_ready() -> ScriptedChecker:
    return ScriptedChecker([True])


@pytest.fixture
def never_ready() -> ScriptedChecker:
    return ScriptedChecker([False])
