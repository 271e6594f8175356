"""Probe outcome model and the checker protocol shared by all resource types."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class FailureCause(str, Enum):
    CONNECTION = "connection"
    PROTOCOL = "protocol"
    TIMEOUT = "timeout"


@dataclass
class CheckOutcome:
    """Result of a single probe attempt."""

    ok: bool
    cause: FailureCause | None = None
    detail: str = ""
    latency_ms: float = 0.0

    @classmethod
    def success(cls, detail: str = "", latency_ms: float = 0.0) -> CheckOutcome:
        return cls(ok=True, detail=detail, latency_ms=latency_ms)

    @classmethod
    def failure(cls, cause: FailureCause, detail: str, latency_ms: float = 0.0) -> CheckOutcome:
        return cls(ok=False, cause=cause, detail=detail, latency_ms=latency_ms)

    def __str__(self) -> str:
        if self.ok:
            return f"ok ({self.detail})" if self.detail else "ok"
        return f"{self.cause.value} error: {self.detail}"


class ResourceChecker(Protocol):
    """Anything that can probe a resource once.

    ``check`` runs inside the caller's task, so the caller's asyncio deadline
    bounds the attempt. Probe failures are returned, never raised.
    """

    async def check(self) -> CheckOutcome: ...


def elapsed_ms(t0: float) -> float:
    """Milliseconds since ``t0`` (a ``time.perf_counter()`` reading), rounded."""
    return round((time.perf_counter() - t0) * 1000, 1)
