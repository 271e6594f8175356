"""Polling engine — drives a checker on a fixed interval until it is ready.

- Fixed 1s interval, no backoff
- Counts consecutive successes; any failure resets the count to zero
- One deadline bounds the whole run, in-flight probes included
- Per-attempt failures stay local; only the terminal outcome is reported
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from .checkers import CheckOutcome, ResourceChecker
from .errors import AwfiError

logger = logging.getLogger(__name__)

POLL_INTERVAL = 1.0  # seconds


class DeadlineExceededError(AwfiError, TimeoutError):
    """Raised when the resource is not ready before the deadline."""

    def __init__(self, timeout: float, attempts: int, last_outcome: CheckOutcome | None = None) -> None:
        self.timeout = timeout
        self.attempts = attempts
        self.last_outcome = last_outcome
        msg = f"resource not ready after {timeout}s ({attempts} attempts)"
        if last_outcome is not None:
            msg += f", last {last_outcome}"
        super().__init__(msg)


@dataclass
class PollReport:
    """Summary of a successful polling run."""

    attempts: int
    consecutive_successes: int
    elapsed: float  # seconds


async def poll_until_ready(
    checker: ResourceChecker,
    required_successes: int = 1,
    *,
    timeout: float,
    interval: float = POLL_INTERVAL,
) -> PollReport:
    """Probe until ``required_successes`` consecutive successes are observed.

    Waits one interval before every probe. Raises DeadlineExceededError once
    ``timeout`` seconds have elapsed; cancelling the calling task propagates
    asyncio.CancelledError and stops further probes.

    A ``required_successes`` of zero or less is satisfied without probing.
    """
    loop = asyncio.get_running_loop()
    started = loop.time()

    if required_successes <= 0:
        logger.info("required_successes=%d, treating resource as ready without probing", required_successes)
        return PollReport(attempts=0, consecutive_successes=0, elapsed=0.0)

    successes = 0
    attempts = 0
    last_failure: CheckOutcome | None = None

    try:
        async with asyncio.timeout(timeout):
            while True:
                await asyncio.sleep(interval)
                attempts += 1
                outcome = await checker.check()

                if outcome.ok:
                    successes += 1
                    logger.debug(
                        "Probe %d succeeded (%d/%d): %s",
                        attempts, successes, required_successes, outcome.detail,
                    )
                    if successes >= required_successes:
                        break
                else:
                    successes = 0
                    last_failure = outcome
                    logger.debug("Probe %d failed: %s", attempts, outcome)
    except TimeoutError as e:
        logger.debug("Deadline of %ss reached after %d probes", timeout, attempts)
        raise DeadlineExceededError(timeout, attempts, last_failure) from e

    elapsed = loop.time() - started
    logger.info("Resource ready after %d probes (%.1fs)", attempts, elapsed)
    return PollReport(attempts=attempts, consecutive_successes=successes, elapsed=elapsed)
