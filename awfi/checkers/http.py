"""HTTP(S) readiness probe — one GET, ready iff the final status is 200."""

from __future__ import annotations

import logging
import time

import httpx

from .base import CheckOutcome, FailureCause, elapsed_ms

logger = logging.getLogger(__name__)

EXPECTED_STATUS = 200


class HttpChecker:
    """Probes an HTTP(S) URL with a fresh client per attempt."""

    def __init__(
        self,
        url: str,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport  # injected in tests

    async def check(self) -> CheckOutcome:
        """GET the URL, drain the body, then compare the status code."""
        t0 = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                async with client.stream("GET", self.url) as resp:
                    # Drain so the connection is released cleanly
                    try:
                        async for _ in resp.aiter_raw():
                            pass
                    except httpx.TimeoutException as e:
                        return CheckOutcome.failure(
                            FailureCause.TIMEOUT,
                            f"timed out reading response body: {e}",
                            elapsed_ms(t0),
                        )
                    except httpx.HTTPError as e:
                        return CheckOutcome.failure(
                            FailureCause.PROTOCOL,
                            f"failed to read response body: {type(e).__name__}: {e}",
                            elapsed_ms(t0),
                        )
        except httpx.TimeoutException as e:
            return CheckOutcome.failure(
                FailureCause.TIMEOUT,
                f"request timed out after {self.timeout}s: {type(e).__name__}",
                elapsed_ms(t0),
            )
        except httpx.InvalidURL as e:
            return CheckOutcome.failure(
                FailureCause.CONNECTION, f"failed to create request: {e}", elapsed_ms(t0)
            )
        except httpx.TooManyRedirects as e:
            return CheckOutcome.failure(
                FailureCause.PROTOCOL, f"redirect loop: {e}", elapsed_ms(t0)
            )
        except httpx.HTTPError as e:
            return CheckOutcome.failure(
                FailureCause.CONNECTION,
                f"failed to perform request: {type(e).__name__}: {e}",
                elapsed_ms(t0),
            )

        latency = elapsed_ms(t0)
        if resp.status_code != EXPECTED_STATUS:
            return CheckOutcome.failure(
                FailureCause.PROTOCOL, f"non-200 status code: {resp.status_code}", latency
            )
        logger.debug("GET %s -> %d in %.1fms", self.url, resp.status_code, latency)
        return CheckOutcome.success(f"{resp.status_code} OK", latency)
