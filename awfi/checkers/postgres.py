"""Postgres readiness probe — connect, run ``SELECT 1``, always disconnect.

Accepting a connection and serving a query are separate stages: a server
that is still starting up may complete the handshake and then drop the
connection mid-query. Only a query that returns 1 counts as ready.
"""

from __future__ import annotations

import asyncio
import logging
import time

import asyncpg

from .base import CheckOutcome, FailureCause, elapsed_ms

logger = logging.getLogger(__name__)

READY_QUERY = "SELECT 1"

# Errors asyncpg raises for unreachable servers, refused auth, dropped links
_PG_ERRORS = (OSError, asyncpg.PostgresError, asyncpg.InterfaceError)


class PostgresChecker:
    """Probes a Postgres server with a new connection per attempt."""

    def __init__(self, dsn: str, timeout: float) -> None:
        self.dsn = dsn
        self.timeout = timeout

    async def check(self) -> CheckOutcome:
        t0 = time.perf_counter()
        try:
            conn = await asyncpg.connect(self.dsn, timeout=self.timeout)
        except TimeoutError:
            return CheckOutcome.failure(
                FailureCause.TIMEOUT,
                f"failed to connect to postgres: timed out after {self.timeout}s",
                elapsed_ms(t0),
            )
        except (ValueError, *_PG_ERRORS) as e:  # ValueError: malformed DSN
            return CheckOutcome.failure(
                FailureCause.CONNECTION,
                f"failed to connect to postgres: {type(e).__name__}: {e}",
                elapsed_ms(t0),
            )

        try:
            value = await conn.fetchval(READY_QUERY, timeout=self.timeout)
        except TimeoutError:
            return CheckOutcome.failure(
                FailureCause.TIMEOUT,
                f"failed to query postgres: timed out after {self.timeout}s",
                elapsed_ms(t0),
            )
        except _PG_ERRORS as e:
            return CheckOutcome.failure(
                FailureCause.PROTOCOL,
                f"failed to query postgres: {type(e).__name__}: {e}",
                elapsed_ms(t0),
            )
        except asyncio.CancelledError:
            conn.terminate()
            raise
        finally:
            await _release(conn, self.timeout)

        latency = elapsed_ms(t0)
        if value != 1:
            return CheckOutcome.failure(
                FailureCause.PROTOCOL, f"unexpected result for {READY_QUERY!r}: {value!r}", latency
            )
        return CheckOutcome.success(f"{READY_QUERY} -> 1", latency)


async def _release(conn: asyncpg.Connection, timeout: float) -> None:
    """Close the connection; fall back to ``terminate()`` if that fails."""
    if conn.is_closed():
        return
    try:
        await conn.close(timeout=timeout)
    except (TimeoutError, *_PG_ERRORS) as e:
        logger.debug("Graceful close failed (%s), terminating connection", e)
        conn.terminate()
    except asyncio.CancelledError:
        conn.terminate()
        raise
