"""Tests for the HTTP(S) checker."""

from __future__ import annotations

import asyncio

import httpx

from awfi.checkers import CheckOutcome, FailureCause, HttpChecker


class TrackingStream(httpx.AsyncByteStream):
    """Response body that records whether it was fully read and closed."""

    def __init__(self, chunks: list[bytes], fail_after: int | None = None) -> None:
        self.chunks = chunks
        self.fail_after = fail_after
        self.consumed = False
        self.closed = False

    async def __aiter__(self):
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i >= self.fail_after:
                raise httpx.ReadError("connection reset while reading body")
            yield chunk
        self.consumed = True

    async def aclose(self) -> None:
        self.closed = True


def _check(handler, url: str = "http://svc.local/health", timeout: float = 5) -> CheckOutcome:
    checker = HttpChecker(url, timeout=timeout, transport=httpx.MockTransport(handler))
    return asyncio.run(checker.check())


# ── Success ──────────────────────────────────────────────────────────────────


class TestHttpReady:
    def test_200_is_ready(self) -> None:
        outcome = _check(lambda request: httpx.Response(200, text="ok"))
        assert outcome.ok
        assert outcome.cause is None
        assert outcome.latency_ms >= 0

    def test_sends_get(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        _check(handler, url="https://svc.local/ready?x=1")
        assert len(seen) == 1
        assert seen[0].method == "GET"
        assert str(seen[0].url) == "https://svc.local/ready?x=1"

    def test_body_is_drained_and_closed(self) -> None:
        stream = TrackingStream([b"a" * 1024, b"b" * 1024, b"c"])
        outcome = _check(lambda request: httpx.Response(200, stream=stream))
        assert outcome.ok
        assert stream.consumed
        assert stream.closed

    def test_follows_redirects(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/health":
                return httpx.Response(302, headers={"Location": "/ready"})
            return httpx.Response(200)

        assert _check(handler).ok


# ── Failures ─────────────────────────────────────────────────────────────────


class TestHttpNotReady:
    def test_non_200_is_protocol_error(self) -> None:
        outcome = _check(lambda request: httpx.Response(503, text="starting"))
        assert not outcome.ok
        assert outcome.cause == FailureCause.PROTOCOL
        assert "503" in outcome.detail

    def test_other_2xx_is_not_ready(self) -> None:
        outcome = _check(lambda request: httpx.Response(204))
        assert not outcome.ok
        assert outcome.cause == FailureCause.PROTOCOL

    def test_non_200_body_still_drained(self) -> None:
        stream = TrackingStream([b"not yet"])
        outcome = _check(lambda request: httpx.Response(500, stream=stream))
        assert outcome.cause == FailureCause.PROTOCOL
        assert stream.consumed

    def test_connect_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

        outcome = _check(handler)
        assert outcome.cause == FailureCause.CONNECTION
        assert "Connection refused" in outcome.detail

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        outcome = _check(handler, timeout=3)
        assert outcome.cause == FailureCause.TIMEOUT
        assert "3s" in outcome.detail

    def test_redirect_loop_is_protocol_error(self) -> None:
        outcome = _check(lambda request: httpx.Response(302, headers={"Location": "/health"}))
        assert not outcome.ok
        assert outcome.cause == FailureCause.PROTOCOL
        assert outcome.detail.startswith("redirect loop")

    def test_body_read_error(self) -> None:
        stream = TrackingStream([b"partial", b"rest"], fail_after=1)
        outcome = _check(lambda request: httpx.Response(200, stream=stream))
        assert not outcome.ok
        assert outcome.cause == FailureCause.PROTOCOL
        assert "failed to read response body" in outcome.detail

    def test_refused_port(self) -> None:
        checker = HttpChecker("http://127.0.0.1:1/health", timeout=2)
        outcome = asyncio.run(checker.check())
        assert not outcome.ok
        assert outcome.cause in (FailureCause.CONNECTION, FailureCause.TIMEOUT)

    def test_str_includes_cause(self) -> None:
        outcome = _check(lambda request: httpx.Response(404))
        assert str(outcome) == "protocol error: non-200 status code: 404"
