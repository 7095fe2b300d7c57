from __future__ import annotations

from typing import Any

import structlog

from earning_engine.observability.middleware import RequestContextMiddleware, wallet_from_scope


def _http_scope(query_string: bytes = b"", headers: list[tuple[bytes, bytes]] | None = None) -> dict[str, Any]:
    return {
        "type": "http",
        "method": "GET",
        "path": "/api/engine/metrics",
        "query_string": query_string,
        "headers": headers or [],
    }


def test_wallet_prefers_query_over_header() -> None:
    scope = _http_scope(b"wallet=0xQUERY", [(b"x-wallet-address", b"0xHEADER")])
    assert wallet_from_scope(scope) == "0xQUERY"


def test_wallet_falls_back_to_header_when_query_empty() -> None:
    scope = _http_scope(b"wallet=", [(b"x-wallet-address", b"0xHEADER")])
    assert wallet_from_scope(scope) == "0xHEADER"


def test_wallet_absent() -> None:
    assert wallet_from_scope(_http_scope()) is None


async def test_middleware_binds_wallet_and_request_id_while_handling() -> None:
    seen: dict[str, Any] = {}
    sent: list[dict[str, Any]] = []

    async def inner_app(scope, receive, send) -> None:
        seen.update(structlog.contextvars.get_contextvars())
        await send({"type": "http.response.start", "status": 200, "headers": []})
        await send({"type": "http.response.body", "body": b"{}"})

    async def receive() -> dict[str, Any]:
        return {"type": "http.request", "body": b"", "more_body": False}

    async def send(message: dict[str, Any]) -> None:
        sent.append(message)

    middleware = RequestContextMiddleware(inner_app)
    await middleware(_http_scope(b"wallet=0xABC"), receive, send)

    assert seen["wallet_address"] == "0xABC"
    assert seen["path"] == "/api/engine/metrics"
    assert seen["request_id"]
    assert (b"x-request-id", seen["request_id"].encode()) in sent[0]["headers"]
    assert structlog.contextvars.get_contextvars() == {}
