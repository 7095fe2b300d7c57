from __future__ import annotations

import uuid
from time import perf_counter
from typing import Any, Callable
from urllib.parse import parse_qs

import structlog
from starlette.datastructures import MutableHeaders


def wallet_from_scope(scope: dict[str, Any]) -> str | None:
    """Wallet named by the `wallet` query parameter or the x-wallet-address header, query first."""

    query = parse_qs(scope.get("query_string", b"").decode("latin-1"))
    wallet = (query.get("wallet") or [""])[0]
    if wallet:
        return wallet

    for name, value in scope.get("headers") or []:
        if name.lower() == b"x-wallet-address" and value:
            return value.decode("latin-1")
    return None


class RequestContextMiddleware:
    """Binds request_id (and the caller's wallet, when named) to the log context; one access log per request."""

    def __init__(self, app: Callable[..., Any]) -> None:
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        request_id = str(uuid.uuid4())

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=scope.get("path"),
            method=scope.get("method"),
        )
        wallet_address = wallet_from_scope(scope)
        if wallet_address:
            structlog.contextvars.bind_contextvars(wallet_address=wallet_address)

        start = perf_counter()
        status_code: int = 500

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code

            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))
                headers = MutableHeaders(scope=message)
                headers["X-Request-ID"] = request_id

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed_ms = (perf_counter() - start) * 1000.0
            structlog.get_logger("access").info(
                "http_request",
                status_code=status_code,
                elapsed_ms=round(elapsed_ms, 2),
            )
            structlog.contextvars.clear_contextvars()
