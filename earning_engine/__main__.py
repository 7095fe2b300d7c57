from __future__ import annotations

import argparse
import os

import uvicorn

from earning_engine.config import get_settings
from earning_engine.observability.logging import configure_logging


def main() -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Ultra Earning Engine backend API")
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on (env: PORT)")
    parser.add_argument("--log-level", default=settings.log_level, help="Root log level (env: LOG_LEVEL)")
    args = parser.parse_args()

    # Settings are read again inside the app; keep them in sync with the CLI.
    os.environ["HOST"] = args.host
    os.environ["PORT"] = str(args.port)
    os.environ["LOG_LEVEL"] = args.log_level
    get_settings.cache_clear()

    configure_logging(args.log_level)
    uvicorn.run(
        "earning_engine.main:app",
        host=args.host,
        port=args.port,
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    main()
