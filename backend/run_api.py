#!/usr/bin/env python
"""
Serve the accounts API (registration, login, verification, admin).

Host, port, reload and log level come from Settings (.env); the flags
below override them for a single run.

Usage:
    uv run python run_api.py
    uv run python run_api.py --reload --port 8001
"""

import argparse
import uvicorn

from shared.config import get_settings


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description=f"Serve the {settings.app_name}")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument("--host", type=str, help=f"Bind address (default {settings.host})")
    parser.add_argument("--port", type=int, help=f"Bind port (default {settings.port})")
    parser.add_argument("--log-level", type=str, help=f"Log level (default {settings.log_level})")
    args = parser.parse_args()

    uvicorn.run(
        "api:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
        log_level=(args.log_level or settings.log_level).lower(),
    )


if __name__ == "__main__":
    main()
