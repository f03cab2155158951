from __future__ import annotations

import argparse
import logging
from typing import Optional

import uvicorn

from bfjava.cli import configure_logging

from .app import create_app

log = logging.getLogger(__name__)

APP_FACTORY = "bfjava.webui.app:create_app"


def _serve_args(argv: Optional[list[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bfjava-webui",
        description="Serve the Brainfuck to Java translation API",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="TCP port (default: 8000)")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when bfjava sources change",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = _serve_args(argv)
    configure_logging(args.verbose)
    log_level = "debug" if args.verbose else "info"
    log.info("serving translation API on %s:%d", args.host, args.port)

    if args.reload:
        # the reloader re-imports the app, so it is named by factory path
        uvicorn.run(APP_FACTORY, factory=True, host=args.host, port=args.port, reload=True, log_level=log_level)
    else:
        uvicorn.run(create_app(), host=args.host, port=args.port, log_level=log_level)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
