"""Command line entry point: ``hashtag-scraper [transport] [host] [port]``.

Arguments left out fall back to SCRAPER_TRANSPORT, SCRAPER_HOST and
SCRAPER_PORT, then to streamable-http on 0.0.0.0:8000.
"""

from __future__ import annotations

import os
import sys

from hashtag_scraper.server import run_server

TRANSPORTS = ("streamable-http", "sse", "stdio")


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv

    transport = args[0] if len(args) > 0 else os.getenv("SCRAPER_TRANSPORT", "streamable-http")
    host = args[1] if len(args) > 1 else os.getenv("SCRAPER_HOST", "0.0.0.0")
    port_text = args[2] if len(args) > 2 else os.getenv("SCRAPER_PORT", "8000")

    if transport not in TRANSPORTS:
        sys.exit(f"Unknown transport {transport!r}; expected one of {', '.join(TRANSPORTS)}")
    try:
        port = int(port_text)
    except ValueError:
        sys.exit(f"Port must be an integer, got {port_text!r}")

    # stdout carries the protocol under stdio
    print(f"Hashtag Scraper listening on {host}:{port} ({transport})", file=sys.stderr)
    run_server(transport=transport, host=host, port=port)


if __name__ == "__main__":
    main()
