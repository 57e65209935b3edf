#!/usr/bin/env python3
"""NHL Auth Gateway entry point.

Usage examples:
  python -m nhl_auth_gateway
  python -m nhl_auth_gateway --port 3443 --no-browser
"""
from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path

from nhl_auth_gateway.config.env import ConfigError, configure_logging, load_settings
from nhl_auth_gateway.gateway import run

logger = logging.getLogger("nhl_auth_gateway")

def main(argv=None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command line arguments (optional)

    Returns:
        0 after a clean shutdown, 1 on configuration errors
    """
    ap = argparse.ArgumentParser(description="Local Yahoo OAuth helper and Fantasy NHL proxy")
    ap.add_argument("--host", help="Host to bind to (overrides HOST)")
    ap.add_argument("--port", type=int, help="Port to listen on (overrides PORT)")
    ap.add_argument("--no-browser", action="store_true", help="Do not open the /auth page on startup")
    args = ap.parse_args(argv)

    try:
        settings = load_settings()
    except ConfigError as e:
        configure_logging()
        logger.error("%s", e)
        return 1

    overrides = {}
    if args.host:
        overrides["host"] = args.host
    if args.port:
        overrides["port"] = args.port
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    configure_logging(settings.log_level)

    for label, path in (("SSL_KEY_PATH", settings.ssl_key_path), ("SSL_CERT_PATH", settings.ssl_cert_path)):
        if not Path(path).is_file():
            logger.error("TLS file not found: %s=%s", label, path)
            return 1

    run(settings, open_browser=not args.no_browser)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
