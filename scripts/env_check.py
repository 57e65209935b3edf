#!/usr/bin/env python3
"""Environment validator for the NHL Auth Gateway (localhost HTTPS).

Usage:
  python -m scripts.env_check
"""
from __future__ import annotations
from pathlib import Path
from typing import List, Mapping, Optional

from nhl_auth_gateway.auth.oauth import YAHOO_AUTH_URL, YAHOO_TOKEN_URL
from nhl_auth_gateway.config.env import ConfigError, load_settings
from nhl_auth_gateway.yahoo.client import API_BASE

def main(environ: Optional[Mapping[str, str]] = None) -> int:
    root = Path.cwd()
    print("=== env-check (NHL Auth Gateway) ===")
    print(f"Project root: {root}")
    print(f".env present: {'yes' if (root / '.env').exists() else 'no'}\n")

    try:
        settings = load_settings(environ)
    except ConfigError as e:
        print(f"Configuration error: {e}")
        print("\nAdd the missing values to your .env and re-run this check.")
        return 2

    problems: List[str] = []
    for label, path in (("SSL_KEY_PATH", settings.ssl_key_path), ("SSL_CERT_PATH", settings.ssl_cert_path)):
        if not Path(path).is_file():
            problems.append(f"{label} not found: {path}")
    if not 0 < settings.port < 65536:
        problems.append(f"PORT out of range: {settings.port}")

    # Print resolved config (redact secret)
    print("Resolved values:")
    print(f"  YAHOO_CLIENT_ID = {settings.client_id}")
    print("  YAHOO_CLIENT_SECRET = ***redacted***")
    print(f"  HOST = {settings.host}")
    print(f"  PORT = {settings.port}")
    print(f"  SSL_KEY_PATH = {settings.ssl_key_path}")
    print(f"  SSL_CERT_PATH = {settings.ssl_cert_path}")
    print(f"  LOG_LEVEL = {settings.log_level}")
    print(f"  HTTP_TIMEOUT = {settings.http_timeout or 'none'}")

    print("\nRegister this redirect URI with your Yahoo app:")
    print(f"  {settings.redirect_uri}")

    print("\nYahoo endpoints:")
    print(f"  authorize: {YAHOO_AUTH_URL}")
    print(f"  token:     {YAHOO_TOKEN_URL}")
    print(f"  api:       {API_BASE}")

    if problems:
        print("\nProblems:")
        for problem in problems:
            print(f"  - {problem}")
        return 2

    print("\nNext: run `python -m nhl_auth_gateway` and open the /auth page.")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
