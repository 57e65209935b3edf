"""Configuration and environment utilities for the NHL Auth Gateway."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import load_dotenv

REQUIRED_KEYS = [
    "YAHOO_CLIENT_ID",
    "YAHOO_CLIENT_SECRET",
]

DEFAULTS = {
    "PORT": "3000",
    "HOST": "0.0.0.0",
    "SSL_KEY_PATH": "key.pem",
    "SSL_CERT_PATH": "cert.pem",
    "LOG_LEVEL": "INFO",
    "HTTP_TIMEOUT": "30",
}

class ConfigError(RuntimeError):
    """Raised when the environment cannot produce a usable configuration."""

@dataclass(frozen=True)
class Settings:
    """Resolved gateway configuration.

    Attributes:
        client_id: Yahoo OAuth client ID
        client_secret: Yahoo OAuth client secret
        port: HTTPS listen port (also part of the redirect URI)
        host: Address the listener binds to
        ssl_key_path: Path to the TLS private key
        ssl_cert_path: Path to the TLS certificate
        log_level: Root logging level name
        http_timeout: Outbound request timeout in seconds, None to wait forever
    """
    client_id: str
    client_secret: str = field(repr=False)
    port: int = 3000
    host: str = "0.0.0.0"
    ssl_key_path: str = "key.pem"
    ssl_cert_path: str = "cert.pem"
    log_level: str = "INFO"
    http_timeout: Optional[float] = 30.0

    @property
    def base_url(self) -> str:
        return f"https://localhost:{self.port}"

    @property
    def redirect_uri(self) -> str:
        """Redirect URI registered with Yahoo, derived from the listen port."""
        return f"{self.base_url}/callback"

    @property
    def auth_start_url(self) -> str:
        return f"{self.base_url}/auth"

def _parse_int(key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {value!r}") from None

def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the process environment and an optional .env file.

    Values already present in the environment win over the .env file.

    Args:
        environ: Mapping to read instead of os.environ (skips .env loading)

    Returns:
        Frozen Settings instance

    Raises:
        ConfigError: If required keys are missing or a numeric value is invalid
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    missing = [key for key in REQUIRED_KEYS if not (environ.get(key) or "").strip()]
    if missing:
        raise ConfigError(f"{' and '.join(missing)} must be set in environment variables")

    cfg = {key: (environ.get(key) or default).strip() for key, default in DEFAULTS.items()}
    timeout = _parse_int("HTTP_TIMEOUT", cfg["HTTP_TIMEOUT"])

    return Settings(
        client_id=environ["YAHOO_CLIENT_ID"].strip(),
        client_secret=environ["YAHOO_CLIENT_SECRET"].strip(),
        port=_parse_int("PORT", cfg["PORT"]),
        host=cfg["HOST"],
        ssl_key_path=cfg["SSL_KEY_PATH"],
        ssl_cert_path=cfg["SSL_CERT_PATH"],
        log_level=cfg["LOG_LEVEL"].upper(),
        http_timeout=float(timeout) if timeout > 0 else None,
    )

def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="[%(levelname)s] %(message)s",
    )
