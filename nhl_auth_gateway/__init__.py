"""NHL Auth Gateway - Core package.

This package runs the Yahoo OAuth2 authorization code flow on a local HTTPS
server and proxies a few Yahoo Fantasy NHL endpoints with the bearer token.
"""

# Package metadata
__version__ = "1.0.0"
__license__ = "MIT"
__all__ = [
    "auth",
    "config",
    "yahoo",
    "gateway",
]

# Import key modules for easy access
from .auth.oauth import TokenStore, NotAuthenticatedError, build_authorization_url, exchange_code
from .config.env import Settings, ConfigError, load_settings
from .yahoo.api import YahooNHLAPI
from .yahoo.client import YahooFantasyClient, LeagueRef, LeagueNotFoundError, extract_leagues
from .gateway import AuthGateway, create_app

# Export key classes and functions at package level
__all__.extend([
    "TokenStore",
    "NotAuthenticatedError",
    "build_authorization_url",
    "exchange_code",
    "Settings",
    "ConfigError",
    "load_settings",
    "YahooNHLAPI",
    "YahooFantasyClient",
    "LeagueRef",
    "LeagueNotFoundError",
    "extract_leagues",
    "AuthGateway",
    "create_app",
])
