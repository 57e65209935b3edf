# nhl_auth_gateway/auth/oauth.py
from __future__ import annotations

import logging
import urllib.parse
from typing import Optional

import requests
from requests.auth import HTTPBasicAuth
from requests_oauthlib import OAuth2Session

from nhl_auth_gateway.config.env import Settings

logger = logging.getLogger(__name__)

# ==========
# CONSTANTS
# ==========
YAHOO_AUTH_BASE = "https://api.login.yahoo.com/oauth2"
YAHOO_TOKEN_URL = f"{YAHOO_AUTH_BASE}/get_token"
YAHOO_AUTH_URL = f"{YAHOO_AUTH_BASE}/request_auth"

class NotAuthenticatedError(RuntimeError):
    """Raised when an authenticated call is attempted without a bearer token."""

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)

# ============
# TOKEN STORE
# ============
class TokenStore:
    """Holds the bearer token of the single session this gateway serves.

    Only the callback handler writes; every data route reads. Writes are
    unconditional, so the last successful exchange wins.
    """

    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token or None

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    @property
    def present(self) -> bool:
        return bool(self._token)

    def __repr__(self) -> str:
        # Never render the token itself
        return f"TokenStore(present={self.present})"

# =================
# AUTHORIZE / TOKEN
# =================
def build_authorization_url(client_id: str, redirect_uri: str) -> str:
    """Build the Yahoo consent URL the browser is redirected to.

    Args:
        client_id: Yahoo OAuth client ID
        redirect_uri: Callback URI registered with Yahoo

    Returns:
        Fully qualified authorization URL
    """
    params = {
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "response_type": "code",
    }
    return f"{YAHOO_AUTH_URL}?{urllib.parse.urlencode(params)}"

def _raise_for_status(response: requests.Response) -> requests.Response:
    """Compliance hook: oauthlib parses the body regardless of status code."""
    response.raise_for_status()
    return response

def exchange_code(settings: Settings, code: str) -> str:
    """Exchange an authorization code for an access token.

    Posts ``code``, ``redirect_uri`` and ``grant_type=authorization_code`` as
    a form body, authenticating the client with HTTP Basic credentials.

    Args:
        settings: Gateway settings carrying client credentials
        code: Authorization code received on the callback

    Returns:
        The ``access_token`` from the provider's response

    Raises:
        requests.exceptions.RequestException: On network failure or non-2xx
        oauthlib.oauth2.OAuth2Error: If the body is an error or lacks a token
    """
    oauth = OAuth2Session(client_id=settings.client_id, redirect_uri=settings.redirect_uri)
    oauth.register_compliance_hook("access_token_response", _raise_for_status)

    token = oauth.fetch_token(
        token_url=YAHOO_TOKEN_URL,
        code=code,
        auth=HTTPBasicAuth(settings.client_id, settings.client_secret),
        include_client_id=False,
        timeout=settings.http_timeout,
    )
    logger.debug("Token exchange succeeded (token_type=%s)", token.get("token_type"))
    return token["access_token"]
