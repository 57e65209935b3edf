"""
Auth Gateway
Local HTTPS app that runs the Yahoo authorization code flow and proxies a
few Yahoo Fantasy NHL endpoints with the resulting bearer token.
"""

from __future__ import annotations

import asyncio
import logging
import webbrowser
from contextlib import asynccontextmanager
from typing import Any, Callable, Optional

import requests
import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response

from nhl_auth_gateway import __version__
from nhl_auth_gateway.auth.oauth import TokenStore, build_authorization_url, exchange_code
from nhl_auth_gateway.config.env import Settings
from nhl_auth_gateway.yahoo.api import YahooNHLAPI
from nhl_auth_gateway.yahoo.client import YahooFantasyClient

logger = logging.getLogger(__name__)

NOT_AUTHENTICATED = "Not authenticated. Please authenticate first."


class AuthGateway:
    """Per-process gateway state: settings, the token slot and the HTTP session."""

    def __init__(
        self,
        settings: Settings,
        token_store: Optional[TokenStore] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the gateway

        Args:
            settings: Resolved configuration
            token_store: Token slot (a fresh, empty one if not provided)
            session: requests session for Yahoo API calls
        """
        self.settings = settings
        self.token_store = token_store or TokenStore()
        self.session = session or requests.Session()

    @property
    def authorization_url(self) -> str:
        return build_authorization_url(self.settings.client_id, self.settings.redirect_uri)

    def api(self, token: Optional[str]) -> YahooNHLAPI:
        """Build an API wrapper bound to a token snapshot."""
        client = YahooFantasyClient(self.session, token, timeout=self.settings.http_timeout)
        return YahooNHLAPI(client)

    def close(self) -> None:
        self.session.close()


def get_gateway(request: Request) -> AuthGateway:
    return request.app.state.gateway


router = APIRouter()


@router.get("/auth")
async def auth(gateway: AuthGateway = Depends(get_gateway)):
    """Redirect the browser to Yahoo's consent page."""
    return RedirectResponse(gateway.authorization_url, status_code=302)


@router.get("/callback")
async def callback(request: Request, gateway: AuthGateway = Depends(get_gateway)):
    """Exchange the authorization code Yahoo redirected back with."""
    # A repeated ?code= arrives as several values; only a single one is valid
    codes = request.query_params.getlist("code")
    if len(codes) != 1:
        return PlainTextResponse("Invalid authorization code", status_code=400)

    try:
        token = await run_in_threadpool(exchange_code, gateway.settings, codes[0])
    except Exception:
        logger.exception("Error getting token")
        return PlainTextResponse("Authentication failed", status_code=500)

    gateway.token_store.set(token)
    logger.info("Authentication successful; bearer token stored")
    return PlainTextResponse("Authentication successful! You can close this window.")


async def _relay(
    gateway: AuthGateway,
    route: str,
    error_message: str,
    operation: Callable[[YahooNHLAPI], Any],
) -> Response:
    """Run an API operation with the current token and relay its JSON body."""
    token = gateway.token_store.get()
    if not token:
        return PlainTextResponse(NOT_AUTHENTICATED, status_code=401)

    try:
        data = await run_in_threadpool(operation, gateway.api(token))
    except Exception:
        logger.exception("Error in %s route", route)
        return PlainTextResponse(error_message, status_code=500)

    return JSONResponse(data)


@router.get("/test")
async def test(gateway: AuthGateway = Depends(get_gateway)):
    """Fetch the logged-in user's games to confirm the token works."""
    return await _relay(
        gateway, "/test", "Error making authenticated request",
        lambda api: api.user_games(),
    )


@router.get("/nhl-leagues")
async def nhl_leagues(gateway: AuthGateway = Depends(get_gateway)):
    return await _relay(
        gateway, "/nhl-leagues", "Error fetching NHL league information",
        lambda api: api.nhl_leagues(),
    )


@router.get("/nhl-matchups")
async def nhl_matchups(week: str = "current", gateway: AuthGateway = Depends(get_gateway)):
    """Scoreboard of the first NHL league for ``week`` (defaults to current)."""
    week = week or "current"
    return await _relay(
        gateway, "/nhl-matchups", "Error fetching NHL matchup information",
        lambda api: api.nhl_matchups(week),
    )


@router.get("/nhl-teams")
async def nhl_teams(gateway: AuthGateway = Depends(get_gateway)):
    return await _relay(
        gateway, "/nhl-teams", "Error fetching NHL team information",
        lambda api: api.nhl_teams(),
    )


def open_auth_page(url: str) -> bool:
    """Best-effort attempt to open the auth URL in the local browser."""
    try:
        opened = webbrowser.open(url, new=1, autoraise=True)
    except webbrowser.Error as exc:
        logger.debug("webbrowser error: %s", exc)
        opened = False

    if not opened:
        logger.warning("Failed to open browser automatically. Please open the URL manually.")
    return opened


def _log_browser_result(future: asyncio.Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.warning(
            "Failed to open browser automatically (%s). Please open the URL manually.", exc,
        )


def schedule_auth_page(url: str) -> asyncio.Future:
    """Open the auth page on a worker thread; failures are logged, never raised."""
    future = asyncio.get_running_loop().run_in_executor(None, open_auth_page, url)
    future.add_done_callback(_log_browser_result)
    return future


class GatewayServer(uvicorn.Server):
    """uvicorn server that opens the auth page once the listener is bound."""

    def __init__(self, config: uvicorn.Config, open_url: Optional[str] = None):
        super().__init__(config)
        self.open_url = open_url
        self.browser_future: Optional[asyncio.Future] = None

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started and self.open_url:
            self.browser_future = schedule_auth_page(self.open_url)


def create_app(settings: Settings, gateway: Optional[AuthGateway] = None) -> FastAPI:
    """Factory function to create the FastAPI application"""
    gateway = gateway or AuthGateway(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Server running at %s", settings.base_url)
        logger.info(
            "Please open %s in your browser to start the authentication process.",
            settings.auth_start_url,
        )
        yield
        gateway.close()

    app = FastAPI(
        title="NHL Auth Gateway",
        description="Local Yahoo OAuth helper and Fantasy NHL proxy",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.gateway = gateway
    app.include_router(router)
    return app


def run(settings: Settings, open_browser: bool = True) -> None:
    """Serve the gateway over HTTPS until interrupted"""
    config = uvicorn.Config(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        ssl_keyfile=settings.ssl_key_path,
        ssl_certfile=settings.ssl_cert_path,
        log_level=settings.log_level.lower(),
    )
    server = GatewayServer(config, open_url=settings.auth_start_url if open_browser else None)
    server.run()
