"""Shared fixtures for the gateway tests.

The Yahoo provider is never contacted: outbound calls go through mocked
sessions that hand back real ``requests.Response`` objects.
"""

import json
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest
import requests
from fastapi.testclient import TestClient

from nhl_auth_gateway.auth.oauth import TokenStore
from nhl_auth_gateway.config.env import Settings
from nhl_auth_gateway.gateway import AuthGateway, create_app


def make_response(
    status: int = 200,
    body: Any = None,
    content_type: str = "application/json",
    text: Optional[str] = None,
    url: str = "https://example.invalid/",
    method: str = "GET",
) -> requests.Response:
    """Build a real requests.Response carrying a JSON (or raw text) body.

    The originating request is attached because requests-oauthlib reads
    ``response.request.url`` while fetching a token.
    """
    resp = requests.Response()
    resp.request = requests.Request(method, url).prepare()
    resp.status_code = status
    resp.url = url
    resp.encoding = "utf-8"
    resp.headers["Content-Type"] = content_type
    payload = text if text is not None else json.dumps(body if body is not None else {})
    resp._content = payload.encode("utf-8")
    return resp


def leagues_payload(*league_keys: str) -> dict:
    """Yahoo-shaped users;use_login=1/games;game_keys=nhl/leagues response."""
    leagues = {
        str(i): {"league": [{"league_key": key, "league_id": key.split(".")[-1], "name": f"League {i}", "season": "2025"}]}
        for i, key in enumerate(league_keys)
    }
    leagues["count"] = len(league_keys)
    return {
        "fantasy_content": {
            "users": {
                "0": {
                    "user": [
                        {"guid": "ABCDEF"},
                        {"games": {
                            "0": {"game": [
                                {"game_key": "465", "code": "nhl", "season": "2025"},
                                {"leagues": leagues},
                            ]},
                            "count": 1,
                        }},
                    ]
                },
                "count": 1,
            }
        }
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(client_id="test-client-id", client_secret="test-client-secret", port=3000)


@pytest.fixture
def http_session() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def token_store() -> TokenStore:
    return TokenStore()


@pytest.fixture
def gateway(settings, token_store, http_session) -> AuthGateway:
    return AuthGateway(settings, token_store=token_store, session=http_session)


@pytest.fixture
def client(settings, gateway) -> TestClient:
    return TestClient(create_app(settings, gateway=gateway))
