"""Tests for Settings loading and the token slot."""

import pytest

from nhl_auth_gateway.auth.oauth import TokenStore
from nhl_auth_gateway.config.env import ConfigError, Settings, load_settings

BASE_ENV = {"YAHOO_CLIENT_ID": "cid", "YAHOO_CLIENT_SECRET": "secret"}


def test_defaults_applied():
    settings = load_settings(BASE_ENV)

    assert settings == Settings(client_id="cid", client_secret="secret")
    assert settings.port == 3000
    assert settings.ssl_key_path == "key.pem"
    assert settings.ssl_cert_path == "cert.pem"
    assert settings.http_timeout == 30.0
    assert settings.redirect_uri == "https://localhost:3000/callback"
    assert settings.auth_start_url == "https://localhost:3000/auth"


def test_overrides_from_environment():
    env = dict(BASE_ENV, PORT="3443", SSL_KEY_PATH="certs/k.pem", SSL_CERT_PATH="certs/c.pem",
               LOG_LEVEL="debug", HTTP_TIMEOUT="0", HOST="127.0.0.1")
    settings = load_settings(env)

    assert settings.port == 3443
    assert settings.host == "127.0.0.1"
    assert settings.ssl_key_path == "certs/k.pem"
    assert settings.ssl_cert_path == "certs/c.pem"
    assert settings.log_level == "DEBUG"
    assert settings.http_timeout is None
    assert settings.redirect_uri == "https://localhost:3443/callback"


@pytest.mark.parametrize("missing", ["YAHOO_CLIENT_ID", "YAHOO_CLIENT_SECRET"])
def test_missing_credentials_raise(missing):
    env = dict(BASE_ENV)
    env[missing] = "   "

    with pytest.raises(ConfigError, match=missing):
        load_settings(env)


def test_both_credentials_reported():
    with pytest.raises(ConfigError, match="YAHOO_CLIENT_ID and YAHOO_CLIENT_SECRET"):
        load_settings({})


def test_bad_port_raises():
    with pytest.raises(ConfigError, match="PORT"):
        load_settings(dict(BASE_ENV, PORT="https"))


def test_settings_repr_hides_secret():
    assert "b-secret" not in repr(Settings(client_id="a", client_secret="b-secret"))


# ---------- TokenStore ----------

def test_token_store_starts_empty():
    store = TokenStore()
    assert store.get() is None
    assert not store.present


def test_token_store_last_write_wins():
    store = TokenStore()
    store.set("one")
    store.set("two")
    assert store.get() == "two"
    assert store.present


def test_token_store_repr_hides_token():
    store = TokenStore("very-secret")
    assert "very-secret" not in repr(store)
