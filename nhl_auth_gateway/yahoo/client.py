# nhl_auth_gateway/yahoo/client.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union
from xml.parsers.expat import ExpatError

import requests
import xmltodict

from nhl_auth_gateway.auth.oauth import NotAuthenticatedError

logger = logging.getLogger(__name__)

# Constants
API_BASE = "https://fantasysports.yahooapis.com/fantasy/v2"

# Type aliases
Json = Union[Dict[str, Any], List[Any], str, int, float, bool, None]

class LeagueNotFoundError(LookupError):
    """Raised when a Yahoo payload does not contain the expected league."""

def _fetch(url: str, session: requests.Session, headers: Dict[str, str], timeout: Optional[float]) -> Json:
    """Fetch data from Yahoo API with JSON/XML fallback handling.

    Args:
        url: URL to fetch data from
        session: requests session used for the call
        headers: Request headers (carries the bearer token)
        timeout: Request timeout in seconds, or None

    Returns:
        Parsed JSON data or XML-to-dict converted data

    Raises:
        requests.exceptions.RequestException: For network and HTTP errors
        xml.parsers.expat.ExpatError: If neither JSON nor XML can be parsed
    """
    # Try JSON first
    response = session.get(url, headers={"Accept": "application/json", **headers}, timeout=timeout)

    # Server insists on XML: 406 refuses JSON outright, otherwise check the status
    content_type = response.headers.get("Content-Type", "").lower()
    if response.status_code == 406:
        return xmltodict.parse(response.text)
    if content_type.startswith(("application/xml", "text/xml")):
        response.raise_for_status()
        return xmltodict.parse(response.text)

    response.raise_for_status()

    try:
        return response.json()
    except requests.exceptions.JSONDecodeError:
        # Try XML parse if JSON parsing failed
        return xmltodict.parse(response.text)

def _dig(obj: Json, *path) -> Any:
    """Safely navigate nested dictionary/list structure by keys/indices.

    Returns None if any path element is missing. Handles Yahoo's common patterns
    where arrays are stored as {"0": {...}, "1": {...}, "count": 2} or as
    [{key: value}, {key: value}].

    Args:
        obj: JSON object to navigate (dict or list)
        *path: Sequence of keys/indices to traverse

    Returns:
        Value at the specified path, or None if path doesn't exist
    """
    current = obj
    for key in path:
        if isinstance(current, dict):
            current = current.get(str(key))
        elif isinstance(current, list):
            try:
                index = int(key)  # allow numeric path parts for list indexing
                current = current[index]
            except (ValueError, IndexError):
                # If key is a string and each item is a {key:...} dict
                found = None
                for item in current:
                    if isinstance(item, dict) and key in item:
                        found = item[key]
                        break
                current = found
        else:
            return None

        if current is None:
            return None

    return current

def _numbered_entries(container: Any) -> List[Any]:
    """Return the entries of a Yahoo collection in index order.

    Yahoo collections arrive either as {"0": x, "1": y, "count": 2} or as
    plain lists.
    """
    if isinstance(container, list):
        return list(container)
    if isinstance(container, dict):
        keys = sorted((key for key in container if str(key).isdigit()), key=int)
        return [container[key] for key in keys]
    return []

def _flatten(entry: Any) -> Dict[str, Any]:
    """Flatten a list of single-field dicts into one dictionary."""
    flattened: Dict[str, Any] = {}

    if isinstance(entry, list):
        for item in entry:
            if isinstance(item, dict):
                flattened.update(item)
    elif isinstance(entry, dict):
        flattened.update(entry)

    return flattened

# ================
# LEAGUE PROJECTION
# ================
@dataclass(frozen=True)
class LeagueRef:
    """Typed view of one league inside a users/games/leagues payload.

    Attributes:
        league_key: Yahoo league key (e.g. '465.l.22607')
        league_id: Numeric league id as returned by Yahoo
        name: League display name
        season: Season year
        game_key: Key of the game the league belongs to
    """
    league_key: str
    league_id: Optional[str] = None
    name: Optional[str] = None
    season: Optional[str] = None
    game_key: Optional[str] = None

def extract_leagues(payload: Json) -> List[LeagueRef]:
    """Project every league of every game for the logged-in user.

    Args:
        payload: Raw response of users;use_login=1/games;game_keys=.../leagues

    Returns:
        LeagueRef list in the order Yahoo returned them (may be empty)
    """
    leagues: List[LeagueRef] = []

    for user_entry in _numbered_entries(_dig(payload, "fantasy_content", "users")):
        for game_entry in _numbered_entries(_dig(user_entry, "user", "games")):
            game = _dig(game_entry, "game")
            game_meta = _flatten(_dig(game, 0))
            for league_entry in _numbered_entries(_dig(game, "leagues")):
                league = _flatten(_dig(league_entry, "league", 0))
                league_key = league.get("league_key")
                if not isinstance(league_key, str) or not league_key:
                    continue
                leagues.append(LeagueRef(
                    league_key=league_key,
                    league_id=league.get("league_id"),
                    name=league.get("name"),
                    season=league.get("season"),
                    game_key=game_meta.get("game_key"),
                ))

    return leagues

def first_league(payload: Json) -> LeagueRef:
    """Return the first league in the payload.

    Only the first league is ever used; users in several leagues of the same
    game get the one Yahoo lists first.

    Raises:
        LeagueNotFoundError: If the payload holds no league
    """
    leagues = extract_leagues(payload)
    if not leagues:
        raise LeagueNotFoundError("No league found for the logged-in user")
    return leagues[0]

# ======
# CLIENT
# ======
class YahooFantasyClient:
    """Authenticated GET helper bound to one bearer token."""

    def __init__(
        self,
        session: requests.Session,
        token: Optional[str],
        timeout: Optional[float] = None,
    ) -> None:
        """Initialize the client.

        Args:
            session: requests session shared by the gateway
            token: Bearer token snapshot for the current request, or None
            timeout: Request timeout in seconds, or None
        """
        self.session = session
        self.token = token
        self.timeout = timeout

    def get(self, url: str) -> Json:
        """GET a fully qualified Yahoo URL with the bearer token.

        Args:
            url: Fully qualified request URL

        Returns:
            Parsed response body, not validated

        Raises:
            NotAuthenticatedError: If no token is held; no request is made
            requests.exceptions.RequestException: On network or HTTP failure
            ExpatError: If the body is neither JSON nor XML
        """
        if not self.token:
            raise NotAuthenticatedError()

        try:
            return _fetch(
                url,
                self.session,
                headers={"Authorization": f"Bearer {self.token}"},
                timeout=self.timeout,
            )
        except (requests.RequestException, ExpatError) as exc:
            logger.error("Error making authenticated request to %s: %s", url, exc)
            raise
