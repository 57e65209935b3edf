from typing import Any

from nhl_auth_gateway.yahoo.client import API_BASE, Json, LeagueRef, first_league

USER_GAMES_URL = f"{API_BASE}/users;use_login=1/games?format=json"
NHL_LEAGUES_URL = f"{API_BASE}/users;use_login=1/games;game_keys=nhl/leagues?format=json"

def scoreboard_url(league_key: str, week: str) -> str:
    return f"{API_BASE}/league/{league_key}/scoreboard;week={week}?format=json"

def teams_url(league_key: str) -> str:
    return f"{API_BASE}/league/{league_key}/teams?format=json"

class YahooNHLAPI:
    """Thin wrapper around YahooFantasyClient naming the proxied endpoints."""

    def __init__(self, client: Any) -> None:
        """Initialize the wrapper.

        Args:
            client: YahooFantasyClient instance for making API calls
        """
        self.client = client

    def user_games(self) -> Json:
        """Return the games the logged-in user has played."""
        return self.client.get(USER_GAMES_URL)

    def nhl_leagues(self) -> Json:
        """Return the logged-in user's NHL leagues for the current season."""
        return self.client.get(NHL_LEAGUES_URL)

    def first_nhl_league(self) -> LeagueRef:
        """Return the first NHL league of the logged-in user.

        Raises:
            LeagueNotFoundError: If the user has no NHL league
        """
        return first_league(self.nhl_leagues())

    def nhl_matchups(self, week: str = "current") -> Json:
        """Return the scoreboard of the first NHL league.

        Args:
            week: Week number, or 'current'

        Returns:
            Raw Yahoo scoreboard payload
        """
        league = self.first_nhl_league()
        return self.client.get(scoreboard_url(league.league_key, week or "current"))

    def nhl_teams(self) -> Json:
        """Return the teams of the first NHL league."""
        league = self.first_nhl_league()
        return self.client.get(teams_url(league.league_key))
