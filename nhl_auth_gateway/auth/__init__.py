"""Yahoo OAuth2 authorization code flow and the in-memory token slot."""
