"""
Trello REST API wrapper for the board builder.

Provides a thin interface to Trello's API with:
- Key/token authentication on every call
- Client-side pacing under Trello's token rate limit
- A fixed per-request timeout
- Errors surfaced unmodified to the caller
"""

import json
from typing import Any, Optional

import requests
from ratelimit import limits, sleep_and_retry

from .config import Config

# Trello API rate limit: 100 requests per 10 seconds per token
RATE_LIMIT_CALLS = 100
RATE_LIMIT_PERIOD = 10  # seconds


class TrelloAPI:
    """
    Wrapper around the Trello REST API.

    Handles:
    - Authentication (key and token query parameters)
    - Rate pacing (100 req / 10 sec)
    - Parameter encoding (Trello expects lowercase booleans)
    - Raising on any non-2xx response
    """

    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        """
        Initialize the Trello API client.

        Args:
            config: Configuration instance with Trello credentials.
            session: Optional pre-built HTTP session (used by tests).
        """
        self.config = config
        self.session = session or requests.Session()
        self._request_count = 0

    def get(self, path: str, **params: Any) -> Any:
        """Issue a GET against `path` and return the decoded JSON body."""
        return self._request("GET", path, params)

    def post(self, path: str, **params: Any) -> Any:
        """
        Issue a POST against `path` and return the decoded JSON body.

        Trello accepts creation fields as query parameters, so no
        request body is sent.
        """
        return self._request("POST", path, params)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    @sleep_and_retry
    @limits(calls=RATE_LIMIT_CALLS, period=RATE_LIMIT_PERIOD)
    def _request(self, method: str, path: str, params: dict[str, Any]) -> Any:
        """Execute a rate-limited API call."""
        self._request_count += 1

        response = self.session.request(
            method,
            f"{self.config.base_url}{path}",
            params=self._params(params),
            timeout=self.config.timeout,
        )
        response.raise_for_status()
        return response.json()

    def _params(self, extra: dict[str, Any]) -> dict[str, str]:
        """Merge call parameters with credentials, encoding values for Trello."""
        encoded = {}
        for name, value in extra.items():
            if value is None:
                continue
            if isinstance(value, bool):
                value = "true" if value else "false"
            encoded[name] = str(value)

        encoded["key"] = self.config.api_key
        encoded["token"] = self.config.token
        return encoded

    @property
    def request_count(self) -> int:
        """Number of API requests made."""
        return self._request_count


def describe_error(error: Exception) -> str:
    """
    Render a failed call for the console.

    Prefers the structured JSON payload Trello sent back, then the raw
    response text, then the exception message.
    """
    response = getattr(error, "response", None)
    if response is not None:
        try:
            return json.dumps(response.json(), indent=2)
        except ValueError:
            if response.text:
                return response.text
    return str(error)
