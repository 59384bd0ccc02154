"""
Configuration management for the Trello board builder.

Loads credentials and request settings from environment variables
and provides a single structured object that is passed explicitly
to the API client.
"""

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_BASE_URL = "https://api.trello.com/1"
DEFAULT_TIMEOUT = 30.0


@dataclass
class Config:
    """
    Central configuration for a build run.

    Loads from environment variables and provides defaults.
    All secrets are loaded from env vars - never hardcoded.
    """

    # Trello credentials
    api_key: str
    token: str

    # Request settings
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    # Behavior
    debug: bool = False

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Config":
        """
        Load configuration from environment variables.

        Args:
            env_file: Optional path to .env file. If not provided,
                     looks for .env in current directory.

        Returns:
            Configured Config instance.

        Raises:
            ValueError: If required environment variables are missing
                        or a setting has an invalid value.
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv(find_dotenv(usecwd=True))

        api_key = os.getenv("TRELLO_API_KEY")
        token = os.getenv("TRELLO_TOKEN")
        if not api_key or not token:
            raise ValueError(
                "Missing TRELLO_API_KEY or TRELLO_TOKEN in environment.\n"
                "Generate both at https://trello.com/power-ups/admin"
            )

        base_url = os.getenv("TRELLO_BASE_URL") or DEFAULT_BASE_URL

        timeout_str = os.getenv("TRELLO_TIMEOUT")
        try:
            timeout = float(timeout_str) if timeout_str else DEFAULT_TIMEOUT
        except ValueError:
            raise ValueError(
                f"TRELLO_TIMEOUT must be a number of seconds, got {timeout_str!r}"
            ) from None

        debug = os.getenv("DEBUG", "false").lower() == "true"

        return cls(
            api_key=api_key,
            token=token,
            base_url=base_url,
            timeout=timeout,
            debug=debug,
        )

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.base_url = self.base_url.rstrip("/")

        if not math.isfinite(self.timeout) or self.timeout <= 0:
            raise ValueError(
                f"Request timeout must be a positive, finite number of seconds, got {self.timeout}"
            )
