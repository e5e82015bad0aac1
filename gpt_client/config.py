"""
Client configuration.

API constants, transport tuning and the per-client configuration object.
Everything here is immutable once built. The credential is always passed
explicitly by the caller and is never read from the environment.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .models import LIBRARY_DEFAULT_MODEL, ModelSelector, is_default_marker


API_BASE = "https://api.openai.com"
V1_COMPLETIONS = "/v1/completions"

USER_AGENT = "gpt-client/0.3.0"


@dataclass(frozen=True)
class TransportSettings:
    """Transport tuning handed to the httpx client."""

    base_url: str = API_BASE
    timeout: float = 60.0
    connect_timeout: float = 10.0
    user_agent: str = USER_AGENT

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "TransportSettings":
        """
        Load transport overrides from environment variables.

        Reads env_file, or the nearest .env found upward from the current
        working directory, then:
        - GPT_CLIENT_BASE_URL
        - GPT_CLIENT_TIMEOUT
        - GPT_CLIENT_CONNECT_TIMEOUT

        Raises:
            ValueError if a timeout is not a number.
        """
        load_dotenv(env_file or find_dotenv(usecwd=True))
        return cls(
            base_url=os.getenv("GPT_CLIENT_BASE_URL", API_BASE),
            timeout=float(os.getenv("GPT_CLIENT_TIMEOUT", "60")),
            connect_timeout=float(os.getenv("GPT_CLIENT_CONNECT_TIMEOUT", "10")),
        )


@dataclass(frozen=True)
class ClientConfig:
    """
    Immutable configuration owned by one client instance.

    Constructed once in GPT.__init__ and shared read-only by every call,
    buffered or streamed.
    """

    api_key: str = field(repr=False)
    default_model: ModelSelector = LIBRARY_DEFAULT_MODEL
    transport: TransportSettings = field(default_factory=TransportSettings)

    def __post_init__(self):
        if not self.api_key:
            raise ValueError("api_key must be a non-empty string")
        if is_default_marker(self.default_model):
            object.__setattr__(self, "default_model", LIBRARY_DEFAULT_MODEL)
