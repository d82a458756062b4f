"""
Pydantic model for the client configuration and the one-shot registry that holds it.
"""

import logging
import threading
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from lastfm_client.exceptions import ConfigurationError

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://ws.audioscrobbler.com/2.0"


class ClientConfig(BaseModel):
    """Immutable credentials and endpoint used to sign and address every request."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    api_key: str
    shared_secret: str = Field(repr=False)
    base_url: str = DEFAULT_BASE_URL

    @field_validator("api_key", "shared_secret")
    @classmethod
    def validate_credential(cls, v: str) -> str:
        """Rejects blank credentials; the service would refuse every request."""
        if not v:
            raise ValueError("Credential cannot be empty.")
        return v

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Base URL must be an http(s) URL, but got: {v}")
        return v


def create_config(
    api_key: str, shared_secret: str, base_url: Optional[str] = None
) -> ClientConfig:
    """
    Builds a ClientConfig, reporting invalid values as a ConfigurationError.

    Args:
        api_key: The Last.fm API key.
        shared_secret: The Last.fm shared secret.
        base_url: Override for the REST endpoint (defaults to the public one).
    """
    settings = {"api_key": api_key, "shared_secret": shared_secret}
    if base_url is not None:
        settings["base_url"] = base_url
    try:
        return ClientConfig(**settings)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed:\n{e}") from e


class ConfigRegistry:
    """
    Holds a single ClientConfig for an application.

    Initialization happens at most once; a second attempt fails and leaves the
    existing configuration in effect.
    """

    def __init__(self):
        self._config: Optional[ClientConfig] = None
        self._lock = threading.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._config is not None

    def initialize(
        self, api_key: str, shared_secret: str, base_url: Optional[str] = None
    ) -> ClientConfig:
        """
        Creates and stores the configuration.

        Raises:
            ConfigurationError: If already initialized or the values are invalid.
        """
        with self._lock:
            if self._config is not None:
                raise ConfigurationError("Last.fm API is already initialized.")
            self._config = create_config(api_key, shared_secret, base_url)
            log.debug(f"Last.fm API initialized for endpoint {self._config.base_url}")
            return self._config

    def get(self) -> ClientConfig:
        """
        Returns the stored configuration.

        Raises:
            ConfigurationError: If ``initialize`` has not been called yet.
        """
        if self._config is None:
            raise ConfigurationError("You need to initialize the Last.fm API first.")
        return self._config


_default_registry = ConfigRegistry()


def initialize_api(
    api_key: str, shared_secret: str, base_url: Optional[str] = None
) -> ClientConfig:
    """Initializes the process-wide configuration. May only be called once."""
    return _default_registry.initialize(api_key, shared_secret, base_url)


def get_api() -> ClientConfig:
    """Returns the process-wide configuration set by ``initialize_api``."""
    return _default_registry.get()


class AppSettings(BaseModel):
    """Settings the command-line application keeps in its INI file."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    api_key: str = ""
    shared_secret: str = Field(default="", repr=False)
    base_url: str = DEFAULT_BASE_URL
    session_key: str = Field(default="", repr=False)
    username: str = ""

    def to_client_config(self) -> ClientConfig:
        """Builds the ClientConfig, raising ConfigurationError if incomplete."""
        return create_config(self.api_key, self.shared_secret, self.base_url)

    def require_session_key(self) -> str:
        if not self.session_key:
            raise ConfigurationError(
                "No session key stored. Run 'lastfm-client session <TOKEN>' first."
            )
        return self.session_key

    @classmethod
    def get_ini_keys(cls) -> list[str]:
        """Returns the keys expected in the INI file, in declaration order."""
        return list(cls.model_fields)
