"""
Async client for the Last.fm REST API with request signing and typed responses.
"""

__version__ = "0.1.0"

from lastfm_client.api.client import LastFmClient  # noqa: E402
from lastfm_client.exceptions import (  # noqa: E402
    ConfigurationError,
    DecodeError,
    LastFmApiError,
    LastFmClientError,
    TransportError,
)
from lastfm_client.models.config import (  # noqa: E402
    ClientConfig,
    ConfigRegistry,
    get_api,
    initialize_api,
)

__all__ = [
    "ClientConfig",
    "ConfigRegistry",
    "ConfigurationError",
    "DecodeError",
    "LastFmApiError",
    "LastFmClient",
    "LastFmClientError",
    "TransportError",
    "__version__",
    "get_api",
    "initialize_api",
]
