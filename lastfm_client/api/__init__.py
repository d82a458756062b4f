"""
Last.fm API Layer.

This package signs, builds, sends, and validates requests to the Last.fm API.
"""

from .auth import LastFmAuthenticator
from .client import LastFmClient
from .operations import OPERATIONS, HttpMethod, Operation
from .request_builder import RequestDescription, build_request, sign_params
from .signing import sign
from .transport import AiohttpTransport, Transport, TransportResponse
from .validator import validate

__all__ = [
    "OPERATIONS",
    "AiohttpTransport",
    "HttpMethod",
    "LastFmAuthenticator",
    "LastFmClient",
    "Operation",
    "RequestDescription",
    "Transport",
    "TransportResponse",
    "build_request",
    "sign",
    "sign_params",
    "validate",
]
