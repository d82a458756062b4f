"""
Assembles signed requests for the Last.fm API.
"""

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional
from urllib.parse import urlencode

from lastfm_client.exceptions import ConfigurationError
from lastfm_client.models.config import ClientConfig
from lastfm_client.models.params import ParameterSet

from .operations import HttpMethod, Operation
from .signing import RESERVED_KEYS, sign

log = logging.getLogger(__name__)

RESPONSE_FORMAT = "json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Parameters masked when a request is logged.
_SENSITIVE_KEYS = frozenset({"sk", "token", "api_sig"})


@dataclass(frozen=True)
class RequestDescription:
    """
    A fully rendered request, ready to hand to a transport.

    GET requests carry every parameter in ``url``; POST requests carry them in
    ``body`` and ``url`` is the unmodified base URL.
    """

    method: HttpMethod
    url: str
    params: ParameterSet = field(repr=False)
    body: Optional[str] = None

    @property
    def headers(self) -> dict[str, str]:
        if self.method is HttpMethod.POST:
            return {"Content-Type": FORM_CONTENT_TYPE}
        return {}

    @property
    def operation_name(self) -> str:
        return self.params["method"]


def sign_params(params: Mapping[str, str], shared_secret: str) -> ParameterSet:
    """
    Returns a copy of ``params`` with ``api_sig`` and ``format`` appended.

    The signature is computed first, so neither reserved key takes part in it.
    """
    signed = dict(params)
    signed["api_sig"] = sign(params, shared_secret)
    signed["format"] = RESPONSE_FORMAT
    return signed


def _masked(params: Mapping[str, str]) -> dict[str, str]:
    return {k: ("***" if k in _SENSITIVE_KEYS else v) for k, v in params.items()}


def build_request(
    config: ClientConfig,
    operation: Operation,
    params: Mapping[str, str],
    session_key: Optional[str] = None,
) -> RequestDescription:
    """
    Builds the signed request for an operation.

    Args:
        config: Credentials and endpoint.
        operation: The remote procedure to call.
        params: The operation-specific parameters, already rendered as strings.
        session_key: The user's session key, required by write operations.

    Returns:
        The rendered request.

    Raises:
        ConfigurationError: If the operation needs a session key and none was given.
        ValueError: If ``params`` tries to set a reserved key.
    """
    reserved = RESERVED_KEYS.intersection(params)
    if reserved:
        raise ValueError(
            f"Reserved parameters cannot be supplied: {', '.join(sorted(reserved))}"
        )

    to_sign = dict(params)
    to_sign["method"] = operation.name
    to_sign["api_key"] = config.api_key

    if operation.requires_session:
        if not session_key:
            raise ConfigurationError(
                f"'{operation.name}' requires a session key. "
                "Obtain one with auth.getSession first."
            )
        to_sign["sk"] = session_key

    signed = sign_params(to_sign, config.shared_secret)
    encoded = urlencode(signed)

    if operation.http_method is HttpMethod.GET:
        separator = "&" if "?" in config.base_url else "?"
        request = RequestDescription(
            method=HttpMethod.GET,
            url=f"{config.base_url}{separator}{encoded}",
            params=signed,
        )
    else:
        request = RequestDescription(
            method=HttpMethod.POST,
            url=config.base_url,
            params=signed,
            body=encoded,
        )

    log.debug(
        f"Built {request.method.value} request for {operation.name}: "
        f"{_masked(signed)}"
    )
    return request
