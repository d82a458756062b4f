"""
Handles the Last.fm web authentication flow: sending the user to approve the
application, then exchanging the approved token for a session key.
"""

import logging
from typing import TYPE_CHECKING, Optional
from urllib.parse import urlencode

from lastfm_client.models.requests import GetSessionRequest
from lastfm_client.models.responses import GetSessionResponse

from .operations import GET_SESSION

if TYPE_CHECKING:
    from .client import LastFmClient

log = logging.getLogger(__name__)

AUTHORIZE_URL = "https://www.last.fm/api/auth/"


class LastFmAuthenticator:
    """
    Manages the authentication flow for the Last.fm API client.
    """

    def __init__(self, api_client: "LastFmClient"):
        """
        Initializes the authenticator.

        Args:
            api_client: A reference to the main LastFmClient instance.
        """
        self._api_client = api_client

    def authorize_url(
        self, token: Optional[str] = None, callback_url: Optional[str] = None
    ) -> str:
        """
        Builds the page a user visits to grant this application access.

        Args:
            token: A token from auth.getToken, for desktop applications.
            callback_url: Where Last.fm redirects web applications after approval.

        Returns:
            The authorization URL.
        """
        params = {"api_key": self._api_client.config.api_key}
        if token is not None:
            params["token"] = token
        if callback_url is not None:
            params["cb"] = callback_url
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    async def get_session(self, token: str) -> GetSessionResponse:
        """
        Exchanges an approved auth token for a session key.

        Args:
            token: The token the user approved on the authorization page.

        Returns:
            The session, holding the key used to sign write operations.
        """
        request = GetSessionRequest(token=token)
        response = await self._api_client.api_call(GET_SESSION, request.to_params())
        log.info(f"Obtained a session for user: {response.session.name}")
        return response
