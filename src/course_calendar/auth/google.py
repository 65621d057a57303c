"""Google OAuth consent URL.

The calendar API only ever receives access tokens obtained by the external
authentication service. This module builds the URL that sends a user to
Google's consent screen so that service can obtain them.

## Required Setup

1. Create a project in Google Cloud Console
2. Enable Google Calendar API
3. Create OAuth 2.0 credentials (Web application)
4. Add the authentication service's callback as authorized redirect URI
5. Set GOOGLE_CLIENT_ID (and GOOGLE_CLIENT_SECRET for the token exchange)

## Scopes Used

- https://www.googleapis.com/auth/calendar: Read and write calendar events
- https://www.googleapis.com/auth/userinfo.email: Identify the user
- https://www.googleapis.com/auth/userinfo.profile: Display name and picture
"""

from __future__ import annotations

import logging
from urllib.parse import urlencode

from course_calendar.config import get_settings

logger = logging.getLogger(__name__)

GOOGLE_AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"


class GoogleOAuth:
    """Builder for Google OAuth 2.0 authorization URLs.

    Example:
        ```python
        oauth = GoogleOAuth()
        auth_url = oauth.get_authorization_url()
        # Hand auth_url to the client, which opens it in a browser
        ```
    """

    def __init__(
        self,
        client_id: str | None = None,
        redirect_uri: str | None = None,
        scopes: list[str] | None = None,
    ):
        """Initialize the builder.

        Args:
            client_id: Google OAuth client ID (or from settings)
            redirect_uri: OAuth callback URL (or from settings)
            scopes: OAuth scopes to request (or from settings)
        """
        settings = get_settings()

        self.client_id = client_id or settings.google_client_id
        self.redirect_uri = redirect_uri or settings.google_redirect_uri
        self.scopes = scopes or list(settings.google_calendar_scopes)

        if not self.client_id:
            logger.warning(
                "Google OAuth client ID not configured. Set GOOGLE_CLIENT_ID."
            )

    def get_authorization_url(
        self,
        state: str | None = None,
        access_type: str = "offline",
        prompt: str = "consent",
    ) -> str:
        """Generate the Google OAuth authorization URL.

        Pure construction: no network call and no credential is involved.

        Args:
            state: Optional state parameter for CSRF protection
            access_type: "offline" to get refresh token
            prompt: "consent" to always show consent screen

        Returns:
            URL to redirect the user to
        """
        params = {
            "access_type": access_type,
            "scope": " ".join(self.scopes),
            "prompt": prompt,
            "response_type": "code",
            "client_id": self.client_id or "",
            "redirect_uri": self.redirect_uri,
        }
        if state:
            params["state"] = state

        return f"{GOOGLE_AUTHORIZE_URL}?{urlencode(params)}"

