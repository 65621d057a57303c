"""Authentication helpers for calendar access.

The service does not authenticate users itself. It consumes a Google access
token supplied as a bearer credential and can produce the consent URL the
external authentication service sends users to.

## Scopes

- calendar: Read and write calendar events
- userinfo.email: To identify the user
- userinfo.profile: For display name and picture

Consent is requested with offline access and a forced consent prompt so a
refresh token is always issued.
"""

from course_calendar.auth.dependencies import (
    get_access_token_optional,
    require_access_token,
)
from course_calendar.auth.google import GoogleOAuth

__all__ = [
    "GoogleOAuth",
    "get_access_token_optional",
    "require_access_token",
]
