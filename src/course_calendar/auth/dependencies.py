"""FastAPI dependencies for calendar credentials.

Calendar routes act on behalf of the user with the Google access token sent
as a bearer credential. Issuing, storing, and refreshing that token is the
job of the external authentication service.

## Usage

```python
from fastapi import Depends
from course_calendar.auth import require_access_token

@router.get("/schedule")
async def get_schedule(access_token: str = Depends(require_access_token)):
    ...
```
"""

from __future__ import annotations

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from course_calendar.errors import MissingCredentialError

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False, description="Google access token")


async def get_access_token_optional(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    """Extract the bearer token from the Authorization header, or None."""
    if credentials is None:
        return None
    token = credentials.credentials.strip()
    return token or None


async def require_access_token(
    token: str | None = Depends(get_access_token_optional),
) -> str:
    """Get the bearer token, raising MissingCredentialError if absent.

    The API layer renders the error as a 401 response.
    """
    if token is None:
        logger.warning("Calendar request without bearer token")
        raise MissingCredentialError()
    return token
