"""FastAPI dependencies guarding protected routes."""

import logging

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette import status

from ascending.auth.tokens import decode_access_token
from ascending.config import Settings, get_settings
from ascending.errors import AuthError
from ascending.schemas.auth import TokenClaims

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> TokenClaims:
    """Return the identity carried by the request's bearer token.

    401 when no token is presented, 403 when it fails verification.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return decode_access_token(credentials.credentials, settings)
    except AuthError as e:
        logger.info("Rejected bearer token: %s", e.message)
        raise HTTPException(status_code=e.status_code, detail=e.message) from None
