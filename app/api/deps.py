import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError as PydanticValidationError

from app.core.security import InvalidTokenError, decode_access_token
from app.schemas.auth import TokenPayload

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_producer(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> TokenPayload:
    """
    Stateless bearer-token check. The store is not consulted: the decoded
    payload becomes the request's identity.
    """
    if not credentials or not credentials.credentials:
        raise _unauthorized("Access denied. Token not provided.")

    try:
        payload = decode_access_token(credentials.credentials)
        return TokenPayload(**payload)
    except (InvalidTokenError, PydanticValidationError, TypeError) as e:
        logger.info(f"Rejected bearer token: {e}")
        raise _unauthorized("Access denied. Invalid token.")
