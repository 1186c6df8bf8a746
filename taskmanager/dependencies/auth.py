from typing import Optional
from fastapi import Depends, Request

from ..errors import AuthError
from ..services.session import Authenticator, TokenData


def get_authenticator(request: Request) -> Authenticator:
    return request.app.state.authenticator


def _bearer_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


async def get_current_user(
    request: Request,
    authenticator: Authenticator = Depends(get_authenticator),
) -> TokenData:
    """
    Verify the bearer token in the Authorization header.

    Raises:
        AuthError: 401 if the token is missing, 403 if it is invalid or expired
    """
    token = _bearer_token(request)
    if not token:
        raise AuthError("Access token required", 401)
    return authenticator.verify(token)


async def get_owner_id(request: Request) -> Optional[str]:
    """
    Owner scope for task routes.

    With authentication disabled every task is visible and the scope is None.
    """
    if not request.app.state.settings.auth_enabled:
        return None
    user = await get_current_user(request, get_authenticator(request))
    return user.user_id
