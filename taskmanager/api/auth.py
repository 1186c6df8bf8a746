from fastapi import APIRouter, Depends, status

from ..dependencies.auth import get_authenticator
from ..schemas import AuthOut, LoginRequest, RegisterRequest, UserOut, envelope
from ..services.session import AuthResult, Authenticator

router = APIRouter()


def _auth_out(result: AuthResult) -> AuthOut:
    return AuthOut(user=UserOut.model_validate(result.user), token=result.token)


@router.post("/auth/register")
def register(payload: RegisterRequest, authenticator: Authenticator = Depends(get_authenticator)):
    """Register a new user and return a session token."""
    result = authenticator.register(payload.username, payload.email, payload.password)
    return envelope(
        data=_auth_out(result),
        message="User registered successfully",
        status_code=status.HTTP_201_CREATED,
    )


@router.post("/auth/login")
def login(payload: LoginRequest, authenticator: Authenticator = Depends(get_authenticator)):
    result = authenticator.login(payload.email, payload.password)
    return envelope(data=_auth_out(result), message="Login successful")
