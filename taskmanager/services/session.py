from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

from jose import JWTError, jwt
from passlib.context import CryptContext

from ..errors import AuthError, ConflictError, ValidationError
from ..models import User
from ..repositories import Repository

logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_TOKEN = "Invalid or expired token"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


@dataclass
class TokenData:
    """Identity embedded in a verified session token."""
    user_id: str
    username: str


@dataclass
class AuthResult:
    user: User
    token: str


class Authenticator:
    """Registers users, checks credentials and issues bearer tokens.

    Tokens are never stored server side, so a token stays valid until it
    expires.
    """

    def __init__(
        self,
        users: Repository[User],
        secret_key: str,
        algorithm: str = "HS256",
        expire_hours: int = 24,
    ):
        self.users = users
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_hours = expire_hours

    def create_access_token(self, user: User, expires_delta: Optional[timedelta] = None) -> str:
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=self.expire_hours))
        to_encode = {"sub": user.id, "username": user.username, "exp": expire}
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def register(
        self,
        username: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> AuthResult:
        """Create an account and log it in.

        Raises:
            ValidationError: If a field is missing
            ConflictError: If the email or the username is already taken
        """
        username = (username or "").strip()
        email = (email or "").strip()
        if not username or not email or not password:
            raise ValidationError("Username, email, and password are required")

        existing = self.users.first(lambda u: u.email == email or u.username == username)
        if existing:
            raise ConflictError("User already exists")

        user = self.users.add(
            User(
                username=username,
                email=email,
                hashed_password=get_password_hash(password),
            )
        )
        logger.info(f"Registered user {user.id}")
        return AuthResult(user=user, token=self.create_access_token(user))

    def login(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        """Check credentials and issue a fresh token.

        Unknown email and wrong password fail with the same message.
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self.users.first(lambda u: u.email == email.strip())
        if not user or not verify_password(password, user.hashed_password):
            logger.warning("Rejected login attempt")
            raise AuthError(INVALID_CREDENTIALS, 401)

        return AuthResult(user=user, token=self.create_access_token(user))

    def verify(self, token: str) -> TokenData:
        """Return the identity inside a token.

        Raises:
            AuthError: If the signature is invalid or the token expired
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.warning(f"Token verification failed: {e}")
            raise AuthError(INVALID_TOKEN, 403)

        user_id = payload.get("sub")
        if not user_id:
            raise AuthError(INVALID_TOKEN, 403)
        return TokenData(user_id=user_id, username=payload.get("username", ""))
