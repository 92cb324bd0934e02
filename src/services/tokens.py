"""JWT issuing and verification."""

from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt

from src.errors import ConfigurationError, TokenExpiredError, TokenInvalidError
from src.models.enums import Role
from src.schemas.auth import TokenPayload

DEFAULT_EXPIRATION_MINUTES = 7 * 24 * 60


class TokenService:
    """Issues and verifies stateless bearer tokens carrying user id and role.

    Tokens cannot be revoked before they expire.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expiration_minutes: int = DEFAULT_EXPIRATION_MINUTES,
    ):
        if not secret:
            raise ConfigurationError("JWT secret is not configured")
        self.secret = secret
        self.algorithm = algorithm
        self.expiration = timedelta(minutes=expiration_minutes)

    def generate_token(
        self, user_id: int, role: Role, expires_delta: timedelta | None = None
    ) -> str:
        """Create a signed access token for the given identity."""
        now = datetime.now(UTC)
        expire = now + (expires_delta if expires_delta is not None else self.expiration)
        to_encode = {
            "sub": str(user_id),
            "role": Role(role).value,
            "iat": now,
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify signature and expiry and return the embedded identity.

        Raises:
            TokenExpiredError: the token is past its expiry.
            TokenInvalidError: the token is malformed, badly signed or has bad claims.
        """
        try:
            payload = jwt.decode(
                token, self.secret, algorithms=[self.algorithm], options={"require_exp": True}
            )
        except ExpiredSignatureError:
            raise TokenExpiredError() from None
        except JWTError:
            raise TokenInvalidError() from None

        subject = payload.get("sub")
        role = payload.get("role")
        if subject is None or role is None:
            raise TokenInvalidError()
        try:
            return TokenPayload(user_id=int(subject), role=Role(role))
        except ValueError:
            raise TokenInvalidError() from None
