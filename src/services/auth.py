"""Authentication service for registration, login and password handling."""

import logging

from email_validator import EmailNotValidError, validate_email
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.errors import ConflictError, InvalidError, NotFoundError, UnauthorizedError
from src.models.enums import NAME_MAX_LENGTH, NAME_MIN_LENGTH, Role
from src.models.user import User
from src.schemas.auth import AuthResponse, UserResponse
from src.services.tokens import TokenService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def build_password_context(rounds: int = 12) -> CryptContext:
    """Password hashing context (bcrypt)."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively, so they are stored lower-cased."""
    return email.strip().lower()


class AuthService:
    """Registers users and exchanges credentials for access tokens."""

    def __init__(self, db: Session, tokens: TokenService, pwd_context: CryptContext):
        self.db = db
        self.tokens = tokens
        self.pwd_context = pwd_context

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return self.pwd_context.verify(plain_password, hashed_password)

    def get_password_hash(self, password: str) -> str:
        """Hash a password."""
        return self.pwd_context.hash(password)

    def get_user_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def get_user(self, user_id: int) -> UserResponse:
        """Get the public profile of a user."""
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise NotFoundError("User not found")
        return UserResponse.model_validate(user)

    def register(self, name: str, email: str, password: str) -> UserResponse:
        """Create a new account with the USER role."""
        name = (name or "").strip()
        if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
            raise InvalidError(
                f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
            )
        email = normalize_email(email or "")
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            raise InvalidError("Please provide a valid email address") from None
        if not password:
            raise InvalidError("Password is required")

        if self.get_user_by_email(email):
            raise ConflictError("Email already registered")

        user = User(
            name=name,
            email=email,
            password_hash=self.get_password_hash(password),
            role=Role.USER.value,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            logger.warning("Duplicate email rejected by the database during registration")
            raise ConflictError("Email already registered") from None
        self.db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return UserResponse.model_validate(user)

    def login(self, email: str, password: str) -> AuthResponse:
        """Authenticate a user by email and password and issue a token."""
        user = self.get_user_by_email(email or "")
        if user is None:
            # Spend the same hashing time as a real check
            self.pwd_context.dummy_verify()
            logger.info("Failed login attempt")
            raise UnauthorizedError(INVALID_CREDENTIALS)
        if not self.verify_password(password, user.password_hash):
            logger.info("Failed login attempt")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        access_token = self.tokens.generate_token(user.id, Role(user.role))
        return AuthResponse(access_token=access_token, user=UserResponse.model_validate(user))
