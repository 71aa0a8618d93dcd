"""Authentication service for JWT and password handling."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from email_validator import EmailNotValidError, validate_email
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import Settings
from src.errors import ConflictError, InputValidationError, UnauthenticatedError
from src.models.user import User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 5


@dataclass(frozen=True)
class AuthState:
    """Outcome of inspecting a request's bearer token."""

    is_auth: bool = False
    user_id: int | None = None


@lru_cache
def get_pwd_context(rounds: int) -> CryptContext:
    """Password hashing context for the given bcrypt cost."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    # Verification reads the cost from the hash itself
    return get_pwd_context(12).verify(plain_password, hashed_password)


def get_password_hash(password: str, rounds: int = 12) -> str:
    """Hash a password."""
    return get_pwd_context(rounds).hash(password)


def create_access_token(
    user_id: int, email: str, settings: Settings, expires_delta: timedelta | None = None
) -> str:
    """Create a JWT access token."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expiration_minutes)
    expire = datetime.now(UTC) + expires_delta
    to_encode = {
        "sub": str(user_id),
        "userId": str(user_id),
        "email": email,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def resolve_auth_header(authorization: str | None, settings: Settings) -> AuthState:
    """Turn an ``Authorization`` header into an auth state; never raises."""
    if not authorization:
        return AuthState()

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return AuthState()

    payload = decode_access_token(token.strip(), settings)
    if payload is None:
        return AuthState()

    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        return AuthState()

    return AuthState(is_auth=True, user_id=user_id)


def validate_signup(email: str, password: str) -> list[dict[str, str]]:
    """Collect field errors for a signup request."""
    errors = []
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        errors.append({"message": "Invalid email."})

    if not password or len(password) < MIN_PASSWORD_LENGTH:
        errors.append({"message": "Password too short."})
    return errors


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def create_user(db: Session, email: str, name: str, password: str, rounds: int = 12) -> User:
    """Validate and create a new user."""
    errors = validate_signup(email, password)
    if errors:
        raise InputValidationError(errors)

    if get_user_by_email(db, email):
        raise ConflictError("User exists already.")

    user = User(email=email, name=name, password_hash=get_password_hash(password, rounds))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        # A concurrent signup won the race for the unique email index
        if "email" in str(e.orig).lower():
            raise ConflictError("User exists already.") from None
        raise
    db.refresh(user)
    logger.info(f"Created user {user.id} ({user.email})")
    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user:
        logger.warning(f"Login failed: unknown email {email}")
        raise UnauthenticatedError("User not found.")
    if not verify_password(password, user.password_hash):
        logger.warning(f"Login failed: incorrect password for user {user.id}")
        raise UnauthenticatedError("Incorrect password.")
    return user


def login(db: Session, email: str, password: str, settings: Settings) -> tuple[str, User]:
    """Authenticate and issue a signed token."""
    user = authenticate_user(db, email, password)
    token = create_access_token(user.id, user.email, settings)
    logger.info(f"User {user.id} logged in")
    return token, user
