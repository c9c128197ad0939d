# storefront/core/auth.py
import uuid
from typing import Any

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from storefront.core.config import Settings
from storefront.database import get_session
from storefront.models.user import User
from storefront.repositories.user_repo import UserRepository

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so we can support "guest" mode (unauthenticated).
bearer_scheme = HTTPBearer(auto_error=False)

user_repo = UserRepository()


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Decode and verify an access token (JWT) issued by the auth service.

    Verification:
      - signature (JWT_ALGORITHM using JWT_SECRET)
      - expiration time (exp), when present
      - audience is NOT verified

    Args:
        token: raw JWT from the Authorization header.
        settings: application settings holding the secret.

    Returns:
        Decoded JWT claims.

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_aud": False},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def _default_name_from_email(email: str) -> str:
    """
    Derive a default display name from email.
    """
    if "@" in email:
        return email.split("@", 1)[0]
    return email


def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User | None:
    """
    Resolve the current user from a bearer JWT.

    Flow:
      1. If no Authorization header => guest => return None.
      2. Decode JWT => extract 'sub' (user id) and 'email'.
      3. Convert 'sub' to UUID to match User.id type.
      4. Find user row; auto-provision a minimal one if missing.

    Returns:
        User instance if authenticated, else None for guests.

    Raises:
        HTTPException(401): if token is malformed or missing required claims.
    """
    if credentials is None:
        return None  # guest mode

    payload = decode_access_token(credentials.credentials, request.app.state.settings)
    sub = payload.get("sub")
    email = payload.get("email")

    if not sub or not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing sub/email",
        )

    try:
        sub_uuid = uuid.UUID(str(sub))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid sub in token",
        )

    user = user_repo.get_by_id(session, sub_uuid)

    if user is None:
        user = user_repo.create(
            session,
            User(
                id=sub_uuid,
                email=email,
                name=_default_name_from_email(email),
            ),
        )

    return user


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """
    Enforce authentication.

    Guests (missing JWT) are rejected with 401.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user
