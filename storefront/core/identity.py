# storefront/core/identity.py
import secrets
import uuid
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, status

from storefront.core.auth import get_current_user
from storefront.models.cart import MAX_SESSION_ID_LENGTH
from storefront.models.user import User


@dataclass(frozen=True)
class UserIdentity:
    """Cart key for an authenticated caller."""

    user_id: uuid.UUID


@dataclass(frozen=True)
class GuestIdentity:
    """
    Cart key for an anonymous caller.

    `issued` is True when the token was generated for this request and
    must be handed back to the client.
    """

    session_id: str
    issued: bool = False


CartIdentity = UserIdentity | GuestIdentity


def generate_session_id() -> str:
    """
    New guest session token.

    Tokens scope a cart without any other credential, so they come from
    the OS CSPRNG and are long enough to be unguessable.
    """
    return secrets.token_urlsafe(32)


def read_session_header(request: Request) -> str | None:
    """
    Return the guest session token sent by the client, if any.
    Blank values are treated as absent; tokens longer than the
    carts.session_id column are rejected with 400.
    """
    header = request.app.state.settings.SESSION_HEADER
    value = request.headers.get(header)
    if value is None:
        return None
    value = value.strip()
    if len(value) > MAX_SESSION_ID_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid session ID",
        )
    return value or None


def resolve_cart_identity(
    request: Request,
    user: User | None = Depends(get_current_user),
) -> CartIdentity:
    """
    Decide whose cart this request targets.

    Flow:
      1. Authenticated => UserIdentity (guest header ignored).
      2. Guest with session header => GuestIdentity(token).
      3. Guest without header => GuestIdentity(new token, issued=True).
    """
    if user is not None:
        return UserIdentity(user_id=user.id)

    session_id = read_session_header(request)
    if session_id is None:
        return GuestIdentity(session_id=generate_session_id(), issued=True)
    return GuestIdentity(session_id=session_id)


def session_id_for_response(identity: CartIdentity) -> str | None:
    """Token to echo back to the client; None for authenticated callers."""
    if isinstance(identity, GuestIdentity):
        return identity.session_id
    return None
