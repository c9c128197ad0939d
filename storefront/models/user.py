# storefront/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Mirror of an authenticated identity.

    Identity:
      - id: MUST match the "sub" claim of the bearer token

    Guests are represented by the absence of a token; they never get a row.
    Passwords and token issuance live in the auth service, not here.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        primary_key=True,
        index=True,
        description="Matches the JWT sub claim",
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Email from the JWT email claim",
    )

    name: str = Field(
        max_length=100,
        description="Display name; first part of email by default",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
