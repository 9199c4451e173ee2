"""
models/user.py
--------------
Domain model for application users.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID


@dataclass
class User:
    """
    Represents an account.

    Attributes:
        id: Server-generated UUID (None for new records).
        first_name: Given name.
        last_name: Family name.
        email_address: Login address, unique across users.
        hashed_password: Credential hash; never part of repr or public output.
        active: Whether the account is activated.
        created_at: Set by the database on insert.
        updated_at: Refreshed by the database on every update.
    """
    first_name: str
    last_name: str
    email_address: str
    hashed_password: str = field(default="", repr=False)
    active: bool = False
    id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_public(self) -> dict:
        """Return the fields that may leave the service."""
        return {
            "user_uuid": self.id,
            "active": self.active,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email_address": self.email_address,
        }

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} <{self.email_address}>"
