"""User entity.

Users are created out of band (credential issuance is handled elsewhere);
this service only reads them to attribute comments to their authors.
"""

from datetime import datetime
from typing import Optional
from urllib.parse import quote

from pydantic import Field

from discuss.domain.model.common import DomainModel, utc_now
from discuss.domain.value import UserId, Username

DEFAULT_AVATAR_URL = "https://ui-avatars.com/api/?name={name}&background=random"


class User(DomainModel):
    """User entity."""

    id: UserId
    username: Username
    avatar_url: Optional[str] = None
    email: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def display_avatar(self) -> str:
        """Avatar URL, falling back to a generated initials avatar."""
        if self.avatar_url:
            return self.avatar_url
        return DEFAULT_AVATAR_URL.format(name=quote(self.username.root))
