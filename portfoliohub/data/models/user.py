"""
User data models for PortfolioHub.

Defines the stored user document with the skills and interests
that matching reads.
"""

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from portfoliohub.utils.constants import UserRole

from .base import BaseDocument
from .profile import UserProfile, normalize_identifiers


class User(BaseDocument):
    """
    Platform user document.

    Skills and interests are stored as identifier lists referencing the
    skills and categories collections.
    """

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    role: UserRole = UserRole.VOLUNTEER
    bio: Optional[str] = None
    is_active: bool = True

    skill_ids: list[str] = Field(default_factory=list)
    interest_category_ids: list[str] = Field(default_factory=list)

    @field_validator("skill_ids", "interest_category_ids")
    @classmethod
    def dedupe_identifiers(cls, v: list[str]) -> list[str]:
        """Store identifiers once each, in a stable order."""
        return sorted(normalize_identifiers(v))

    def to_profile(self) -> UserProfile:
        """Build the matching snapshot for this user."""
        return UserProfile(
            user_id=self.document_id,
            skill_ids=self.skill_ids,
            interest_category_ids=self.interest_category_ids,
        )
