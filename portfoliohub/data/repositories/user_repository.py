"""
User repository for PortfolioHub.

Reads user documents and builds the profiles matching consumes.
"""

from typing import Optional

from bson import ObjectId

from portfoliohub.data.database import USERS_COLLECTION
from portfoliohub.data.models.profile import UserProfile
from portfoliohub.data.models.user import User
from portfoliohub.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for user document operations."""

    @property
    def collection_name(self) -> str:
        return USERS_COLLECTION

    @property
    def model_class(self) -> type[User]:
        return User

    def get_profile(self, user_id: str | ObjectId) -> Optional[UserProfile]:
        """Get the current skills and interests of a user."""
        user = self.get_by_id(user_id)
        if user is None:
            logger.debug(f"User not found: {user_id}")
            return None
        return user.to_profile()

    async def get_profile_async(self, user_id: str | ObjectId) -> Optional[UserProfile]:
        """Get the current skills and interests of a user asynchronously."""
        user = await self.get_by_id_async(user_id)
        if user is None:
            logger.debug(f"User not found: {user_id}")
            return None
        return user.to_profile()


# Singleton instance
_user_repository: Optional[UserRepository] = None


def get_user_repository() -> UserRepository:
    """Get the user repository singleton instance."""
    global _user_repository
    if _user_repository is None:
        _user_repository = UserRepository()
    return _user_repository
