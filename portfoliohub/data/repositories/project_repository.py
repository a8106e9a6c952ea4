"""
Project repository for PortfolioHub.

Provides the candidate projects for matching: projects currently
accepting volunteers, in creation order.
"""

from typing import Any, Optional

from portfoliohub.data.database import PROJECTS_COLLECTION
from portfoliohub.data.models.profile import ProjectProfile
from portfoliohub.data.models.project import Project
from portfoliohub.utils.constants import OPEN_PROJECT_STATUSES
from portfoliohub.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class ProjectRepository(BaseRepository[Project]):
    """Repository for project document operations."""

    @property
    def collection_name(self) -> str:
        return PROJECTS_COLLECTION

    @property
    def model_class(self) -> type[Project]:
        return Project

    @staticmethod
    def _open_query() -> dict[str, Any]:
        return {"status": {"$in": [s.value for s in OPEN_PROJECT_STATUSES]}}

    # -------------------------------------------------------------------------
    # Candidate Queries
    # -------------------------------------------------------------------------

    def find_open_projects(self, limit: int = 1000) -> list[Project]:
        """Get projects accepting volunteers, oldest first."""
        return self.find(self._open_query(), limit=limit, sort_by="created_at", sort_order=1)

    async def find_open_projects_async(self, limit: int = 1000) -> list[Project]:
        """Get projects accepting volunteers asynchronously, oldest first."""
        return await self.find_async(
            self._open_query(), limit=limit, sort_by="created_at", sort_order=1
        )

    def get_candidate_profiles(self, limit: int = 1000) -> list[ProjectProfile]:
        """Get matching profiles for all open projects."""
        projects = self.find_open_projects(limit=limit)
        logger.debug(f"Loaded {len(projects)} open projects")
        return [p.to_profile() for p in projects]

    async def get_candidate_profiles_async(self, limit: int = 1000) -> list[ProjectProfile]:
        """Get matching profiles for all open projects asynchronously."""
        projects = await self.find_open_projects_async(limit=limit)
        logger.debug(f"Loaded {len(projects)} open projects")
        return [p.to_profile() for p in projects]


# Singleton instance
_project_repository: Optional[ProjectRepository] = None


def get_project_repository() -> ProjectRepository:
    """Get the project repository singleton instance."""
    global _project_repository
    if _project_repository is None:
        _project_repository = ProjectRepository()
    return _project_repository
