"""
Database repositories for PortfolioHub data access.

Implements the repository pattern for the collections matching reads.
"""

# Base repository
from .base import BaseRepository

# Entity repositories
from .user_repository import UserRepository, get_user_repository
from .project_repository import ProjectRepository, get_project_repository

__all__ = [
    # Base
    "BaseRepository",
    # User
    "UserRepository",
    "get_user_repository",
    # Project
    "ProjectRepository",
    "get_project_repository",
]
