"""
Pydantic data models and schemas for PortfolioHub.

This module provides the stored documents read by matching and the
profile snapshots the matching engine consumes.
"""

# Base models
from .base import BaseDocument, EmbeddedDocument, PyObjectId, to_object_id, utc_now

# Matching snapshots
from .profile import ProjectProfile, UserProfile, normalize_identifiers

# User models
from .user import User

# Project models
from .project import Project, ProjectSkill

__all__ = [
    # Base
    "BaseDocument",
    "EmbeddedDocument",
    "PyObjectId",
    "to_object_id",
    "utc_now",
    # Profiles
    "ProjectProfile",
    "UserProfile",
    "normalize_identifiers",
    # User
    "User",
    # Project
    "Project",
    "ProjectSkill",
]
