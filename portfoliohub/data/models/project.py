"""
Project data models for PortfolioHub.

Defines the stored project document, including required skills
(optionally mandatory) and categories.
"""

from typing import Optional

from pydantic import Field, field_validator

from portfoliohub.utils.constants import OPEN_PROJECT_STATUSES, ProjectStatus

from .base import BaseDocument, EmbeddedDocument
from .profile import ProjectProfile, normalize_identifiers


class ProjectSkill(EmbeddedDocument):
    """A skill required by a project."""

    skill_id: str = Field(..., min_length=1)
    is_mandatory: bool = False  # Non-negotiable for volunteer eligibility

    @field_validator("skill_id", mode="before")
    @classmethod
    def strip_skill_id(cls, v):
        return v.strip() if isinstance(v, str) else v


class Project(BaseDocument):
    """
    Project document.

    Volunteers are matched against `skills` and `category_ids`.
    """

    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    status: ProjectStatus = ProjectStatus.DRAFT
    creator_id: Optional[str] = None

    skills: list[ProjectSkill] = Field(default_factory=list)
    category_ids: list[str] = Field(default_factory=list)

    @field_validator("category_ids")
    @classmethod
    def dedupe_categories(cls, v: list[str]) -> list[str]:
        return sorted(normalize_identifiers(v))

    @property
    def required_skill_ids(self) -> list[str]:
        """All skill ids the project lists."""
        return [s.skill_id for s in self.skills]

    @property
    def mandatory_skill_ids(self) -> list[str]:
        """Skill ids flagged as mandatory."""
        return [s.skill_id for s in self.skills if s.is_mandatory]

    @property
    def is_open(self) -> bool:
        """Check if project is accepting volunteers."""
        return self.status in OPEN_PROJECT_STATUSES

    def to_profile(self) -> ProjectProfile:
        """Build the matching snapshot for this project."""
        return ProjectProfile(
            project_id=self.document_id,
            name=self.name,
            required_skill_ids=self.required_skill_ids,
            mandatory_skill_ids=self.mandatory_skill_ids,
            category_ids=self.category_ids,
            status=self.status,
        )
