"""
Matching profile snapshots.

UserProfile and ProjectProfile are immutable views of a user and a
candidate project built from current database state for one matching
request. Identifier sets have set semantics: duplicates collapse.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from portfoliohub.utils.constants import OPEN_PROJECT_STATUSES, ProjectStatus


def normalize_identifiers(values: Any) -> frozenset[str]:
    """
    Normalize a collection of identifiers into a frozenset.

    Args:
        values: Any iterable of string identifiers

    Returns:
        Frozenset of stripped identifiers

    Raises:
        ValueError: If the collection or any identifier is malformed
    """
    if values is None:
        return frozenset()
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise ValueError(
            f"Expected a collection of identifiers, got {type(values).__name__}"
        )

    identifiers = set()
    for value in values:
        if not isinstance(value, str):
            raise ValueError(
                f"Identifier must be a string, got {type(value).__name__}: {value!r}"
            )
        stripped = value.strip()
        if not stripped:
            raise ValueError("Identifier must be a non-empty string")
        identifiers.add(stripped)
    return frozenset(identifiers)


class ProfileSnapshot(BaseModel):
    """Base for read-only profile snapshots."""

    model_config = ConfigDict(frozen=True)


class UserProfile(ProfileSnapshot):
    """A user's skills and declared interest categories."""

    user_id: str = Field(..., min_length=1)
    skill_ids: frozenset[str] = Field(default_factory=frozenset)
    interest_category_ids: frozenset[str] = Field(default_factory=frozenset)

    @field_validator("skill_ids", "interest_category_ids", mode="before")
    @classmethod
    def validate_identifiers(cls, v: Any) -> frozenset[str]:
        return normalize_identifiers(v)


class ProjectProfile(ProfileSnapshot):
    """A candidate project's required skills and categories."""

    project_id: str = Field(..., min_length=1)
    name: str = ""
    required_skill_ids: frozenset[str] = Field(default_factory=frozenset)
    mandatory_skill_ids: frozenset[str] = Field(default_factory=frozenset)
    category_ids: frozenset[str] = Field(default_factory=frozenset)
    status: ProjectStatus = ProjectStatus.ACTIVE

    @field_validator(
        "required_skill_ids", "mandatory_skill_ids", "category_ids", mode="before"
    )
    @classmethod
    def validate_identifiers(cls, v: Any) -> frozenset[str]:
        return normalize_identifiers(v)

    @model_validator(mode="after")
    def validate_mandatory_subset(self) -> "ProjectProfile":
        """Mandatory skills must be a subset of the required skills."""
        extra = self.mandatory_skill_ids - self.required_skill_ids
        if extra:
            raise ValueError(
                f"Mandatory skills not listed as required for project "
                f"{self.project_id}: {sorted(extra)}"
            )
        return self

    @property
    def is_open(self) -> bool:
        """Whether the project is currently accepting volunteers."""
        return self.status in OPEN_PROJECT_STATUSES
