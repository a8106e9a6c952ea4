"""
Tests for Pydantic data models in portfoliohub.data.models.
"""

import pytest
from bson import ObjectId
from pydantic import ValidationError

from portfoliohub.data.models import (
    Project,
    ProjectProfile,
    ProjectSkill,
    User,
    UserProfile,
    normalize_identifiers,
)
from portfoliohub.data.models.base import BaseDocument, to_object_id
from portfoliohub.utils.constants import ProjectStatus, UserRole


# ── normalize_identifiers ────────────────────────────────────────────────────


class TestNormalizeIdentifiers:
    def test_duplicates_collapse(self):
        assert normalize_identifiers(["a", "b", "a"]) == frozenset({"a", "b"})

    def test_strips_whitespace(self):
        assert normalize_identifiers([" a ", "a"]) == frozenset({"a"})

    def test_none_is_empty(self):
        assert normalize_identifiers(None) == frozenset()

    def test_rejects_bare_string(self):
        with pytest.raises(ValueError):
            normalize_identifiers("python")

    def test_rejects_non_string_identifier(self):
        with pytest.raises(ValueError):
            normalize_identifiers(["a", 3])

    def test_rejects_blank_identifier(self):
        with pytest.raises(ValueError):
            normalize_identifiers(["a", "   "])

    def test_rejects_non_iterable(self):
        with pytest.raises(ValueError):
            normalize_identifiers(42)


# ── UserProfile / ProjectProfile ─────────────────────────────────────────────


class TestUserProfile:
    def test_set_semantics(self):
        profile = UserProfile(user_id="u1", skill_ids=["a", "a", "b"], interest_category_ids=("x",))
        assert profile.skill_ids == frozenset({"a", "b"})
        assert profile.interest_category_ids == frozenset({"x"})

    def test_defaults_empty(self):
        profile = UserProfile(user_id="u1")
        assert profile.skill_ids == frozenset()
        assert profile.interest_category_ids == frozenset()

    def test_malformed_identifiers_rejected(self):
        with pytest.raises(ValidationError):
            UserProfile(user_id="u1", skill_ids=["a", ""])

    def test_requires_user_id(self):
        with pytest.raises(ValidationError):
            UserProfile(user_id="")

    def test_frozen(self):
        profile = UserProfile(user_id="u1")
        with pytest.raises(ValidationError):
            profile.user_id = "u2"


class TestProjectProfile:
    def test_mandatory_must_be_required(self):
        with pytest.raises(ValidationError):
            ProjectProfile(
                project_id="p1",
                required_skill_ids=["a"],
                mandatory_skill_ids=["a", "b"],
            )

    def test_mandatory_subset_accepted(self):
        profile = ProjectProfile(
            project_id="p1",
            required_skill_ids=["a", "b"],
            mandatory_skill_ids=["b"],
        )
        assert profile.mandatory_skill_ids == frozenset({"b"})

    def test_status_coerced(self):
        profile = ProjectProfile(project_id="p1", status="completed")
        assert profile.status == ProjectStatus.COMPLETED
        assert profile.is_open is False

    def test_active_is_open(self):
        assert ProjectProfile(project_id="p1").is_open is True


# ── Stored documents ─────────────────────────────────────────────────────────


class TestUser:
    def test_identifiers_normalized(self, sample_user):
        assert sample_user.skill_ids == ["nodejs", "react", "typescript"]

    def test_role_stored_as_value(self, sample_user):
        assert sample_user.role == UserRole.VOLUNTEER.value

    def test_to_profile(self, sample_user):
        profile = sample_user.to_profile()
        assert profile.user_id == str(sample_user.id)
        assert profile.skill_ids == frozenset({"nodejs", "react", "typescript"})
        assert profile.interest_category_ids == frozenset({"education", "health"})

    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            User(name="No Mail", email="not-an-email")

    def test_model_dump_mongo_aliases_id(self, sample_user):
        data = sample_user.model_dump_mongo()
        assert data["_id"] == sample_user.id
        assert "id" not in data


class TestProject:
    def test_skill_properties(self, sample_project):
        assert sample_project.required_skill_ids == ["react", "nodejs", "postgresql"]
        assert sample_project.mandatory_skill_ids == ["react", "nodejs"]

    def test_is_open(self, sample_project):
        assert sample_project.is_open is True

    def test_draft_not_open(self):
        assert Project(name="Idea").is_open is False

    def test_to_profile(self, sample_project):
        profile = sample_project.to_profile()
        assert profile.project_id == str(sample_project.id)
        assert profile.name == sample_project.name
        assert profile.required_skill_ids == frozenset({"react", "nodejs", "postgresql"})
        assert profile.mandatory_skill_ids == frozenset({"react", "nodejs"})
        assert profile.category_ids == frozenset({"education"})
        assert profile.status == ProjectStatus.ACTIVE

    def test_from_mongo_document(self):
        object_id = ObjectId()
        project = Project.model_validate(
            {
                "_id": object_id,
                "name": "Clinic Scheduler",
                "status": "active",
                "skills": [{"skill_id": "python", "is_mandatory": True}],
                "category_ids": ["health", "health"],
            }
        )
        assert project.id == object_id
        assert project.category_ids == ["health"]
        assert project.to_profile().mandatory_skill_ids == frozenset({"python"})

    def test_blank_skill_rejected(self):
        with pytest.raises(ValidationError):
            ProjectSkill(skill_id="")


class TestBaseDocument:
    def test_document_id_empty_when_unsaved(self):
        assert BaseDocument().document_id == ""

    def test_timestamps_are_utc(self):
        document = BaseDocument()
        assert document.created_at.tzinfo is not None
        assert document.created_at.utcoffset().total_seconds() == 0

    def test_touch_moves_updated_at(self):
        document = BaseDocument()
        before = document.updated_at
        document.touch()
        assert document.updated_at >= before

    def test_id_from_hex_string(self):
        object_id = ObjectId()
        document = BaseDocument.model_validate({"_id": str(object_id)})
        assert document.id == object_id
        assert document.document_id == str(object_id)

    def test_id_serialized_as_string_in_json(self):
        object_id = ObjectId()
        assert BaseDocument(id=object_id).model_dump(mode="json")["id"] == str(object_id)

    def test_invalid_id_rejected(self):
        with pytest.raises(ValidationError):
            BaseDocument.model_validate({"_id": "not-an-id"})

    def test_to_object_id(self):
        object_id = ObjectId()
        assert to_object_id(str(object_id)) == object_id
        with pytest.raises(ValueError):
            to_object_id(None)
