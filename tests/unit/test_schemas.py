"""Unit tests for acronym schemas."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from acronym_assist.schemas import AcronymCreate, AcronymRecord, AcronymUpdate


class TestAcronymCreate:
    """Tests for create payload validation."""

    def test_defaults(self) -> None:
        """Optional fields default sensibly."""
        data = AcronymCreate(acronym="ML", expansion="machine learning")
        assert data.is_enabled is True
        assert data.tags == []
        assert data.description is None

    @pytest.mark.parametrize("label", ["", "   ", "M L", "ML\n"])
    def test_label_must_be_one_token(self, label: str) -> None:
        """Blank labels and labels with whitespace are rejected."""
        with pytest.raises(ValidationError):
            AcronymCreate(acronym=label, expansion="machine learning")

    def test_label_length_limit(self) -> None:
        """Labels longer than 64 characters are rejected."""
        with pytest.raises(ValidationError):
            AcronymCreate(acronym="X" * 65, expansion="x")

    def test_expansion_required(self) -> None:
        """Empty expansions are rejected."""
        with pytest.raises(ValidationError):
            AcronymCreate(acronym="ML", expansion="")


class TestAcronymUpdate:
    """Tests for partial updates."""

    def test_only_set_fields(self) -> None:
        """Unset fields are not part of the changes."""
        assert AcronymUpdate(expansion="markup language").changes() == {
            "expansion": "markup language"
        }

    def test_none_leaves_field_unchanged(self) -> None:
        """None on non-nullable fields means 'no change'."""
        assert AcronymUpdate(acronym=None, is_enabled=None).changes() == {}

    def test_none_clears_description(self) -> None:
        """None on description is an explicit clear."""
        assert AcronymUpdate(description=None).changes() == {"description": None}


class TestAcronymRecord:
    """Tests for stored records."""

    def test_null_tags_become_empty_list(self) -> None:
        """Stores holding NULL tags produce an empty list."""
        now = datetime.now(UTC)
        record = AcronymRecord(
            id=1, acronym="ML", expansion="x", created_at=now, updated_at=now, tags=None
        )
        assert record.tags == []

    def test_usage_count_not_negative(self) -> None:
        """Usage counts are never negative."""
        now = datetime.now(UTC)
        with pytest.raises(ValidationError):
            AcronymRecord(
                id=1, acronym="ML", expansion="x", created_at=now, updated_at=now, usage_count=-1
            )
