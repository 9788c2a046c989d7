"""Tests for model validation.

Verifies kind checking of single fields, shard construction (missing
fields nulled, extra fields dropped) and model/table-name validation.
"""

import pytest

from docstore.errors import ModelInvalid, ModelMismatch, ReservedCharacterUsed
from docstore.schema.validator import (
    build_shard,
    validate_member,
    validate_model,
    validate_table_name,
)

USER_MODEL = {"uID": 1, "email": "example@example.com"}


class TestValidateMember:
    """Test validate_member() kind checks."""

    def test_none_is_accepted_as_absent(self) -> None:
        """A None candidate returns None whatever the model kind."""
        assert validate_member(None, 1) is None
        assert validate_member(None, "text") is None

    def test_matching_kind_returns_candidate(self) -> None:
        """A candidate of the model's kind is returned unchanged."""
        assert validate_member(42, 1) == 42
        assert validate_member("a@b.c", "x") == "a@b.c"
        assert validate_member([1, 2], []) == [1, 2]

    def test_mismatched_kind_raises(self) -> None:
        """A str where an int is declared raises ModelMismatch."""
        with pytest.raises(ModelMismatch):
            validate_member("1", 1)

    def test_bool_does_not_satisfy_int(self) -> None:
        """bool and int are distinct kinds."""
        with pytest.raises(ModelMismatch):
            validate_member(True, 1)
        with pytest.raises(ModelMismatch):
            validate_member(1, True)

    def test_float_does_not_satisfy_int(self) -> None:
        """float and int are distinct kinds."""
        with pytest.raises(ModelMismatch):
            validate_member(1.5, 1)


class TestBuildShard:
    """Test build_shard() over a whole model."""

    def test_exact_record(self) -> None:
        """All model fields supplied are copied."""
        shard = build_shard(USER_MODEL, {"uID": 7, "email": "e"}, "User")
        assert shard == {"uID": 7, "email": "e"}

    def test_missing_fields_become_none(self) -> None:
        """Fields absent from the candidate are stored as None."""
        shard = build_shard(USER_MODEL, {"uID": 7}, "User")
        assert shard == {"uID": 7, "email": None}

    def test_extra_fields_are_dropped(self) -> None:
        """Fields outside the model never reach the shard."""
        shard = build_shard(USER_MODEL, {"uID": 7, "nickname": "x"}, "User")
        assert "nickname" not in shard
        assert set(shard) == {"uID", "email"}

    def test_returns_new_dict(self) -> None:
        """The shard is not the candidate object."""
        value = {"uID": 7, "email": "e"}
        shard = build_shard(USER_MODEL, value, "User")
        shard["uID"] = 8
        assert value["uID"] == 7

    def test_mismatch_names_table_and_field(self) -> None:
        """The error message points at the table and field."""
        with pytest.raises(ModelMismatch, match="User.*email"):
            build_shard(USER_MODEL, {"email": 5}, "User")

    def test_non_mapping_value_raises(self) -> None:
        """A list is not a record."""
        with pytest.raises(ModelMismatch):
            build_shard(USER_MODEL, [1, "e"], "User")


class TestValidateModel:
    """Test validate_model() and validate_table_name()."""

    def test_dict_model_is_valid(self) -> None:
        """A plain dict model passes."""
        validate_model(USER_MODEL)

    def test_empty_model_is_valid(self) -> None:
        """An empty mapping is a valid (field-less) model."""
        validate_model({})

    @pytest.mark.parametrize("model", [["uID", "email"], ("uID",), "uID", None, 5])
    def test_non_mapping_model_is_invalid(self, model) -> None:
        """Sequences, strings and scalars are rejected."""
        with pytest.raises(ModelInvalid):
            validate_model(model)

    def test_none_field_value_is_invalid(self) -> None:
        """None carries no kind, so it can't declare a field."""
        with pytest.raises(ModelInvalid, match="email"):
            validate_model({"uID": 1, "email": None})

    def test_non_string_field_name_is_invalid(self) -> None:
        """Field names must be strings."""
        with pytest.raises(ModelInvalid):
            validate_model({1: 1})

    def test_table_name_with_delimiter(self) -> None:
        """Table names may not contain the path delimiter."""
        with pytest.raises(ReservedCharacterUsed):
            validate_table_name("Us%er")

    def test_empty_table_name(self) -> None:
        """An empty table name is rejected."""
        with pytest.raises(ModelInvalid):
            validate_table_name("")
