"""Tests for snapshot dump, restore and validation."""

import copy
import json
import logging
from pathlib import Path

import pytest

from docstore.errors import NoSuchItem
from docstore.snapshot import (
    dump_database,
    load_snapshot,
    restore_database,
    save_snapshot,
    validate_snapshot,
)
from docstore.store.database import Database


@pytest.fixture
def world(db: Database, users, admins) -> Database:
    users.add("u1", {"uID": 1, "email": "a@example.com"})
    admins.add("a1", {"uID": 2, "email": "b@example.com", "editAnything": True})
    users.make_view("low_ids", lambda r: r.uID < 2)
    return db


class TestDump:
    """Test dump_database()."""

    def test_dump_shape(self, world: Database) -> None:
        data = dump_database(world)
        assert data["name"] == "game"
        assert data["metadata"]["version"] == "1.0"
        assert data["metadata"]["table_count"] == 2
        assert [t["name"] for t in data["tables"]] == ["User", "Admin"]

    def test_dump_entries_and_views(self, world: Database) -> None:
        user_table = dump_database(world)["tables"][0]
        assert user_table["entries"] == {
            "u1": {"uID": 1, "email": "a@example.com"},
            "%Admin%a1": {"uID": 2, "email": "b@example.com"},
        }
        assert user_table["views"] == ["low_ids"]

    def test_dump_is_json_serializable(self, world: Database) -> None:
        json.dumps(dump_database(world))


class TestRestore:
    """Test restore_database()."""

    def test_round_trip_records(self, world: Database) -> None:
        restored = restore_database(dump_database(world))
        admins = restored.get_table("Admin")
        assert admins.get("a1") == world.get_table("Admin").get("a1")
        assert restored.get_table("User").descendants == ["Admin"]

    def test_restored_tables_cascade(self, world: Database) -> None:
        restored = restore_database(dump_database(world))
        restored.get_table("Admin").remove("a1")
        assert restored.get_table("User").keys() == ["u1"]

    def test_view_restored_with_predicate(self, world: Database) -> None:
        restored = restore_database(
            dump_database(world),
            view_predicates={"User": {"low_ids": lambda r: r.uID < 2}},
        )
        view = restored.get_table("User").get_view("low_ids")
        assert [r.uID for r in view.get_all()] == [1]

        restored.get_table("User").add("u0", {"uID": 0})
        assert [r.uID for r in view.get_all()] == [1, 0]

    def test_view_without_predicate_skipped(self, world: Database, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            restored = restore_database(dump_database(world))
        with pytest.raises(NoSuchItem):
            restored.get_table("User").get_view("low_ids")
        assert "low_ids" in caplog.text

    def test_invalid_snapshot_raises(self) -> None:
        with pytest.raises(ValueError):
            restore_database({"name": "x"})


class TestValidate:
    """Test validate_snapshot()."""

    def test_valid(self, world: Database) -> None:
        result = validate_snapshot(dump_database(world))
        assert result.valid
        assert result.errors == []

    def test_not_a_dict(self) -> None:
        assert not validate_snapshot([1, 2]).valid

    def test_missing_keys(self) -> None:
        result = validate_snapshot({"name": "x"})
        assert not result.valid
        assert "Missing required key: metadata" in result.errors
        assert "Missing required key: tables" in result.errors

    def test_wrong_version(self, world: Database) -> None:
        data = dump_database(world)
        data["metadata"]["version"] = "0.9"
        result = validate_snapshot(data)
        assert not result.valid
        assert "version" in result.errors[0]

    def test_ancestor_after_descendant(self, world: Database) -> None:
        data = dump_database(world)
        data["tables"].reverse()
        result = validate_snapshot(data)
        assert not result.valid
        assert any("ancestor 'User'" in e for e in result.errors)

    def test_field_outside_model(self, world: Database) -> None:
        data = dump_database(world)
        data["tables"][0]["entries"]["u1"]["password"] = "x"
        result = validate_snapshot(data)
        assert not result.valid
        assert "password" in result.errors[0]

    def test_kind_mismatch(self, world: Database) -> None:
        data = dump_database(world)
        data["tables"][0]["entries"]["u1"]["uID"] = "one"
        assert not validate_snapshot(data).valid

    def test_missing_field_is_warning(self, world: Database) -> None:
        data = dump_database(world)
        del data["tables"][0]["entries"]["u1"]["email"]
        result = validate_snapshot(data)
        assert result.valid
        assert len(result.warnings) == 1

        restored = restore_database(data)
        assert restored.get_table("User").get("u1").email is None

    def test_repeated_ancestor(self, world: Database) -> None:
        data = dump_database(world)
        data["tables"][1]["ancestors"] = ["User", "User"]
        result = validate_snapshot(data)
        assert not result.valid
        assert any("repeats an ancestor" in e for e in result.errors)

    def test_reserved_character_in_table_name(self, world: Database) -> None:
        data = dump_database(world)
        data["tables"][0]["name"] = "Us%er"
        data["tables"][1]["ancestors"] = ["Us%er"]
        assert not validate_snapshot(data).valid

    def test_null_model_value(self, world: Database) -> None:
        data = dump_database(world)
        data["tables"][0]["model"]["email"] = None
        assert not validate_snapshot(data).valid

    @pytest.mark.parametrize(
        "change",
        [
            lambda d: d["tables"][1].update(ancestors=["User", "User"]),
            lambda d: d["tables"][0]["model"].update(email=None),
            lambda d: d["tables"][0].update(name="Us%er"),
        ],
    )
    def test_restore_reports_construction_errors_as_value_error(
        self, world: Database, change
    ) -> None:
        """Anything make_table would reject is caught before restoring."""
        data = dump_database(world)
        change(data)
        with pytest.raises(ValueError):
            restore_database(data)

    def test_malformed_table(self, world: Database) -> None:
        data = copy.deepcopy(dump_database(world))
        data["tables"][0]["model"] = ["uID"]
        result = validate_snapshot(data)
        assert not result.valid
        assert result.errors[0].startswith("Malformed snapshot")

    def test_format_report(self, world: Database) -> None:
        data = dump_database(world)
        data["metadata"]["version"] = "0.9"
        report = validate_snapshot(data).format_report()
        assert "Snapshot validation failed" in report


class TestFiles:
    """Test save_snapshot()/load_snapshot()."""

    def test_save_and_load(self, world: Database, tmp_path: Path) -> None:
        path = save_snapshot(world, tmp_path / "saves" / "world.json")
        assert Path(path).exists()

        loaded = load_snapshot(path, {"User": {"low_ids": lambda r: r.uID < 2}})
        assert loaded.get_table("Admin").get("a1").editAnything is True
        assert len(loaded.get_table("User").get_view("low_ids")) == 1

    def test_load_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_snapshot(tmp_path / "missing.json")

    def test_load_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ValueError):
            load_snapshot(path)
