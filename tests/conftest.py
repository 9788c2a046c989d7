"""Shared fixtures: a database with a User <- Admin inheritance chain."""

import pytest

from docstore.store.database import Database


@pytest.fixture
def db() -> Database:
    return Database("game")


@pytest.fixture
def users(db: Database):
    return db.make_table("User", {"uID": 1, "email": "example@example.com"})


@pytest.fixture
def admins(db: Database, users):
    return db.make_table(
        "Admin",
        {"editAnything": True, "deleteAnything": True, "makeAnything": True},
        ["User"],
    )
