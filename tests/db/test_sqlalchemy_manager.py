"""Tests for the SQLAlchemy manager and its use by the SQLite dialect."""

from __future__ import annotations

from pathlib import Path

import pytest

from dsdialect.config.models import DatabaseConfig, DatabaseType
from dsdialect.db.manager import SQLAlchemyManager, bind_positional
from dsdialect.dialects import SQLITE
from dsdialect.dialects.base import NameRecord
from dsdialect.exceptions import DatabaseError


@pytest.fixture()
def sqlite_manager(sqlite_path: Path) -> SQLAlchemyManager:
    manager = SQLAlchemyManager(DatabaseConfig(type=DatabaseType.SQLITE, path=str(sqlite_path)))
    yield manager
    manager.close()


class TestBindPositional:
    def test_rewrites_markers(self):
        sql, bound = bind_positional("SELECT * FROM t WHERE a = ? AND b = ?", ["x", 2])
        assert sql == "SELECT * FROM t WHERE a = :p0 AND b = :p1"
        assert bound == {"p0": "x", "p1": 2}

    def test_ignores_markers_in_literals(self):
        sql, bound = bind_positional("SELECT '?' AS q WHERE LENGTH(?) > 0", ["shop"])
        assert sql == "SELECT '?' AS q WHERE LENGTH(:p0) > 0"
        assert bound == {"p0": "shop"}

    def test_escapes_colons(self):
        sql, bound = bind_positional("SELECT CAST(x AS TEXT), ':new' FROM t WHERE a = ?", [1])
        assert sql == "SELECT CAST(x AS TEXT), '\\:new' FROM t WHERE a = :p0"
        assert bound == {"p0": 1}

    def test_doubled_quote_stays_in_literal(self):
        sql, bound = bind_positional("SELECT 'it''s ?', ?", ["x"])
        assert sql == "SELECT 'it''s ?', :p0"
        assert bound == {"p0": "x"}

    def test_ignores_markers_in_quoted_identifiers(self):
        sql, bound = bind_positional('SELECT "odd?col" FROM t WHERE a = ?', [1])
        assert sql == 'SELECT "odd?col" FROM t WHERE a = :p0'
        assert bound == {"p0": 1}

    def test_ignores_markers_in_comments(self):
        query = "SELECT a -- why?\nFROM t /* really? */ WHERE b = ?"
        sql, bound = bind_positional(query, [2])
        assert sql == "SELECT a -- why?\nFROM t /* really? */ WHERE b = :p0"
        assert bound == {"p0": 2}

    def test_no_parameters(self):
        assert bind_positional("PRAGMA database_list", None) == ("PRAGMA database_list", {})

    def test_too_few_parameters(self):
        with pytest.raises(DatabaseError):
            bind_positional("SELECT ?", [])

    def test_too_many_parameters(self):
        with pytest.raises(DatabaseError):
            bind_positional("SELECT 1", ["extra"])


class TestConnectionStrings:
    def test_mysql(self):
        manager = SQLAlchemyManager(
            DatabaseConfig(type="mysql", host="db", database="shop", username="app", password="p@ss")
        )
        assert manager.build_connection_string() == "mysql+pymysql://app:p%40ss@db:3306/shop?charset=utf8mb4"

    def test_postgresql(self):
        manager = SQLAlchemyManager(
            DatabaseConfig(type="postgres", host="db", port=6543, database="shop", username="app", password="pw")
        )
        assert manager.build_connection_string() == "postgresql+psycopg2://app:pw@db:6543/shop"

    def test_oracle(self):
        manager = SQLAlchemyManager(
            DatabaseConfig(type="oracle", host="db", database="XEPDB1", username="app", password="pw")
        )
        assert manager.build_connection_string() == "oracle+oracledb://app:pw@db:1521/?service_name=XEPDB1"

    def test_sqlserver(self):
        manager = SQLAlchemyManager(
            DatabaseConfig(type="mssql", host="db", database="shop", username="sa", password="pw")
        )
        assert manager.build_connection_string() == (
            "mssql+pyodbc://sa:pw@db:1433/shop?driver=ODBC+Driver+18+for+SQL+Server"
        )

    def test_sqlite_relative_path_is_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        manager = SQLAlchemyManager(DatabaseConfig(type="sqlite", path="data/app.db"))
        assert manager.build_connection_string() == f"sqlite:///{tmp_path / 'data' / 'app.db'}"
        assert (tmp_path / "data").is_dir()

    def test_sqlite_memory(self):
        manager = SQLAlchemyManager(DatabaseConfig(type="sqlite", path=":memory:"))
        assert manager.build_connection_string() == "sqlite://"

    def test_config_is_not_mutated(self):
        config = DatabaseConfig(type="mysql", host="db", database="shop", username="app")
        manager = SQLAlchemyManager(config)
        assert config.port is None
        assert manager.config.port == 3306


class TestExecution:
    def test_execute_and_read(self, sqlite_manager):
        sqlite_manager.execute("CREATE TABLE items (id INTEGER PRIMARY KEY, name TEXT)")
        result = sqlite_manager.execute("INSERT INTO items (name) VALUES ('a'), ('b')")
        assert result.rows_affected == 2

        assert sqlite_manager.read_all("SELECT id, name FROM items ORDER BY id") == [
            {"id": 1, "name": "a"},
            {"id": 2, "name": "b"},
        ]
        assert sqlite_manager.read_all("SELECT name FROM items ORDER BY id", into=tuple) == [("a",), ("b",)]
        assert sqlite_manager.read_all(
            "SELECT name FROM items WHERE name = ?", ["b"], into=NameRecord
        ) == [NameRecord(name="b")]

    def test_read_single(self, sqlite_manager):
        sqlite_manager.execute("CREATE TABLE items (id INTEGER PRIMARY KEY, name TEXT)")
        assert sqlite_manager.read_single("SELECT COUNT(*) FROM items", into=int) == 0
        assert sqlite_manager.read_single("SELECT name FROM items") is None

    def test_colon_in_default(self, sqlite_manager):
        sqlite_manager.execute("CREATE TABLE tags (id INTEGER PRIMARY KEY, tag TEXT DEFAULT ':new')")
        sqlite_manager.execute("INSERT INTO tags (id) VALUES (1)")
        assert sqlite_manager.read_all("SELECT tag FROM tags WHERE id = ?", [1], into=str) == [":new"]

    def test_error_is_database_error(self, sqlite_manager):
        with pytest.raises(DatabaseError) as exc_info:
            sqlite_manager.read_all("SELECT * FROM missing_table")
        assert exc_info.value.statement == "SELECT * FROM missing_table"
        assert exc_info.value.database_type == "sqlite"


class TestSQLiteDialectOnSQLite:
    def test_lifecycle(self, sqlite_manager, sqlite_path):
        SQLITE.create_datastore(sqlite_manager, "shop")
        SQLITE.create_table(sqlite_manager, "shop", "users", "id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT")
        SQLITE.create_table(sqlite_manager, "shop", "orders", "id INTEGER PRIMARY KEY, user_id INTEGER")
        sqlite_manager.execute("INSERT INTO users (name) VALUES ('alice'), ('bob'), ('carol')")

        assert sorted(SQLITE.get_tables(sqlite_manager, "shop")) == ["orders", "users"]
        assert SQLITE.get_current_datastore(sqlite_manager) == sqlite_path.name
        assert SQLITE.get_datastores(sqlite_manager) == [sqlite_path.name]
        assert SQLITE.get_sequence(sqlite_manager, "users") == 4
        assert SQLITE.get_sequence(sqlite_manager, "orders") == 1
        assert SQLITE.get_key_name(sqlite_manager, "shop", "users") == ""

        SQLITE.drop_table(sqlite_manager, "shop", "orders")
        assert SQLITE.get_tables(sqlite_manager, "shop") == ["users"]

        SQLITE.drop_datastore(sqlite_manager, "shop")
        assert SQLITE.get_tables(sqlite_manager, "shop") == []

    def test_table_name_with_colon(self, sqlite_manager):
        SQLITE.create_table(sqlite_manager, "shop", "users", "id INTEGER PRIMARY KEY AUTOINCREMENT")
        assert SQLITE.get_sequence(sqlite_manager, "a :b") == 1

    def test_create_table_error_propagates(self, sqlite_manager):
        SQLITE.create_table(sqlite_manager, "shop", "users", "id INTEGER")
        with pytest.raises(DatabaseError):
            SQLITE.create_table(sqlite_manager, "shop", "users", "id INTEGER")
