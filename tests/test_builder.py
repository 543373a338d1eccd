"""Tests for the SQL statement builders."""

from __future__ import annotations

import pytest

from dbhandler.database import (
    DatabaseError,
    Statement,
    build_clear_table,
    build_create_table,
    build_create_table_from_lists,
    build_delete,
    build_drop_table,
    build_insert,
    build_update,
    render_literal,
)


@pytest.mark.unit
class TestCreateTable:
    def test_autoincrement_id(self) -> None:
        stmt = build_create_table("Students", {"Name": "VARCHAR(255)"})
        assert stmt.sql == (
            "CREATE TABLE IF NOT EXISTS Students "
            "(_id INTEGER PRIMARY KEY AUTOINCREMENT, Name VARCHAR(255))"
        )
        assert stmt.params == ()

    def test_plain_id(self) -> None:
        stmt = build_create_table("T", {"a": "INTEGER", "b": "TEXT"}, id_autoincrement=False)
        assert stmt.sql == "CREATE TABLE IF NOT EXISTS T (_id INTEGER, a INTEGER, b TEXT)"

    def test_from_lists_keeps_order(self) -> None:
        stmt = build_create_table_from_lists("T", ["b", "a"], ["TEXT", "INTEGER"])
        assert stmt.sql.endswith("(_id INTEGER PRIMARY KEY AUTOINCREMENT, b TEXT, a INTEGER)")

    def test_from_lists_length_mismatch(self) -> None:
        with pytest.raises(DatabaseError, match="same length"):
            build_create_table_from_lists("T", ["a", "b"], ["TEXT"])

    def test_no_columns(self) -> None:
        with pytest.raises(DatabaseError, match="columns size is invalid"):
            build_create_table("T", {})

    def test_unsafe_column_type(self) -> None:
        with pytest.raises(DatabaseError, match="column type"):
            build_create_table("T", {"a": "TEXT); DROP TABLE x; --"})

    @pytest.mark.parametrize("name", ["", "1abc", "bad name", "x;--", 'q"'])
    def test_unsafe_table_name(self, name: str) -> None:
        with pytest.raises(DatabaseError, match="Unsafe SQL identifier"):
            build_create_table(name, {"a": "TEXT"})


@pytest.mark.unit
class TestRowStatements:
    def test_insert_binds_values(self) -> None:
        stmt = build_insert("Students", {"Name": "Shaked3", "Age": 20})
        assert stmt == Statement("INSERT INTO Students (Name, Age) VALUES (?, ?)", ("Shaked3", 20))

    def test_insert_empty(self) -> None:
        with pytest.raises(DatabaseError):
            build_insert("Students", {})

    def test_delete_ands_filters(self) -> None:
        stmt = build_delete("Students", {"Name": "a", "Age": 3})
        assert stmt.sql == "DELETE FROM Students WHERE Name = ? AND Age = ?"
        assert stmt.params == ("a", 3)

    def test_delete_null_filter(self) -> None:
        stmt = build_delete("Students", {"Name": None})
        assert stmt.sql == "DELETE FROM Students WHERE Name IS NULL"
        assert stmt.params == ()

    def test_delete_requires_filters(self) -> None:
        with pytest.raises(DatabaseError, match="no filters"):
            build_delete("Students", {})

    def test_update_with_string_where(self) -> None:
        stmt = build_update("Students", {"Name": "x", "Age": 4}, "_id = ?", (7,))
        assert stmt.sql == "UPDATE Students SET Name = ?, Age = ? WHERE _id = ?"
        assert stmt.params == ("x", 4, 7)

    def test_update_with_mapping_where(self) -> None:
        stmt = build_update("Students", {"Age": None}, {"Name": "x"})
        assert stmt.sql == "UPDATE Students SET Age = ? WHERE Name = ?"
        assert stmt.params == (None, "x")

    def test_update_without_where(self) -> None:
        assert build_update("Students", {"Age": 1}).sql == "UPDATE Students SET Age = ?"

    @pytest.mark.parametrize("where", ["", "   ", "\n\t"])
    def test_update_rejects_blank_string_where(self, where: str) -> None:
        with pytest.raises(DatabaseError, match="blank where clause"):
            build_update("Students", {"Age": 1}, where)

    def test_update_rejects_params_with_mapping_where(self) -> None:
        with pytest.raises(DatabaseError, match="where_params"):
            build_update("Students", {"Age": 1}, {"Name": "x"}, (1,))

    def test_drop_and_clear(self) -> None:
        assert build_drop_table("T").sql == "DROP TABLE T"
        assert build_drop_table("T", if_exists=True).sql == "DROP TABLE IF EXISTS T"
        assert build_clear_table("T").sql == "DELETE FROM T"


@pytest.mark.unit
class TestRendering:
    def test_strings_and_non_strings_render_distinctly(self) -> None:
        assert render_literal(5) == "5"
        assert render_literal("5") == "'5'"
        assert render_literal(True) == "1"
        assert render_literal(None) == "NULL"
        assert render_literal(2.5) == "2.5"

    def test_quotes_are_doubled(self) -> None:
        assert render_literal("O'Brien") == "'O''Brien'"

    def test_statement_render(self) -> None:
        stmt = build_insert("Students", {"Name": "Kuku3", "Age": 9})
        assert stmt.render() == "INSERT INTO Students (Name, Age) VALUES ('Kuku3', 9)"

    def test_render_falls_back_on_placeholder_mismatch(self) -> None:
        stmt = Statement("SELECT '?' , ?", (1,))
        assert "params=(1,)" in stmt.render()
