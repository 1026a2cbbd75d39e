"""Unit tests for the query interpreter."""

from __future__ import annotations

import pytest

from reldb.application import (
    JOIN_RESULT_NAME,
    SELECT_RESULT_NAME,
    Message,
    QueryInterpreter,
    convert_literal,
)
from reldb.domain.entities import ColumnDefinition, Table
from reldb.domain.errors import (
    ArityMismatchError,
    ColumnNotFoundError,
    DuplicateTableError,
    ForeignKeyViolation,
    PrimaryKeyViolation,
    ReferentialIntegrityError,
    TableNotFoundError,
    TypeConversionError,
    UnsupportedStatementError,
)
from reldb.domain.value_objects import ABSENT, DataType, IntegerValue, TextValue


def select(interpreter: QueryInterpreter, sql: str) -> Table:
    result = interpreter.execute(sql)
    assert isinstance(result, Table)
    return result


@pytest.mark.unit
class TestConvertLiteral:
    """Tests for literal conversion."""

    INT_COLUMN = ColumnDefinition("n", DataType.INT)
    STRING_COLUMN = ColumnDefinition("s", DataType.STRING)

    @pytest.mark.parametrize("literal, expected", [("42", 42), ("-7", -7), ("+3", 3), ("007", 7)])
    def test_integers(self, literal: str, expected: int) -> None:
        assert convert_literal(self.INT_COLUMN, literal) == IntegerValue(expected)

    @pytest.mark.parametrize("literal", ["abc", "'1'", "1.5", "", "9223372036854775808"])
    def test_invalid_integers(self, literal: str) -> None:
        with pytest.raises(TypeConversionError, match="is not an INT for column 'n'"):
            convert_literal(self.INT_COLUMN, literal)

    @pytest.mark.parametrize("literal", ["9" * 5000, "-" + "1" * 5000, "1" * 20])
    def test_overlong_integers(self, literal: str) -> None:
        with pytest.raises(TypeConversionError):
            convert_literal(self.INT_COLUMN, literal)

    def test_leading_zeros_do_not_count_towards_length(self) -> None:
        assert convert_literal(self.INT_COLUMN, "-" + "0" * 5000 + "42") == IntegerValue(-42)
        assert convert_literal(self.INT_COLUMN, "+0") == IntegerValue(0)

    def test_string_quotes_stripped(self) -> None:
        assert convert_literal(self.STRING_COLUMN, "'recife'") == TextValue("recife")

    def test_unquoted_string_kept(self) -> None:
        assert convert_literal(self.STRING_COLUMN, "recife") == TextValue("recife")

    def test_only_outer_quotes_stripped(self) -> None:
        assert convert_literal(self.STRING_COLUMN, "''x''") == TextValue("'x'")


@pytest.mark.unit
class TestInterpreterDDL:
    """Tests for CREATE TABLE and DROP TABLE."""

    def test_create_table(self, interpreter: QueryInterpreter) -> None:
        result = interpreter.execute("CREATE TABLE t (id INT PRIMARY KEY, nome STRING)")

        assert result == Message("Table created successfully.")
        table = interpreter.catalog.get_table("t")
        assert table is not None
        assert table.column_names() == ["id", "nome"]

    def test_create_duplicate(self, interpreter: QueryInterpreter) -> None:
        interpreter.execute("CREATE TABLE t (id INT)")
        with pytest.raises(DuplicateTableError):
            interpreter.execute("CREATE TABLE T (id INT)")

    def test_drop_table(self, interpreter: QueryInterpreter) -> None:
        interpreter.execute("CREATE TABLE t (id INT)")
        assert str(interpreter.execute("DROP TABLE t")) == "Table dropped successfully."
        assert "t" not in interpreter.catalog

    def test_drop_referenced(self, cities_and_users: QueryInterpreter) -> None:
        with pytest.raises(ReferentialIntegrityError):
            cities_and_users.execute("DROP TABLE cidades")

    def test_unsupported_statement(self, interpreter: QueryInterpreter) -> None:
        with pytest.raises(UnsupportedStatementError):
            interpreter.execute("UPDATE t SET id = 1")


@pytest.mark.unit
class TestInterpreterInsert:
    """Tests for INSERT."""

    def test_insert(self, cities_and_users: QueryInterpreter) -> None:
        result = cities_and_users.execute("INSERT INTO cidades (id, nome) VALUES (10, 'Recife')")

        assert result == Message("Row inserted successfully.", affected_rows=1)
        rows = cities_and_users.catalog.require_table("cidades").rows
        assert rows[0].values == (IntegerValue(10), TextValue("recife"))

    def test_insert_in_any_column_order(self, cities_and_users: QueryInterpreter) -> None:
        cities_and_users.execute("INSERT INTO cidades (nome, id) VALUES ('olinda', 20)")
        row = cities_and_users.catalog.require_table("cidades").rows[0]
        assert row.values == (IntegerValue(20), TextValue("olinda"))

    def test_unlisted_columns_absent(self, cities_and_users: QueryInterpreter) -> None:
        cities_and_users.execute("INSERT INTO usuarios (id) VALUES (1)")
        row = cities_and_users.catalog.require_table("usuarios").rows[0]
        assert row[1] is ABSENT
        assert row[2] is ABSENT

    def test_insert_missing_table(self, interpreter: QueryInterpreter) -> None:
        with pytest.raises(TableNotFoundError):
            interpreter.execute("INSERT INTO ghost (id) VALUES (1)")

    def test_insert_unknown_column(self, cities_and_users: QueryInterpreter) -> None:
        with pytest.raises(ColumnNotFoundError):
            cities_and_users.execute("INSERT INTO cidades (id, pais) VALUES (1, 'br')")
        assert cities_and_users.catalog.require_table("cidades").row_count == 0

    def test_insert_arity_mismatch(self, cities_and_users: QueryInterpreter) -> None:
        with pytest.raises(ArityMismatchError):
            cities_and_users.execute("INSERT INTO cidades (id, nome) VALUES (1)")

    def test_insert_type_error(self, cities_and_users: QueryInterpreter) -> None:
        with pytest.raises(TypeConversionError):
            cities_and_users.execute("INSERT INTO cidades (id, nome) VALUES ('x', 'y')")
        assert cities_and_users.catalog.require_table("cidades").row_count == 0

    def test_primary_key_required(self, cities_and_users: QueryInterpreter) -> None:
        with pytest.raises(PrimaryKeyViolation):
            cities_and_users.execute("INSERT INTO cidades (nome) VALUES ('recife')")

    def test_duplicate_primary_key(self, cities_and_users: QueryInterpreter) -> None:
        cities_and_users.execute("INSERT INTO cidades (id, nome) VALUES (10, 'recife')")
        with pytest.raises(PrimaryKeyViolation):
            cities_and_users.execute("INSERT INTO cidades (id, nome) VALUES (10, 'olinda')")

    def test_foreign_key_violation(self, cities_and_users: QueryInterpreter) -> None:
        with pytest.raises(ForeignKeyViolation):
            cities_and_users.execute(
                "INSERT INTO usuarios (id, nome, id_cidade) VALUES (1, 'alice', 99)"
            )
        assert cities_and_users.catalog.require_table("usuarios").row_count == 0


@pytest.mark.unit
class TestInterpreterDelete:
    """Tests for DELETE."""

    @pytest.fixture
    def populated(self, cities_and_users: QueryInterpreter) -> QueryInterpreter:
        for sql in (
            "INSERT INTO cidades (id, nome) VALUES (10, 'recife')",
            "INSERT INTO cidades (id, nome) VALUES (20, 'olinda')",
            "INSERT INTO cidades (id, nome) VALUES (30, 'recife')",
        ):
            cities_and_users.execute(sql)
        return cities_and_users

    def test_delete(self, populated: QueryInterpreter) -> None:
        result = populated.execute("DELETE FROM cidades WHERE nome = 'recife'")

        assert str(result) == "DELETE executed successfully. Rows affected: 2"
        assert isinstance(result, Message)
        assert result.affected_rows == 2
        remaining = populated.catalog.require_table("cidades")
        assert [row.to_python() for row in remaining] == [[20, "olinda"]]

    def test_delete_no_match(self, populated: QueryInterpreter) -> None:
        result = populated.execute("DELETE FROM cidades WHERE id = 99")
        assert str(result) == "DELETE executed successfully. Rows affected: 0"

    def test_delete_type_error(self, populated: QueryInterpreter) -> None:
        with pytest.raises(TypeConversionError):
            populated.execute("DELETE FROM cidades WHERE id = 'recife'")

    def test_delete_unknown_column(self, populated: QueryInterpreter) -> None:
        with pytest.raises(ColumnNotFoundError):
            populated.execute("DELETE FROM cidades WHERE pais = 'br'")
        assert populated.catalog.require_table("cidades").row_count == 3

    def test_delete_does_not_cascade(self, populated: QueryInterpreter) -> None:
        """Deleting a referenced row leaves referencing rows in place."""
        populated.execute("INSERT INTO usuarios (id, nome, id_cidade) VALUES (1, 'alice', 10)")
        populated.execute("DELETE FROM cidades WHERE id = 10")
        assert populated.catalog.require_table("usuarios").row_count == 1


@pytest.mark.unit
class TestInterpreterSelect:
    """Tests for SELECT and JOIN."""

    @pytest.fixture
    def populated(self, cities_and_users: QueryInterpreter) -> QueryInterpreter:
        for sql in (
            "INSERT INTO cidades (id, nome) VALUES (10, 'recife')",
            "INSERT INTO cidades (id, nome) VALUES (20, 'olinda')",
            "INSERT INTO usuarios (id, nome, id_cidade) VALUES (1, 'alice', 10)",
            "INSERT INTO usuarios (id, nome, id_cidade) VALUES (2, 'bob', 20)",
            "INSERT INTO usuarios (id, nome, id_cidade) VALUES (3, 'carol', 10)",
            "INSERT INTO usuarios (id, nome) VALUES (4, 'dave')",
        ):
            cities_and_users.execute(sql)
        return cities_and_users

    def test_select_star(self, populated: QueryInterpreter) -> None:
        result = select(populated, "SELECT * FROM cidades")

        assert result.name == SELECT_RESULT_NAME
        assert result.column_names() == ["id", "nome"]
        assert [row.to_python() for row in result] == [[10, "recife"], [20, "olinda"]]

    def test_select_result_is_detached(self, populated: QueryInterpreter) -> None:
        result = select(populated, "SELECT * FROM cidades")
        result.rows[0][1] = TextValue("changed")

        source = populated.catalog.require_table("cidades")
        assert source.rows[0][1] == TextValue("recife")
        assert SELECT_RESULT_NAME not in populated.catalog

    def test_select_projection_order(self, populated: QueryInterpreter) -> None:
        result = select(populated, "SELECT nome, id FROM cidades")
        assert result.column_names() == ["nome", "id"]
        assert [row.to_python() for row in result] == [["recife", 10], ["olinda", 20]]

    def test_select_unknown_column(self, populated: QueryInterpreter) -> None:
        with pytest.raises(ColumnNotFoundError):
            populated.execute("SELECT pais FROM cidades")

    def test_select_missing_table(self, interpreter: QueryInterpreter) -> None:
        with pytest.raises(TableNotFoundError):
            interpreter.execute("SELECT * FROM ghost")

    def test_select_empty_table(self, cities_and_users: QueryInterpreter) -> None:
        result = select(cities_and_users, "SELECT * FROM cidades")
        assert result.row_count == 0
        assert result.column_names() == ["id", "nome"]

    def test_join(self, populated: QueryInterpreter) -> None:
        result = select(
            populated,
            "SELECT * FROM usuarios JOIN cidades ON usuarios.id_cidade = cidades.id",
        )

        assert result.name == JOIN_RESULT_NAME
        assert result.column_names() == [
            "usuarios.id",
            "usuarios.nome",
            "usuarios.id_cidade",
            "cidades.id",
            "cidades.nome",
        ]
        assert [row.to_python() for row in result] == [
            [1, "alice", 10, 10, "recife"],
            [2, "bob", 20, 20, "olinda"],
            [3, "carol", 10, 10, "recife"],
        ]

    def test_join_ignores_projection(self, populated: QueryInterpreter) -> None:
        result = select(
            populated,
            "SELECT usuarios.nome FROM usuarios JOIN cidades ON usuarios.id_cidade = cidades.id",
        )
        assert len(result.columns) == 5

    def test_join_unknown_column(self, populated: QueryInterpreter) -> None:
        with pytest.raises(ColumnNotFoundError):
            populated.execute("SELECT * FROM usuarios JOIN cidades ON usuarios.x = cidades.id")

    def test_join_missing_table(self, populated: QueryInterpreter) -> None:
        with pytest.raises(TableNotFoundError):
            populated.execute("SELECT * FROM usuarios JOIN ghost ON usuarios.id = ghost.id")
