import pytest

from sqlglot.tokens import TokenType

from sqlalchemy_easy.errors import UnreadableStatement
from sqlalchemy_easy.helpers.tokens import find_markers, single_marker, split_on, sql_dialect, tokenize


class TestDialect:
    def test_names(self):
        assert sql_dialect("sqlite") == "sqlite"
        assert sql_dialect("postgresql") == "postgres"
        assert sql_dialect("mssql") == "tsql"
        assert sql_dialect("firebird") is None
        assert sql_dialect(None) is None


class TestMarkers:
    def test_find(self):
        sql = "SELECT * FROM t WHERE a = ? AND b = :name AND c = '?' AND d::text = ':x'"
        found = find_markers(tokenize(sql))

        assert [(m.text, m.positional) for m in found] == [("?", True), (":name", False)]
        assert [sql[m.start:m.end] for m in found] == ["?", ":name"]

    def test_single(self):
        assert single_marker(" ? ").positional
        assert single_marker(":id").text == ":id"
        assert single_marker("qty + ?") is None
        assert single_marker(": id") is None
        assert single_marker("'?'") is None
        assert single_marker(5) is None

    def test_unreadable(self):
        with pytest.raises(UnreadableStatement):
            tokenize("SELECT 'open")


class TestSplit:
    def test_split_on_keywords(self):
        fragments = split_on("WHERE a = 1 AND b = 'x and y'", {TokenType.WHERE, TokenType.AND})
        assert fragments == ["", " a = 1 ", " b = 'x and y'"]

    def test_nothing_to_split(self):
        assert split_on("a = 1", {TokenType.AND}) == ["a = 1"]
