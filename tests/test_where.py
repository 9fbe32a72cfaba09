import pytest

from sqlalchemy_easy.base.markers import BindingResolver, BindingSupply
from sqlalchemy_easy.base.where import WhereClauseParser, literal_value
from sqlalchemy_easy.errors import (
    MalformedCondition, UnreadableStatement, UnresolvedBinding, UnsupportedCondition,
)


def make_parser(bindings=None, dialect=None):
    return WhereClauseParser(BindingResolver(BindingSupply.from_bindings(bindings)), dialect)


class TestSplit:
    def test_string(self):
        assert WhereClauseParser.split("WHERE id = 1 and name = 'x'") == ["id = 1", "name = 'x'"]

    def test_keywords_inside_literals_and_words(self):
        fragments = WhereClauseParser.split("brand = 'salt and pepper' AND wand > 2")
        assert fragments == ["brand = 'salt and pepper'", "wand > 2"]

    def test_backslash_is_plain_text(self):
        fragments = WhereClauseParser.split("drive = 'C:\\' AND qty = ?")
        assert fragments == ["drive = 'C:\\'", "qty = ?"]

    def test_list(self):
        assert WhereClauseParser.split([" id = 1 ", "", "qty > 2"]) == ["id = 1", "qty > 2"]

    def test_empty(self):
        assert WhereClauseParser.split(None) == []
        assert WhereClauseParser.split("") == []
        assert WhereClauseParser.split("WHERE") == []


class TestParse:
    def test_positional(self):
        parser = make_parser(["mango"])
        clause = parser.parse(["name = ?"])

        assert clause.sql == "WHERE name = :where_name"
        assert parser.resolver.bindings == {":where_name": "mango"}

    def test_literals_are_bound(self):
        parser = make_parser()
        clause = parser.parse("WHERE qty >= 10 AND name = 'it''s' AND color != NULL")

        assert clause.sql == "WHERE qty >= :where_qty AND name = :where_name AND color != :where_color"
        assert parser.resolver.bindings == {
            ":where_qty": 10,
            ":where_name": "it's",
            ":where_color": None,
        }

    def test_named(self):
        parser = make_parser({":id": 3})
        clause = parser.parse("id = :id")

        assert clause.sql == "WHERE id = :id"
        assert parser.resolver.bindings == {":id": 3}

    def test_condition_parts(self):
        parser = make_parser([7])
        condition, = parser.parse("f.qty<>?").conditions

        assert condition.column == "f.qty"
        assert condition.operator == "<>"
        assert condition.value == 7
        assert condition.marker == ":where_f_qty"
        assert condition.text == "f.qty<>:where_f_qty"

    def test_same_column_twice(self):
        parser = make_parser()
        clause = parser.parse("id > 1 AND id < 5")

        assert clause.sql == "WHERE id > :where_id AND id < :where_id_2"
        assert parser.resolver.bindings == {":where_id": 1, ":where_id_2": 5}

    def test_order_is_preserved(self):
        clause = make_parser().parse(["b = 2", "a = 1", "c = 3"])
        assert [c.column for c in clause.conditions] == ["b", "a", "c"]

    def test_empty(self):
        clause = make_parser().parse([])
        assert not clause
        assert clause.sql == ""

    def test_malformed(self):
        parser = make_parser()

        with pytest.raises(MalformedCondition):
            parser.parse("name")

        with pytest.raises(MalformedCondition):
            parser.parse("qty =! 3")

        with pytest.raises(MalformedCondition):
            parser.parse("deleted_at IS NULL")

        # BETWEEN is split on its AND, leaving fragments that do not parse
        with pytest.raises(MalformedCondition):
            parser.parse("qty BETWEEN 1 AND 5")

    def test_unsupported(self):
        with pytest.raises(UnsupportedCondition):
            make_parser().parse("id = 1 OR id = 2")

        with pytest.raises(UnsupportedCondition):
            make_parser().parse("name = 'a' LIKE 'b'")

    def test_unresolved(self):
        with pytest.raises(UnresolvedBinding):
            make_parser().parse("id = ?")

    def test_markers_inside_expressions(self):
        with pytest.raises(UnsupportedCondition):
            make_parser([1]).parse("qty = qty + ?")

        with pytest.raises(UnsupportedCondition):
            make_parser({"a": "x", "b": "y"}).parse("name = :a || :b")

    def test_marker_inside_literal_is_text(self):
        parser = make_parser()
        parser.parse("note = 'why ?'")
        assert parser.resolver.bindings == {":where_note": "why ?"}

    def test_mysql_strings(self):
        parser = make_parser(dialect="mysql")
        parser.parse("body = 'it\\'s' AND title = \"quoted\"")
        assert parser.resolver.bindings == {":where_body": "it's", ":where_title": "quoted"}

    def test_unterminated_literal(self):
        with pytest.raises(UnreadableStatement):
            make_parser().parse("name = 'open")


class TestLiteralValue:
    def test_values(self):
        assert literal_value("'mango'") == "mango"
        assert literal_value("'it''s'") == "it's"
        assert literal_value("42") == 42
        assert literal_value("-3") == -3
        assert literal_value("2.5") == 2.5
        assert literal_value("NULL") is None
        assert literal_value("true") is True
        assert literal_value("FALSE") is False
        assert literal_value("NOW()") == "NOW()"
        assert literal_value("'C:\\'") == "C:\\"
        assert literal_value("'it\\'s'", "mysql") == "it's"
