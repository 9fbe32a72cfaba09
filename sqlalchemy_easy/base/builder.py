from dataclasses import dataclass

from ..errors import EmptyStatement, MixedMarkers, UnresolvedBinding
from ..logger import logger
from .markers import BindingResolver, BindingSupply, is_named_marker, is_positional_marker
from .where import WhereClauseParser


@dataclass(frozen=True)
class Statement:
    sql: str
    bindings: object = ()


class StatementBuilder:
    """
    Writes INSERT and UPDATE statements from a table name and a mapping of
    column -> value.

    Values are never inlined: each one is bound to a marker, either one the
    caller wrote (``?`` or ``:name``) or one made up from the column name.

    WHERE clauses are read with the quoting rules of ``dialect`` (a sqlglot
    dialect name).
    """

    def __init__(self, dialect=None):
        self.dialect = dialect

    def build_insert(self, table, values, bindings=None) -> Statement:
        if not values:
            raise EmptyStatement(f"No columns to insert into table '{table}'")

        columns = list(values)
        if bindings:
            # Values are the caller's own markers
            markers = [str(v).strip() for v in values.values()]
            named = [m for m in markers if is_named_marker(m)]
            positional = [m for m in markers if is_positional_marker(m)]
            if named and positional:
                raise MixedMarkers(f"INSERT into '{table}' mixes ? and :name markers")
        else:
            markers = ["?"] * len(columns)
            bindings = tuple(values.values())

        sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({', '.join(markers)})"
        logger.debug(f"Built {sql}")
        return Statement(sql, bindings)

    def build_update(self, table, values, where, bindings=None) -> Statement:
        if not values:
            raise EmptyStatement(f"No columns to update in table '{table}'")

        resolver = BindingResolver(BindingSupply.from_bindings(bindings))

        assignments = []
        for column, value in values.items():
            marker, _ = resolver.resolve(value, base=column)
            assignments.append(f"{column} = {marker}")

        sql = f"UPDATE {table} SET {', '.join(assignments)}"

        clause = WhereClauseParser(resolver, self.dialect).parse(where)
        if resolver.supply.positional:
            raise UnresolvedBinding(
                f"{len(resolver.supply.positional)} positional value(s) left over after binding UPDATE of '{table}'"
            )

        if clause:
            sql = f"{sql} {clause.sql}"

        logger.debug(f"Built {sql}")
        return Statement(sql, dict(resolver.bindings))
