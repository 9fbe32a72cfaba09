from collections.abc import Mapping
from enum import Enum
from typing import Protocol

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from ..errors import ExecutionFailure, MixedMarkers, UnresolvedBinding, UnsupportedFetchMode
from ..helpers.tokens import QUOTED, find_markers, sql_dialect, tokenize
from ..logger import logger


class FetchMode(Enum):
    ASSOC = "assoc"         # list of dicts keyed by column name
    NUM = "num"             # list of tuples
    COLUMN = "column"       # list of values from one column
    KEY_PAIR = "key_pair"   # dict of first column -> second column
    OBJ = "obj"             # Row objects with attribute access


class StatementCapability(Protocol):
    def prepare(self, sql): ...
    def execute(self, handle, bindings) -> bool: ...
    def fetch_all(self, handle, mode=FetchMode.ASSOC, argument=None): ...
    def fetch_scalar(self, handle): ...
    def row_count(self, handle) -> int: ...


class PreparedStatement:
    """
    A statement ready to run, plus the buffered outcome of running it.
    """
    def __init__(self, sql, clause, positional_names):
        self.sql = sql
        self.clause = clause
        self.positional_names = positional_names

        self.rows = []
        self.rowcount = -1

    @property
    def is_positional(self):
        return bool(self.positional_names)

    def parameters(self, bindings):
        if self.is_positional:
            if isinstance(bindings, Mapping):
                values = [v for k, v in bindings.items() if isinstance(k, int)]
            else:
                values = list(bindings or ())

            if len(values) != len(self.positional_names):
                raise UnresolvedBinding(
                    f"Statement has {len(self.positional_names)} positional markers "
                    f"but {len(values)} values were bound"
                )
            return dict(zip(self.positional_names, values))

        if not bindings:
            return {}

        if not isinstance(bindings, Mapping):
            raise UnresolvedBinding("Positional values given for a statement without ? markers")

        return {str(k).lstrip(":"): v for k, v in bindings.items()}


def _escape(sql):
    return sql.replace(":", "\\:")


class EasyCursor:
    """
    Runs prepared SQL through SQLAlchemy.

    Bound to an Engine, every statement runs in its own transaction which is
    committed on success. Bound to a Connection, statements run on it and
    transaction control stays with the caller.
    """
    def __init__(self, bind):
        self.bind = bind
        self.dialect = sql_dialect(bind.dialect.name)

    def prepare(self, sql):
        sql = sql.strip()
        tokens = tokenize(sql, self.dialect)
        markers = {m.start: m for m in find_markers(tokens)}

        # text() only knows named binds, so ? markers become :positional_N.
        # Colons in quoted text and comments are escaped so text() leaves them alone.
        parts = []
        positional_names = []
        has_named = False
        position = 0
        for token in tokens:
            if token.start < position:
                continue

            parts.append(_escape(sql[position:token.start]))
            marker = markers.get(token.start)

            if marker is None:
                chunk = sql[token.start:token.end + 1]
                parts.append(_escape(chunk) if token.token_type in QUOTED else chunk)
                position = token.end + 1
            elif marker.positional:
                name = f"positional_{len(positional_names)}"
                positional_names.append(name)
                parts.append(f":{name}")
                position = marker.end
            else:
                has_named = True
                parts.append(marker.text)
                position = marker.end

        parts.append(_escape(sql[position:]))

        if has_named and positional_names:
            raise MixedMarkers(f"Statement mixes ? and :name markers: {sql}")

        return PreparedStatement(sql, text("".join(parts)), positional_names)

    def execute(self, handle: PreparedStatement, bindings=None) -> bool:
        params = handle.parameters(bindings)

        try:
            if isinstance(self.bind, Engine):
                with self.bind.begin() as connection:
                    self._run(connection, handle, params)
            else:
                self._run(self.bind, handle, params)
        except SQLAlchemyError as exc:
            raise ExecutionFailure(str(exc).splitlines()[0], orig=exc) from exc

        return True

    @staticmethod
    def _run(connection: Connection, handle, params):
        logger.debug(f"Executing {handle.sql}")
        result = connection.execute(handle.clause, params)

        handle.rows = result.all() if result.returns_rows else []
        handle.rowcount = result.rowcount

    def fetch_all(self, handle: PreparedStatement, mode=FetchMode.ASSOC, argument=None):
        try:
            mode = FetchMode(mode)
        except ValueError:
            raise UnsupportedFetchMode(f"Unknown fetch mode: {mode!r}") from None

        try:
            return self._shape(handle.rows, mode, argument)
        except (LookupError, SQLAlchemyError) as exc:
            raise ExecutionFailure(f"Cannot fetch rows as {mode.name}: {exc}", orig=exc) from exc

    @staticmethod
    def _shape(rows, mode, argument):
        if mode is FetchMode.ASSOC:
            return [dict(row._mapping) for row in rows]

        if mode is FetchMode.NUM:
            return [tuple(row) for row in rows]

        if mode is FetchMode.COLUMN:
            column = argument or 0
            if isinstance(column, str):
                return [row._mapping[column] for row in rows]
            return [row[column] for row in rows]

        if mode is FetchMode.KEY_PAIR:
            return {row[0]: row[1] for row in rows}

        return list(rows)

    def fetch_scalar(self, handle: PreparedStatement):
        if not handle.rows:
            return None
        return handle.rows[0][0]

    def row_count(self, handle: PreparedStatement) -> int:
        return max(handle.rowcount, 0)
