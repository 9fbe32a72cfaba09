from typing import Protocol

from sqlalchemy import MetaData, Table
from sqlalchemy.exc import SQLAlchemyError

from ..errors import ExecutionFailure
from ..logger import logger


class ColumnCatalog(Protocol):
    def columns_of(self, table) -> set: ...
    def auto_increment_columns_of(self, table) -> set: ...


class ReflectedCatalog:
    """
    Column information read from the database through SQLAlchemy reflection.
    """
    def __init__(self, bind):
        self.bind = bind

    def _reflect(self, table) -> Table:
        try:
            return Table(table, MetaData(), autoload_with=self.bind)
        except SQLAlchemyError as exc:
            raise ExecutionFailure(f"Could not read columns of table '{table}': {exc}", orig=exc) from exc

    def columns_of(self, table):
        return {column.name for column in self._reflect(table).columns}

    def auto_increment_columns_of(self, table):
        reflected = self._reflect(table)

        names = {column.name for column in reflected.columns if column.autoincrement is True}
        if reflected.autoincrement_column is not None:
            names.add(reflected.autoincrement_column.name)
        return names


def filter_values(catalog: ColumnCatalog, values, table):
    """
    Keep the values whose key is a column of ``table``, minus auto-increment
    columns. Order is preserved.
    """
    columns = catalog.columns_of(table)
    auto_increment = catalog.auto_increment_columns_of(table)

    kept = {}
    for name, value in values.items():
        if name not in columns:
            logger.debug(f"Dropping '{name}': not a column of table '{table}'")
            continue
        if name in auto_increment:
            logger.debug(f"Dropping '{name}': auto-increment column of table '{table}'")
            continue
        kept[name] = value
    return kept
