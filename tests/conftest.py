import pytest
from unittest.mock import MagicMock

from sqlalchemy import create_engine, insert

from sqlalchemy_easy.base.catalog import ReflectedCatalog
from sqlalchemy_easy.base.cursor import EasyCursor
from sqlalchemy_easy.base.reporter import ErrorReporter
from sqlalchemy_easy.base.session import EasySession

from models import Base, Fruit

FRUITS = [
    dict(name="mango", color="yellow", qty=3),
    dict(name="kiwi", color="green", qty=5),
    dict(name="apple", color="red", qty=0),
]

@pytest.fixture
def engine():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()

@pytest.fixture
def fruits(engine):
    with engine.begin() as conn:
        conn.execute(insert(Fruit.__table__), FRUITS)
    return FRUITS

@pytest.fixture
def reporter():
    return ErrorReporter()

@pytest.fixture
def session(engine, reporter):
    return EasySession(EasyCursor(engine), catalog=ReflectedCatalog(engine), reporter=reporter)

@pytest.fixture
def statement():
    # Stands in for the database; records every call it receives
    return MagicMock(spec=EasyCursor)
