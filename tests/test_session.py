import pytest
from sqlalchemy import inspect

from studyassistant.db import session as db_session
from studyassistant.db.session import DEFAULT_DATABASE_URL, init_db, make_engine, normalize_database_url


@pytest.mark.parametrize("url,expected", [
    ("postgres://u:p@db:5432/app", "postgresql+psycopg://u:p@db:5432/app"),
    ("postgresql://u:p@db/app", "postgresql+psycopg://u:p@db/app"),
    ("postgresql+psycopg://u@db/app", "postgresql+psycopg://u@db/app"),
    ("sqlite:///./x.db", "sqlite:///./x.db"),
    (None, DEFAULT_DATABASE_URL),
    ("", DEFAULT_DATABASE_URL),
])
def test_normalize_database_url(url, expected):
    assert normalize_database_url(url) == expected


def test_in_memory_engine_keeps_tables_between_connections():
    engine = make_engine("sqlite://")
    init_db(bind=engine)
    tables = set(inspect(engine).get_table_names())
    assert {"users", "lectures", "summaries", "flashcards", "quizzes", "quiz_attempts"} <= tables
    engine.dispose()


def test_app_startup_creates_tables(client):
    assert "lectures" in inspect(db_session.engine).get_table_names()
