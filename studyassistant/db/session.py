from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import StaticPool
from studyassistant.config import settings

class Base(DeclarativeBase):
    pass

DEFAULT_DATABASE_URL = "sqlite:///./study_assistant.db"

def normalize_database_url(url: str | None) -> str:
    """Hosted Postgres hands out postgres:// urls; SQLAlchemy needs the psycopg driver spelled out."""
    url = url or DEFAULT_DATABASE_URL
    for scheme in ("postgres://", "postgresql://"):
        if url.startswith(scheme):
            return "postgresql+psycopg://" + url[len(scheme):]
    return url

def make_engine(url: str | None) -> Engine:
    url = normalize_database_url(url)
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)
    kwargs = {"connect_args": {"check_same_thread": False}}
    # an in-memory database only lives as long as its one connection
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)

engine = make_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def init_db(bind: Engine | None = None):
    from studyassistant.models import user, lecture, flashcard, quiz  # noqa: F401 registers tables
    Base.metadata.create_all(bind=bind or engine)
