import json
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LLM_PROVIDER"] = "openai"
os.environ.pop("OPENAI_API_KEY", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from studyassistant.auth.deps import get_db
from studyassistant.db.session import init_db, make_engine
from studyassistant.llm.client import GenerationClient
from studyassistant.main import create_app
from studyassistant.models.user import User
from studyassistant.services import Services
from studyassistant.uploads.storage import LocalStorage

SUMMARY_MD = "## Photosynthesis\n\n- **Light energy** becomes chemical energy"

FLASHCARDS_REPLY = "Here you go:\n" + json.dumps([
    {"front_text": "What does photosynthesis convert?", "back_text": "Light into chemical energy", "mastery_level": 3},
    {"front_text": "Where does it happen?", "back_text": "Chloroplasts", "mastery_level": 0},
    {"front_text": "Main product?", "back_text": "Glucose", "mastery_level": 0},
]) + "\nEnjoy!"


def make_question(text, correct, explanation="because"):
    return {
        "question_text": text,
        "options": [{"option_text": f"{text} option {i}", "is_correct": i == correct} for i in range(4)],
        "explanation": explanation,
    }


QUIZ_REPLY = "```json\n" + json.dumps({"questions": [
    make_question("Q1", 1),
    make_question("Q2", 0),
    make_question("Q3", 3),
]}) + "\n```"


class FakeBackend:
    """Answers by prompt kind; set ``error`` or ``replies`` to steer a test."""

    name = "fake"

    def __init__(self):
        self.calls = []
        self.error = None
        self.replies = {"summary": SUMMARY_MD, "flashcards": FLASHCARDS_REPLY, "quiz": QUIZ_REPLY}

    def complete(self, system, user, options):
        self.calls.append((system, user, options))
        if self.error is not None:
            raise self.error
        if "summarizer" in system:
            return self.replies["summary"]
        if "flashcards" in system:
            return self.replies["flashcards"]
        return self.replies["quiz"]


@pytest.fixture
def engine():
    eng = make_engine("sqlite://")
    init_db(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def upload_root(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def services(backend, upload_root):
    return Services(storage=LocalStorage(upload_root), generator=GenerationClient(backend))


@pytest.fixture
def app(services, session_factory):
    application = create_app(services=services)

    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    application.dependency_overrides[get_db] = _get_db
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def register(client, email="alice@example.com", password="password123", full_name="Alice"):
    r = client.post("/api/auth/register", json={"email": email, "password": password, "full_name": full_name})
    assert r.status_code == 201, r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}


def upload_txt(client, headers, content="Photosynthesis converts light into chemical energy.", title="Bio 101", tone="concise"):
    r = client.post(
        "/api/lectures/upload",
        headers=headers,
        files={"file": ("notes.txt", content.encode("utf-8"), "text/plain")},
        data={"title": title, "tone": tone},
    )
    assert r.status_code == 201, r.text
    return r.json()["lecture"]


@pytest.fixture
def alice(client):
    return register(client)


@pytest.fixture
def bob(client):
    return register(client, email="bob@example.com", full_name="Bob")


@pytest.fixture
def make_admin(session_factory):
    def _promote(email):
        with session_factory() as db:
            user = db.query(User).filter(User.email == email).one()
            user.role = "admin"
            db.commit()
    return _promote
