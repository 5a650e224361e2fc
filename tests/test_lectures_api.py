from pathlib import Path

from conftest import upload_txt
from studyassistant.config import settings
from studyassistant.errors import GenerationFailedError
from studyassistant.models.flashcard import Flashcard
from studyassistant.models.lecture import Summary
from studyassistant.models.quiz import QuizAttempt


def stored_files(root):
    return [p for p in Path(root).rglob("*") if p.is_file()]


def test_upload_extracts_and_summarises(client, alice, backend, upload_root):
    lecture = upload_txt(client, alice, content="Photosynthesis basics", title="Bio 101")
    assert lecture["title"] == "Bio 101"
    assert lecture["media_type"] == "txt"
    assert lecture["file_url"].startswith("file://")
    assert "raw_content" not in lecture
    assert len(stored_files(upload_root)) == 1

    r = client.get(f"/api/lectures/{lecture['id']}", headers=alice)
    assert r.status_code == 200
    body = r.json()
    assert body["lecture"]["raw_content"] == "Photosynthesis basics"
    assert body["summary"]["content_markdown"].startswith("## Photosynthesis")
    assert "<h2>Photosynthesis</h2>" in body["summary"]["content_html"]
    assert body["summary"]["tone"] == "concise"
    assert len(backend.calls) == 1


def test_title_defaults_to_filename(client, alice):
    r = client.post(
        "/api/lectures/upload", headers=alice,
        files={"file": ("week1.txt", b"content", "text/plain")},
    )
    assert r.status_code == 201
    assert r.json()["lecture"]["title"] == "week1.txt"


def test_unknown_tone_falls_back_to_concise(client, alice, session_factory):
    lecture = upload_txt(client, alice, tone="sarcastic")
    with session_factory() as db:
        assert db.query(Summary).filter_by(lecture_id=lecture["id"]).one().tone == "concise"


def test_summary_failure_does_not_fail_upload(client, alice, backend):
    backend.error = GenerationFailedError("upstream 500")
    lecture = upload_txt(client, alice)
    body = client.get(f"/api/lectures/{lecture['id']}", headers=alice).json()
    assert body["summary"] is None


def test_upload_without_generator_still_succeeds(client, alice, services):
    services.generator = None
    lecture = upload_txt(client, alice)
    assert client.get(f"/api/lectures/{lecture['id']}", headers=alice).json()["summary"] is None


def test_upload_requires_auth(client):
    r = client.post("/api/lectures/upload", files={"file": ("a.txt", b"x", "text/plain")})
    assert r.status_code == 401


def test_unsupported_type_is_rejected(client, alice, upload_root):
    r = client.post(
        "/api/lectures/upload", headers=alice,
        files={"file": ("slides.pptx", b"PK..", "application/vnd.ms-powerpoint")},
    )
    assert r.status_code == 400
    assert r.json()["error"] == "UNSUPPORTED_MEDIA_TYPE"
    assert stored_files(upload_root) == []


def test_extension_and_mime_must_agree(client, alice):
    r = client.post(
        "/api/lectures/upload", headers=alice,
        files={"file": ("notes.pdf", b"plain", "text/plain")},
    )
    assert r.status_code == 400
    assert r.json()["error"] == "FILE_TYPE_MISMATCH"


def test_oversized_upload_is_rejected(client, alice, monkeypatch, upload_root):
    monkeypatch.setattr(settings, "max_upload_mb", 1)
    r = client.post(
        "/api/lectures/upload", headers=alice,
        files={"file": ("big.txt", b"a" * (1024 * 1024 + 1), "text/plain")},
    )
    assert r.status_code == 400
    assert r.json()["error"] == "FILE_TOO_LARGE"
    assert stored_files(upload_root) == []


def test_upload_at_the_size_limit_is_accepted(client, alice, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_mb", 1)
    r = client.post(
        "/api/lectures/upload", headers=alice,
        files={"file": ("limit.txt", b"a" * (1024 * 1024), "text/plain")},
    )
    assert r.status_code == 201


def test_empty_text_is_an_extraction_failure_and_file_is_removed(client, alice, upload_root):
    r = client.post(
        "/api/lectures/upload", headers=alice,
        files={"file": ("blank.txt", b"   \n", "text/plain")},
    )
    assert r.status_code == 400
    assert r.json()["error"] == "EXTRACTION_FAILED"
    assert stored_files(upload_root) == []
    assert client.get("/api/lectures", headers=alice).json()["count"] == 0


def test_corrupt_pdf_hides_parser_details(client, alice, upload_root):
    r = client.post(
        "/api/lectures/upload", headers=alice,
        files={"file": ("broken.pdf", b"definitely not a pdf", "application/pdf")},
    )
    assert r.status_code == 400
    assert r.json() == {"error": "EXTRACTION_FAILED", "message": "Failed to extract text from file"}
    assert stored_files(upload_root) == []


def test_image_upload_gets_placeholder_text(client, alice):
    r = client.post(
        "/api/lectures/upload", headers=alice,
        files={"file": ("board.png", b"\x89PNG\r\n", "image/png")},
    )
    assert r.status_code == 201
    lecture = r.json()["lecture"]
    assert lecture["media_type"] == "image"
    detail = client.get(f"/api/lectures/{lecture['id']}", headers=alice).json()
    assert "OCR not implemented" in detail["lecture"]["raw_content"]


def test_list_is_per_user_and_newest_first(client, alice, bob):
    first = upload_txt(client, alice, title="First")
    second = upload_txt(client, alice, title="Second")
    upload_txt(client, bob, title="Bob's")

    body = client.get("/api/lectures", headers=alice).json()
    assert body["count"] == 2
    assert [l["id"] for l in body["lectures"]] == [second["id"], first["id"]]
    assert all("raw_content" not in l for l in body["lectures"])


def test_other_users_lecture_is_forbidden(client, alice, bob):
    lecture = upload_txt(client, alice)
    r = client.get(f"/api/lectures/{lecture['id']}", headers=bob)
    assert r.status_code == 403
    assert r.json()["error"] == "NOT_AUTHORIZED"
    assert client.delete(f"/api/lectures/{lecture['id']}", headers=bob).status_code == 403


def test_missing_lecture_is_not_found(client, alice):
    r = client.get("/api/lectures/4242", headers=alice)
    assert r.status_code == 404
    assert r.json() == {"error": "NOT_FOUND", "message": "Lecture not found"}


def test_delete_cascades_to_everything(client, alice, upload_root, session_factory):
    lecture = upload_txt(client, alice)
    lid = lecture["id"]
    assert client.post(f"/api/flashcards/generate/{lid}", headers=alice, json={"count": 3}).status_code == 201
    quiz = client.post(f"/api/quizzes/generate/{lid}", headers=alice, json={"questionCount": 3}).json()["quiz"]
    assert client.post(f"/api/quizzes/{quiz['id']}/submit", headers=alice, json={"answers": [1, 0, 3]}).status_code == 200

    r = client.delete(f"/api/lectures/{lid}", headers=alice)
    assert r.status_code == 200
    assert r.json() == {"message": "Lecture deleted"}

    assert client.get(f"/api/lectures/{lid}", headers=alice).status_code == 404
    assert client.get(f"/api/quizzes/{quiz['id']}", headers=alice).status_code == 404
    assert stored_files(upload_root) == []
    with session_factory() as db:
        assert db.query(Flashcard).count() == 0
        assert db.query(Summary).count() == 0
        assert db.query(QuizAttempt).count() == 0
