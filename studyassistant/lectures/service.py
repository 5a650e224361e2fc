import logging

import markdown
from sqlalchemy import select
from sqlalchemy.orm import Session

from studyassistant.errors import ExtractionError, UnsupportedMediaTypeError
from studyassistant.llm.generation import generate_summary
from studyassistant.models.flashcard import Flashcard
from studyassistant.models.lecture import Lecture, Summary, TONES
from studyassistant.models.quiz import Quiz, QuizAttempt
from studyassistant.models.user import User
from studyassistant.services import Services
from studyassistant.uploads.extractor import extract_text, get_media_kind, validate_upload

logger = logging.getLogger(__name__)


def render_markdown(md: str) -> str:
    return markdown.markdown(md or "", extensions=["fenced_code", "tables", "nl2br"])


def _discard_file(services: Services, key: str) -> None:
    """Best effort: a failed delete is logged and never replaces the caller's error."""
    try:
        services.storage.delete(key)
    except Exception as e:
        logger.error(f"Failed to delete stored file {key}: {e}")


def _attach_summary(db: Session, services: Services, lecture: Lecture, tone: str) -> Summary | None:
    try:
        generator = services.require_generator()
        with services.jobs.track("summary"):
            content = generate_summary(generator, lecture.raw_content, tone)
        summary = Summary(lecture_id=lecture.id, content_markdown=content, tone=tone)
        db.add(summary)
        db.commit()
        return summary
    except Exception as e:
        db.rollback()
        logger.warning(f"AI summary generation failed for lecture {lecture.id}: {e}")
        return None


def create_lecture(
    db: Session,
    services: Services,
    user: User,
    *,
    filename: str,
    content_type: str | None,
    data: bytes,
    title: str | None,
    tone: str | None,
    max_bytes: int,
) -> Lecture:
    """Validate, store, extract, persist, then try to summarise.

    Once the file is in storage any failure removes it again before the
    error propagates. The summary step never fails the upload.
    """
    validate_upload(filename, content_type, len(data), max_bytes)
    media_kind = get_media_kind(filename)
    if media_kind == "unknown":
        raise UnsupportedMediaTypeError("Unsupported file type")
    tone = tone if tone in TONES else "concise"

    stored = services.storage.save(data, filename, content_type)
    try:
        raw_content = extract_text(data, media_kind)
        if not raw_content.strip():
            raise ExtractionError("No text could be extracted from the file")
        lecture = Lecture(
            user_id=user.id,
            title=(title or "").strip() or filename,
            media_type=media_kind,
            raw_content=raw_content,
            file_url=stored.url,
            file_path=stored.key,
            resource_type=stored.resource_type,
        )
        db.add(lecture)
        db.commit()
        db.refresh(lecture)
    except Exception:
        db.rollback()
        _discard_file(services, stored.key)
        raise

    _attach_summary(db, services, lecture, tone)
    return lecture


def list_lectures(db: Session, user: User) -> list[Lecture]:
    return (db.query(Lecture)
              .filter(Lecture.user_id == user.id)
              .order_by(Lecture.uploaded_at.desc(), Lecture.id.desc())
              .all())


def latest_summary(db: Session, lecture: Lecture) -> Summary | None:
    return (db.query(Summary)
              .filter(Summary.lecture_id == lecture.id)
              .order_by(Summary.created_at.desc(), Summary.id.desc())
              .first())


def delete_lecture(db: Session, services: Services, lecture: Lecture) -> None:
    """Removes the stored file and everything hanging off the lecture."""
    if lecture.file_path:
        _discard_file(services, lecture.file_path)

    quiz_ids = select(Quiz.id).where(Quiz.lecture_id == lecture.id)
    db.query(QuizAttempt).filter(QuizAttempt.quiz_id.in_(quiz_ids)).delete(synchronize_session=False)
    db.query(Quiz).filter(Quiz.lecture_id == lecture.id).delete(synchronize_session=False)
    db.query(Flashcard).filter(Flashcard.lecture_id == lecture.id).delete(synchronize_session=False)
    db.query(Summary).filter(Summary.lecture_id == lecture.id).delete(synchronize_session=False)
    db.delete(lecture)
    db.commit()
