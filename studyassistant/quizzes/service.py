import logging

from sqlalchemy.orm import Session

from studyassistant.llm.generation import generate_quiz
from studyassistant.models.lecture import Lecture
from studyassistant.models.quiz import Quiz, QuizAttempt
from studyassistant.models.user import User
from studyassistant.quizzes.scoring import QuizScore, score_quiz
from studyassistant.services import Services

logger = logging.getLogger(__name__)


def create_quiz(db: Session, services: Services, lecture: Lecture, title: str | None, question_count: int) -> Quiz:
    generator = services.require_generator()
    with services.jobs.track("quiz"):
        questions = generate_quiz(generator, lecture.raw_content, question_count)
    quiz = Quiz(
        lecture_id=lecture.id,
        title=(title or "").strip() or f"Quiz: {lecture.title}",
        total_questions=len(questions),
        questions=[q.model_dump() for q in questions],
    )
    db.add(quiz)
    db.commit()
    db.refresh(quiz)
    return quiz


def list_quizzes(db: Session, lecture: Lecture) -> list[Quiz]:
    return (db.query(Quiz)
              .filter(Quiz.lecture_id == lecture.id)
              .order_by(Quiz.created_at.desc(), Quiz.id.desc())
              .all())


def submit_attempt(db: Session, user: User, quiz: Quiz, answers: list[int | None]) -> tuple[QuizScore, QuizAttempt]:
    result = score_quiz(quiz, answers)
    attempt = QuizAttempt(
        user_id=user.id,
        quiz_id=quiz.id,
        score=result.score,
        correct_answers=result.correct_count,
        total_questions=result.total_questions,
    )
    db.add(attempt)
    db.commit()
    db.refresh(attempt)
    logger.info(f"Quiz {quiz.id} attempt by user {user.id}: {result.correct_count}/{result.total_questions}")
    return result, attempt


def list_attempts(db: Session, user: User):
    return (db.query(QuizAttempt, Quiz.title, Quiz.lecture_id)
              .outerjoin(Quiz, Quiz.id == QuizAttempt.quiz_id)
              .filter(QuizAttempt.user_id == user.id)
              .order_by(QuizAttempt.attempted_at.desc(), QuizAttempt.id.desc())
              .all())


def delete_quiz(db: Session, quiz: Quiz) -> None:
    db.query(QuizAttempt).filter(QuizAttempt.quiz_id == quiz.id).delete(synchronize_session=False)
    db.delete(quiz)
    db.commit()
