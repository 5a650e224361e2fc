from dataclasses import asdict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from studyassistant.auth.deps import get_db, get_current_user
from studyassistant.auth.ownership import get_owned_lecture, get_owned_quiz
from studyassistant.models.user import User
from studyassistant.quizzes.service import create_quiz, delete_quiz, list_attempts, list_quizzes, submit_attempt
from studyassistant.schemas.lecture import MessageOut
from studyassistant.schemas.quiz import (
    AttemptList, AttemptOut, AttemptWithQuiz, QuestionResult, QuizGenerateIn, QuizItem, QuizList,
    QuizOut, QuizResultOut, QuizSubmitIn,
)
from studyassistant.services import Services, get_services

router = APIRouter(prefix="/quizzes", tags=["quizzes"])

@router.post("/generate/{lecture_id}", response_model=QuizItem, status_code=201)
def generate(
    lecture_id: int,
    body: QuizGenerateIn | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    body = body or QuizGenerateIn()
    lecture = get_owned_lecture(db, lecture_id, user)
    quiz = create_quiz(db, services, lecture, body.title, body.question_count)
    return QuizItem(quiz=QuizOut.model_validate(quiz))

@router.get("/lecture/{lecture_id}", response_model=QuizList)
def by_lecture(lecture_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    lecture = get_owned_lecture(db, lecture_id, user)
    quizzes = list_quizzes(db, lecture)
    return QuizList(count=len(quizzes), quizzes=[QuizOut.model_validate(q) for q in quizzes])

@router.get("/attempts", response_model=AttemptList)
def my_attempts(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    rows = list_attempts(db, user)
    attempts = [
        AttemptWithQuiz(**AttemptOut.model_validate(attempt).model_dump(), quiz_title=title, lecture_id=lecture_id)
        for attempt, title, lecture_id in rows
    ]
    return AttemptList(count=len(attempts), attempts=attempts)

@router.get("/{quiz_id}", response_model=QuizItem)
def get_quiz(quiz_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return QuizItem(quiz=QuizOut.model_validate(get_owned_quiz(db, quiz_id, user)))

@router.post("/{quiz_id}/submit", response_model=QuizResultOut)
def submit(
    quiz_id: int,
    body: QuizSubmitIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    quiz = get_owned_quiz(db, quiz_id, user)
    result, attempt = submit_attempt(db, user, quiz, body.answers)
    return QuizResultOut(
        score=result.score,
        correct_answers=result.correct_count,
        total_questions=result.total_questions,
        results=[QuestionResult(**asdict(r)) for r in result.results],
        attempt=AttemptOut.model_validate(attempt),
    )

@router.delete("/{quiz_id}", response_model=MessageOut)
def remove_quiz(quiz_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    delete_quiz(db, get_owned_quiz(db, quiz_id, user))
    return MessageOut(message="Quiz deleted")
