"""Every read or write of a lecture-owned record is authorized here.

Flashcards, summaries and quizzes carry no owner column; they belong to
whoever owns their lecture.
"""

from sqlalchemy.orm import Session
from studyassistant.errors import NotAuthorizedError, NotFoundError
from studyassistant.models.flashcard import Flashcard
from studyassistant.models.lecture import Lecture
from studyassistant.models.quiz import Quiz
from studyassistant.models.user import User


def authorize_lecture(lecture: Lecture | None, user: User) -> Lecture:
    if lecture is None:
        raise NotFoundError("Lecture not found")
    if lecture.user_id != user.id:
        raise NotAuthorizedError("Not authorized")
    return lecture

def get_owned_lecture(db: Session, lecture_id: int, user: User) -> Lecture:
    return authorize_lecture(db.get(Lecture, lecture_id), user)

def get_owned_flashcard(db: Session, flashcard_id: int, user: User) -> Flashcard:
    card = db.get(Flashcard, flashcard_id)
    if card is None:
        raise NotFoundError("Flashcard not found")
    authorize_lecture(db.get(Lecture, card.lecture_id), user)
    return card

def get_owned_quiz(db: Session, quiz_id: int, user: User) -> Quiz:
    quiz = db.get(Quiz, quiz_id)
    if quiz is None:
        raise NotFoundError("Quiz not found")
    authorize_lecture(db.get(Lecture, quiz.lecture_id), user)
    return quiz
