from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from studyassistant.auth.deps import get_db, require_admin
from studyassistant.models.flashcard import Flashcard
from studyassistant.models.lecture import Lecture
from studyassistant.models.quiz import Quiz
from studyassistant.models.user import User
from studyassistant.schemas.admin import AdminLectureList, AdminStats, AdminUserList
from studyassistant.schemas.auth import UserOut
from studyassistant.schemas.lecture import LectureItem
from studyassistant.services import Services, get_services

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])

@router.get("/stats", response_model=AdminStats)
def stats(db: Session = Depends(get_db), services: Services = Depends(get_services)):
    return AdminStats(
        users=db.query(User).count(),
        lectures=db.query(Lecture).count(),
        flashcards=db.query(Flashcard).count(),
        quizzes=db.query(Quiz).count(),
        jobs=services.jobs.stats(),
    )

@router.get("/users", response_model=AdminUserList)
def all_users(db: Session = Depends(get_db)):
    users = db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
    return AdminUserList(count=len(users), users=[UserOut.model_validate(u) for u in users])

@router.get("/lectures", response_model=AdminLectureList)
def all_lectures(db: Session = Depends(get_db)):
    lectures = db.query(Lecture).order_by(Lecture.uploaded_at.desc(), Lecture.id.desc()).all()
    return AdminLectureList(count=len(lectures), lectures=[LectureItem.model_validate(l) for l in lectures])
