from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from studyassistant.auth.deps import get_db, get_current_user
from studyassistant.auth.ownership import get_owned_lecture
from studyassistant.config import settings
from studyassistant.lectures.service import (
    create_lecture, delete_lecture, latest_summary, list_lectures, render_markdown,
)
from studyassistant.models.user import User
from studyassistant.schemas.lecture import (
    LectureCreated, LectureDetail, LectureItem, LectureList, LectureOut, MessageOut, SummaryOut,
)
from studyassistant.services import Services, get_services
from studyassistant.uploads.extractor import read_capped

router = APIRouter(prefix="/lectures", tags=["lectures"])

@router.post("/upload", response_model=LectureCreated, status_code=201)
def upload_lecture(
    file: UploadFile = File(...),
    title: str | None = Form(None),
    tone: str | None = Form("concise"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    max_bytes = settings.max_upload_mb * 1024 * 1024
    data = read_capped(file.file, max_bytes)
    lecture = create_lecture(
        db, services, user,
        filename=file.filename or "",
        content_type=file.content_type,
        data=data,
        title=title,
        tone=tone,
        max_bytes=max_bytes,
    )
    return LectureCreated(lecture=LectureItem.model_validate(lecture))

@router.get("", response_model=LectureList)
def get_lectures(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    lectures = list_lectures(db, user)
    return LectureList(count=len(lectures), lectures=[LectureItem.model_validate(l) for l in lectures])

@router.get("/{lecture_id}", response_model=LectureDetail)
def get_lecture(lecture_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    lecture = get_owned_lecture(db, lecture_id, user)
    summary = latest_summary(db, lecture)
    summary_out = None
    if summary:
        summary_out = SummaryOut.model_validate(summary)
        summary_out.content_html = render_markdown(summary.content_markdown)
    return LectureDetail(lecture=LectureOut.model_validate(lecture), summary=summary_out)

@router.delete("/{lecture_id}", response_model=MessageOut)
def remove_lecture(
    lecture_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    lecture = get_owned_lecture(db, lecture_id, user)
    delete_lecture(db, services, lecture)
    return MessageOut(message="Lecture deleted")
