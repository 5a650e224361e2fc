
from pydantic import BaseModel
from studyassistant.schemas.auth import UserOut
from studyassistant.schemas.lecture import LectureItem

class JobStats(BaseModel):
    active_count: int
    active_by_type: dict[str, int]
    queue_length: int = 0
    active_jobs: list[dict]

class AdminStats(BaseModel):
    users: int
    lectures: int
    flashcards: int
    quizzes: int
    jobs: JobStats

class AdminUserList(BaseModel):
    count: int
    users: list[UserOut]

class AdminLectureList(BaseModel):
    count: int
    lectures: list[LectureItem]
