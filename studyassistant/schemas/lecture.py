
from datetime import datetime
from pydantic import BaseModel

class LectureItem(BaseModel):
    id: int
    user_id: int
    title: str
    media_type: str
    file_url: str
    uploaded_at: datetime | None = None

    class Config:
        from_attributes = True

class LectureOut(LectureItem):
    raw_content: str

class SummaryOut(BaseModel):
    id: int
    lecture_id: int
    content_markdown: str
    content_html: str = ""
    tone: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True

class LectureCreated(BaseModel):
    lecture: LectureItem

class LectureList(BaseModel):
    count: int
    lectures: list[LectureItem]

class LectureDetail(BaseModel):
    lecture: LectureOut
    summary: SummaryOut | None = None

class MessageOut(BaseModel):
    message: str
