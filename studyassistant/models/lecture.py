
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, func
from sqlalchemy.orm import relationship
from studyassistant.db.session import Base

MEDIA_TYPES = ("pdf", "docx", "txt", "image")
TONES = ("concise", "detailed", "simple", "academic")

class Lecture(Base):
    __tablename__ = "lectures"
    __table_args__ = (Index("ix_lectures_user_uploaded", "user_id", "uploaded_at"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    title = Column(String(255), nullable=False)
    media_type = Column(String(10), nullable=False)
    raw_content = Column(Text, nullable=False)
    file_url = Column(String(1024), nullable=False)
    file_path = Column(String(1024))
    resource_type = Column(String(20), default="raw")
    uploaded_at = Column(DateTime, server_default=func.now())

    owner = relationship("User", back_populates="lectures")


class Summary(Base):
    __tablename__ = "summaries"
    id = Column(Integer, primary_key=True)
    lecture_id = Column(Integer, ForeignKey("lectures.id"), index=True, nullable=False)
    content_markdown = Column(Text, nullable=False)
    tone = Column(String(20), default="concise", nullable=False)
    created_at = Column(DateTime, server_default=func.now())
