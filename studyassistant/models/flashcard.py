
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, func
from studyassistant.db.session import Base

class Flashcard(Base):
    __tablename__ = "flashcards"
    id = Column(Integer, primary_key=True)
    lecture_id = Column(Integer, ForeignKey("lectures.id"), index=True, nullable=False)
    front_text = Column(Text, nullable=False)
    back_text = Column(Text, nullable=False)
    mastery_level = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
