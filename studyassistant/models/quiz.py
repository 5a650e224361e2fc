import json
from sqlalchemy import Column, Integer, Float, String, Text, DateTime, ForeignKey, Index, func
from studyassistant.db.session import Base

class Quiz(Base):
    __tablename__ = "quizzes"
    id = Column(Integer, primary_key=True)
    lecture_id = Column(Integer, ForeignKey("lectures.id"), index=True, nullable=False)
    title = Column(String(255), nullable=False)
    total_questions = Column(Integer, nullable=False)
    questions_json = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    @property
    def questions(self) -> list[dict]:
        return json.loads(self.questions_json or "[]")

    @questions.setter
    def questions(self, value: list[dict]):
        self.questions_json = json.dumps(value, ensure_ascii=False)


class QuizAttempt(Base):
    __tablename__ = "quiz_attempts"
    __table_args__ = (Index("ix_quiz_attempts_user_quiz", "user_id", "quiz_id"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    quiz_id = Column(Integer, ForeignKey("quizzes.id"), nullable=False)
    score = Column(Float, nullable=False)
    correct_answers = Column(Integer, nullable=False)
    total_questions = Column(Integer, nullable=False)
    attempted_at = Column(DateTime, server_default=func.now())
