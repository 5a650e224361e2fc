
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, StrictInt

class OptionDraft(BaseModel):
    option_text: str = Field(min_length=1)
    is_correct: bool = False

class QuestionDraft(BaseModel):
    """One multiple-choice question as returned by the generation backend."""
    question_text: str = Field(min_length=1)
    options: list[OptionDraft]
    explanation: str = ""

class QuizGenerateIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(default=None, max_length=255)
    question_count: int = Field(5, ge=1, le=20, alias="questionCount")

class QuizSubmitIn(BaseModel):
    answers: list[StrictInt | None] = Field(default_factory=list)

class QuizOut(BaseModel):
    id: int
    lecture_id: int
    title: str
    total_questions: int
    questions: list[QuestionDraft]
    created_at: datetime | None = None

    class Config:
        from_attributes = True

class QuizItem(BaseModel):
    quiz: QuizOut

class QuizList(BaseModel):
    count: int
    quizzes: list[QuizOut]

class QuestionResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: str
    user_answer: str | None = Field(alias="userAnswer")
    correct_answer: str | None = Field(alias="correctAnswer")
    is_correct: bool = Field(alias="isCorrect")
    explanation: str

class AttemptOut(BaseModel):
    id: int
    user_id: int
    quiz_id: int
    score: float
    correct_answers: int
    total_questions: int
    attempted_at: datetime | None = None

    class Config:
        from_attributes = True

class AttemptWithQuiz(AttemptOut):
    quiz_title: str | None = None
    lecture_id: int | None = None

class QuizResultOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    score: float
    correct_answers: int = Field(alias="correctAnswers")
    total_questions: int = Field(alias="totalQuestions")
    results: list[QuestionResult]
    attempt: AttemptOut

class AttemptList(BaseModel):
    count: int
    attempts: list[AttemptWithQuiz]
