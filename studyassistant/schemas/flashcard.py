
from datetime import datetime
from pydantic import BaseModel, Field

class FlashcardDraft(BaseModel):
    """One flashcard as returned by the generation backend."""
    front_text: str = Field(min_length=1)
    back_text: str = Field(min_length=1)
    mastery_level: int = 0

class FlashcardGenerateIn(BaseModel):
    count: int = Field(10, ge=1, le=50)

class FlashcardUpdate(BaseModel):
    front_text: str | None = Field(default=None, min_length=1)
    back_text: str | None = Field(default=None, min_length=1)
    mastery_level: int | None = Field(default=None, ge=0, le=5)

class FlashcardOut(BaseModel):
    id: int
    lecture_id: int
    front_text: str
    back_text: str
    mastery_level: int
    created_at: datetime | None = None

    class Config:
        from_attributes = True

class FlashcardItem(BaseModel):
    flashcard: FlashcardOut

class FlashcardList(BaseModel):
    count: int
    flashcards: list[FlashcardOut]
