from sqlalchemy.orm import Session

from studyassistant.llm.generation import generate_flashcards
from studyassistant.models.flashcard import Flashcard
from studyassistant.models.lecture import Lecture
from studyassistant.schemas.flashcard import FlashcardUpdate
from studyassistant.services import Services


def create_flashcards(db: Session, services: Services, lecture: Lecture, count: int) -> list[Flashcard]:
    generator = services.require_generator()
    with services.jobs.track("flashcards"):
        drafts = generate_flashcards(generator, lecture.raw_content, count)
    cards = [
        Flashcard(lecture_id=lecture.id, front_text=d.front_text, back_text=d.back_text, mastery_level=0)
        for d in drafts
    ]
    db.add_all(cards)
    db.commit()
    for card in cards:
        db.refresh(card)
    return cards


def list_flashcards(db: Session, lecture: Lecture) -> list[Flashcard]:
    return (db.query(Flashcard)
              .filter(Flashcard.lecture_id == lecture.id)
              .order_by(Flashcard.id)
              .all())


def update_flashcard(db: Session, card: Flashcard, body: FlashcardUpdate) -> Flashcard:
    if body.front_text is not None:
        card.front_text = body.front_text
    if body.back_text is not None:
        card.back_text = body.back_text
    if body.mastery_level is not None:
        card.mastery_level = body.mastery_level
    db.commit()
    db.refresh(card)
    return card
