from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from studyassistant.auth.deps import get_db, get_current_user
from studyassistant.auth.ownership import get_owned_flashcard, get_owned_lecture
from studyassistant.flashcards.service import create_flashcards, list_flashcards, update_flashcard
from studyassistant.models.user import User
from studyassistant.schemas.flashcard import (
    FlashcardGenerateIn, FlashcardItem, FlashcardList, FlashcardOut, FlashcardUpdate,
)
from studyassistant.schemas.lecture import MessageOut
from studyassistant.services import Services, get_services

router = APIRouter(prefix="/flashcards", tags=["flashcards"])

def _as_list(cards) -> FlashcardList:
    return FlashcardList(count=len(cards), flashcards=[FlashcardOut.model_validate(c) for c in cards])

@router.post("/generate/{lecture_id}", response_model=FlashcardList, status_code=201)
def generate(
    lecture_id: int,
    body: FlashcardGenerateIn | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    services: Services = Depends(get_services),
):
    body = body or FlashcardGenerateIn()
    lecture = get_owned_lecture(db, lecture_id, user)
    return _as_list(create_flashcards(db, services, lecture, body.count))

@router.get("/lecture/{lecture_id}", response_model=FlashcardList)
def by_lecture(lecture_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    lecture = get_owned_lecture(db, lecture_id, user)
    return _as_list(list_flashcards(db, lecture))

@router.get("/{flashcard_id}", response_model=FlashcardItem)
def get_flashcard(flashcard_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    card = get_owned_flashcard(db, flashcard_id, user)
    return FlashcardItem(flashcard=FlashcardOut.model_validate(card))

@router.put("/{flashcard_id}", response_model=FlashcardItem)
def put_flashcard(
    flashcard_id: int,
    body: FlashcardUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    card = get_owned_flashcard(db, flashcard_id, user)
    return FlashcardItem(flashcard=FlashcardOut.model_validate(update_flashcard(db, card, body)))

@router.delete("/{flashcard_id}", response_model=MessageOut)
def delete_flashcard(flashcard_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    card = get_owned_flashcard(db, flashcard_id, user)
    db.delete(card)
    db.commit()
    return MessageOut(message="Flashcard deleted")
