import logging

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from studyassistant.errors import MalformedGenerationOutputError
from studyassistant.llm.client import GenerationClient, GenerationOptions
from studyassistant.llm.parsing import extract_json_payload
from studyassistant.llm.prompts import build_flashcard_prompt, build_quiz_prompt, build_summary_prompt
from studyassistant.schemas.flashcard import FlashcardDraft
from studyassistant.schemas.quiz import QuestionDraft

logger = logging.getLogger(__name__)

OPTIONS_PER_QUESTION = 4

_flashcards = TypeAdapter(list[FlashcardDraft])
_questions = TypeAdapter(list[QuestionDraft])


def generate_summary(client: GenerationClient, text: str, tone: str = "concise") -> str:
    prompt = build_summary_prompt(text, tone)
    return client.complete(prompt.system, prompt.user, GenerationOptions(temperature=0.7, max_tokens=1500))


def generate_flashcards(client: GenerationClient, text: str, count: int = 10) -> list[FlashcardDraft]:
    """An empty list means the model produced zero cards; unusable output raises instead."""
    prompt = build_flashcard_prompt(text, count)
    raw = client.complete(prompt.system, prompt.user, GenerationOptions(temperature=0.8, max_tokens=2000))
    payload = extract_json_payload(raw, "array")
    try:
        cards = _flashcards.validate_python(payload)
    except PydanticValidationError as e:
        logger.warning(f"Flashcard payload failed validation: {e.error_count()} errors")
        raise MalformedGenerationOutputError("Generated flashcards have an invalid shape") from e
    for card in cards:
        card.mastery_level = 0
    return cards


def generate_quiz(client: GenerationClient, text: str, question_count: int = 5) -> list[QuestionDraft]:
    prompt = build_quiz_prompt(text, question_count)
    raw = client.complete(prompt.system, prompt.user, GenerationOptions(temperature=0.8, max_tokens=2500))
    payload = extract_json_payload(raw, "object")
    try:
        questions = _questions.validate_python(payload.get("questions"))
    except PydanticValidationError as e:
        logger.warning(f"Quiz payload failed validation: {e.error_count()} errors")
        raise MalformedGenerationOutputError("Generated quiz has an invalid shape") from e

    if not questions:
        raise MalformedGenerationOutputError("Generated quiz contains no questions")
    for i, q in enumerate(questions):
        if len(q.options) != OPTIONS_PER_QUESTION:
            raise MalformedGenerationOutputError(
                f"Question {i + 1} has {len(q.options)} options, expected {OPTIONS_PER_QUESTION}"
            )
        if sum(1 for o in q.options if o.is_correct) != 1:
            raise MalformedGenerationOutputError(f"Question {i + 1} must have exactly one correct option")
    return questions
