"""Quiz scoring. Pure functions, no I/O."""

from dataclasses import dataclass, field
from typing import Any, Sequence

from studyassistant.errors import InvariantViolationError


@dataclass
class QuestionOutcome:
    question: str
    user_answer: str | None
    correct_answer: str | None
    is_correct: bool
    explanation: str


@dataclass
class QuizScore:
    score: float
    correct_count: int
    total_questions: int
    results: list[QuestionOutcome] = field(default_factory=list)


def correct_option_index(question: dict[str, Any]) -> int:
    flagged = [i for i, opt in enumerate(question.get("options") or []) if opt.get("is_correct")]
    if len(flagged) != 1:
        raise InvariantViolationError(
            "Quiz question must have exactly one correct option",
            context={"question": question.get("question_text"), "correct_options": len(flagged)},
        )
    return flagged[0]


def _option_text(options: list[dict], index: Any) -> str | None:
    if isinstance(index, bool) or not isinstance(index, int):
        return None
    if 0 <= index < len(options):
        return options[index].get("option_text")
    return None


def score_quiz(quiz, answers: Sequence[int | None]) -> QuizScore:
    """Score a submission against ``quiz.questions``.

    ``answers[i]`` is the chosen option index for question i, or None.
    Missing trailing answers count as wrong. The percentage is taken over
    ``quiz.total_questions`` and is not rounded.
    """
    results = []
    correct = 0
    for i, question in enumerate(quiz.questions):
        options = question.get("options") or []
        right = correct_option_index(question)
        answer = answers[i] if i < len(answers) else None
        is_correct = isinstance(answer, int) and not isinstance(answer, bool) and answer == right
        if is_correct:
            correct += 1
        results.append(QuestionOutcome(
            question=question.get("question_text", ""),
            user_answer=_option_text(options, answer),
            correct_answer=options[right].get("option_text"),
            is_correct=is_correct,
            explanation=question.get("explanation") or "",
        ))

    total = quiz.total_questions
    score = (correct / total) * 100 if total else 0.0
    return QuizScore(score=score, correct_count=correct, total_questions=total, results=results)
