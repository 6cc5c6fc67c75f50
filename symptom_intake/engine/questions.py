"""Follow-up question generation."""

from typing import List
from symptom_intake.engine.knowledge_base import Condition
from symptom_intake.models.analysis import Question
from symptom_intake.models.levels import Priority, QuestionType

MAX_QUESTIONS = 5

ONSET_OPTIONS = ["Menos de 1 hora", "1-6 horas", "6-24 horas", "Mais de 24 horas"]


def questions_for_condition(condition: Condition, probability: float) -> List[Question]:
    """Yes/no questions from a matched condition's question list."""
    priority = Priority.HIGH if probability > 0.7 else Priority.MEDIUM
    return [
        Question(
            id=f"{condition.key}_q{index}",
            text=text,
            type=QuestionType.YES_NO,
            category=condition.category,
            priority=priority,
            condition_key=condition.key,
        )
        for index, text in enumerate(condition.questions)
    ]


def generic_questions() -> List[Question]:
    """Questions asked when no condition matched."""
    return [
        Question(
            id="general_1",
            text="Você está com febre?",
            type=QuestionType.YES_NO,
            category="general",
            priority=Priority.MEDIUM,
        ),
        Question(
            id="general_2",
            text="Os sintomas começaram há quanto tempo?",
            type=QuestionType.MULTIPLE_CHOICE,
            options=list(ONSET_OPTIONS),
            category="general",
            priority=Priority.HIGH,
        ),
    ]


def finalize_questions(questions: List[Question]) -> List[Question]:
    """Fall back to generic questions when empty, then cap in generation order.

    Duplicate ids keep their first occurrence.
    """
    if not questions:
        questions = generic_questions()

    seen = set()
    unique = []
    for question in questions:
        if question.id not in seen:
            seen.add(question.id)
            unique.append(question)

    return unique[:MAX_QUESTIONS]
