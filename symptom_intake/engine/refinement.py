"""Answer-driven refinement of a prior analysis."""

from typing import Iterable, List
from symptom_intake.engine.scoring import classify_confidence
from symptom_intake.models.analysis import Analysis, Answer, AnswerValue, Diagnosis
import logging

logger = logging.getLogger(__name__)

POSITIVE_ADJUSTMENT = 0.1
NEGATIVE_ADJUSTMENT = -0.05

POSITIVE_ANSWERS = ("Sim",)
NEGATIVE_ANSWERS = ("Não",)


def answer_adjustment(value: AnswerValue) -> float:
    """Probability delta for an answer value; 0 for non yes/no values."""
    if value is True or (isinstance(value, str) and value in POSITIVE_ANSWERS):
        return POSITIVE_ADJUSTMENT
    if value is False or (isinstance(value, str) and value in NEGATIVE_ANSWERS):
        return NEGATIVE_ADJUSTMENT
    return 0.0


def _refine_diagnosis(
    diagnosis: Diagnosis, answers: List[Answer], analysis: Analysis
) -> Diagnosis:
    probability = diagnosis.probability

    for answer in answers:
        question = analysis.find_question(answer.question_id)
        if question is None or question.category != diagnosis.key:
            continue
        probability += answer_adjustment(answer.value)

    probability = max(0.0, min(1.0, probability))
    return diagnosis.model_copy(
        update={
            "probability": probability,
            "confidence": classify_confidence(probability),
        }
    )


def refine(answers: Iterable[Answer], analysis: Analysis) -> Analysis:
    """Adjust diagnosis probabilities from answers and re-rank them.

    Only probability and confidence change. Risk level, assessment text,
    questions and general recommendations are carried over as they are.
    Answers to unknown questions are ignored.
    """
    answers = list(answers)

    refined = [
        _refine_diagnosis(diagnosis, answers, analysis)
        for diagnosis in analysis.possible_conditions
    ]
    refined.sort(key=lambda d: d.probability, reverse=True)

    logger.info(
        f"Local refinement applied {len(answers)} answer(s) "
        f"to {len(refined)} condition(s)"
    )

    return analysis.model_copy(update={"possible_conditions": refined})
