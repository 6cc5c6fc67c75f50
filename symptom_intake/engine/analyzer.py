"""Local rule-based symptom analysis.

Deterministic and side-effect free: the same PatientData always yields the
same Analysis, and malformed or empty symptom text yields a low-information
analysis instead of an error.
"""

from typing import List, Tuple
from symptom_intake.engine.knowledge_base import iter_conditions
from symptom_intake.engine.questions import finalize_questions, questions_for_condition
from symptom_intake.engine.recommendations import (
    build_initial_assessment,
    get_condition_recommendations,
    get_general_recommendations,
    get_next_steps,
)
from symptom_intake.engine.scoring import (
    MIN_PROBABILITY,
    aggregate_risk_level,
    calculate_probability,
    classify_confidence,
    determine_urgency,
    match_symptoms,
)
from symptom_intake.models.analysis import Analysis, Diagnosis, Question
from symptom_intake.models.levels import AnalysisSource
from symptom_intake.models.patient import PatientData
import logging

logger = logging.getLogger(__name__)


def _score_conditions(symptom_text: str) -> Tuple[List[Diagnosis], List[Question]]:
    diagnoses: List[Diagnosis] = []
    questions: List[Question] = []

    for condition in iter_conditions():
        matching = match_symptoms(condition, symptom_text)
        if not matching:
            continue

        probability = calculate_probability(condition, matching, symptom_text)
        if probability <= MIN_PROBABILITY:
            continue

        diagnoses.append(
            Diagnosis(
                condition=condition.name,
                probability=probability,
                confidence=classify_confidence(probability),
                symptoms=matching,
                recommendations=get_condition_recommendations(condition.name),
                urgency=determine_urgency(condition.name, probability),
                next_steps=get_next_steps(probability),
                key=condition.key,
            )
        )
        questions.extend(questions_for_condition(condition, probability))

    return diagnoses, questions


def analyze(patient: PatientData) -> Analysis:
    """Preliminary analysis of a patient's symptoms with the local engine."""
    symptom_text = (patient.symptoms or "").lower()

    diagnoses, questions = _score_conditions(symptom_text)
    risk_level = aggregate_risk_level(diagnoses)

    # sorted() is stable: ties keep knowledge-base order
    diagnoses = sorted(diagnoses, key=lambda d: d.probability, reverse=True)

    logger.info(
        f"Local analysis for patient {patient.id}: "
        f"{len(diagnoses)} condition(s), risk={risk_level.value}"
    )

    return Analysis(
        initial_assessment=build_initial_assessment(patient.symptoms, diagnoses),
        possible_conditions=diagnoses,
        generated_questions=finalize_questions(questions),
        risk_level=risk_level,
        recommendations=get_general_recommendations(risk_level),
        source=AnalysisSource.LOCAL,
    )
