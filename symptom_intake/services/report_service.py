"""Report payload for the wizard's final step."""

from symptom_intake.engine.recommendations import probability_percent
from symptom_intake.models.analysis import Analysis
from symptom_intake.models.levels import RiskLevel
from symptom_intake.models.messages import (
    AnsweredQuestion,
    DiagnosticReport,
    PatientSummary,
    ReportDiagnosis,
)
from symptom_intake.models.session import IntakeSession
from symptom_intake.services.intake_service import InvalidTransitionError
from typing import List
import logging

logger = logging.getLogger(__name__)

RISK_LABELS = {
    RiskLevel.CRITICAL: "Crítico",
    RiskLevel.HIGH: "Alto",
    RiskLevel.MEDIUM: "Médio",
    RiskLevel.LOW: "Baixo",
}

DISCLAIMER = (
    "Esta análise é uma ferramenta de apoio e não substitui a avaliação de um "
    "profissional de saúde. Em caso de dúvida ou piora dos sintomas, procure "
    "atendimento médico."
)


def _answered_questions(session: IntakeSession, analysis: Analysis) -> List[AnsweredQuestion]:
    answered = []
    for answer in session.answers:
        question = analysis.find_question(answer.question_id)
        if question is None and session.preliminary_analysis is not None:
            question = session.preliminary_analysis.find_question(answer.question_id)
        if question is None:
            continue
        answered.append(
            AnsweredQuestion(
                question_id=question.id,
                question=question.text,
                answer=answer.display_value(),
            )
        )
    return answered


def build_report(session: IntakeSession) -> DiagnosticReport:
    """
    Build the report for a session holding an analysis.

    Raises:
        InvalidTransitionError: if the session has no patient data or analysis
    """
    analysis = session.analysis
    patient = session.patient_data
    if analysis is None or patient is None:
        raise InvalidTransitionError(
            f"Session {session.session_id} has no analysis to report"
        )

    diagnoses = [
        ReportDiagnosis(
            condition=d.condition,
            probability=d.probability,
            probability_percent=probability_percent(d.probability),
            confidence=d.confidence,
            urgency=d.urgency,
            symptoms=d.symptoms,
            recommendations=d.recommendations,
            next_steps=d.next_steps,
        )
        for d in analysis.possible_conditions
    ]

    logger.info(
        f"Built report for session {session.session_id} "
        f"(risk={analysis.risk_level.value}, {len(diagnoses)} diagnoses)"
    )

    return DiagnosticReport(
        session_id=session.session_id,
        patient=PatientSummary(
            id=patient.id,
            name=patient.name,
            age=patient.age,
            gender=patient.gender,
            symptoms=patient.symptoms or "",
            medical_history=patient.medical_history,
            current_medications=patient.current_medications,
            vital_signs=patient.vital_signs,
        ),
        risk_level=analysis.risk_level,
        risk_label=RISK_LABELS[analysis.risk_level],
        emergency_advised=analysis.risk_level in (RiskLevel.CRITICAL, RiskLevel.HIGH),
        initial_assessment=analysis.initial_assessment,
        diagnoses=diagnoses,
        answered_questions=_answered_questions(session, analysis),
        recommendations=analysis.recommendations,
        source=analysis.source,
        created_at=session.created_at,
        completed_at=session.completed_at,
        disclaimer=DISCLAIMER,
    )
