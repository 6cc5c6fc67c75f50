"""Intake wizard orchestration.

welcome -> data_entry -> questions -> report, with revisits to data_entry
or questions from any later step. Sessions are held by the client: every
operation takes a session and returns an updated copy.
"""

from symptom_intake.agents.diagnostic_agent import DiagnosticAgent, get_diagnostic_agent
from symptom_intake.engine.refinement import NEGATIVE_ANSWERS, POSITIVE_ANSWERS
from symptom_intake.models.analysis import Answer, Question
from symptom_intake.models.levels import QuestionType, WizardStep
from symptom_intake.models.patient import PatientData
from symptom_intake.models.session import IntakeSession
from typing import Optional
from datetime import datetime
import logging

logger = logging.getLogger(__name__)

SCALE_MIN = 1
SCALE_MAX = 10

YES_NO_ANSWERS = POSITIVE_ANSWERS + NEGATIVE_ANSWERS

# Steps each revisit target can be reached from
_BACK_TARGETS = {
    WizardStep.DATA_ENTRY: (WizardStep.QUESTIONS, WizardStep.REPORT),
    WizardStep.QUESTIONS: (WizardStep.REPORT,),
}


class IntakeError(Exception):
    """Base class for wizard errors."""


class InvalidTransitionError(IntakeError):
    """Operation not allowed at the session's current step."""


class InvalidAnswerError(IntakeError):
    """Answer value does not fit its question."""


def _require_step(session: IntakeSession, *steps: WizardStep) -> None:
    if session.step not in steps:
        allowed = ", ".join(step.value for step in steps)
        raise InvalidTransitionError(
            f"Session {session.session_id} is at '{session.step.value}', "
            f"expected one of: {allowed}"
        )


def validate_answer(question: Question, answer: Answer) -> None:
    """
    Check an answer value against its question type.

    Raises:
        InvalidAnswerError: if the value does not fit the question
    """
    value = answer.value

    if question.type == QuestionType.YES_NO:
        if not isinstance(value, bool) and value not in YES_NO_ANSWERS:
            raise InvalidAnswerError(f"Question {question.id} expects yes/no")
    elif question.type == QuestionType.SCALE:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidAnswerError(f"Question {question.id} expects an integer")
        if not SCALE_MIN <= value <= SCALE_MAX:
            raise InvalidAnswerError(
                f"Question {question.id} expects a value from {SCALE_MIN} to {SCALE_MAX}"
            )
    elif question.type == QuestionType.MULTIPLE_CHOICE:
        if value not in (question.options or []):
            raise InvalidAnswerError(f"Question {question.id} expects one of its options")
    elif question.type == QuestionType.TEXT:
        if not isinstance(value, str):
            raise InvalidAnswerError(f"Question {question.id} expects text")


class IntakeService:
    """Service driving the intake wizard."""

    def __init__(self, agent: DiagnosticAgent):
        self.agent = agent

    def start_session(self) -> IntakeSession:
        """Create a session and leave the welcome screen for data entry."""
        session = IntakeSession(step=WizardStep.DATA_ENTRY)
        logger.info(f"Started intake session {session.session_id}")
        return session

    async def submit_patient_data(
        self, session: IntakeSession, patient: PatientData
    ) -> IntakeSession:
        """
        Analyze submitted patient data and move to the questions step.

        Args:
            session: Session at data_entry
            patient: Patient data from the intake form

        Returns:
            Session holding the new analysis, with previous answers cleared
        """
        _require_step(session, WizardStep.DATA_ENTRY)

        analysis = await self.agent.analyze_symptoms(patient)

        logger.info(
            f"Session {session.session_id}: analysis ready "
            f"({analysis.source.value}, {len(analysis.generated_questions)} questions)"
        )
        return session.model_copy(
            update={
                "patient_data": patient,
                "analysis": analysis,
                "preliminary_analysis": analysis,
                "answers": [],
                "step": WizardStep.QUESTIONS,
                "completed_at": None,
            }
        )

    def record_answer(self, session: IntakeSession, answer: Answer) -> IntakeSession:
        """
        Append an answer to the session.

        Answers to known questions are validated against the question type;
        answers to unknown ids are kept and later ignored by refinement.
        """
        _require_step(session, WizardStep.QUESTIONS)

        question = self._find_question(session, answer.question_id)
        if question is not None:
            validate_answer(question, answer)
        else:
            logger.warning(
                f"Session {session.session_id}: answer for unknown question "
                f"{answer.question_id}"
            )

        return session.model_copy(update={"answers": [*session.answers, answer]})

    async def complete_questions(self, session: IntakeSession) -> IntakeSession:
        """Refine the preliminary analysis with the answers and move to the report."""
        _require_step(session, WizardStep.QUESTIONS)

        preliminary = session.preliminary_analysis or session.analysis
        if preliminary is None:
            raise InvalidTransitionError(
                f"Session {session.session_id} has no analysis to refine"
            )

        refined = await self.agent.refine_diagnosis(list(session.answers), preliminary)

        logger.info(
            f"Session {session.session_id}: refined with {len(session.answers)} answer(s)"
        )
        return session.model_copy(
            update={
                "analysis": refined,
                "step": WizardStep.REPORT,
                "completed_at": datetime.utcnow(),
            }
        )

    def go_back(self, session: IntakeSession, step: WizardStep) -> IntakeSession:
        """Revisit data entry or the questions from a later step."""
        sources = _BACK_TARGETS.get(step)
        if sources is None:
            raise InvalidTransitionError(f"Cannot go back to '{step.value}'")
        _require_step(session, *sources)

        update = {"step": step}
        if step == WizardStep.QUESTIONS:
            # Report is rebuilt from the preliminary analysis on completion
            update["completed_at"] = None

        logger.info(f"Session {session.session_id}: back to {step.value}")
        return session.model_copy(update=update)

    def _find_question(
        self, session: IntakeSession, question_id: str
    ) -> Optional[Question]:
        analysis = session.preliminary_analysis or session.analysis
        if analysis is None:
            return None
        return analysis.find_question(question_id)


# Global service instance
_intake_service: Optional[IntakeService] = None


def get_intake_service() -> IntakeService:
    """Get or create IntakeService instance."""
    global _intake_service
    if _intake_service is None:
        _intake_service = IntakeService(get_diagnostic_agent())
    return _intake_service
