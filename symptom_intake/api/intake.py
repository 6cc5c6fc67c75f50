"""Intake wizard API endpoints.

Stateless: the client holds the session and sends it with every request.
Each endpoint performs one wizard transition and returns the updated
session (or the final report).
"""

from fastapi import APIRouter, Depends, HTTPException, status
from symptom_intake.models.messages import (
    DiagnosticReport,
    GoBackRequest,
    RecordAnswerRequest,
    SessionRequest,
    SubmitPatientDataRequest,
)
from symptom_intake.models.session import IntakeSession
from symptom_intake.services.intake_service import (
    IntakeError,
    IntakeService,
    InvalidAnswerError,
    get_intake_service,
)
from symptom_intake.services.report_service import build_report
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/intake", tags=["Intake"])


def _to_http_error(error: IntakeError) -> HTTPException:
    if isinstance(error, InvalidAnswerError):
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    else:
        code = status.HTTP_409_CONFLICT
    logger.warning(f"Rejected intake request: {error}")
    return HTTPException(status_code=code, detail=str(error))


@router.post("/sessions", response_model=IntakeSession)
async def start_session(service: IntakeService = Depends(get_intake_service)):
    """Start a new intake at the data entry step."""
    return service.start_session()


@router.post("/sessions/patient-data", response_model=IntakeSession)
async def submit_patient_data(
    request: SubmitPatientDataRequest,
    service: IntakeService = Depends(get_intake_service),
):
    """
    Submit patient data and receive the preliminary analysis.

    Uses the LLM when configured and the local diagnostic engine otherwise
    or on LLM failure.
    """
    try:
        return await service.submit_patient_data(request.session, request.patient_data)
    except IntakeError as e:
        raise _to_http_error(e)


@router.post("/sessions/answers", response_model=IntakeSession)
async def record_answer(
    request: RecordAnswerRequest,
    service: IntakeService = Depends(get_intake_service),
):
    """Record the answer to a follow-up question."""
    try:
        return service.record_answer(request.session, request.answer)
    except IntakeError as e:
        raise _to_http_error(e)


@router.post("/sessions/complete", response_model=IntakeSession)
async def complete_questions(
    request: SessionRequest,
    service: IntakeService = Depends(get_intake_service),
):
    """Finish the questions and refine the diagnosis with the answers."""
    try:
        return await service.complete_questions(request.session)
    except IntakeError as e:
        raise _to_http_error(e)


@router.post("/sessions/back", response_model=IntakeSession)
async def go_back(
    request: GoBackRequest,
    service: IntakeService = Depends(get_intake_service),
):
    """Revisit data entry or the questions."""
    try:
        return service.go_back(request.session, request.step)
    except IntakeError as e:
        raise _to_http_error(e)


@router.post("/sessions/report", response_model=DiagnosticReport)
async def get_report(request: SessionRequest):
    """Build the diagnostic report for a session."""
    try:
        return build_report(request.session)
    except IntakeError as e:
        raise _to_http_error(e)
