"""API request and response models."""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from symptom_intake.models.analysis import Answer
from symptom_intake.models.levels import (
    AnalysisSource,
    Confidence,
    Gender,
    RiskLevel,
    Urgency,
    WizardStep,
)
from symptom_intake.models.patient import PatientData, VitalSigns
from symptom_intake.models.session import IntakeSession


class SubmitPatientDataRequest(BaseModel):
    """Patient data submitted from the intake form."""

    session: IntakeSession
    patient_data: PatientData

    @field_validator("patient_data")
    @classmethod
    def _require_form_fields(cls, patient: PatientData) -> PatientData:
        if not patient.name.strip():
            raise ValueError("Nome é obrigatório")
        if not (patient.symptoms or "").strip():
            raise ValueError("Descrição dos sintomas é obrigatória")
        return patient


class RecordAnswerRequest(BaseModel):
    """Answer to one follow-up question."""

    session: IntakeSession
    answer: Answer


class SessionRequest(BaseModel):
    """Request carrying only the client-held session."""

    session: IntakeSession


class GoBackRequest(BaseModel):
    """Revisit an earlier wizard step."""

    session: IntakeSession
    step: WizardStep = Field(..., description="data_entry or questions")


class PatientSummary(BaseModel):
    """Patient identification shown at the top of the report."""

    id: str
    name: str
    age: int
    gender: Gender
    symptoms: str
    medical_history: str = ""
    current_medications: str = ""
    vital_signs: Optional[VitalSigns] = None


class ReportDiagnosis(BaseModel):
    """Diagnosis as rendered in the report."""

    condition: str
    probability: float
    probability_percent: int
    confidence: Confidence
    urgency: Urgency
    symptoms: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    next_steps: List[str] = Field(default_factory=list)


class AnsweredQuestion(BaseModel):
    """Question text with the answer given to it."""

    question_id: str
    question: str
    answer: str


class DiagnosticReport(BaseModel):
    """Final report payload for the wizard's report step."""

    session_id: str
    patient: PatientSummary
    risk_level: RiskLevel
    risk_label: str
    emergency_advised: bool = False
    initial_assessment: str
    diagnoses: List[ReportDiagnosis] = Field(default_factory=list)
    answered_questions: List[AnsweredQuestion] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    source: AnalysisSource
    created_at: datetime
    completed_at: Optional[datetime] = None
    disclaimer: str
