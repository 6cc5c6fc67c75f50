"""Intake wizard session.

The session is owned by the client; the service never stores it and
returns an updated copy from every operation.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from symptom_intake.models.analysis import Analysis, Answer
from symptom_intake.models.levels import WizardStep
from symptom_intake.models.patient import PatientData
import uuid


class IntakeSession(BaseModel):
    """Patient data, analysis and answers for one intake."""

    session_id: str = Field(default_factory=lambda: f"session_{uuid.uuid4().hex}")
    step: WizardStep = WizardStep.WELCOME
    patient_data: Optional[PatientData] = None
    analysis: Optional[Analysis] = None
    # Analysis as first produced; refinement always starts from it
    preliminary_analysis: Optional[Analysis] = None
    answers: List[Answer] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    completed_at: Optional[datetime] = None

    class Config:
        json_schema_extra = {
            "example": {
                "session_id": "session_3f1c2a9b0e",
                "step": "questions",
                "answers": [{"question_id": "angina_de_peito_q0", "value": True}],
            }
        }
