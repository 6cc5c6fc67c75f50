"""Patient intake data."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from symptom_intake.models.levels import Gender
import uuid


class VitalSigns(BaseModel):
    """Optional measurements taken by the health worker."""

    blood_pressure: Optional[str] = None  # e.g. "120/80"
    height_cm: Optional[float] = Field(default=None, gt=0)
    weight_kg: Optional[float] = Field(default=None, gt=0)
    abdominal_circumference_cm: Optional[float] = Field(default=None, gt=0)
    hypertension_diagnosed: Optional[bool] = None
    diabetes_diagnosed: Optional[bool] = None

    class Config:
        frozen = True


class PatientData(BaseModel):
    """Patient data submitted at intake. Immutable once created."""

    id: str = Field(default_factory=lambda: f"patient_{uuid.uuid4().hex[:12]}")
    name: str = ""
    age: int = Field(default=0, ge=0, le=120)
    gender: Gender = Gender.OTHER
    symptoms: Optional[str] = ""
    medical_history: str = ""
    current_medications: str = ""
    vital_signs: Optional[VitalSigns] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "name": "Maria da Silva",
                "age": 58,
                "gender": "F",
                "symptoms": "aperto no peito, tontura ao levantar, falta de ar",
                "medical_history": "Hipertensão",
                "current_medications": "Losartana 50mg",
                "vital_signs": {"blood_pressure": "150/95", "weight_kg": 72},
            }
        }
