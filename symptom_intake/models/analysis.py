"""Diagnostic analysis schema: questions, answers, diagnoses."""

from pydantic import BaseModel, Field, model_validator
from typing import Any, List, Optional, Union
from datetime import datetime
from symptom_intake.models.levels import (
    AnalysisSource,
    Confidence,
    Priority,
    QuestionType,
    RiskLevel,
    Urgency,
)
import re

_WHITESPACE = re.compile(r"\s+")

AnswerValue = Union[bool, int, float, str]


def condition_key(name: str) -> str:
    """Derive the stable key of a condition: lowercase, whitespace to '_'."""
    return _WHITESPACE.sub("_", name.lower())


class Question(BaseModel):
    """A follow-up question generated for the patient."""

    id: str
    text: str
    type: QuestionType = QuestionType.YES_NO
    options: Optional[List[str]] = None  # multiple_choice only
    category: str = "general"
    priority: Priority = Priority.MEDIUM
    condition_key: Optional[str] = None  # None for generic questions

    class Config:
        frozen = True

    @model_validator(mode="before")
    @classmethod
    def _drop_options_for_closed_types(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("type", QuestionType.YES_NO) not in (
            QuestionType.MULTIPLE_CHOICE,
            QuestionType.MULTIPLE_CHOICE.value,
        ):
            data = {**data, "options": None}
        return data


class Answer(BaseModel):
    """An answer to a follow-up question."""

    question_id: str
    value: AnswerValue
    timestamp: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        frozen = True

    def display_value(self) -> str:
        """Answer as shown to the health worker ("Sim"/"Não" for booleans)."""
        if isinstance(self.value, bool):
            return "Sim" if self.value else "Não"
        return str(self.value)


class Diagnosis(BaseModel):
    """A scored, ranked instantiation of a condition for one patient."""

    condition: str
    probability: float = Field(..., ge=0.0, le=1.0)
    confidence: Confidence
    symptoms: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    urgency: Urgency = Urgency.LOW
    next_steps: List[str] = Field(default_factory=list)
    key: str = ""

    @model_validator(mode="after")
    def _derive_key(self) -> "Diagnosis":
        if not self.key:
            self.key = condition_key(self.condition)
        return self


class Analysis(BaseModel):
    """Preliminary or refined analysis of a patient's symptoms."""

    initial_assessment: str
    possible_conditions: List[Diagnosis] = Field(default_factory=list)
    generated_questions: List[Question] = Field(default_factory=list)
    risk_level: RiskLevel = RiskLevel.LOW
    recommendations: List[str] = Field(default_factory=list)
    source: AnalysisSource = AnalysisSource.LOCAL

    def find_question(self, question_id: str) -> Optional[Question]:
        """Return the generated question with the given id, if any."""
        for question in self.generated_questions:
            if question.id == question_id:
                return question
        return None
