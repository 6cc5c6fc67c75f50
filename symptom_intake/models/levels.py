"""Classification enums shared by the engine, agent and API."""

from enum import Enum


class Gender(str, Enum):
    """Patient gender as captured by the intake form."""

    MALE = "M"
    FEMALE = "F"
    OTHER = "O"


class Confidence(str, Enum):
    """Confidence tier derived from a diagnosis probability."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Urgency(str, Enum):
    """Per-diagnosis triage urgency."""

    IMMEDIATE = "immediate"  # Emergency care now
    URGENT = "urgent"  # Urgent medical referral
    MODERATE = "moderate"  # Consultation within 24-48h
    LOW = "low"  # Monitor


class RiskLevel(str, Enum):
    """Session-wide aggregate severity."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Priority(str, Enum):
    """Follow-up question priority."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class QuestionType(str, Enum):
    """Expected answer type of a follow-up question."""

    YES_NO = "yes_no"
    MULTIPLE_CHOICE = "multiple_choice"
    SCALE = "scale"  # 1-10
    TEXT = "text"


class WizardStep(str, Enum):
    """Intake wizard steps."""

    WELCOME = "welcome"
    DATA_ENTRY = "data_entry"
    QUESTIONS = "questions"
    REPORT = "report"


class AnalysisSource(str, Enum):
    """Which path produced an analysis."""

    AI = "ai"
    LOCAL = "local"
