"""Symptom matching, probability scoring and triage classification."""

from typing import Iterable, List
from symptom_intake.engine.knowledge_base import URGENT_CONDITIONS, Condition
from symptom_intake.models.analysis import Diagnosis
from symptom_intake.models.levels import Confidence, RiskLevel, Urgency

MAX_PROBABILITY = 0.95
MIN_PROBABILITY = 0.3
INTENSITY_BONUS = 0.1

# Each group adds the bonus once when any of its cues is in the text
INTENSITY_CUES = (
    ("intenso", "forte"),
    ("constante",),
    ("piora",),
)


def match_symptoms(condition: Condition, symptom_text: str) -> List[str]:
    """Return the condition's keywords contained in the lowercased text.

    Substring containment, not word matching: "tontura" matches
    "tontura ao levantar".
    """
    return [symptom for symptom in condition.symptoms if symptom in symptom_text]


def intensity_factor(symptom_text: str) -> float:
    """Bonus for intensity cues found anywhere in the text (up to +0.3)."""
    factor = 0.0
    for cues in INTENSITY_CUES:
        if any(cue in symptom_text for cue in cues):
            factor += INTENSITY_BONUS
    return factor


def calculate_probability(
    condition: Condition, matching_symptoms: List[str], symptom_text: str
) -> float:
    """Scale the base probability by the match ratio, add intensity, cap."""
    match_ratio = len(matching_symptoms) / len(condition.symptoms)
    probability = (
        condition.base_probability * match_ratio + intensity_factor(symptom_text)
    )
    return min(MAX_PROBABILITY, probability)


def classify_confidence(probability: float) -> Confidence:
    if probability > 0.7:
        return Confidence.HIGH
    if probability > 0.5:
        return Confidence.MEDIUM
    return Confidence.LOW


def determine_urgency(condition_name: str, probability: float) -> Urgency:
    """Triage urgency from urgent-class membership and probability."""
    urgent_class = condition_name in URGENT_CONDITIONS

    if urgent_class and probability > 0.7:
        return Urgency.IMMEDIATE
    if urgent_class or probability > 0.8:
        return Urgency.URGENT
    if probability > 0.6:
        return Urgency.MODERATE
    return Urgency.LOW


def aggregate_risk_level(diagnoses: Iterable[Diagnosis]) -> RiskLevel:
    """Session risk from the worst urgency/probability among diagnoses."""
    diagnoses = list(diagnoses)

    if any(d.urgency == Urgency.IMMEDIATE for d in diagnoses):
        return RiskLevel.CRITICAL
    if any(d.urgency == Urgency.URGENT for d in diagnoses):
        return RiskLevel.HIGH
    if any(d.probability > 0.6 for d in diagnoses):
        return RiskLevel.MEDIUM
    return RiskLevel.LOW
