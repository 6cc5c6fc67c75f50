"""Static medical knowledge base for the local diagnostic engine.

Simplified, demonstration-only table: category -> conditions, each with the
symptom keywords it is matched on and the follow-up questions it asks.
Built once at import time and never mutated.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Dict, Iterator, Tuple
from symptom_intake.models.analysis import condition_key


class Condition(BaseModel):
    """A named medical hypothesis."""

    name: str
    category: str
    base_probability: float = Field(..., ge=0.0, le=1.0)
    symptoms: Tuple[str, ...]
    questions: Tuple[str, ...]
    key: str = ""

    class Config:
        frozen = True

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data):
        if isinstance(data, dict):
            data = dict(data)
            data["symptoms"] = tuple(s.lower() for s in data.get("symptoms", ()))
            data.setdefault("key", condition_key(data["name"]))
        return data


def _conditions(category: str, *entries: dict) -> Tuple[Condition, ...]:
    return tuple(Condition(category=category, **entry) for entry in entries)


KNOWLEDGE_BASE: Dict[str, Tuple[Condition, ...]] = {
    "cardiovascular": _conditions(
        "cardiovascular",
        {
            "name": "Angina de Peito",
            "base_probability": 0.7,
            "symptoms": ("aperto no peito", "tontura", "falta de ar"),
            "questions": (
                "A dor piora com esforço físico?",
                "A dor irradia para o braço esquerdo?",
                "Você tem histórico de diabetes?",
                "Você fuma?",
                "A dor melhora com repouso?",
            ),
        },
        {
            "name": "Infarto Agudo do Miocárdio",
            "base_probability": 0.8,
            "symptoms": ("aperto no peito", "tontura", "sudorese"),
            "questions": (
                "A dor é intensa e constante?",
                "Você sente náuseas ou vômitos?",
                "A dor irradia para o pescoço ou mandíbula?",
                "Você tem histórico familiar de problemas cardíacos?",
            ),
        },
    ),
    "neurological": _conditions(
        "neurological",
        {
            "name": "Enxaqueca",
            "base_probability": 0.6,
            "symptoms": ("dor de cabeça", "tontura"),
            "questions": (
                "A dor de cabeça é latejante?",
                "Você tem sensibilidade à luz?",
                "A dor dura mais de 4 horas?",
                "Você tem histórico de enxaqueca?",
            ),
        },
        {
            "name": "Ataque Isquêmico Transitório (AIT)",
            "base_probability": 0.4,
            "symptoms": ("tontura", "perda de consciência"),
            "questions": (
                "Você teve perda de força em um lado do corpo?",
                "Você teve dificuldade para falar?",
                "Você tem pressão alta?",
                "Os sintomas duraram menos de 24 horas?",
            ),
        },
    ),
    "respiratory": _conditions(
        "respiratory",
        {
            "name": "Asma",
            "base_probability": 0.5,
            "symptoms": ("falta de ar", "chiado no peito"),
            "questions": (
                "Você tem histórico de asma?",
                "Os sintomas pioram à noite?",
                "Você tem alergias?",
                "Os sintomas melhoram com medicamento inalatório?",
            ),
        },
    ),
}

# Conditions with immediate cardiac/neurological risk
URGENT_CONDITIONS = frozenset(
    {"Infarto Agudo do Miocárdio", "Ataque Isquêmico Transitório (AIT)"}
)


def iter_conditions() -> Iterator[Condition]:
    """Yield every condition in knowledge-base order."""
    for conditions in KNOWLEDGE_BASE.values():
        yield from conditions


def get_condition(name: str) -> Condition:
    """Look up a condition by name.

    Raises:
        KeyError: if no condition has that name
    """
    for condition in iter_conditions():
        if condition.name == name:
            return condition
    raise KeyError(name)
