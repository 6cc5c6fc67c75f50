"""Recommendation tables and assessment text.

Pure lookups: no scoring happens here.
"""

from typing import Dict, List, Optional, Sequence, Union
from symptom_intake.models.analysis import Diagnosis
import math
from symptom_intake.models.levels import RiskLevel, Urgency

DEFAULT_CONDITION_RECOMMENDATIONS = ["Procurar atendimento médico para avaliação"]

CONDITION_RECOMMENDATIONS: Dict[str, List[str]] = {
    "Angina de Peito": [
        "Repouso imediato",
        "Evitar esforço físico",
        "Procurar atendimento médico urgente",
        "Considerar uso de nitroglicerina se prescrita",
    ],
    "Infarto Agudo do Miocárdio": [
        "ATENÇÃO: Procure atendimento médico IMEDIATAMENTE",
        "Chame SAMU (192) ou vá ao hospital mais próximo",
        "Não dirija sozinho",
        "Mantenha repouso absoluto",
    ],
    "Enxaqueca": [
        "Repouso em ambiente escuro e silencioso",
        "Hidratação adequada",
        "Evitar estímulos visuais e sonoros",
        "Considerar analgésico se prescrito",
    ],
    "Asma": [
        "Usar inalador de resgate se disponível",
        "Manter posição confortável",
        "Respiração lenta e profunda",
        "Procurar atendimento se não melhorar",
    ],
}

GENERAL_RECOMMENDATIONS: Dict[RiskLevel, List[str]] = {
    RiskLevel.CRITICAL: [
        "ATENÇÃO: Risco crítico identificado",
        "Encaminhar IMEDIATAMENTE para atendimento médico",
        "Chamar SAMU (192) se necessário",
        "Manter paciente em repouso absoluto",
    ],
    RiskLevel.HIGH: [
        "Encaminhar para atendimento médico urgente",
        "Monitorar sinais vitais constantemente",
        "Documentar todos os sintomas",
        "Preparar para transporte médico",
    ],
    RiskLevel.MEDIUM: [
        "Agendar consulta médica em 24-48 horas",
        "Monitorar evolução dos sintomas",
        "Orientar sobre sinais de alerta",
        "Fornecer orientações de cuidado",
    ],
    RiskLevel.LOW: [
        "Monitorar evolução dos sintomas",
        "Orientar sobre cuidados gerais",
        "Retornar se sintomas piorarem",
        "Manter acompanhamento regular",
    ],
}

URGENT_NEXT_STEPS = [
    "Encaminhar para atendimento médico urgente",
    "Coletar sinais vitais",
    "Documentar todos os sintomas",
    "Preparar para transporte se necessário",
]

SOON_NEXT_STEPS = [
    "Agendar consulta médica em 24-48 horas",
    "Monitorar sintomas",
    "Orientar sobre sinais de alerta",
    "Fornecer orientações de cuidado",
]

MONITOR_NEXT_STEPS = [
    "Monitorar evolução dos sintomas",
    "Orientar sobre cuidados gerais",
    "Retornar se sintomas piorarem",
    "Manter acompanhamento",
]

IMMEDIATE_CARE_WARNING = "ATENÇÃO: Esta condição requer atendimento médico IMEDIATO."


def get_condition_recommendations(condition_name: str) -> List[str]:
    return list(
        CONDITION_RECOMMENDATIONS.get(condition_name, DEFAULT_CONDITION_RECOMMENDATIONS)
    )


def get_next_steps(probability: float) -> List[str]:
    """Next steps for the health worker by probability tier."""
    if probability > 0.8:
        return list(URGENT_NEXT_STEPS)
    if probability > 0.6:
        return list(SOON_NEXT_STEPS)
    return list(MONITOR_NEXT_STEPS)


def get_general_recommendations(risk_level: Union[RiskLevel, str]) -> List[str]:
    """Recommendations for a risk level; unknown levels get the low tier."""
    try:
        level = RiskLevel(risk_level)
    except ValueError:
        level = RiskLevel.LOW
    return list(GENERAL_RECOMMENDATIONS[level])


def probability_percent(probability: float) -> int:
    """Probability as a whole percentage, rounding halves up."""
    return int(math.floor(probability * 100 + 0.5))


def build_initial_assessment(
    symptom_text: Optional[str], diagnoses: Sequence[Diagnosis]
) -> str:
    """Assessment sentence for the top diagnosis, or a generic one."""
    symptoms = symptom_text or ""

    if diagnoses:
        top = diagnoses[0]
        percentage = probability_percent(top.probability)
        text = (
            f'Baseado nos sintomas relatados ("{symptoms}"), há uma probabilidade '
            f"de {percentage}% de que o paciente apresente {top.condition}. "
        )
        if top.urgency == Urgency.IMMEDIATE:
            text += IMMEDIATE_CARE_WARNING
        return text

    return (
        f'Os sintomas relatados ("{symptoms}") requerem investigação adicional. '
        "Será necessário fazer algumas perguntas específicas para melhor avaliar "
        "a condição do paciente."
    )
