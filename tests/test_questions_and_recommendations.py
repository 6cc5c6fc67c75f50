"""Tests for question generation and the recommendation tables."""

import pytest

from symptom_intake.engine.knowledge_base import get_condition
from symptom_intake.engine.questions import (
    MAX_QUESTIONS,
    finalize_questions,
    generic_questions,
    questions_for_condition,
)
from symptom_intake.engine.recommendations import (
    DEFAULT_CONDITION_RECOMMENDATIONS,
    GENERAL_RECOMMENDATIONS,
    build_initial_assessment,
    get_condition_recommendations,
    get_general_recommendations,
    get_next_steps,
    probability_percent,
)
from symptom_intake.models.analysis import Diagnosis, Question
from symptom_intake.models.levels import Confidence, Priority, RiskLevel, Urgency


class TestQuestionsForCondition:
    def test_high_priority_above_point_seven(self) -> None:
        infarto = get_condition("Infarto Agudo do Miocárdio")
        questions = questions_for_condition(infarto, 0.8)

        assert len(questions) == len(infarto.questions)
        assert {q.priority for q in questions} == {Priority.HIGH}
        assert questions[0].id == "infarto_agudo_do_miocárdio_q0"

    def test_medium_priority_otherwise(self) -> None:
        asma = get_condition("Asma")
        questions = questions_for_condition(asma, 0.7)
        assert {q.priority for q in questions} == {Priority.MEDIUM}
        assert {q.category for q in questions} == {"respiratory"}


class TestFinalizeQuestions:
    def test_empty_falls_back_to_generic(self) -> None:
        assert finalize_questions([]) == generic_questions()

    def test_caps_in_generation_order(self) -> None:
        angina = questions_for_condition(get_condition("Angina de Peito"), 0.5)
        asma = questions_for_condition(get_condition("Asma"), 0.9)

        questions = finalize_questions(angina + asma)

        assert len(questions) == MAX_QUESTIONS
        assert questions == angina[:MAX_QUESTIONS]

    def test_duplicate_ids_are_dropped(self) -> None:
        question = Question(id="q", text="Pergunta?")
        other = Question(id="r", text="Outra?")
        assert finalize_questions([question, question, other]) == [question, other]


class TestRecommendations:
    def test_condition_table(self) -> None:
        assert get_condition_recommendations("Asma")[0] == (
            "Usar inalador de resgate se disponível"
        )

    def test_condition_default(self) -> None:
        assert (
            get_condition_recommendations("Ataque Isquêmico Transitório (AIT)")
            == DEFAULT_CONDITION_RECOMMENDATIONS
        )

    def test_returns_copies(self) -> None:
        get_condition_recommendations("Asma").append("x")
        assert "x" not in get_condition_recommendations("Asma")

    @pytest.mark.parametrize(
        "probability, first_step",
        [
            (0.85, "Encaminhar para atendimento médico urgente"),
            (0.7, "Agendar consulta médica em 24-48 horas"),
            (0.6, "Monitorar evolução dos sintomas"),
        ],
    )
    def test_next_steps_tiers(self, probability: float, first_step: str) -> None:
        assert get_next_steps(probability)[0] == first_step

    @pytest.mark.parametrize("level", list(RiskLevel))
    def test_general_by_level(self, level: RiskLevel) -> None:
        assert get_general_recommendations(level) == GENERAL_RECOMMENDATIONS[level]

    def test_general_accepts_plain_strings(self) -> None:
        assert get_general_recommendations("critical") == GENERAL_RECOMMENDATIONS[
            RiskLevel.CRITICAL
        ]

    def test_general_unknown_defaults_to_low(self) -> None:
        assert get_general_recommendations("unknown") == GENERAL_RECOMMENDATIONS[
            RiskLevel.LOW
        ]


class TestInitialAssessment:
    def test_rounds_half_up(self) -> None:
        assert probability_percent(0.625) == 63
        assert probability_percent(0.5333) == 53

    def test_none_symptoms(self) -> None:
        text = build_initial_assessment(None, [])
        assert text.startswith('Os sintomas relatados ("")')

    def test_immediate_warning(self) -> None:
        diagnosis = Diagnosis(
            condition="Infarto Agudo do Miocárdio",
            probability=0.95,
            confidence=Confidence.HIGH,
            urgency=Urgency.IMMEDIATE,
        )
        text = build_initial_assessment("aperto no peito", [diagnosis])
        assert "95%" in text
        assert "IMEDIATO" in text

    def test_without_warning_keeps_trailing_space(self) -> None:
        diagnosis = Diagnosis(
            condition="Asma", probability=0.5, confidence=Confidence.LOW
        )
        text = build_initial_assessment("falta de ar", [diagnosis])
        assert text == (
            'Baseado nos sintomas relatados ("falta de ar"), há uma probabilidade '
            "de 50% de que o paciente apresente Asma. "
        )
