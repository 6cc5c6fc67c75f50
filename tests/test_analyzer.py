"""Tests for the local symptom analysis."""

import pytest

from conftest import CHEST_SYMPTOMS, make_patient
from symptom_intake.engine import analyze
from symptom_intake.engine.knowledge_base import get_condition
from symptom_intake.engine.recommendations import (
    IMMEDIATE_CARE_WARNING,
    get_general_recommendations,
)
from symptom_intake.engine.scoring import classify_confidence
from symptom_intake.models.levels import (
    AnalysisSource,
    Confidence,
    Priority,
    QuestionType,
    RiskLevel,
    Urgency,
)

CRITICAL_SYMPTOMS = "aperto no peito, tontura, sudorese, dor forte e constante"


class TestChestPainScenario:
    """aperto no peito, tontura ao levantar, falta de ar."""

    def test_angina_is_top_diagnosis(self) -> None:
        analysis = analyze(make_patient(CHEST_SYMPTOMS))
        top = analysis.possible_conditions[0]

        assert top.condition == "Angina de Peito"
        assert top.probability == pytest.approx(0.7)
        assert top.confidence == Confidence.MEDIUM
        assert top.urgency == Urgency.MODERATE
        assert {"aperto no peito", "tontura", "falta de ar"} <= set(top.symptoms)
        assert top.key == "angina_de_peito"

    def test_infarction_is_urgent_class(self) -> None:
        analysis = analyze(make_patient(CHEST_SYMPTOMS))
        names = [d.condition for d in analysis.possible_conditions]
        assert names == ["Angina de Peito", "Infarto Agudo do Miocárdio"]

        infarto = analysis.possible_conditions[1]
        assert infarto.probability == pytest.approx(0.8 * 2 / 3)
        assert infarto.urgency == Urgency.URGENT
        assert analysis.risk_level == RiskLevel.HIGH

    def test_questions_come_from_angina_and_are_capped(self) -> None:
        analysis = analyze(make_patient(CHEST_SYMPTOMS))
        angina = get_condition("Angina de Peito")

        assert len(analysis.generated_questions) == 5
        assert [q.text for q in analysis.generated_questions] == list(angina.questions)
        for index, question in enumerate(analysis.generated_questions):
            assert question.id == f"angina_de_peito_q{index}"
            assert question.type == QuestionType.YES_NO
            assert question.category == "cardiovascular"
            assert question.condition_key == "angina_de_peito"
            assert question.priority == Priority.MEDIUM

    def test_initial_assessment(self) -> None:
        analysis = analyze(make_patient(CHEST_SYMPTOMS))
        assert f'("{CHEST_SYMPTOMS}")' in analysis.initial_assessment
        assert "70%" in analysis.initial_assessment
        assert "Angina de Peito" in analysis.initial_assessment
        assert IMMEDIATE_CARE_WARNING not in analysis.initial_assessment

    def test_general_recommendations_follow_risk(self) -> None:
        analysis = analyze(make_patient(CHEST_SYMPTOMS))
        assert analysis.recommendations == get_general_recommendations(RiskLevel.HIGH)
        assert analysis.source == AnalysisSource.LOCAL


class TestIntensityScenario:
    def test_migraine_gets_intensity_bonus(self) -> None:
        analysis = analyze(make_patient("dor de cabeça latejante e intenso"))
        assert [d.condition for d in analysis.possible_conditions] == ["Enxaqueca"]

        enxaqueca = analysis.possible_conditions[0]
        assert enxaqueca.probability == pytest.approx(0.6 * 0.5 + 0.1)
        assert enxaqueca.confidence == Confidence.LOW
        assert analysis.risk_level == RiskLevel.LOW

    def test_migraine_without_bonus_is_dropped(self) -> None:
        analysis = analyze(make_patient("dor de cabeça latejante"))
        assert analysis.possible_conditions == []


class TestCriticalScenario:
    def test_immediate_urgency_makes_risk_critical(self) -> None:
        analysis = analyze(make_patient(CRITICAL_SYMPTOMS))
        top = analysis.possible_conditions[0]

        assert top.condition == "Infarto Agudo do Miocárdio"
        assert top.probability == 0.95
        assert top.urgency == Urgency.IMMEDIATE
        assert analysis.risk_level == RiskLevel.CRITICAL
        assert "95%" in analysis.initial_assessment
        assert analysis.initial_assessment.endswith(IMMEDIATE_CARE_WARNING)

    def test_urgent_next_steps_for_high_probability(self) -> None:
        analysis = analyze(make_patient(CRITICAL_SYMPTOMS))
        top = analysis.possible_conditions[0]
        assert top.next_steps[0] == "Encaminhar para atendimento médico urgente"
        assert top.recommendations[0].startswith("ATENÇÃO")

    def test_questions_keep_generation_order(self) -> None:
        analysis = analyze(make_patient(CRITICAL_SYMPTOMS))
        # Angina is generated first even though Infarto ranks higher
        assert all(
            q.condition_key == "angina_de_peito" for q in analysis.generated_questions
        )


class TestTransientIschemicScenario:
    """tontura e perda de consciência: only AIT matches, and it is urgent-class."""

    def test_ait_raises_risk_to_high(self) -> None:
        analysis = analyze(make_patient("tontura e perda de consciência"))

        assert [d.condition for d in analysis.possible_conditions] == [
            "Ataque Isquêmico Transitório (AIT)"
        ]
        ait = analysis.possible_conditions[0]
        assert ait.probability == pytest.approx(0.4)
        assert ait.urgency == Urgency.URGENT
        assert analysis.risk_level == RiskLevel.HIGH


class TestEmptyInput:
    @pytest.mark.parametrize("symptoms", ["", None, "   ", "dor no joelho"])
    def test_generic_questions_and_low_risk(self, symptoms) -> None:
        analysis = analyze(make_patient(symptoms))

        assert analysis.possible_conditions == []
        assert analysis.risk_level == RiskLevel.LOW
        assert [q.id for q in analysis.generated_questions] == ["general_1", "general_2"]

    def test_generic_question_shapes(self) -> None:
        fever, onset = analyze(make_patient("")).generated_questions

        assert fever.type == QuestionType.YES_NO
        assert fever.priority == Priority.MEDIUM
        assert fever.category == "general"
        assert fever.options is None
        assert onset.type == QuestionType.MULTIPLE_CHOICE
        assert onset.priority == Priority.HIGH
        assert onset.options == [
            "Menos de 1 hora",
            "1-6 horas",
            "6-24 horas",
            "Mais de 24 horas",
        ]

    def test_generic_assessment(self) -> None:
        analysis = analyze(make_patient(""))
        assert "requerem investigação adicional" in analysis.initial_assessment


class TestInvariants:
    @pytest.mark.parametrize(
        "symptoms",
        [
            CHEST_SYMPTOMS,
            CRITICAL_SYMPTOMS,
            "falta de ar e chiado no peito que piora à noite",
            "tontura constante e perda de consciência",
            "DOR DE CABEÇA FORTE",
        ],
    )
    def test_probabilities_confidence_and_order(self, symptoms: str) -> None:
        analysis = analyze(make_patient(symptoms))
        probabilities = [d.probability for d in analysis.possible_conditions]

        assert probabilities == sorted(probabilities, reverse=True)
        assert len(analysis.generated_questions) <= 5
        for diagnosis in analysis.possible_conditions:
            assert 0.3 < diagnosis.probability <= 0.95
            assert diagnosis.confidence == classify_confidence(diagnosis.probability)

    def test_deterministic(self) -> None:
        patient = make_patient(CRITICAL_SYMPTOMS)
        assert analyze(patient) == analyze(patient)

    def test_uppercase_text_is_matched(self) -> None:
        analysis = analyze(make_patient("FALTA DE AR E CHIADO NO PEITO"))
        assert [d.condition for d in analysis.possible_conditions] == ["Asma"]
        assert analysis.possible_conditions[0].probability == pytest.approx(0.5)
