"""AI-backed diagnostic agent with local fallbacks.

Without an LLM both methods run the local rule-based engine. When the LLM
times out or returns something that is not a valid analysis,
analyze_symptoms falls back to the local engine and refine_diagnosis keeps
the prior analysis unchanged.
Neither method raises for LLM failures.
"""

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import ValidationError
from typing import Any, Dict, List, Optional
from symptom_intake.agents.prompts import (
    ANALYSIS_PROMPT,
    DIAGNOSTIC_SYSTEM_PROMPT,
    REFINEMENT_PROMPT,
)
from symptom_intake.config.llm_config import get_diagnostic_model
from symptom_intake.engine import analyze, refine
from symptom_intake.engine.recommendations import build_initial_assessment
from symptom_intake.engine.scoring import classify_confidence
from symptom_intake.models.analysis import Analysis, Answer, Diagnosis
from symptom_intake.models.levels import AnalysisSource, RiskLevel
from symptom_intake.models.patient import PatientData
from symptom_intake.utils.llm_helpers import (
    LLMResponseError,
    extract_json_object,
    invoke_llm_with_timeout,
)
import json
import logging

logger = logging.getLogger(__name__)


def _parse_diagnoses(raw: Any) -> List[Diagnosis]:
    diagnoses = []
    for entry in raw or []:
        if isinstance(entry, dict) and "confidence" not in entry:
            probability = entry.get("probability")
            if isinstance(probability, (int, float)):
                entry = {**entry, "confidence": classify_confidence(probability)}
        diagnoses.append(Diagnosis.model_validate(entry))
    return sorted(diagnoses, key=lambda d: d.probability, reverse=True)


def _field(parsed: Dict[str, Any], name: str, default: Any) -> Any:
    """Value of a reply field, or the default when missing, null or blank."""
    value = parsed.get(name)
    if value is None or value == "":
        return default
    return value


class DiagnosticAgent:
    """Runs symptom analysis and refinement through the LLM when configured."""

    def __init__(self, llm: Optional[BaseChatModel] = None):
        self.llm = llm

    async def analyze_symptoms(self, patient: PatientData) -> Analysis:
        """
        Preliminary analysis of the patient's symptoms.

        Args:
            patient: Submitted patient data

        Returns:
            Analysis from the LLM, or from the local engine on any failure
        """
        if self.llm is None:
            return analyze(patient)

        logger.info(f"🤖 Analyzing symptoms with LLM for patient {patient.id}")
        messages = [
            SystemMessage(content=DIAGNOSTIC_SYSTEM_PROMPT),
            HumanMessage(content=self._build_analysis_prompt(patient)),
        ]

        try:
            content = await invoke_llm_with_timeout(self.llm, messages)
            analysis = self._parse_analysis(content, patient)
            logger.info(
                f"LLM analysis: {len(analysis.possible_conditions)} condition(s), "
                f"risk={analysis.risk_level.value}"
            )
            return analysis
        except (LLMResponseError, ValidationError) as e:
            logger.error(f"Failed to parse LLM analysis: {e}")
        except Exception as e:
            logger.error(f"❌ LLM analysis failed: {e}", exc_info=True)

        logger.info("🔄 Using local diagnostic engine as fallback")
        return analyze(patient)

    async def refine_diagnosis(
        self, answers: List[Answer], analysis: Analysis
    ) -> Analysis:
        """
        Refine an analysis with the patient's answers.

        Args:
            answers: Answers collected for the generated questions
            analysis: Analysis being refined

        Returns:
            Refined analysis from the LLM (or the local engine when no LLM
            is configured), or the given analysis unchanged on LLM failure
        """
        if self.llm is None:
            return refine(answers, analysis)

        logger.info(f"🤖 Refining diagnosis with LLM using {len(answers)} answer(s)")
        messages = [
            SystemMessage(content=DIAGNOSTIC_SYSTEM_PROMPT),
            HumanMessage(content=self._build_refinement_prompt(answers, analysis)),
        ]

        try:
            content = await invoke_llm_with_timeout(self.llm, messages)
            return self._parse_refinement(content, analysis)
        except (LLMResponseError, ValidationError) as e:
            logger.error(f"Failed to parse LLM refinement: {e}")
        except Exception as e:
            logger.error(f"❌ LLM refinement failed: {e}", exc_info=True)

        logger.info("🔄 Keeping current analysis")
        return analysis

    def _build_analysis_prompt(self, patient: PatientData) -> str:
        vital_signs = (
            patient.vital_signs.model_dump(exclude_none=True)
            if patient.vital_signs
            else {}
        )
        return ANALYSIS_PROMPT.format(
            name=patient.name or "Not informed",
            age=patient.age,
            gender=patient.gender.value,
            symptoms=patient.symptoms or "Not informed",
            medical_history=patient.medical_history or "Not informed",
            current_medications=patient.current_medications or "None",
            vital_signs=json.dumps(vital_signs, ensure_ascii=False),
        )

    def _build_refinement_prompt(self, answers: List[Answer], analysis: Analysis) -> str:
        answer_lines = []
        for answer in answers:
            question = analysis.find_question(answer.question_id)
            question_text = question.text if question else answer.question_id
            answer_lines.append(
                f"Question: {question_text}\nAnswer: {answer.display_value()}"
            )

        return REFINEMENT_PROMPT.format(
            analysis_json=analysis.model_dump_json(indent=2, exclude={"source"}),
            answers_text="\n\n".join(answer_lines) or "No answers given.",
        )

    def _parse_analysis(self, content: str, patient: PatientData) -> Analysis:
        parsed: Dict[str, Any] = extract_json_object(content)
        diagnoses = _parse_diagnoses(_field(parsed, "possible_conditions", []))

        return Analysis(
            initial_assessment=_field(
                parsed,
                "initial_assessment",
                build_initial_assessment(patient.symptoms, diagnoses),
            ),
            possible_conditions=diagnoses,
            generated_questions=_field(parsed, "generated_questions", []),
            risk_level=_field(parsed, "risk_level", RiskLevel.LOW),
            recommendations=_field(parsed, "recommendations", []),
            source=AnalysisSource.AI,
        )

    def _parse_refinement(self, content: str, current: Analysis) -> Analysis:
        parsed: Dict[str, Any] = extract_json_object(content)

        diagnoses = current.possible_conditions
        if _field(parsed, "possible_conditions", None) is not None:
            diagnoses = _parse_diagnoses(parsed["possible_conditions"])

        return Analysis(
            initial_assessment=_field(
                parsed, "initial_assessment", current.initial_assessment
            ),
            possible_conditions=diagnoses,
            generated_questions=_field(
                parsed, "generated_questions", current.generated_questions
            ),
            risk_level=_field(parsed, "risk_level", current.risk_level),
            recommendations=_field(parsed, "recommendations", current.recommendations),
            source=AnalysisSource.AI,
        )


# Global agent instance
_diagnostic_agent: Optional[DiagnosticAgent] = None


def get_diagnostic_agent() -> DiagnosticAgent:
    """Get or create the DiagnosticAgent instance."""
    global _diagnostic_agent
    if _diagnostic_agent is None:
        _diagnostic_agent = DiagnosticAgent(llm=get_diagnostic_model())
    return _diagnostic_agent
