"""Pytest configuration and fixtures for the intake service tests."""

from collections.abc import AsyncGenerator
from typing import List, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from langchain_core.messages import AIMessage, BaseMessage

from main import app
from symptom_intake.agents.diagnostic_agent import DiagnosticAgent
from symptom_intake.models.patient import PatientData
from symptom_intake.services.intake_service import IntakeService, get_intake_service

CHEST_SYMPTOMS = "aperto no peito, tontura ao levantar, falta de ar"


class FakeChatModel:
    """Chat model stand-in returning a canned reply or raising an error."""

    def __init__(self, reply: str = "", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[List[BaseMessage]] = []

    async def ainvoke(self, messages: List[BaseMessage]) -> AIMessage:
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.reply)


def make_patient(symptoms: Optional[str] = CHEST_SYMPTOMS, **overrides) -> PatientData:
    """Build patient data with sensible defaults."""
    fields = {
        "id": "patient_test",
        "name": "Maria da Silva",
        "age": 58,
        "gender": "F",
        "symptoms": symptoms,
    }
    fields.update(overrides)
    return PatientData(**fields)


@pytest.fixture
def local_agent() -> DiagnosticAgent:
    """Agent without an LLM: analysis always comes from the local engine."""
    return DiagnosticAgent(llm=None)


@pytest.fixture
def intake_service(local_agent: DiagnosticAgent) -> IntakeService:
    return IntakeService(local_agent)


@pytest.fixture
async def client(intake_service: IntakeService) -> AsyncGenerator[AsyncClient, None]:
    """Async test client wired to the local-engine intake service."""
    app.dependency_overrides[get_intake_service] = lambda: intake_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
