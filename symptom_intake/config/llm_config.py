"""LLM configuration for GitHub Models API.

The diagnostic agent talks to a single clinical model through the
OpenAI-compatible GitHub Models endpoint. When no token is configured the
service runs on the local rule-based engine only.
"""

from langchain_openai import ChatOpenAI
from langchain_core.language_models import BaseChatModel
from symptom_intake.config.settings import settings
from typing import Optional
from pydantic import SecretStr
import logging

logger = logging.getLogger(__name__)


def _create_model(model_name: str) -> BaseChatModel:
    """Instantiate a ChatOpenAI client pointed at the GitHub Models endpoint."""
    logger.info(f"Creating GitHub Models client: {model_name}")
    return ChatOpenAI(
        base_url=settings.github_models_endpoint,
        api_key=SecretStr(settings.github_token or ""),
        model=model_name,
        temperature=settings.model_temperature,
        max_completion_tokens=settings.model_max_tokens,
    )


def get_diagnostic_model() -> Optional[BaseChatModel]:
    """Model used for symptom analysis and diagnosis refinement.

    Returns None when the LLM path is disabled or no token is set.
    """
    if not settings.llm_configured:
        logger.info("LLM not configured, local diagnostic engine will be used")
        return None
    return _create_model(settings.model_name)
