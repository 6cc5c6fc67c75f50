"""Application configuration and settings."""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service Configuration
    service_name: str = "symptom-intake"
    symptom_intake_port: int = 8010
    environment: str = "development"

    # GitHub Models API (OpenAI-compatible endpoint)
    github_token: Optional[str] = None
    github_models_endpoint: str = "https://models.inference.ai.azure.com"
    model_name: str = "Llama-3.3-70B-Instruct"
    model_temperature: float = 0.3
    model_max_tokens: int = 2000
    llm_invoke_timeout: float = 30.0

    # Set to False to always use the local rule-based engine
    ai_enabled: bool = True

    # CORS
    cors_origins: List[str] = ["http://localhost:5173"]

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False
        protected_namespaces = ("settings_",)

    @property
    def llm_configured(self) -> bool:
        """True when an LLM client can be built."""
        return self.ai_enabled and bool(self.github_token)


# Global settings instance
settings = Settings()
