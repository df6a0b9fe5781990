"""Rehab Estimator configuration settings.

Loads configuration from environment variables with sensible defaults.
The Gemini API key comes from config.secrets unless passed in explicitly.
"""

import os
from typing import Optional
from dataclasses import dataclass, field
from dotenv import load_dotenv

from config.errors import ConfigurationError

# Load .env file for local development (model name, temperatures, API key)
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class Settings:
    """Application settings loaded from environment variables.

    A Settings instance is passed to GeminiService (and the agents that use
    it); the module-level ``settings`` singleton is only the default.
    """

    # Gemini Configuration
    gemini_model: str = field(default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.5-flash"))
    estimate_temperature: float = field(default_factory=lambda: float(os.getenv("ESTIMATE_TEMPERATURE", "0.0")))
    analysis_temperature: float = field(default_factory=lambda: float(os.getenv("ANALYSIS_TEMPERATURE", "0.1")))
    enable_search_grounding: bool = field(default_factory=lambda: _env_flag("ENABLE_SEARCH_GROUNDING", "true"))

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # Explicit key wins over the secrets lookup (use gemini_api_key property)
    api_key: Optional[str] = field(default=None, repr=False)

    @property
    def gemini_api_key(self) -> Optional[str]:
        """Get the Gemini API key.

        Falls back to the unified secrets module when no key was injected.
        """
        if self.api_key is None:
            from config.secrets import get_gemini_api_key
            self.api_key = get_gemini_api_key()
        return self.api_key

    def validate(self) -> None:
        """Validate required settings are present.

        Raises:
            ConfigurationError: If the Gemini API key is missing.
        """
        if not self.gemini_api_key:
            raise ConfigurationError(
                "Missing GEMINI_API_KEY. Set it in the environment or pass api_key to Settings.",
                setting="GEMINI_API_KEY"
            )


# Singleton settings instance
settings = Settings()
