"""Multi-provider LLM abstraction layer."""

from .base import LLMAuthError, LLMError, LLMProvider, LLMRateLimitError
from .factory import create_from_config, create_llm_provider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "create_from_config",
    "LLMError",
    "LLMRateLimitError",
    "LLMAuthError",
]
