"""Build an LLMProvider from config, an explicit key, or whatever key the environment has."""

import importlib
import os

import structlog

from .base import LLMError, LLMProvider

logger = structlog.get_logger()

# name -> (env var holding its key, module, class); order is auto-detect priority
_PROVIDERS = {
    "claude": ("ANTHROPIC_API_KEY", ".providers.claude", "ClaudeProvider"),
    "openai": ("OPENAI_API_KEY", ".providers.openai", "OpenAIProvider"),
    "gemini": ("GOOGLE_API_KEY", ".providers.gemini", "GeminiProvider"),
}

# Checked in order: "sk-ant-" must win over the bare "sk-" prefix
_KEY_PREFIXES = [("sk-ant-", "claude"), ("sk-", "openai"), ("AI", "gemini")]


def _detect_provider_from_key(api_key: str) -> str | None:
    for prefix, name in _KEY_PREFIXES:
        if api_key.startswith(prefix):
            return name
    return None


def _auto_detect_provider(api_key: str | None = None) -> str:
    """Pick a provider from the key's prefix, else from the first env var set."""
    if api_key:
        inferred = _detect_provider_from_key(api_key)
        if inferred:
            return inferred

    for name, (env_var, _, _) in _PROVIDERS.items():
        if os.getenv(env_var):
            return name
    env_vars = ", ".join(env for env, _, _ in _PROVIDERS.values())
    raise LLMError(f"No LLM API key found. Set one of: {env_vars}")


def create_llm_provider(
    provider: str | None = None,
    api_key: str | None = None,
    model: str | None = None,
    client=None,
) -> LLMProvider:
    """Create an LLM provider instance.

    Args:
        provider: "claude", "openai", "gemini", "auto", or None (auto-detect)
        api_key: Explicit API key (overrides env var)
        model: Model name (None = provider default)
        client: Pre-built SDK client for testing/DI
    """
    name = provider or "auto"
    if name == "auto":
        name = _auto_detect_provider(api_key)

    if name not in _PROVIDERS:
        raise LLMError(f"Unknown provider: {name}. Use: {', '.join(_PROVIDERS)}")

    env_var, module_name, class_name = _PROVIDERS[name]
    if not api_key and not client:
        api_key = os.getenv(env_var)

    # Provider modules import their SDKs, so load only the one asked for
    module = importlib.import_module(module_name, package=__package__)
    instance = getattr(module, class_name)(api_key=api_key, model=model, client=client)
    logger.debug("llm.provider_created", provider=name, model=instance.model)
    return instance


def create_from_config(llm_config, api_key: str | None = None) -> LLMProvider:
    """Build a provider from an LLMConfig section.

    An explicit ``api_key`` wins over the one in config; both fall back to
    the provider's env var.
    """
    return create_llm_provider(
        provider=llm_config.provider,
        api_key=api_key or llm_config.api_key or None,
        model=llm_config.model,
    )
