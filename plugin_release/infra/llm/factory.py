from plugin_release.core.config import Settings
from plugin_release.core.logging import get_logger
from plugin_release.infra.llm.base import BaseLLMClient
from plugin_release.infra.llm.gemini_client import GeminiClient
from plugin_release.infra.llm.openai_client import OpenAIClient

logger = get_logger(__name__)

_changelog_client: BaseLLMClient | None = None


def get_changelog_client(settings: Settings) -> BaseLLMClient:
    """changelog 생성용 LLM 클라이언트 반환"""
    global _changelog_client

    if _changelog_client is not None:
        return _changelog_client

    provider = settings.llm_provider

    if provider == "openai":
        _changelog_client = OpenAIClient(settings)
    elif provider == "gemini":
        _changelog_client = GeminiClient(settings)
    else:
        raise ValueError(f"Unsupported LLM provider: {provider}")

    logger.info(
        "LLM 클라이언트 초기화 provider=%s model=%s",
        _changelog_client.provider,
        _changelog_client.get_model_name(),
    )
    return _changelog_client


def reset_clients() -> None:
    """클라이언트 캐시 초기화 - 테스트용"""
    global _changelog_client
    _changelog_client = None
