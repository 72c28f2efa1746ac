from plugin_release.infra.llm.base import BaseLLMClient
from plugin_release.infra.llm.client import format_change_window, generate_changelog
from plugin_release.infra.llm.factory import get_changelog_client, reset_clients
from plugin_release.infra.llm.gemini_client import GeminiClient
from plugin_release.infra.llm.openai_client import OpenAIClient

__all__ = [
    "BaseLLMClient",
    "OpenAIClient",
    "GeminiClient",
    "get_changelog_client",
    "reset_clients",
    "format_change_window",
    "generate_changelog",
]
