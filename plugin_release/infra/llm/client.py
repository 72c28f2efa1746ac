import os

from langchain_core.messages import HumanMessage, SystemMessage
from langfuse.langchain import CallbackHandler

from plugin_release.core.config import Settings
from plugin_release.core.exceptions import LLMError
from plugin_release.core.logging import get_logger
from plugin_release.domain.release.prompts import (
    CHANGELOG_GENERATOR_HUMAN,
    CHANGELOG_GENERATOR_SYSTEM,
)
from plugin_release.domain.release.schemas import ChangelogOutput, ChangeWindow
from plugin_release.infra.llm.base import BaseLLMClient
from plugin_release.infra.llm.factory import get_changelog_client

logger = get_logger(__name__)


def get_langfuse_handler(settings: Settings) -> CallbackHandler | None:
    """Langfuse 콜백 핸들러 반환"""
    if not settings.langfuse_public_key or not settings.langfuse_secret_key:
        return None

    # Langfuse 클라이언트는 환경 변수에서 자격 증명을 읽는다
    os.environ.setdefault("LANGFUSE_PUBLIC_KEY", settings.langfuse_public_key)
    os.environ.setdefault("LANGFUSE_SECRET_KEY", settings.langfuse_secret_key)
    os.environ.setdefault("LANGFUSE_HOST", settings.langfuse_base_url)
    return CallbackHandler()


def format_change_window(plugin_name: str, window: ChangeWindow) -> str:
    """변경 내역을 프롬프트용 텍스트로 포맷"""
    if window.since_tag:
        window_label = f"since release {window.since_tag}"
    else:
        window_label = "since it was added (first release)"

    lines = [f"### Commits {window_label}"]
    lines.append(window.commit_log or "(none)")
    lines.append("")
    lines.append("### Diff")
    lines.append("```diff")
    lines.append(window.diff_text)
    lines.append("```")
    if window.truncated:
        lines.append("")
        lines.append("Note: the diff was truncated; rely on the commit messages for the rest.")

    return CHANGELOG_GENERATOR_HUMAN.format(
        plugin_name=plugin_name,
        window_label=window_label,
        change_context="\n".join(lines),
    )


def format_entries(output: ChangelogOutput) -> str:
    """LLM 출력 항목을 bullet 목록으로 변환"""
    entries = []
    for entry in output.entries:
        text = entry.strip().lstrip("-*").strip()
        if text:
            entries.append(f"- {text}")
    return "\n".join(entries)


async def generate_changelog(
    plugin_name: str,
    window: ChangeWindow,
    settings: Settings,
    client: BaseLLMClient | None = None,
) -> str:
    """변경 내역 기반 changelog 생성

    Raises:
        LLMError: 모델 호출 실패 또는 생성 결과가 비어 있는 경우
    """
    logger.debug("changelog 생성 요청 plugin=%s since=%s", plugin_name, window.since_tag)

    langfuse_handler = get_langfuse_handler(settings)
    config = {
        "callbacks": [langfuse_handler] if langfuse_handler else [],
        "metadata": {
            "langfuse_tags": ["changelog", plugin_name],
        },
    }

    llm_client = client or get_changelog_client(settings)
    llm = llm_client.changelog_model()
    messages = [
        SystemMessage(content=CHANGELOG_GENERATOR_SYSTEM),
        HumanMessage(content=format_change_window(plugin_name, window)),
    ]
    try:
        result = await llm.ainvoke(messages, config=config)
    except Exception as e:
        logger.error("changelog 생성 호출 실패 plugin=%s error=%s", plugin_name, type(e).__name__)
        raise LLMError(f"{type(e).__name__}: {e}") from e

    if result is None:
        raise LLMError("model returned no structured output")

    changelog = format_entries(result)
    if not changelog:
        raise LLMError("model returned no changelog entries")

    logger.debug("changelog 생성 완료 plugin=%s entries=%d", plugin_name, len(result.entries))
    return changelog
