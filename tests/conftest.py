"""테스트 공통 fixture"""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from plugin_release.core.config import Settings
from plugin_release.core.exceptions import GitCommandError
from plugin_release.domain.release.schemas import (
    ChangeWindow,
    PluginInfo,
    ReleaseRequest,
    SubmissionResponse,
)
from plugin_release.infra.llm.factory import reset_clients
from tests.fakes import FakeBuilder


@pytest.fixture(autouse=True)
def _reset_llm_clients():
    """LLM 클라이언트 캐시 초기화"""
    reset_clients()
    yield
    reset_clients()


@pytest.fixture
def settings() -> Settings:
    """환경 변수와 .env에 영향받지 않는 설정"""
    return Settings(
        _env_file=None,
        plugin_path="plugins/my-plugin",
        changelog="- Fixed a bug",
        session_token="session-123",
        framer_admin_secret="secret-456",
        openai_api_key="sk-test",
        langfuse_public_key="",
        langfuse_secret_key="",
        github_output="",
    )


@pytest.fixture
def plugin_dir(tmp_path) -> Path:
    """framer.json과 package.json이 있는 플러그인 디렉토리"""
    path = tmp_path / "plugins" / "my-plugin"
    path.mkdir(parents=True)
    (path / "framer.json").write_text(
        json.dumps({"id": "abc123", "name": "My Plugin", "modes": ["canvas"]}),
        encoding="utf-8",
    )
    (path / "package.json").write_text(
        json.dumps({"name": "@plugins/my-plugin", "version": "1.0.0"}),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def sample_plugin_info(plugin_dir) -> PluginInfo:
    """테스트용 플러그인 정보"""
    return PluginInfo(
        id="abc123",
        name="My Plugin",
        workspace_name="@plugins/my-plugin",
        path=str(plugin_dir),
        zip_path=str(plugin_dir / "plugin.zip"),
    )


@pytest.fixture
def sample_release_request(plugin_dir, tmp_path) -> ReleaseRequest:
    """테스트용 릴리스 요청"""
    return ReleaseRequest(
        plugin_path=str(plugin_dir),
        changelog="- Fixed a bug",
        repo_root=str(tmp_path),
    )


@pytest.fixture
def sample_window() -> ChangeWindow:
    """테스트용 변경 내역"""
    return ChangeWindow(
        diff_text="diff --git a/plugins/my-plugin/src/App.tsx b/plugins/my-plugin/src/App.tsx\n+new line",
        commit_log="abc1234 Add dark mode\ndef5678 Fix crash on empty selection",
        since_tag="my-plugin-v3",
    )


@pytest.fixture
def sample_submission() -> SubmissionResponse:
    """테스트용 제출 응답"""
    return SubmissionResponse(version="4", version_id="ver_1", plugin_id="abc123")


@pytest.fixture
def fake_builder() -> FakeBuilder:
    return FakeBuilder()


@pytest.fixture
def mock_marketplace(sample_submission):
    """마켓플레이스 클라이언트 mock"""
    marketplace = MagicMock()
    marketplace.submit = AsyncMock(return_value=sample_submission)
    return marketplace


@pytest.fixture
def mock_notifier():
    """Slack 알림 mock"""
    notifier = MagicMock()
    notifier.notify_success = AsyncMock(return_value=True)
    notifier.notify_failure = AsyncMock(return_value=True)
    return notifier


@pytest.fixture
def create_http_error():
    """HTTPStatusError 생성 helper"""

    def _create(status_code: int, message: str = "Error"):
        return httpx.HTTPStatusError(
            message,
            request=httpx.Request("GET", "https://test.com"),
            response=httpx.Response(status_code),
        )

    return _create


@pytest.fixture
def git_error():
    """GitCommandError 생성 helper"""

    def _create(*args: str, detail: str = "fatal: error"):
        return GitCommandError(["git", *args], detail=detail)

    return _create
