"""GitHub 클라이언트 테스트"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from plugin_release.core.exceptions import ErrorCode, GitHubAPIError
from plugin_release.infra.github.actions import write_output
from plugin_release.infra.github.client import (
    MAX_FILE_PAGES,
    PER_PAGE,
    GitHubClient,
    _get_headers,
    parse_repository,
)


class TestParseRepository:
    """parse_repository 함수 테스트"""

    @pytest.mark.parametrize(
        "repository,expected",
        [
            ("framer/plugins", ("framer", "plugins")),
            ("org-name/repo_name", ("org-name", "repo_name")),
            (" User123/Repo.Name ", ("User123", "Repo.Name")),
        ],
    )
    def test_valid(self, repository, expected):
        """유효한 owner/repo"""
        assert parse_repository(repository) == expected

    @pytest.mark.parametrize("repository", ["", "framer", "framer/plugins/extra", "/plugins"])
    def test_invalid(self, repository):
        """유효하지 않은 형식"""
        with pytest.raises(ValueError):
            parse_repository(repository)


class TestGetHeaders:
    """_get_headers 함수 테스트"""

    def test_with_token(self):
        """토큰이 있으면 인증 헤더 포함"""
        headers = _get_headers("test-token")

        assert headers["Authorization"] == "Bearer test-token"
        assert headers["Accept"] == "application/vnd.github.v3+json"

    def test_without_token(self):
        """토큰이 없으면 인증 헤더 없음"""
        assert "Authorization" not in _get_headers(None)


class TestGitHubClient:
    """GitHubClient 테스트"""

    @pytest.mark.asyncio
    async def test_get_pull_body(self):
        """PR 본문 조회"""
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"body": "### Changelog\n\n- Entry"})

        client = GitHubClient(
            "framer/plugins",
            token="test-token",
            client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
        body = await client.get_pull_body(42)
        await client.aclose()

        assert body == "### Changelog\n\n- Entry"
        assert captured["url"] == "https://api.github.com/repos/framer/plugins/pulls/42"
        assert captured["auth"] == "Bearer test-token"

    @pytest.mark.asyncio
    async def test_get_pull_body_empty(self):
        """본문이 없는 PR"""
        client = GitHubClient(
            "framer/plugins",
            client=httpx.AsyncClient(
                transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"body": None}))
            ),
        )

        assert await client.get_pull_body(42) is None

    @pytest.mark.asyncio
    async def test_get_pull_files_paginates(self):
        """페이지 단위로 모든 파일 조회"""
        pages = {
            "1": [{"filename": f"plugins/foo/file{i}.ts"} for i in range(PER_PAGE)],
            "2": [{"filename": "plugins/bar/new.ts", "previous_filename": "plugins/baz/old.ts"}],
        }
        requested = []

        def handler(request: httpx.Request) -> httpx.Response:
            page = request.url.params["page"]
            requested.append(page)
            assert request.url.params["per_page"] == str(PER_PAGE)
            return httpx.Response(200, json=pages[page])

        client = GitHubClient(
            "framer/plugins",
            client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
        paths = await client.get_pull_files(7)

        assert requested == ["1", "2"]
        assert len(paths) == PER_PAGE + 2
        assert paths[-2:] == ["plugins/bar/new.ts", "plugins/baz/old.ts"]

    @pytest.mark.asyncio
    async def test_get_pull_files_page_limit(self):
        """최대 페이지 수 제한"""
        full_page = [{"filename": "plugins/foo/a.ts"}] * PER_PAGE
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.params["page"])
            return httpx.Response(200, json=full_page)

        client = GitHubClient(
            "framer/plugins",
            client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
        await client.get_pull_files(7)

        assert len(calls) == MAX_FILE_PAGES

    @pytest.mark.asyncio
    async def test_http_error(self, create_http_error):
        """HTTP 오류는 GitHubAPIError"""
        response = MagicMock()
        response.raise_for_status.side_effect = create_http_error(404, "Not Found")
        http_client = MagicMock()
        http_client.get = AsyncMock(return_value=response)

        client = GitHubClient("framer/plugins", client=http_client)

        with pytest.raises(GitHubAPIError) as exc_info:
            await client.get_pull_body(42)

        assert exc_info.value.error_code == ErrorCode.GITHUB_API_ERROR
        assert "HTTP 404" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_request_error(self):
        """전송 실패는 GitHubAPIError"""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = GitHubClient(
            "framer/plugins",
            client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

        with pytest.raises(GitHubAPIError, match="ConnectError"):
            await client.get_pull_files(42)


class TestWriteOutput:
    """write_output 함수 테스트"""

    def test_no_output_path(self):
        """GITHUB_OUTPUT 미설정"""
        assert write_output("", "plugins", "[]") is False

    def test_appends_multiline_value(self, tmp_path):
        """여러 줄 값을 구분자로 감싸 추가"""
        output = tmp_path / "github_output"
        output.write_text("existing=1\n", encoding="utf-8")

        assert write_output(str(output), "changelog", "- First\n- Second") is True

        lines = output.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "existing=1"
        key, delimiter = lines[1].split("<<")
        assert key == "changelog"
        assert delimiter.startswith("ghadelimiter_")
        assert lines[2:4] == ["- First", "- Second"]
        assert lines[4] == delimiter

    def test_unique_delimiters(self, tmp_path):
        """값마다 다른 구분자"""
        output = tmp_path / "github_output"

        write_output(str(output), "a", "1")
        write_output(str(output), "b", "2")

        headers = [line for line in output.read_text(encoding="utf-8").splitlines() if "<<" in line]
        delimiters = {line.split("<<")[1] for line in headers}
        assert len(delimiters) == 2
