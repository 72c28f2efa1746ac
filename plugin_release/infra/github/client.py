import re

import httpx

from plugin_release.core.exceptions import GitHubAPIError
from plugin_release.core.logging import get_logger

logger = get_logger(__name__)

GITHUB_API_BASE = "https://api.github.com"

REPOSITORY_PATTERN = re.compile(r"^([a-zA-Z0-9_.-]+)/([a-zA-Z0-9_.-]+)$")

PER_PAGE = 100
# GitHub API는 PR 파일을 최대 3000개까지만 반환
MAX_FILE_PAGES = 30


def _get_headers(token: str | None = None) -> dict[str, str]:
    """GitHub API 요청 헤더 생성

    Args:
        token: GitHub 토큰

    Returns:
        HTTP 헤더 딕셔너리
    """
    headers = {"Accept": "application/vnd.github.v3+json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def parse_repository(repository: str) -> tuple[str, str]:
    """owner/repo 형식에서 owner와 repo 추출

    Args:
        repository: GITHUB_REPOSITORY 값

    Returns:
        owner, repo 튜플

    Raises:
        ValueError: 형식이 올바르지 않은 경우
    """
    match = REPOSITORY_PATTERN.match(repository.strip())
    if not match:
        raise ValueError(f"Invalid GitHub repository: {repository!r}")
    return match.group(1), match.group(2)


class GitHubClient:
    """PR 본문과 변경 파일 조회용 GitHub REST 클라이언트"""

    def __init__(
        self,
        repository: str,
        token: str | None = None,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.owner, self.repo = parse_repository(repository)
        self._token = token
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        """httpx 클라이언트 종료"""
        await self._client.aclose()

    def _pulls_url(self, pull_number: int) -> str:
        return f"{GITHUB_API_BASE}/repos/{self.owner}/{self.repo}/pulls/{pull_number}"

    async def _get(self, url: str, params: dict | None = None) -> httpx.Response:
        try:
            response = await self._client.get(
                url, headers=_get_headers(self._token), params=params
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise GitHubAPIError(f"HTTP {e.response.status_code} {url}") from e
        except httpx.RequestError as e:
            raise GitHubAPIError(f"{type(e).__name__} {url}") from e
        return response

    async def get_pull_body(self, pull_number: int) -> str | None:
        """PR 본문 조회

        Args:
            pull_number: PR 번호

        Returns:
            PR 본문, 비어 있으면 None
        """
        response = await self._get(self._pulls_url(pull_number))
        body = response.json().get("body")

        logger.info(
            "PR 본문 조회 완료 repo=%s/%s pr=%d", self.owner, self.repo, pull_number
        )
        return body or None

    async def get_pull_files(self, pull_number: int) -> list[str]:
        """PR에서 변경된 파일 경로 조회

        Args:
            pull_number: PR 번호

        Returns:
            변경 파일 경로 목록, 이름이 바뀐 파일은 이전 경로도 포함
        """
        url = f"{self._pulls_url(pull_number)}/files"
        paths: list[str] = []

        for page in range(1, MAX_FILE_PAGES + 1):
            response = await self._get(url, params={"per_page": PER_PAGE, "page": page})
            data = response.json()

            for item in data:
                paths.append(item["filename"])
                if item.get("previous_filename"):
                    paths.append(item["previous_filename"])

            if len(data) < PER_PAGE:
                break

        logger.info(
            "PR 파일 조회 완료 repo=%s/%s pr=%d files=%d",
            self.owner,
            self.repo,
            pull_number,
            len(paths),
        )
        return paths
