from pathlib import Path

import httpx
from pydantic import ValidationError

from plugin_release.core.exceptions import SubmissionError
from plugin_release.core.logging import get_logger
from plugin_release.domain.release.schemas import PluginInfo, SubmissionResponse

logger = get_logger(__name__)


class MarketplaceClient:
    """마켓플레이스 플러그인 버전 제출 클라이언트"""

    def __init__(
        self,
        base_url: str,
        session_token: str,
        admin_secret: str,
        timeout: float = 300.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._session_token = session_token
        self._admin_secret = admin_secret
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        """httpx 클라이언트 종료"""
        await self._client.aclose()

    def _get_headers(self) -> dict[str, str]:
        return {
            "Cookie": f"session={self._session_token}",
            "Authorization": f"Bearer {self._admin_secret}",
        }

    def submission_url(self, plugin_id: str) -> str:
        return f"{self.base_url}/api/admin/plugin/{plugin_id}/versions/"

    async def submit(self, plugin: PluginInfo, changelog: str) -> SubmissionResponse:
        """플러그인 zip과 changelog 제출

        Args:
            plugin: 플러그인 정보
            changelog: 이번 버전 changelog

        Returns:
            제출 응답

        Raises:
            SubmissionError: HTTP 오류 응답, 전송 실패, 응답 형식 오류
        """
        url = self.submission_url(plugin.id)
        logger.info("제출 시작 url=%s", url)

        zip_bytes = Path(plugin.zip_path).read_bytes()
        files = {"file": ("plugin.zip", zip_bytes, "application/zip")}
        data = {"content": changelog}

        try:
            response = await self._client.post(
                url, headers=self._get_headers(), files=files, data=data
            )
        except httpx.RequestError as e:
            raise SubmissionError(detail=f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise SubmissionError(
                status_code=response.status_code,
                detail=f"{response.reason_phrase}\n{response.text}",
            )

        try:
            result = SubmissionResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise SubmissionError(
                status_code=response.status_code, detail=f"Unexpected response: {e}"
            ) from e

        logger.info(
            "제출 완료 version=%s version_id=%s", result.version, result.version_id
        )
        return result
