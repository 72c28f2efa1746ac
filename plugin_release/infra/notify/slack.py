import httpx

from plugin_release.core.logging import get_logger

logger = get_logger(__name__)


def _section(text: str) -> dict:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def build_success_message(
    plugin_name: str,
    changelog: str,
    version: str | None = None,
    dry_run: bool = False,
) -> dict:
    """제출 성공 메시지 생성"""
    prefix = "[DRY RUN] " if dry_run else ""
    version_suffix = f" v{version}" if version else ""
    version_line = f"\n*Version:* {version}" if version else ""

    return {
        "text": f"{prefix}Plugin submitted: {plugin_name}{version_suffix}",
        "blocks": [
            _section(
                f"*{prefix}Plugin submitted successfully!*\n\n*Name:* {plugin_name}{version_line}"
            ),
            _section(f"*Changelog:*\n{changelog}"),
        ],
    }


def build_failure_message(plugin_name: str, error: str) -> dict:
    """제출 실패 메시지 생성"""
    return {
        "text": f"Plugin submission failed: {plugin_name}",
        "blocks": [
            _section(f"*Plugin submission failed!*\n\n*Name:* {plugin_name}"),
            _section(f"*Error:*\n```{error}```"),
        ],
    }


class SlackNotifier:
    """Slack incoming webhook 알림

    전송 실패는 릴리스 결과에 영향을 주지 않으므로 로그만 남긴다.
    """

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.webhook_url = webhook_url
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        """httpx 클라이언트 종료"""
        await self._client.aclose()

    async def send(self, message: dict) -> bool:
        """메시지 전송, 성공 여부 반환"""
        try:
            response = await self._client.post(self.webhook_url, json=message)
        except httpx.RequestError as e:
            logger.error("Slack 알림 요청 실패 error=%s", type(e).__name__)
            return False

        if not response.is_success:
            logger.error("Slack 알림 실패 status_code=%d", response.status_code)
            return False

        logger.info("Slack 알림 전송 완료")
        return True

    async def notify_success(
        self,
        plugin_name: str,
        changelog: str,
        version: str | None = None,
        dry_run: bool = False,
    ) -> bool:
        return await self.send(build_success_message(plugin_name, changelog, version, dry_run))

    async def notify_failure(self, plugin_name: str, error: str) -> bool:
        return await self.send(build_failure_message(plugin_name, error))
