from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from plugin_release.core.exceptions import ConfigError


class Settings(BaseSettings):
    """릴리스 스크립트 설정

    프로세스 시작 시 한 번 생성하여 각 협력 객체에 명시적으로 전달한다.
    """

    environment: str = "development"

    # 대상 플러그인
    plugin_path: str = ""
    changelog: str = ""
    repo_root: str = "."
    plugins_dir: str = "plugins"

    # 마켓플레이스 API
    session_token: str = ""
    framer_admin_secret: str = ""
    creators_api_base: str = "https://creators.framer.com"
    dry_run: bool = False

    # Slack
    slack_webhook_url: str = ""

    # GitHub
    github_token: str = ""
    github_repository: str = ""
    github_output: str = ""

    # LLM 프로바이더 선택: "openai" 또는 "gemini"
    llm_provider: str = "openai"

    # OpenAI 설정
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_timeout: float = 120.0

    # Gemini 설정
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_timeout: float = 120.0

    # Timeout 설정
    submission_timeout: float = 300.0
    slack_timeout: float = 30.0
    github_timeout: float = 60.0

    # changelog 생성 설정
    max_diff_chars: int = 50_000

    # 로깅 설정
    log_level: str = "INFO"

    # Langfuse 설정
    langfuse_public_key: str = ""
    langfuse_secret_key: str = ""
    langfuse_base_url: str = "https://cloud.langfuse.com"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("creators_api_base")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def missing_for_submission(self) -> list[str]:
        """플러그인 제출에 필요한 설정 중 누락된 환경 변수 이름 반환"""
        missing = []
        if not self.plugin_path:
            missing.append("PLUGIN_PATH")
        if not self.changelog:
            missing.append("CHANGELOG")

        if not self.dry_run:
            if not self.session_token:
                missing.append("SESSION_TOKEN")
            if not self.framer_admin_secret:
                missing.append("FRAMER_ADMIN_SECRET")
        return missing

    def require_submission(self) -> None:
        """제출 필수 설정 검증

        Raises:
            ConfigError: 필수 환경 변수가 누락된 경우
        """
        missing = self.missing_for_submission()
        if missing:
            raise ConfigError(detail=", ".join(missing))
