from enum import Enum


class ErrorCode(str, Enum):
    """에러 코드 열거형"""

    CONFIG_MISSING = "CONFIG_MISSING"
    PLUGIN_INFO_INVALID = "PLUGIN_INFO_INVALID"
    BUILD_FAILED = "BUILD_FAILED"
    PACK_FAILED = "PACK_FAILED"
    SUBMISSION_FAILED = "SUBMISSION_FAILED"
    GIT_COMMAND_FAILED = "GIT_COMMAND_FAILED"
    GITHUB_API_ERROR = "GITHUB_API_ERROR"
    LLM_ERROR = "LLM_ERROR"


class ReleaseError(Exception):
    def __init__(
        self,
        error_code: ErrorCode | str,
        message: str,
        detail: str | None = None,
    ):
        self.error_code = error_code
        self.message = message
        self.detail = detail
        super().__init__(f"{message}: {detail}" if detail else message)


class ConfigError(ReleaseError):
    def __init__(self, detail: str | None = None):
        super().__init__(
            error_code=ErrorCode.CONFIG_MISSING,
            message="Missing required environment variables",
            detail=detail,
        )


class PluginInfoError(ReleaseError):
    def __init__(self, detail: str | None = None):
        super().__init__(
            error_code=ErrorCode.PLUGIN_INFO_INVALID,
            message="Invalid plugin metadata",
            detail=detail,
        )


class BuildError(ReleaseError):
    def __init__(self, detail: str | None = None):
        super().__init__(
            error_code=ErrorCode.BUILD_FAILED,
            message="Build failed",
            detail=detail,
        )


class PackError(ReleaseError):
    def __init__(self, detail: str | None = None):
        super().__init__(
            error_code=ErrorCode.PACK_FAILED,
            message="Pack failed",
            detail=detail,
        )


class SubmissionError(ReleaseError):
    def __init__(self, status_code: int | None = None, detail: str | None = None):
        self.status_code = status_code
        message = "API submission failed"
        if status_code is not None:
            message = f"{message}: HTTP {status_code}"
        super().__init__(
            error_code=ErrorCode.SUBMISSION_FAILED,
            message=message,
            detail=detail,
        )


class GitCommandError(ReleaseError):
    def __init__(self, command: list[str], detail: str | None = None):
        self.command = command
        super().__init__(
            error_code=ErrorCode.GIT_COMMAND_FAILED,
            message=f"git command failed: {' '.join(command)}",
            detail=detail,
        )


class GitHubAPIError(ReleaseError):
    def __init__(self, detail: str | None = None):
        super().__init__(
            error_code=ErrorCode.GITHUB_API_ERROR,
            message="GitHub API request failed",
            detail=detail,
        )


class LLMError(ReleaseError):
    def __init__(self, detail: str | None = None):
        super().__init__(
            error_code=ErrorCode.LLM_ERROR,
            message="Changelog generation failed",
            detail=detail,
        )
