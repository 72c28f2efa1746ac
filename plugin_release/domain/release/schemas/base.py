from typing import Any, TypedDict

from pydantic import BaseModel

from plugin_release.domain.release.schemas.plugin import PluginInfo
from plugin_release.domain.release.schemas.submission import SubmissionResponse


class ReleaseRequest(BaseModel):
    """플러그인 릴리스 요청"""

    plugin_path: str
    changelog: str
    repo_root: str
    dry_run: bool = False


class ReleaseState(TypedDict, total=False):
    """LangGraph 릴리스 워크플로우 상태"""

    request: ReleaseRequest
    services: Any
    plugin_info: PluginInfo
    zip_path: str
    submission: SubmissionResponse | None
    tag_name: str | None
    error_code: str
    error_message: str
