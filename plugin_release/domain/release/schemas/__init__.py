from plugin_release.domain.release.schemas.base import ReleaseRequest, ReleaseState
from plugin_release.domain.release.schemas.git import (
    ChangelogOutput,
    ChangelogResult,
    ChangeWindow,
)
from plugin_release.domain.release.schemas.plugin import (
    FramerJson,
    PluginInfo,
    PluginPackageJson,
)
from plugin_release.domain.release.schemas.submission import SubmissionResponse

__all__ = [
    "FramerJson",
    "PluginPackageJson",
    "PluginInfo",
    "ChangeWindow",
    "ChangelogResult",
    "ChangelogOutput",
    "SubmissionResponse",
    "ReleaseRequest",
    "ReleaseState",
]
