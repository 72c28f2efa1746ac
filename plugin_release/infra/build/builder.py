import subprocess
import zipfile
from pathlib import Path

from plugin_release.core.exceptions import BuildError, PackError
from plugin_release.core.logging import get_logger
from plugin_release.domain.release.constants import DIST_DIR, ZIP_FILE_NAME
from plugin_release.domain.release.schemas import PluginInfo
from plugin_release.infra.build.base import ArtifactBuilder

logger = get_logger(__name__)

LOCK_FILES = [
    ("yarn.lock", "yarn"),
    ("pnpm-lock.yaml", "pnpm"),
    ("bun.lockb", "bun"),
    ("bun.lock", "bun"),
    ("package-lock.json", "npm"),
]

MAX_LOOKUP_DEPTH = 3


def detect_package_manager(cwd: str | Path) -> str:
    """lock 파일로 패키지 매니저 감지, 현재 디렉토리부터 상위 2단계까지 탐색"""
    directory = Path(cwd).resolve()
    for _ in range(MAX_LOOKUP_DEPTH):
        for lock_file, manager in LOCK_FILES:
            if (directory / lock_file).exists():
                return manager

        if directory.parent == directory:
            break
        directory = directory.parent
    return "npm"


def run_command(command: list[str], cwd: str | Path) -> None:
    """외부 빌드 명령 실행, 출력은 그대로 터미널로 전달

    Raises:
        BuildError: 실행 실패 또는 0이 아닌 종료 코드
    """
    logger.info("명령 실행 command=%s cwd=%s", " ".join(command), cwd)
    try:
        result = subprocess.run(command, cwd=cwd, check=False)
    except OSError as e:
        raise BuildError(f"Failed to start build process: {e}") from e

    if result.returncode != 0:
        raise BuildError(f"{' '.join(command)} exited with code {result.returncode}")


def zip_dist_folder(
    cwd: str | Path,
    dist_path: str = DIST_DIR,
    zip_file_name: str = ZIP_FILE_NAME,
) -> str:
    """dist 디렉토리 내용을 zip 파일로 압축

    Raises:
        PackError: dist 디렉토리가 없는 경우
    """
    base = Path(cwd)
    dist = base / dist_path
    if not dist.is_dir():
        raise PackError(
            f"The '{dist_path}' directory does not exist at {dist}. "
            "Please make sure to build the Plugin first."
        )

    zip_path = base / zip_file_name
    with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for file in sorted(dist.rglob("*")):
            if file.is_file():
                archive.write(file, file.relative_to(dist).as_posix())

    logger.info("zip 생성 완료 path=%s", zip_path)
    return str(zip_path)


def build_and_zip(cwd: str | Path, skip_build: bool = False) -> str:
    """감지된 패키지 매니저로 빌드 후 dist를 zip으로 압축"""
    if not skip_build:
        package_manager = detect_package_manager(cwd)
        logger.info("패키지 매니저 감지 manager=%s", package_manager)
        run_command([package_manager, "run", "build"], cwd)
    return zip_dist_folder(cwd)


class YarnWorkspaceBuilder(ArtifactBuilder):
    """yarn workspace 기반 모노레포 빌더"""

    def __init__(self, repo_root: str | Path):
        self.repo_root = Path(repo_root)

    def build(self, plugin: PluginInfo) -> None:
        run_command(["yarn", "workspace", plugin.workspace_name, "build"], self.repo_root)
        logger.info("빌드 완료 workspace=%s", plugin.workspace_name)

    def pack(self, plugin: PluginInfo) -> str:
        return zip_dist_folder(plugin.path, zip_file_name=Path(plugin.zip_path).name)
