import json
from collections.abc import Awaitable, Callable
from pathlib import Path

from pydantic import ValidationError

from plugin_release.core.exceptions import GitCommandError, PluginInfoError
from plugin_release.core.logging import get_logger
from plugin_release.domain.release.constants import (
    DIFF_TRUNCATION_MARKER,
    EMPTY_TREE_SHA,
    MAX_DIFF_CHARS,
    ZIP_FILE_NAME,
)
from plugin_release.domain.release.parsers import extract_changelog, tag_prefix
from plugin_release.domain.release.schemas import (
    ChangelogResult,
    ChangeWindow,
    FramerJson,
    PluginInfo,
    PluginPackageJson,
)
from plugin_release.infra.git.base import DiffProvider, GitRepository, TagRepository

logger = get_logger(__name__)

ChangelogGenerator = Callable[[str, ChangeWindow], Awaitable[str]]


def _read_json(path: Path) -> dict:
    """JSON 파일 읽기

    Raises:
        PluginInfoError: 파일이 없거나 JSON이 아닌 경우
    """
    if not path.exists():
        raise PluginInfoError(f"{path.name} not found at {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise PluginInfoError(f"{path.name} is not valid JSON: {e}") from e


def load_plugin_info(plugin_path: str | Path) -> PluginInfo:
    """framer.json과 package.json에서 플러그인 정보 로드

    Args:
        plugin_path: 플러그인 디렉토리

    Returns:
        플러그인 정보

    Raises:
        PluginInfoError: 디렉토리/파일/필수 필드가 없는 경우
    """
    path = Path(plugin_path).resolve()
    if not path.is_dir():
        raise PluginInfoError(f"Plugin path does not exist: {path}")

    try:
        framer_json = FramerJson.model_validate(_read_json(path / "framer.json"))
        package_json = PluginPackageJson.model_validate(_read_json(path / "package.json"))
    except ValidationError as e:
        raise PluginInfoError(str(e)) from e

    if not framer_json.id:
        raise PluginInfoError("framer.json is missing 'id' field")
    if not framer_json.name:
        raise PluginInfoError("framer.json is missing 'name' field")
    if not package_json.name:
        raise PluginInfoError("package.json is missing 'name' field")

    logger.info(
        "플러그인 정보 로드 완료 name=%s id=%s workspace=%s",
        framer_json.name,
        framer_json.id,
        package_json.name,
    )
    return PluginInfo(
        id=framer_json.id,
        name=framer_json.name,
        workspace_name=package_json.name,
        path=str(path),
        zip_path=str(path / ZIP_FILE_NAME),
    )


def latest_tag(plugin_name: str, tags: TagRepository) -> str | None:
    """플러그인의 가장 최근 릴리스 태그 조회

    Args:
        plugin_name: 플러그인 표시 이름
        tags: 태그 저장소

    Returns:
        버전이 가장 높은 태그, 이전 릴리스가 없거나 조회 실패 시 None
    """
    pattern = f"{tag_prefix(plugin_name)}*"
    try:
        matches = tags.list_tags(pattern)
    except GitCommandError as e:
        logger.warning("태그 조회 실패, 첫 릴리스로 간주 pattern=%s error=%s", pattern, e)
        return None

    if not matches:
        logger.info("이전 릴리스 태그 없음 pattern=%s", pattern)
        return None

    logger.info("최근 릴리스 태그 tag=%s", matches[0])
    return matches[0]


def truncate_diff(diff_text: str, max_chars: int = MAX_DIFF_CHARS) -> tuple[str, bool]:
    """생성 모델 입력 한도에 맞춰 diff 자르기"""
    if len(diff_text) <= max_chars:
        return diff_text, False
    return diff_text[:max_chars] + DIFF_TRUNCATION_MARKER, True


def _full_history_base(plugin_path: str, diffs: DiffProvider) -> tuple[str, str | None]:
    """태그가 없을 때 diff 기준점과 비교 대상 결정

    플러그인을 추가한 커밋의 부모부터 HEAD까지 비교하고,
    추가 커밋을 찾지 못하거나 루트 커밋이면 빈 트리와 작업 트리를 비교한다.
    """
    try:
        added_commit = diffs.first_added_commit(plugin_path)
    except GitCommandError as e:
        logger.warning("추가 커밋 조회 실패 path=%s error=%s", plugin_path, e)
        added_commit = None

    if added_commit and diffs.has_parent(added_commit):
        return f"{added_commit}^", "HEAD"

    logger.info("추가 커밋 기준 없음, 빈 트리와 비교 path=%s", plugin_path)
    return EMPTY_TREE_SHA, None


def change_window(
    plugin_path: str,
    since_tag: str | None,
    diffs: DiffProvider,
    max_chars: int = MAX_DIFF_CHARS,
) -> ChangeWindow:
    """마지막 릴리스 이후 플러그인 경로의 diff와 커밋 로그 수집

    Args:
        plugin_path: 저장소 루트 기준 플러그인 경로
        since_tag: 마지막 릴리스 태그, 없으면 전체 이력
        diffs: 변경 내역 제공자
        max_chars: diff 최대 길이

    Returns:
        변경 내역

    Raises:
        GitCommandError: diff 계산 실패 시
    """
    if since_tag:
        base, head = since_tag, "HEAD"
        revision_range = f"{since_tag}..HEAD"
    else:
        base, head = _full_history_base(plugin_path, diffs)
        revision_range = None

    diff_text = diffs.diff(base, plugin_path, head)

    try:
        commit_log = diffs.log_oneline(plugin_path, revision_range).strip()
    except GitCommandError as e:
        logger.warning("커밋 로그 조회 실패 path=%s error=%s", plugin_path, e)
        commit_log = ""

    diff_text, truncated = truncate_diff(diff_text, max_chars)
    if truncated:
        logger.warning("diff 길이 초과로 잘림 path=%s max_chars=%d", plugin_path, max_chars)

    logger.info(
        "변경 내역 수집 완료 path=%s since=%s diff_chars=%d commits=%d",
        plugin_path,
        since_tag,
        len(diff_text),
        len(commit_log.splitlines()),
    )
    return ChangeWindow(
        diff_text=diff_text,
        commit_log=commit_log,
        since_tag=since_tag,
        truncated=truncated,
    )


async def resolve_changelog(
    plugin: PluginInfo,
    plugin_rel_path: str,
    pr_body: str | None,
    git: GitRepository,
    generate: ChangelogGenerator,
    max_chars: int = MAX_DIFF_CHARS,
) -> ChangelogResult | None:
    """PR 본문 changelog 우선, 없으면 변경 내역으로 생성

    Args:
        plugin: 플러그인 정보
        plugin_rel_path: 저장소 루트 기준 플러그인 경로
        pr_body: PR 본문
        git: 태그 저장소이자 변경 내역 제공자
        generate: changelog 생성 함수
        max_chars: diff 최대 길이

    Returns:
        changelog 결과, 변경 내역이 없으면 None
    """
    extracted = extract_changelog(pr_body)
    if extracted:
        logger.info("PR 본문 changelog 사용 plugin=%s", plugin.name)
        return ChangelogResult(text=extracted, source="pull_request")

    since = latest_tag(plugin.name, git)
    window = change_window(plugin_rel_path, since, git, max_chars)
    if window.is_empty:
        logger.warning("변경 내역 없음, changelog 생성 생략 plugin=%s", plugin.name)
        return None

    text = await generate(plugin.name, window)
    logger.info("changelog 생성 완료 plugin=%s since=%s", plugin.name, since)
    return ChangelogResult(text=text, source="generated")
