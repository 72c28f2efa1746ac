import re

from plugin_release.domain.release.constants import (
    CHANGELOG_HEADING,
    PLACEHOLDER_ENTRY,
    PLUGINS_DIR,
    TAG_VERSION_SEPARATOR,
)

HEADING_PATTERN = re.compile(r"^\s{0,3}#+\s+(.*?)(?:\s+#+)?\s*$")
WHITESPACE_PATTERN = re.compile(r"\s+")


def _heading_text(line: str) -> str | None:
    """heading 라인이면 heading 텍스트, 아니면 None"""
    match = HEADING_PATTERN.match(line)
    if not match:
        return None
    return match.group(1)


def extract_changelog(body: str | None) -> str | None:
    """PR 본문에서 Changelog 섹션 추출

    Args:
        body: PR 본문

    Returns:
        Changelog 헤딩 다음 줄부터 다음 헤딩 전까지의 내용,
        섹션이 없거나 비어 있거나 "-" 하나뿐이면 None
    """
    if not body:
        return None

    lines = body.splitlines()
    start = None
    for idx, line in enumerate(lines):
        text = _heading_text(line)
        if text is not None and text.lower() == CHANGELOG_HEADING:
            start = idx + 1
            break

    if start is None:
        return None

    section = []
    for line in lines[start:]:
        if _heading_text(line) is not None:
            break
        section.append(line)

    content = "\n".join(section).strip()
    if not content or content == PLACEHOLDER_ENTRY:
        return None

    return content


def parse_changed_plugins(raw: str, plugins_dir: str = PLUGINS_DIR) -> list[str]:
    """변경 파일 목록에서 플러그인 이름 추출

    Args:
        raw: 공백/탭/개행으로 구분된 변경 파일 경로
        plugins_dir: 플러그인 루트 디렉토리

    Returns:
        중복 제거 후 알파벳 순으로 정렬된 플러그인 이름
    """
    root = [part for part in plugins_dir.split("/") if part]
    depth = len(root)
    names = set()

    for path in raw.split():
        parts = path.split("/")
        # <root>/<name>/<file> 이상이어야 플러그인 변경으로 인정
        if len(parts) < depth + 2 or parts[:depth] != root or not parts[depth]:
            continue
        names.add(parts[depth])

    return sorted(names)


def slugify_plugin_name(name: str) -> str:
    """플러그인 표시 이름을 태그용 slug로 변환"""
    return WHITESPACE_PATTERN.sub("-", name.lower())


def tag_prefix(plugin_name: str) -> str:
    """플러그인 릴리스 태그 접두사"""
    return f"{slugify_plugin_name(plugin_name)}{TAG_VERSION_SEPARATOR}"


def build_tag_name(plugin_name: str, version: str) -> str:
    """플러그인 릴리스 태그 이름 생성"""
    return f"{tag_prefix(plugin_name)}{version}"
