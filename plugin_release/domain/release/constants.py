"""릴리스 관련 상수"""

PLUGINS_DIR = "plugins"

# 릴리스 태그: <slug>-v<version>
TAG_VERSION_SEPARATOR = "-v"

# 생성 모델 입력 한도
MAX_DIFF_CHARS = 50_000
DIFF_TRUNCATION_MARKER = "\n\n... [diff truncated]"

# git이 내장으로 인식하는 빈 트리 객체
EMPTY_TREE_SHA = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

PLACEHOLDER_ENTRY = "-"
CHANGELOG_HEADING = "changelog"

ZIP_FILE_NAME = "plugin.zip"
DIST_DIR = "dist"
