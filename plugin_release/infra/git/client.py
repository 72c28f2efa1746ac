import subprocess
from pathlib import Path

from plugin_release.core.exceptions import GitCommandError
from plugin_release.core.logging import get_logger
from plugin_release.infra.git.base import GitRepository

logger = get_logger(__name__)


class GitClient(GitRepository):
    """git CLI 기반 태그/변경 내역 클라이언트"""

    def __init__(self, repo_root: str | Path, remote: str = "origin"):
        self.repo_root = Path(repo_root)
        self.remote = remote

    def _run(self, *args: str) -> str:
        """git 명령 실행

        Raises:
            GitCommandError: git 실행 실패 또는 0이 아닌 종료 코드
        """
        command = ["git", *args]
        try:
            result = subprocess.run(
                command,
                cwd=self.repo_root,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise GitCommandError(command, detail=str(e)) from e

        if result.returncode != 0:
            raise GitCommandError(command, detail=result.stderr.strip())
        return result.stdout

    def list_tags(self, pattern: str) -> list[str]:
        output = self._run("tag", "--list", pattern, "--sort=-version:refname")
        return [line.strip() for line in output.splitlines() if line.strip()]

    def create_tag(self, tag_name: str, message: str) -> None:
        self._run("tag", "-a", tag_name, "-m", message)
        logger.info("태그 생성 tag=%s", tag_name)

    def push_tag(self, tag_name: str) -> None:
        self._run("push", self.remote, tag_name)
        logger.info("태그 push 완료 tag=%s remote=%s", tag_name, self.remote)

    def diff(self, base: str, path: str, head: str | None = "HEAD") -> str:
        revisions = [base, head] if head else [base]
        return self._run("diff", *revisions, "--", path)

    def log_oneline(self, path: str, revision_range: str | None = None) -> str:
        args = ["log", "--oneline", "--no-decorate"]
        if revision_range:
            args.append(revision_range)
        return self._run(*args, "--", path)

    def first_added_commit(self, path: str) -> str | None:
        output = self._run(
            "log", "--diff-filter=A", "--reverse", "--format=%H", "--", path
        )
        commits = output.split()
        return commits[0] if commits else None

    def has_parent(self, commit: str) -> bool:
        try:
            self._run("rev-parse", "--verify", "--quiet", f"{commit}^")
        except GitCommandError:
            return False
        return True
