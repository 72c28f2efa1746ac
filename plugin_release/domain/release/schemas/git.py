from typing import Literal

from pydantic import BaseModel


class ChangeWindow(BaseModel):
    """마지막 릴리스 이후 변경 내역"""

    diff_text: str
    commit_log: str
    since_tag: str | None = None
    truncated: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.diff_text.strip()


class ChangelogResult(BaseModel):
    """확정된 changelog와 출처"""

    text: str
    source: Literal["pull_request", "generated"]


class ChangelogOutput(BaseModel):
    """changelog 생성 LLM 출력"""

    entries: list[str]
