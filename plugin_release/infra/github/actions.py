import uuid
from pathlib import Path


def write_output(output_path: str, key: str, value: str) -> bool:
    """GitHub Actions 출력값 추가, 여러 줄 값은 heredoc 구분자로 감싼다

    Returns:
        GITHUB_OUTPUT 경로가 설정되어 기록했으면 True
    """
    if not output_path:
        return False

    delimiter = f"ghadelimiter_{uuid.uuid4().hex}"
    with Path(output_path).open("a", encoding="utf-8") as handle:
        handle.write(f"{key}<<{delimiter}\n{value}\n{delimiter}\n")
    return True
