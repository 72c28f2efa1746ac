"""
실행 컨텍스트 관리 모듈

contextvars를 사용하여 run_id와 처리 중인 플러그인 이름을 로그에 전달
"""

import uuid
from contextvars import ContextVar

run_id_var: ContextVar[str | None] = ContextVar("run_id", default=None)
plugin_var: ContextVar[str | None] = ContextVar("plugin", default=None)


def get_run_id() -> str | None:
    """현재 컨텍스트의 run_id 반환"""
    return run_id_var.get()


def set_run_id(run_id: str | None = None) -> str:
    """
    run_id 설정

    인자가 없으면 8자리 UUID 자동 생성
    """
    if run_id is None:
        run_id = uuid.uuid4().hex[:8]
    run_id_var.set(run_id)
    return run_id


def get_plugin() -> str | None:
    """현재 컨텍스트의 플러그인 이름 반환"""
    return plugin_var.get()


def set_plugin(plugin: str | None) -> None:
    """플러그인 이름 설정"""
    plugin_var.set(plugin)


def clear_context() -> None:
    """모든 컨텍스트 변수 초기화"""
    run_id_var.set(None)
    plugin_var.set(None)
