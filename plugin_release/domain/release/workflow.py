from dataclasses import dataclass
from typing import Literal

from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph

from plugin_release.core.context import set_plugin
from plugin_release.core.exceptions import (
    BuildError,
    ErrorCode,
    GitCommandError,
    PackError,
    PluginInfoError,
    SubmissionError,
)
from plugin_release.core.logging import get_logger
from plugin_release.domain.release.parsers import build_tag_name
from plugin_release.domain.release.schemas import ReleaseRequest, ReleaseState
from plugin_release.domain.release.service import load_plugin_info
from plugin_release.infra.build.base import ArtifactBuilder
from plugin_release.infra.git.base import TagRepository
from plugin_release.infra.marketplace.client import MarketplaceClient
from plugin_release.infra.notify.slack import SlackNotifier

logger = get_logger(__name__)


@dataclass
class ReleaseServices:
    """워크플로우 노드가 사용하는 외부 협력 객체"""

    builder: ArtifactBuilder
    tags: TagRepository
    marketplace: MarketplaceClient | None = None
    notifier: SlackNotifier | None = None


async def load_plugin_node(state: ReleaseState) -> ReleaseState:
    """플러그인 정보 로드 노드"""
    request = state["request"]
    logger.info("load_plugin_node 시작 path=%s", request.plugin_path)

    try:
        plugin_info = load_plugin_info(request.plugin_path)
    except PluginInfoError as e:
        logger.error("load_plugin_node 실패 error=%s", e)
        return {
            **state,
            "error_code": e.error_code,
            "error_message": str(e),
        }

    set_plugin(plugin_info.name)
    return {**state, "plugin_info": plugin_info}


async def build_node(state: ReleaseState) -> ReleaseState:
    """플러그인 빌드 노드"""
    plugin_info = state["plugin_info"]
    logger.info("build_node 시작 workspace=%s", plugin_info.workspace_name)

    try:
        state["services"].builder.build(plugin_info)
    except BuildError as e:
        logger.error("build_node 실패 error=%s", e)
        return {
            **state,
            "error_code": e.error_code,
            "error_message": str(e),
        }

    return state


async def pack_node(state: ReleaseState) -> ReleaseState:
    """플러그인 zip 패키징 노드"""
    plugin_info = state["plugin_info"]
    logger.info("pack_node 시작 path=%s", plugin_info.path)

    try:
        zip_path = state["services"].builder.pack(plugin_info)
    except (BuildError, PackError) as e:
        logger.error("pack_node 실패 error=%s", e)
        return {
            **state,
            "error_code": e.error_code,
            "error_message": str(e),
        }
    except OSError as e:
        logger.error("pack_node 파일 오류 error=%s", e)
        return {
            **state,
            "error_code": ErrorCode.PACK_FAILED,
            "error_message": f"Pack failed: {e}",
        }

    logger.info("pack_node 완료 zip=%s", zip_path)
    return {**state, "zip_path": zip_path}


async def submit_node(state: ReleaseState) -> ReleaseState:
    """마켓플레이스 제출 노드, dry run이면 건너뜀"""
    request = state["request"]
    if request.dry_run:
        logger.info("submit_node DRY RUN: 제출 건너뜀")
        return {**state, "submission": None}

    marketplace = state["services"].marketplace
    if marketplace is None:
        return {
            **state,
            "error_code": ErrorCode.CONFIG_MISSING,
            "error_message": "Marketplace client is not configured",
        }

    try:
        submission = await marketplace.submit(state["plugin_info"], request.changelog)
    except SubmissionError as e:
        logger.error("submit_node 실패 error=%s", e.message)
        return {
            **state,
            "error_code": e.error_code,
            "error_message": str(e),
        }

    return {**state, "submission": submission}


async def tag_node(state: ReleaseState) -> ReleaseState:
    """릴리스 태그 생성 노드, 실패해도 릴리스는 성공으로 처리"""
    request = state["request"]
    submission = state.get("submission")

    if request.dry_run:
        logger.info("tag_node DRY RUN: 태그 생성 건너뜀")
        return {**state, "tag_name": None}

    if submission is None or not submission.version:
        logger.warning("tag_node 응답에 버전 없음, 태그 생성 건너뜀")
        return {**state, "tag_name": None}

    tag_name = build_tag_name(state["plugin_info"].name, submission.version)
    tags = state["services"].tags

    try:
        tags.create_tag(tag_name, request.changelog)
        tags.push_tag(tag_name)
    except GitCommandError as e:
        logger.error("tag_node 태그 생성/push 실패 tag=%s error=%s", tag_name, e)
        return {**state, "tag_name": None}

    logger.info("tag_node 완료 tag=%s", tag_name)
    return {**state, "tag_name": tag_name}


async def notify_node(state: ReleaseState) -> ReleaseState:
    """Slack 알림 노드: 성공/실패 결과 전송"""
    notifier = state["services"].notifier
    if notifier is None:
        return state

    request = state["request"]
    plugin_info = state.get("plugin_info")
    plugin_name = plugin_info.name if plugin_info else "unknown"

    if state.get("error_code"):
        if request.dry_run:
            logger.info("notify_node DRY RUN: 실패 알림 건너뜀")
            return state
        await notifier.notify_failure(plugin_name, state.get("error_message", ""))
        return state

    submission = state.get("submission")
    await notifier.notify_success(
        plugin_name,
        request.changelog,
        version=submission.version if submission else None,
        dry_run=request.dry_run,
    )
    return state


def check_error(state: ReleaseState) -> Literal["continue", "error"]:
    """에러 상태 확인: 에러 있으면 알림 노드로, 없으면 다음 노드로"""
    if state.get("error_code"):
        logger.info("check_error: 에러 발생, 알림으로 이동 code=%s", state["error_code"])
        return "error"
    return "continue"


def create_release_workflow() -> CompiledStateGraph:
    """플러그인 릴리스 워크플로우 생성"""
    workflow = StateGraph(ReleaseState)

    workflow.add_node("load_plugin", load_plugin_node)
    workflow.add_node("build", build_node)
    workflow.add_node("pack", pack_node)
    workflow.add_node("submit", submit_node)
    workflow.add_node("tag", tag_node)
    workflow.add_node("notify", notify_node)

    workflow.set_entry_point("load_plugin")

    workflow.add_conditional_edges(
        "load_plugin",
        check_error,
        {
            "continue": "build",
            "error": "notify",
        },
    )

    workflow.add_conditional_edges(
        "build",
        check_error,
        {
            "continue": "pack",
            "error": "notify",
        },
    )

    workflow.add_conditional_edges(
        "pack",
        check_error,
        {
            "continue": "submit",
            "error": "notify",
        },
    )

    workflow.add_conditional_edges(
        "submit",
        check_error,
        {
            "continue": "tag",
            "error": "notify",
        },
    )
    workflow.add_edge("tag", "notify")
    workflow.add_edge("notify", END)

    return workflow.compile()


async def run_release(request: ReleaseRequest, services: ReleaseServices) -> ReleaseState:
    """릴리스 워크플로우 실행 후 최종 상태 반환"""
    workflow = create_release_workflow()
    initial_state = ReleaseState(request=request, services=services)
    return await workflow.ainvoke(initial_state)
