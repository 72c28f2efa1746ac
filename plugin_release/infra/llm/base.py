from abc import ABC, abstractmethod

from langchain_core.language_models import BaseChatModel
from langchain_core.runnables import Runnable

from plugin_release.domain.release.schemas import ChangelogOutput


class BaseLLMClient(ABC):
    """changelog 생성용 LLM 클라이언트 추상 클래스

    프로바이더별 채팅 모델을 감싸고, 생성 호출은 changelog_model()로 통일한다.
    """

    provider: str = ""

    @abstractmethod
    def get_chat_model(self) -> BaseChatModel:
        """프로바이더 채팅 모델 반환"""
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        pass

    def changelog_model(self) -> Runnable:
        """ChangelogOutput을 반환하는 구조화 출력 모델"""
        return self.get_chat_model().with_structured_output(ChangelogOutput)
