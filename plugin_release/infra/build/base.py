from abc import ABC, abstractmethod

from plugin_release.domain.release.schemas import PluginInfo


class ArtifactBuilder(ABC):
    """플러그인 빌드/패키징 추상 클래스"""

    @abstractmethod
    def build(self, plugin: PluginInfo) -> None:
        """플러그인 빌드"""
        pass

    @abstractmethod
    def pack(self, plugin: PluginInfo) -> str:
        """빌드 결과를 zip으로 묶고 경로 반환"""
        pass
