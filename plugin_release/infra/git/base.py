from abc import ABC, abstractmethod


class TagRepository(ABC):
    """릴리스 태그 저장소 추상 클래스"""

    @abstractmethod
    def list_tags(self, pattern: str) -> list[str]:
        """패턴에 맞는 태그를 버전 내림차순으로 반환"""
        pass

    @abstractmethod
    def create_tag(self, tag_name: str, message: str) -> None:
        """annotated 태그 생성"""
        pass

    @abstractmethod
    def push_tag(self, tag_name: str) -> None:
        """태그를 원격 저장소에 push"""
        pass


class DiffProvider(ABC):
    """경로 단위 변경 내역 조회 추상 클래스"""

    @abstractmethod
    def diff(self, base: str, path: str, head: str | None = "HEAD") -> str:
        """base부터 head까지 path의 diff 반환, head가 None이면 작업 트리와 비교"""
        pass

    @abstractmethod
    def log_oneline(self, path: str, revision_range: str | None = None) -> str:
        """path를 건드린 커밋의 한 줄 로그 반환"""
        pass

    @abstractmethod
    def first_added_commit(self, path: str) -> str | None:
        """path를 처음 추가한 커밋 SHA 반환"""
        pass

    @abstractmethod
    def has_parent(self, commit: str) -> bool:
        """커밋에 부모가 있는지 여부"""
        pass


class GitRepository(TagRepository, DiffProvider):
    """릴리스 태그와 변경 내역을 함께 제공하는 저장소"""
