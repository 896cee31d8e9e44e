"""
core/resources/base.py - 리소스 종류 공통 인터페이스

모든 리소스 종류(EC2, S3, ...)가 구현하는 추상 클래스와
컬럼/빠른 작업(QuickAction) 정의를 제공합니다.

구현 규칙:
    - _collect(client): 원격 호출로 항목 목록을 수집 (페이지네이션은 모두 소진)
    - _row(item): 항목 하나를 컬럼 수와 같은 길이의 문자열 튜플로 변환
    - _item_id(item): 빠른 작업 대상이 되는 안정적인 식별자

Example:
    class SQSQueues(Resource[SQSQueue]):
        key = "sqs"
        name = "SQS Queues"
        COLUMNS = (Column("Queue Name", 40), Column("URL", 60))

        def _collect(self, client):
            ...
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from core.config import settings

from .helpers import cell

if TYPE_CHECKING:
    from core.client import AWSClient

T = TypeVar("T")

# 식별자를 얻을 수 없을 때 (범위 밖 인덱스 등)
NO_ID = ""

Row = tuple[str, ...]
ActionHandler = Callable[["AWSClient", str], None]


@dataclass(frozen=True)
class Column:
    """테이블 컬럼 정의"""

    name: str
    width: int


@dataclass(frozen=True)
class QuickAction:
    """리소스 종류별 빠른 작업

    Attributes:
        key: 트리거 키 (예: "s")
        label: 짧은 라벨 (예: "stop")
        description: 설명 (예: "Stop instance")
        handler: (client, identifier) -> None, 실패 시 ProviderError 발생
        needs_selection: 선택된 행이 필요한지 여부
        needs_confirm: 실행 전 확인 대화상자 표시 여부
        confirm_template: 확인 메시지 템플릿 ({id}, {label}, {region} 사용 가능)
        input_label: 설정 시 행 대신 텍스트 입력으로 식별자를 받음 (예: 버킷 생성)
        settle_seconds: 성공 후 새로고침 전 대기 시간 (원격 최종 일관성)
    """

    key: str
    label: str
    description: str
    handler: ActionHandler
    needs_selection: bool = True
    needs_confirm: bool = True
    confirm_template: str = "{label} {id}?"
    input_label: str | None = None
    settle_seconds: float = settings.ACTION_SETTLE_SECONDS

    def confirm_message(self, identifier: str, region: str = "") -> str:
        """확인 메시지 생성"""
        return self.confirm_template.format(id=identifier, label=self.label, region=region)


class Resource(ABC, Generic[T]):
    """리소스 종류 추상 클래스

    행 캐시는 fetch()로만 변경되며, 조회 성공 시에만 한 번에 교체됩니다.
    같은 인스턴스에 대한 fetch()는 내부 lock으로 직렬화됩니다.
    """

    key: str = ""
    name: str = ""
    COLUMNS: tuple[Column, ...] = ()

    def __init__(self) -> None:
        self._items: list[T] = []
        self._fetch_lock = threading.Lock()

    def columns(self) -> list[Column]:
        return list(self.COLUMNS)

    def fetch(self, client: AWSClient) -> None:
        """원격에서 항목을 조회해 캐시를 교체

        Raises:
            ProviderError: 원격 호출 실패 (이전 캐시는 유지)
        """
        with self._fetch_lock:
            items = list(self._collect(client))
            self._items = items

    def rows(self) -> list[Row]:
        items = self._items
        return [tuple(cell(value) for value in self._row(item)) for item in items]

    def get_id(self, index: int) -> str:
        """index 행의 식별자 (범위 밖이면 NO_ID)"""
        items = self._items
        if 0 <= index < len(items):
            return self._item_id(items[index]) or NO_ID
        return NO_ID

    def snapshot(self) -> tuple[list[Row], list[str]]:
        """행과 행별 식별자를 같은 캐시 상태에서 함께 반환"""
        with self._fetch_lock:
            rows = self.rows()
            return rows, [self.get_id(i) for i in range(len(rows))]

    def __len__(self) -> int:
        return len(self._items)

    def quick_actions(self) -> list[QuickAction]:
        return []

    def quick_action(self, key: str) -> QuickAction | None:
        for action in self.quick_actions():
            if action.key == key:
                return action
        return None

    @abstractmethod
    def _collect(self, client: AWSClient) -> Iterable[T]:
        """원격 호출로 항목 수집"""

    @abstractmethod
    def _row(self, item: T) -> Iterable[object]:
        """항목을 컬럼 순서의 값으로 변환"""

    @abstractmethod
    def _item_id(self, item: T) -> str:
        """항목의 식별자"""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(key={self.key!r}, items={len(self._items)})"
