"""
하위 조회 결과 모듈

가져오기 과정의 하위 조회(프로젝트 정보, README, 릴리스)를 필수/선택으로 구분해
실행하고, 선택 조회 실패가 필수 실패로 승격되지 않도록 집계 규칙을 한곳에 둡니다.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Generic, Optional, TypeVar

from ..exceptions import FetchFailedException
from ..utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class SubFetchResult(Generic[T]):
    """하위 조회 결과"""

    name: str
    required: bool
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self, default: Any = None) -> Any:
        """
        결과 값 반환

        필수 조회가 실패했으면 예외를 던지고, 선택 조회가 실패했으면 기본값을 반환합니다.

        Args:
            default: 선택 조회 실패 시 사용할 값

        Raises:
            FetchFailedException: 필수 조회 실패
        """
        if self.ok:
            return self.value

        if self.required:
            if isinstance(self.error, FetchFailedException):
                raise self.error
            raise FetchFailedException(self.name, error_detail=str(self.error)) from self.error

        logger.warning(f"선택 조회 실패, 빈 값으로 대체합니다: {self.name} - {self.error}")
        return default


async def run_sub_fetch(name: str, awaitable: Awaitable[T], required: bool = False) -> SubFetchResult[T]:
    """
    하위 조회 실행

    예외를 결과 객체에 담아 반환하므로 asyncio.gather로 동시에 실행할 수 있습니다.

    Args:
        name: 조회 이름 (로그/오류 메시지용)
        awaitable: 실행할 코루틴
        required: 필수 조회 여부
    """
    try:
        value = await awaitable
        return SubFetchResult(name=name, required=required, value=value)
    except Exception as e:
        return SubFetchResult(name=name, required=required, error=e)
