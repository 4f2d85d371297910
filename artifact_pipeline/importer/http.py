"""
HTTP 전송 계층 모듈

aiohttp 세션을 감싸 저장소 제공자 API 호출에 필요한 최소 기능(GET)만 제공합니다.
타임아웃은 이 계층의 책임이며 재시도는 하지 않습니다.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import aiohttp

from ..config.settings import Settings
from ..utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class HttpResponse:
    """HTTP 응답 스냅샷"""

    status: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        """본문을 JSON으로 파싱"""
        return json.loads(self.body.decode("utf-8"))

    def text(self) -> str:
        """본문을 UTF-8 문자열로 반환"""
        return self.body.decode("utf-8", errors="replace")


class HttpClient:
    """aiohttp 기반 HTTP 클라이언트"""

    def __init__(self, settings: Settings):
        """
        HTTP 클라이언트 초기화

        Args:
            settings: 파이프라인 설정
        """
        self.settings = settings
        self.session: Optional[aiohttp.ClientSession] = None
        self.logger = logger

    async def _get_session(self) -> aiohttp.ClientSession:
        """HTTP 세션 생성"""
        if not self.session:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.http_timeout),
                headers={
                    'User-Agent': self.settings.http_user_agent
                }
            )
        return self.session

    async def get(self, url: str, headers: Optional[Dict[str, str]] = None) -> HttpResponse:
        """
        GET 요청 수행

        Args:
            url: 요청 URL
            headers: 추가 요청 헤더

        Returns:
            HttpResponse: 상태 코드와 본문

        Raises:
            aiohttp.ClientError: 전송 계층 오류
            asyncio.TimeoutError: 타임아웃
        """
        session = await self._get_session()

        async with session.get(url, headers=headers or {}) as response:
            body = await response.read()
            self.logger.debug(f"GET {url} -> HTTP {response.status} ({len(body)} bytes)")
            return HttpResponse(
                status=response.status,
                body=body,
                headers={key: value for key, value in response.headers.items()}
            )

    async def close(self) -> None:
        """세션 정리"""
        if self.session:
            await self.session.close()
            self.session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
