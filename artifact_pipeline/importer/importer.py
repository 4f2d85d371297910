"""
저장소 가져오기 오케스트레이터 모듈

URL에 포함된 호스트 문자열로 제공자별 조회기를 선택해 메타데이터를 가져옵니다.
"""

from typing import Callable, Dict, Optional

from ..config.settings import Settings
from ..exceptions import UnsupportedProviderException
from ..models.base import RepoMetadata
from ..security.host_guard import HostGuard
from ..utils.logging import get_logger
from .http import HttpClient
from .providers import GitHubFetcher, GitLabFetcher, MetadataFetcher

logger = get_logger(__name__)

FetcherFactory = Callable[[Settings, HttpClient, HostGuard], MetadataFetcher]

# URL 부분 문자열 -> 조회기 (선언 순서대로 검사)
PROVIDER_DISPATCH: Dict[str, FetcherFactory] = {
    "github.com": GitHubFetcher,
    "gitlab.com": GitLabFetcher,
}


class RepoImporter:
    """저장소 가져오기 오케스트레이터"""

    def __init__(self, settings: Optional[Settings] = None, http_client: Optional[HttpClient] = None):
        """
        가져오기 오케스트레이터 초기화

        Args:
            settings: 파이프라인 설정 (None이면 기본 설정 사용)
            http_client: HTTP 클라이언트 (None이면 aiohttp 클라이언트 생성)
        """
        if settings is None:
            from ..config.settings import get_settings
            settings = get_settings()

        self.settings = settings
        self.http_client = http_client or HttpClient(settings)
        self._owns_client = http_client is None
        self.guard = HostGuard(settings)
        self.logger = logger

    def select_fetcher(self, url: str) -> MetadataFetcher:
        """
        URL에 맞는 제공자 조회기 선택

        Raises:
            UnsupportedProviderException: 지원하지 않는 제공자
        """
        for marker, factory in PROVIDER_DISPATCH.items():
            if marker in url:
                return factory(self.settings, self.http_client, self.guard)

        raise UnsupportedProviderException(url)

    async def import_repository(self, url: str, token: Optional[str] = None) -> RepoMetadata:
        """
        저장소 메타데이터 가져오기

        Args:
            url: 저장소 URL
            token: 제공자 API 토큰 (선택사항)

        Returns:
            RepoMetadata: 정규화된 메타데이터

        Raises:
            UnsupportedProviderException: 지원하지 않는 제공자
            InvalidUrlException, SsrfRejectedException: URL 검증 실패
            InvalidRepoUrlException: owner/repo 경로 형식 오류
            FetchFailedException: 프로젝트 정보 조회 실패
        """
        fetcher = self.select_fetcher(url)
        self.logger.info(f"저장소 가져오기 요청: {url} ({fetcher.provider.value})")
        return await fetcher.fetch(url, token)

    async def close(self) -> None:
        """리소스 정리"""
        if self._owns_client:
            await self.http_client.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


async def import_repository(url: str, token: Optional[str] = None, settings: Optional[Settings] = None) -> RepoMetadata:
    """
    편의 함수: 저장소 메타데이터 가져오기

    Args:
        url: 저장소 URL
        token: 제공자 API 토큰
        settings: 파이프라인 설정

    Returns:
        RepoMetadata: 정규화된 메타데이터
    """
    async with RepoImporter(settings) as importer:
        return await importer.import_repository(url, token)
