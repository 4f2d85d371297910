"""
플랫폼 매칭 모듈

릴리스 에셋 목록에서 요청한 (platform, arch)에 맞는 에셋을 결정적으로 선택합니다.
"""

from typing import Iterable, Optional

from ..exceptions import NoMatchException
from ..models.base import Asset
from ..utils.logging import get_logger

logger = get_logger(__name__)


def field_matches(stored: Optional[str], requested: str) -> bool:
    """
    단일 필드 일치 여부

    저장값과 정확히 같거나, 요청값이 저장값의 부분 문자열(대소문자 무시)이면 일치합니다.
    저장값이 없으면 일치하지 않습니다.
    """
    if stored is None:
        return False
    return stored == requested or requested.lower() in stored.lower()


class PlatformMatcher:
    """플랫폼/아키텍처 에셋 선택기"""

    def __init__(self):
        self.logger = logger

    def matches(self, asset: Asset, platform: str, arch: str) -> bool:
        """플랫폼과 아키텍처가 동시에 일치하는지 확인"""
        return field_matches(asset.platform, platform) and field_matches(asset.arch, arch)

    def resolve(self, candidates: Iterable[Asset], platform: str, arch: str) -> Asset:
        """
        요청에 맞는 에셋 선택

        후보 순서(보통 생성 순서)대로 검사해 처음 일치하는 에셋을 반환하며 별도 순위는 매기지 않습니다.

        Args:
            candidates: 릴리스 에셋 목록
            platform: 요청 플랫폼
            arch: 요청 아키텍처

        Returns:
            Asset: 선택된 에셋

        Raises:
            NoMatchException: 일치하는 에셋이 없을 때
        """
        for asset in candidates:
            if self.matches(asset, platform, arch):
                self.logger.debug(f"에셋 선택: {asset.filename} ({platform}/{arch})")
                return asset

        self.logger.info(f"일치하는 에셋 없음: {platform}/{arch}")
        raise NoMatchException(platform, arch)


def resolve_asset(candidates: Iterable[Asset], platform: str, arch: str) -> Asset:
    """편의 함수: 요청에 맞는 에셋 선택"""
    return PlatformMatcher().resolve(candidates, platform, arch)
