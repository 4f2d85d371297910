"""
에셋 카탈로그 모듈

설치 흐름에서 릴리스 에셋 후보를 공급하는 영속 계층 인터페이스입니다.
스키마는 외부 영속 계층이 소유하며, 여기서는 조회 계약과 메모리 구현만 제공합니다.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple

from .models.base import Asset

ReleaseKey = Tuple[str, str, str]


class AssetCatalog(ABC):
    """릴리스 에셋 조회 인터페이스"""

    @abstractmethod
    def find_release_assets(self, owner: str, name: str, version: str) -> Optional[List[Asset]]:
        """
        게시된 릴리스의 에셋 목록 조회

        Returns:
            생성 순서대로 정렬된 에셋 목록 (릴리스가 없으면 None)
        """

    def find_asset(self, owner: str, name: str, version: str, asset_id: int) -> Optional[Asset]:
        """릴리스에서 ID로 에셋 조회 (없으면 None)"""
        for asset in self.find_release_assets(owner, name, version) or []:
            if asset.id == asset_id:
                return asset
        return None


class InMemoryAssetCatalog(AssetCatalog):
    """메모리 기반 에셋 카탈로그 (개발/테스트용)"""

    def __init__(self):
        self._releases: Dict[ReleaseKey, List[Asset]] = {}

    def add_release(self, owner: str, name: str, version: str, assets: Iterable[Asset] = ()) -> None:
        """릴리스 등록 (기존 에셋 목록은 대체)"""
        self._releases[(owner, name, version)] = list(assets)

    def add_asset(self, owner: str, name: str, version: str, asset: Asset) -> None:
        """릴리스에 에셋 추가"""
        self._releases.setdefault((owner, name, version), []).append(asset)

    def find_release_assets(self, owner: str, name: str, version: str) -> Optional[List[Asset]]:
        assets = self._releases.get((owner, name, version))
        return list(assets) if assets is not None else None
