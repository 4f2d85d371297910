"""
데이터 모델 패키지

파이프라인의 핵심 데이터 모델들을 정의합니다.
"""

from .base import (
    Asset,
    ImportRequest,
    InstallQuery,
    RepoAsset,
    RepoMetadata,
    RepoRelease,
    StoredAssetDescriptor,
)
from .enums import PlatformFamily, RepositoryProvider

__all__ = [
    "Asset",
    "ImportRequest",
    "InstallQuery",
    "RepoAsset",
    "RepoMetadata",
    "RepoRelease",
    "StoredAssetDescriptor",
    "PlatformFamily",
    "RepositoryProvider",
]
