"""
에셋 무결성 패키지

업로드 에셋의 체크섬 계산, 저장, 다운로드 검증을 제공합니다.
"""

from .service import AssetIntegrityService, ingest_asset
from .storage import S3Storage, StorageBackend

__all__ = [
    "AssetIntegrityService",
    "ingest_asset",
    "S3Storage",
    "StorageBackend",
]
