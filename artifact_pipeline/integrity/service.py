"""
에셋 무결성 서비스 모듈

업로드된 바이트의 SHA-256 체크섬과 충돌 없는 저장소 키를 계산해 저장소에 넘기고,
다운로드 시점에 저장된 체크섬으로 내용을 다시 검증합니다.
"""

from typing import Iterable, Optional

from ..config.settings import Settings
from ..exceptions import IntegrityMismatchException, InvalidMimeTypeException, StorageException
from ..models.base import StoredAssetDescriptor
from ..utils.helpers import (
    DEFAULT_ALLOWED_MIME_TYPES,
    calculate_bytes_hash,
    format_file_size,
    generate_storage_key,
    validate_mime_type,
)
from ..utils.logging import get_logger
from .storage import StorageBackend

logger = get_logger(__name__)

CHECKSUM_METADATA_KEY = "sha256"


class AssetIntegrityService:
    """에셋 체크섬 계산 및 검증 서비스"""

    def __init__(self, storage: StorageBackend, settings: Optional[Settings] = None,
                 allowed_mime_types: Iterable[str] = DEFAULT_ALLOWED_MIME_TYPES):
        """
        무결성 서비스 초기화

        Args:
            storage: 오브젝트 저장소
            settings: 파이프라인 설정 (None이면 기본 설정 사용)
            allowed_mime_types: 업로드 허용 MIME 타입 목록
        """
        if settings is None:
            from ..config.settings import get_settings
            settings = get_settings()

        self.settings = settings
        self.storage = storage
        self.allowed_mime_types = tuple(allowed_mime_types)
        self.logger = logger

    def ingest(self, data: bytes, filename: str, content_type: Optional[str] = None) -> StoredAssetDescriptor:
        """
        에셋 업로드 처리

        Args:
            data: 업로드된 바이트
            filename: 원본 파일명
            content_type: MIME 타입 (선택사항)

        Returns:
            StoredAssetDescriptor: 저장소 키, 체크섬, 크기

        Raises:
            InvalidMimeTypeException: 허용되지 않은 MIME 타입
            StorageException: 저장소 업로드 실패
        """
        if content_type and not validate_mime_type(content_type, self.allowed_mime_types):
            raise InvalidMimeTypeException(content_type)

        sha256 = calculate_bytes_hash(data)
        storage_key = generate_storage_key(filename)

        self.storage.put(
            data,
            storage_key,
            content_type=content_type,
            metadata={CHECKSUM_METADATA_KEY: sha256}
        )

        self.logger.info(f"에셋 저장 완료: {storage_key} ({format_file_size(len(data))})")
        return StoredAssetDescriptor(storage_key=storage_key, sha256=sha256, size=len(data))

    def verify(self, data: bytes, expected_sha256: str, storage_key: Optional[str] = None) -> str:
        """
        내용 체크섬 검증

        Args:
            data: 검증할 바이트
            expected_sha256: 기대 체크섬
            storage_key: 로그/오류 메시지용 저장소 키

        Returns:
            str: 계산된 체크섬

        Raises:
            IntegrityMismatchException: 체크섬 불일치
        """
        actual = calculate_bytes_hash(data)
        if actual != expected_sha256.lower():
            self.logger.error(f"체크섬 불일치: {storage_key or '-'}")
            raise IntegrityMismatchException(expected_sha256, actual, storage_key)
        return actual

    def fetch_verified(self, storage_key: str, expected_sha256: Optional[str] = None) -> bytes:
        """
        저장소에서 내려받아 체크섬 검증

        기대 체크섬이 없으면 업로드 시 저장한 오브젝트 메타데이터를 사용합니다.

        Raises:
            StorageException: 전송 실패 또는 저장된 체크섬 없음
            IntegrityMismatchException: 체크섬 불일치
        """
        if expected_sha256 is None:
            expected_sha256 = self.storage.head(storage_key).get(CHECKSUM_METADATA_KEY)
            if not expected_sha256:
                raise StorageException("head", f"{storage_key}: 저장된 체크섬이 없습니다")

        data = self.storage.get(storage_key)
        self.verify(data, expected_sha256, storage_key)
        return data

    def download_url(self, storage_key: str, ttl_seconds: Optional[int] = None) -> str:
        """서명된 다운로드 URL 생성"""
        return self.storage.presigned_url(storage_key, ttl_seconds or self.settings.presign_ttl_seconds)


def ingest_asset(data: bytes, filename: str, storage: StorageBackend,
                 content_type: Optional[str] = None, settings: Optional[Settings] = None) -> StoredAssetDescriptor:
    """
    편의 함수: 에셋 업로드 처리

    Args:
        data: 업로드된 바이트
        filename: 원본 파일명
        storage: 오브젝트 저장소
        content_type: MIME 타입
        settings: 파이프라인 설정

    Returns:
        StoredAssetDescriptor: 저장소 키, 체크섬, 크기
    """
    return AssetIntegrityService(storage, settings).ingest(data, filename, content_type)
