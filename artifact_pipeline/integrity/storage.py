"""
오브젝트 저장소 연동 모듈

무결성 서비스가 사용하는 저장소 인터페이스와 S3 호환 구현을 제공합니다.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config.settings import Settings
from ..exceptions import StorageException
from ..utils.logging import get_logger

logger = get_logger(__name__)


class StorageBackend(ABC):
    """오브젝트 저장소 추상 클래스"""

    @abstractmethod
    def put(self, data: bytes, key: str, content_type: Optional[str] = None,
            metadata: Optional[Dict[str, str]] = None) -> None:
        """
        오브젝트 업로드

        Raises:
            StorageException: 업로드 실패
        """

    @abstractmethod
    def get(self, key: str) -> bytes:
        """
        오브젝트 다운로드

        Raises:
            StorageException: 다운로드 실패
        """

    @abstractmethod
    def head(self, key: str) -> Dict[str, str]:
        """
        오브젝트 사용자 메타데이터 조회

        Raises:
            StorageException: 조회 실패
        """

    @abstractmethod
    def presigned_url(self, key: str, ttl_seconds: int) -> str:
        """서명된 다운로드 URL 생성"""


class S3Storage(StorageBackend):
    """S3 호환 저장소 (AWS S3, MinIO)"""

    def __init__(self, settings: Settings):
        """
        S3 저장소 초기화

        Args:
            settings: 파이프라인 설정
        """
        self.bucket_name = settings.s3_bucket_name
        self.logger = logger

        try:
            self.s3_client = boto3.client(
                's3',
                endpoint_url=settings.s3_endpoint,
                aws_access_key_id=settings.s3_access_key,
                aws_secret_access_key=settings.s3_secret_key,
                region_name=settings.s3_region,
                # MinIO는 경로 방식 주소 필요
                config=Config(s3={'addressing_style': 'path'})
            )
        except (BotoCoreError, ValueError) as e:
            self.logger.error(f"S3 초기화 실패: {e}")
            raise StorageException("init", f"S3 초기화 실패: {e}") from e

        self.logger.info(f"S3 저장소 초기화 완료: {self.bucket_name}")

    def put(self, data: bytes, key: str, content_type: Optional[str] = None,
            metadata: Optional[Dict[str, str]] = None) -> None:
        params = {
            'Bucket': self.bucket_name,
            'Key': key,
            'Body': data,
            'Metadata': metadata or {},
        }
        if content_type:
            params['ContentType'] = content_type

        try:
            self.s3_client.put_object(**params)
        except (BotoCoreError, ClientError) as e:
            self.logger.error(f"S3 업로드 실패: {key} - {e}")
            raise StorageException("put", f"{key}: {e}") from e

    def get(self, key: str) -> bytes:
        try:
            response = self.s3_client.get_object(Bucket=self.bucket_name, Key=key)
            return response['Body'].read()
        except (BotoCoreError, ClientError) as e:
            self.logger.error(f"S3 다운로드 실패: {key} - {e}")
            raise StorageException("get", f"{key}: {e}") from e

    def head(self, key: str) -> Dict[str, str]:
        try:
            response = self.s3_client.head_object(Bucket=self.bucket_name, Key=key)
            return response.get('Metadata', {})
        except (BotoCoreError, ClientError) as e:
            raise StorageException("head", f"{key}: {e}") from e

    def presigned_url(self, key: str, ttl_seconds: int) -> str:
        try:
            return self.s3_client.generate_presigned_url(
                'get_object',
                Params={'Bucket': self.bucket_name, 'Key': key},
                ExpiresIn=ttl_seconds
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageException("presign", f"{key}: {e}") from e
