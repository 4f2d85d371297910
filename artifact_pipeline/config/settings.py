"""
설정 관리 모듈

환경 변수를 통한 파이프라인 설정을 관리합니다.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from ..exceptions import ConfigurationException


class Settings(BaseSettings):
    """파이프라인 설정 관리 클래스"""

    # 가져오기(import) 보안 설정
    allowed_import_hosts: str = Field(
        default="github.com,gitlab.com,bitbucket.org",
        description="가져오기 허용 호스트 목록 (쉼표 구분)"
    )

    # 저장소 제공자 API 설정
    github_api_url: str = Field(
        default="https://api.github.com",
        description="GitHub API 기본 URL"
    )
    gitlab_api_url: str = Field(
        default="https://gitlab.com/api/v4",
        description="GitLab API 기본 URL"
    )
    http_user_agent: str = Field(
        default="Flo-Package-Registry",
        description="외부 API 요청 User-Agent"
    )
    http_timeout: int = Field(
        default=30,
        description="외부 API 요청 타임아웃 (초)"
    )
    max_import_releases: int = Field(
        default=10,
        description="가져오기 시 유지할 최대 릴리스 수"
    )

    # S3 호환 오브젝트 저장소 설정
    s3_endpoint: Optional[str] = Field(
        default="http://localhost:9000",
        description="S3 엔드포인트 URL (MinIO 등)"
    )
    s3_bucket_name: str = Field(
        default="flo-packages",
        description="S3 버킷 이름"
    )
    s3_region: str = Field(
        default="us-east-1",
        description="S3 리전"
    )
    s3_access_key: Optional[str] = Field(
        default=None,
        description="S3 액세스 키"
    )
    s3_secret_key: Optional[str] = Field(
        default=None,
        description="S3 시크릿 키"
    )
    presign_ttl_seconds: int = Field(
        default=3600,
        description="서명된 다운로드 URL 유효 시간 (초)"
    )

    # 설치 스크립트 설정
    public_url: str = Field(
        default="http://localhost:3000",
        description="설치 명령에 포함될 공개 서비스 URL"
    )

    # 로깅 설정
    log_level: str = Field(
        default="INFO",
        description="로그 레벨"
    )
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="로그 포맷"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="로그 파일 경로"
    )

    # API 설정
    api_host: str = Field(
        default="0.0.0.0",
        description="API 서버 호스트"
    )
    api_port: int = Field(
        default=8000,
        description="API 서버 포트"
    )
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="CORS 허용 오리진 목록"
    )
    cors_credentials: bool = Field(
        default=True,
        description="CORS 자격 증명 허용"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        # 환경 변수 이름 대소문자 무시
        case_sensitive = False
        frozen = True

    @property
    def allowed_hosts(self) -> tuple[str, ...]:
        """허용 호스트 목록을 튜플로 반환"""
        return tuple(
            host.strip() for host in self.allowed_import_hosts.split(",") if host.strip()
        )

    def validate_configuration(self) -> None:
        """설정 유효성 검증"""
        if not self.allowed_hosts:
            raise ConfigurationException(
                "ALLOWED_IMPORT_HOSTS", "최소 하나의 호스트가 필요합니다"
            )

        if self.max_import_releases <= 0:
            raise ConfigurationException(
                "MAX_IMPORT_RELEASES", "0보다 커야 합니다"
            )

        if self.presign_ttl_seconds <= 0:
            raise ConfigurationException(
                "PRESIGN_TTL_SECONDS", "0보다 커야 합니다"
            )

        if not self.public_url.startswith(("http://", "https://")):
            raise ConfigurationException(
                "PUBLIC_URL", f"http(s) URL이어야 합니다: {self.public_url}"
            )


@lru_cache()
def get_settings() -> Settings:
    """
    설정 인스턴스를 반환합니다 (싱글톤 패턴)

    Returns:
        Settings: 설정 인스턴스
    """
    settings = Settings()
    settings.validate_configuration()
    return settings
