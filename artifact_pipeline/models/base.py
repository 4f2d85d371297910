"""
기본 데이터 모델 모듈

가져오기, 무결성 검증, 설치 단계에서 사용하는 데이터 구조들을 정의합니다.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..utils.helpers import is_valid_sha256


class ImportRequest(BaseModel):
    """저장소 가져오기 요청 모델"""

    url: str = Field(
        ...,
        description="가져올 저장소 URL",
        min_length=1
    )
    token: Optional[str] = Field(
        None,
        description="제공자 API 인증 토큰"
    )
    allow_override: bool = Field(
        default=False,
        description="호스트 허용 목록 우회 여부 (사설 주소 차단은 우회하지 않음)"
    )


class RepoAsset(BaseModel):
    """제공자 원본 에셋 정보 모델"""

    name: str = Field(..., description="에셋 파일명")
    url: str = Field(..., description="다운로드 URL")
    size: int = Field(default=0, description="크기 (바이트)", ge=0)
    content_type: Optional[str] = Field(None, description="Content-Type")


class RepoRelease(BaseModel):
    """제공자 릴리스 정보 모델"""

    version: str = Field(..., description="릴리스 태그/버전")
    notes: Optional[str] = Field(None, description="릴리스 노트")
    assets: List[RepoAsset] = Field(default_factory=list, description="에셋 목록")


class RepoMetadata(BaseModel):
    """정규화된 저장소 메타데이터 모델"""

    owner: str = Field(..., description="저장소 소유자")
    name: str = Field(..., description="저장소 이름")
    description: Optional[str] = Field(None, description="저장소 설명")
    readme: Optional[str] = Field(None, description="README 본문")
    homepage: Optional[str] = Field(None, description="홈페이지 URL")
    releases: List[RepoRelease] = Field(
        default_factory=list,
        description="릴리스 목록 (제공자 순서, 최신순)"
    )


class StoredAssetDescriptor(BaseModel):
    """무결성 서비스가 생성한 저장 에셋 정보 모델"""

    storage_key: str = Field(..., description="오브젝트 저장소 키", min_length=1)
    sha256: str = Field(..., description="SHA-256 체크섬 (64자리 소문자 16진수)")
    size: int = Field(..., description="크기 (바이트)", ge=0)

    @field_validator('sha256')
    @classmethod
    def validate_sha256(cls, v: str) -> str:
        """체크섬 형식 검사"""
        if not is_valid_sha256(v):
            raise ValueError('sha256은 64자리 소문자 16진수여야 합니다')
        return v


class InstallQuery(BaseModel):
    """설치 조회 키 모델"""

    owner: str = Field(..., min_length=1, description="패키지 소유자")
    name: str = Field(..., min_length=1, description="패키지 이름")
    version: str = Field(..., min_length=1, description="릴리스 버전")
    platform: str = Field(..., min_length=1, description="요청 플랫폼")
    arch: str = Field(..., min_length=1, description="요청 아키텍처")


class Asset(BaseModel):
    """저장된 에셋 레코드 모델 (외부 영속 계층 소유, 읽기 전용)"""

    id: Optional[int] = Field(None, description="에셋 ID")
    filename: str = Field(..., description="파일명")
    size: int = Field(default=0, ge=0, description="크기 (바이트)")
    mime_type: Optional[str] = Field(None, description="MIME 타입")
    sha256: str = Field(..., description="SHA-256 체크섬")
    storage_key: Optional[str] = Field(None, description="오브젝트 저장소 키")
    platform: Optional[str] = Field(None, description="플랫폼 태그")
    os: Optional[str] = Field(None, description="운영체제 태그")
    arch: Optional[str] = Field(None, description="아키텍처 태그")
