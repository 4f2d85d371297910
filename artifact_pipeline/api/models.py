"""
API 요청/응답 모델 모듈

FastAPI용 Pydantic 모델들을 정의합니다.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ImportPreviewRequest(BaseModel):
    """저장소 가져오기 미리보기 요청 모델"""

    repository_url: str = Field(
        ...,
        description="가져올 저장소 URL",
        min_length=1,
        max_length=2048
    )
    token: Optional[str] = Field(
        None,
        description="제공자 API 토큰"
    )
    allow_override: bool = Field(
        default=False,
        description="호스트 허용 목록 우회 여부"
    )

    @field_validator('repository_url')
    @classmethod
    def validate_repository_url(cls, v: str) -> str:
        """저장소 URL 공백 검사"""
        if not v.strip():
            raise ValueError('저장소 URL은 필수입니다')
        return v.strip()


class InstallCommandResponse(BaseModel):
    """설치 명령 응답 모델"""

    command: str = Field(..., description="한 줄 설치 명령")
    cli_command: str = Field(..., description="레지스트리 CLI 명령")
    filename: str = Field(..., description="선택된 에셋 파일명")
    sha256: str = Field(..., description="선택된 에셋 체크섬")


class ErrorResponse(BaseModel):
    """오류 응답 모델"""

    error: str = Field(..., description="오류 메시지")
    detail: Optional[str] = Field(default=None, description="상세 오류 정보")
    code: Optional[str] = Field(default=None, description="오류 코드")
    timestamp: datetime = Field(default_factory=datetime.now, description="오류 발생 시간")
