"""
열거형 정의 모듈

파이프라인에서 사용되는 상수 값들을 열거형으로 정의합니다.
"""

from enum import Enum


class PlatformFamily(Enum):
    """설치 스크립트 플랫폼 계열 열거형"""
    POSIX = "posix"
    WINDOWS = "windows"
    UNKNOWN = "unknown"


class RepositoryProvider(Enum):
    """외부 저장소 제공자 열거형"""
    GITHUB = "github"
    GITLAB = "gitlab"
