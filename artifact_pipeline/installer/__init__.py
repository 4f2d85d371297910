"""
설치 스크립트 패키지

플랫폼별 자체 검증 설치 스크립트와 설치 명령을 생성합니다.
"""

from .generator import (
    InstallScriptGenerator,
    classify_platform,
    generate_install_command,
    generate_install_script,
)

__all__ = [
    "InstallScriptGenerator",
    "classify_platform",
    "generate_install_command",
    "generate_install_script",
]
