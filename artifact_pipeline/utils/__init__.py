"""
유틸리티 패키지

공통으로 사용되는 유틸리티 함수들을 포함합니다.
"""

from .logging import get_logger, setup_logging
from .helpers import (
    calculate_bytes_hash,
    generate_storage_key,
    validate_mime_type,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "calculate_bytes_hash",
    "generate_storage_key",
    "validate_mime_type",
]
