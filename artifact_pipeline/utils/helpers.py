"""
공통 유틸리티 함수 모듈

체크섬 계산, 저장소 키 생성 등 파이프라인 공통 헬퍼 함수들을 제공합니다.
"""

import hashlib
import re
import secrets
import time
from typing import Iterable

SHA256_PATTERN = re.compile(r'^[0-9a-f]{64}$')

STORAGE_KEY_PREFIX = "assets"

DEFAULT_ALLOWED_MIME_TYPES = (
    'application/zip',
    'application/x-tar',
    'application/gzip',
    'application/x-gzip',
    'application/x-compressed',
    'application/octet-stream',
    'application/x-executable',
    'application/x-mach-binary',
    'application/vnd.debian.binary-package',
    'application/x-rpm',
    'application/x-ms-dos-executable',
)


def calculate_bytes_hash(data: bytes) -> str:
    """
    바이트 시퀀스의 SHA-256 해시 계산

    Args:
        data: 해시를 계산할 바이트

    Returns:
        str: 64자리 소문자 16진수 SHA-256 해시값
    """
    return hashlib.sha256(data).hexdigest()


def is_valid_sha256(value: str) -> bool:
    """64자리 소문자 16진수 문자열인지 확인"""
    return bool(SHA256_PATTERN.match(value or ""))


def generate_storage_key(filename: str) -> str:
    """
    업로드 저장소 키 생성

    같은 밀리초에 같은 파일명이 업로드되어도 충돌하지 않도록
    8바이트 난수 접미사를 붙입니다.

    Args:
        filename: 원본 파일명

    Returns:
        str: assets/<밀리초>-<16진수 난수>-<파일명> 형식의 키
    """
    timestamp = int(time.time() * 1000)
    random_suffix = secrets.token_hex(8)
    return f"{STORAGE_KEY_PREFIX}/{timestamp}-{random_suffix}-{filename}"


def validate_mime_type(mime_type: str, allowed_types: Iterable[str] = DEFAULT_ALLOWED_MIME_TYPES) -> bool:
    """
    MIME 타입 허용 여부 확인

    'application/*' 처럼 '/*'로 끝나는 항목은 접두사 일치로 처리합니다.

    Args:
        mime_type: 검사할 MIME 타입
        allowed_types: 허용 MIME 타입 목록

    Returns:
        bool: 허용 여부
    """
    for allowed in allowed_types:
        if allowed.endswith('/*'):
            if mime_type.startswith(allowed[:-1]):
                return True
        elif mime_type == allowed:
            return True
    return False


def format_file_size(size_bytes: int) -> str:
    """
    파일 크기를 사람이 읽기 쉬운 형태로 변환

    Args:
        size_bytes: 바이트 단위 크기

    Returns:
        str: 형식화된 크기 문자열
    """
    if size_bytes == 0:
        return "0 B"

    size_names = ["B", "KB", "MB", "GB", "TB"]
    i = 0
    size_value = float(size_bytes)

    while size_value >= 1024 and i < len(size_names) - 1:
        size_value = size_value / 1024
        i += 1

    return f"{size_value:.1f} {size_names[i]}"
