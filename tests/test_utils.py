"""
유틸리티 함수 테스트 모듈

체크섬, 저장소 키, MIME 타입 검사와 로깅 설정을 테스트합니다.
"""

import hashlib
import logging

import pytest

from artifact_pipeline.config.settings import Settings
from artifact_pipeline.utils.helpers import (
    calculate_bytes_hash,
    format_file_size,
    generate_storage_key,
    is_valid_sha256,
    validate_mime_type,
)
from artifact_pipeline.utils.logging import KoreanFormatter, get_logger, setup_logging


class TestHashCalculation:
    """해시 계산 함수 테스트"""

    def test_calculate_bytes_hash(self):
        """바이트 해시 계산 테스트"""
        data = b"Hello, World!"
        hash_value = calculate_bytes_hash(data)

        assert hash_value == hashlib.sha256(data).hexdigest()
        assert is_valid_sha256(hash_value)

    def test_empty_bytes_hash(self):
        """빈 바이트 해시 테스트"""
        assert calculate_bytes_hash(b"") == (
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )

    @pytest.mark.parametrize("value,expected", [
        ("a" * 64, True),
        ("A" * 64, False),
        ("a" * 63, False),
        ("g" * 64, False),
        ("", False),
    ])
    def test_is_valid_sha256(self, value, expected):
        """체크섬 형식 검사 테스트"""
        assert is_valid_sha256(value) is expected


class TestStorageKey:
    """저장소 키 생성 테스트"""

    def test_key_format(self):
        """키 형식 테스트"""
        key = generate_storage_key("tool-linux-x64.tar.gz")

        prefix, rest = key.split("/", 1)
        timestamp, suffix, filename = rest.split("-", 2)

        assert prefix == "assets"
        assert timestamp.isdigit()
        assert len(suffix) == 16
        int(suffix, 16)
        assert filename == "tool-linux-x64.tar.gz"

    def test_same_filename_keys_differ(self):
        """같은 파일명 키 충돌 방지 테스트"""
        keys = {generate_storage_key("tool.zip") for _ in range(100)}

        assert len(keys) == 100


class TestMimeType:
    """MIME 타입 검사 테스트"""

    def test_default_allowed(self):
        """기본 허용 타입 테스트"""
        assert validate_mime_type("application/zip") is True
        assert validate_mime_type("application/x-rpm") is True
        assert validate_mime_type("text/html") is False

    def test_wildcard(self):
        """와일드카드 매칭 테스트"""
        assert validate_mime_type("image/png", ["image/*"]) is True
        assert validate_mime_type("imagex/png", ["image/*"]) is False

    def test_exact_only(self):
        """정확 일치 테스트"""
        assert validate_mime_type("application/zip-extra", ["application/zip"]) is False


class TestFormatting:
    """형식 변환 함수 테스트"""

    def test_format_file_size(self):
        assert format_file_size(0) == "0 B"
        assert format_file_size(512) == "512.0 B"
        assert format_file_size(1024) == "1.0 KB"
        assert format_file_size(1536 * 1024) == "1.5 MB"


class TestLogging:
    """로깅 설정 테스트"""

    def test_setup_logging(self):
        """로깅 초기화 테스트"""
        logger = setup_logging(Settings(log_level="DEBUG"))

        assert logger.name == "artifact_pipeline"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_setup_logging_with_file(self, tmp_path):
        """파일 핸들러 테스트"""
        log_file = tmp_path / "logs" / "pipeline.log"
        logger = setup_logging(Settings(log_file=str(log_file)))

        try:
            assert len(logger.handlers) == 2
            assert log_file.parent.exists()
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()

    def test_get_logger_names(self):
        """하위 로거 이름 테스트"""
        assert get_logger("importer").name == "artifact_pipeline.importer"
        assert get_logger("artifact_pipeline.security.host_guard").name == (
            "artifact_pipeline.security.host_guard"
        )

    def test_korean_formatter(self):
        """한국어 레벨명 포맷터 테스트"""
        formatter = KoreanFormatter(fmt="%(levelname)s - %(message)s")
        record = logging.LogRecord("test", logging.WARNING, __file__, 1, "메시지", None, None)

        assert formatter.format(record) == "경고 - 메시지"
        assert record.levelname == "WARNING"
