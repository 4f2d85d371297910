"""
설정 관리 테스트 모듈

파이프라인 설정 로드와 유효성 검증을 테스트합니다.
"""

import pytest

from artifact_pipeline.config.settings import Settings, get_settings
from artifact_pipeline.exceptions import ConfigurationException


class TestSettings:
    """설정 클래스 테스트"""

    def test_default_settings(self, monkeypatch):
        """기본 설정 테스트"""
        monkeypatch.delenv("ALLOWED_IMPORT_HOSTS", raising=False)
        settings = Settings()

        assert settings.allowed_hosts == ("github.com", "gitlab.com", "bitbucket.org")
        assert settings.github_api_url == "https://api.github.com"
        assert settings.gitlab_api_url == "https://gitlab.com/api/v4"
        assert settings.max_import_releases == 10
        assert settings.presign_ttl_seconds == 3600
        assert settings.s3_bucket_name == "flo-packages"

    def test_settings_from_env(self, monkeypatch):
        """환경 변수로부터 설정 로드 테스트"""
        monkeypatch.setenv("ALLOWED_IMPORT_HOSTS", "github.com, git.example.org ,")
        monkeypatch.setenv("MAX_IMPORT_RELEASES", "5")
        monkeypatch.setenv("PUBLIC_URL", "https://pkg.example.org")
        monkeypatch.setenv("S3_BUCKET_NAME", "custom-bucket")
        monkeypatch.setenv("HTTP_TIMEOUT", "15")

        settings = Settings()

        assert settings.allowed_hosts == ("github.com", "git.example.org")
        assert settings.max_import_releases == 5
        assert settings.public_url == "https://pkg.example.org"
        assert settings.s3_bucket_name == "custom-bucket"
        assert settings.http_timeout == 15

    def test_settings_are_immutable(self):
        """설정 불변성 테스트"""
        settings = Settings()

        with pytest.raises(Exception):
            settings.allowed_import_hosts = "evil.com"


class TestValidateConfiguration:
    """설정 유효성 검증 테스트"""

    def test_valid_configuration(self):
        """유효한 설정 테스트"""
        Settings().validate_configuration()

    def test_empty_allowed_hosts(self):
        """빈 허용 목록 테스트"""
        settings = Settings(allowed_import_hosts=" , ")

        with pytest.raises(ConfigurationException) as exc_info:
            settings.validate_configuration()

        assert exc_info.value.config_key == "ALLOWED_IMPORT_HOSTS"

    def test_invalid_release_limit(self):
        """릴리스 수 제한 오류 테스트"""
        with pytest.raises(ConfigurationException):
            Settings(max_import_releases=0).validate_configuration()

    def test_invalid_public_url(self):
        """공개 URL 형식 오류 테스트"""
        with pytest.raises(ConfigurationException) as exc_info:
            Settings(public_url="ftp://example.com").validate_configuration()

        assert exc_info.value.config_key == "PUBLIC_URL"


def test_get_settings_singleton():
    """설정 싱글톤 테스트"""
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
