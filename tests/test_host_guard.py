"""
SSRF 검증 테스트 모듈

가져오기 URL의 호스트 허용 목록과 사설 주소 차단을 테스트합니다.
"""

import pytest

from artifact_pipeline.config.settings import Settings
from artifact_pipeline.exceptions import InvalidUrlException, SsrfRejectedException
from artifact_pipeline.security.host_guard import HostGuard, is_private_hostname, validate_import_url

PRIVATE_URLS = [
    "http://localhost:8080/repo",
    "http://127.0.0.1/repo",
    "http://127.1.2.3:9000/repo",
    "http://192.168.1.1/repo",
    "http://10.0.0.1/repo",
    "http://172.16.0.1/repo",
    "http://172.20.10.5/repo",
    "http://172.31.255.255/repo",
]


class TestHostGuard:
    """HostGuard 테스트"""

    @pytest.fixture
    def guard(self, settings):
        """검증기 픽스처"""
        return HostGuard(settings)

    @pytest.mark.parametrize("url", [
        "https://github.com/user/repo",
        "https://gitlab.com/user/repo",
        "https://bitbucket.org/user/repo",
    ])
    def test_allowed_hosts(self, guard, url):
        """허용 호스트 통과 테스트"""
        assert guard.validate(url) is True

    @pytest.mark.parametrize("url", PRIVATE_URLS)
    @pytest.mark.parametrize("allow_override", [False, True])
    def test_private_addresses_rejected(self, guard, url, allow_override):
        """사설 주소는 우회 여부와 관계없이 거부"""
        with pytest.raises(SsrfRejectedException):
            guard.validate(url, allow_override)

    @pytest.mark.parametrize("url", PRIVATE_URLS)
    def test_private_reason_with_override(self, guard, url):
        """우회 시 거부 사유는 사설 주소"""
        with pytest.raises(SsrfRejectedException) as exc_info:
            guard.validate(url, allow_override=True)

        assert exc_info.value.reason == "private address"

    def test_non_allowed_host(self, guard):
        """허용되지 않은 호스트 거부 테스트"""
        with pytest.raises(SsrfRejectedException) as exc_info:
            guard.validate("https://evil.com/repo")

        assert "not allowed" in str(exc_info.value)
        assert exc_info.value.reason == "host not allowed"
        assert "github.com" in exc_info.value.allowed_hosts

    def test_override_allows_public_host(self, guard):
        """우회 시 공개 호스트 허용 테스트"""
        assert guard.validate("https://custom-git.com/repo", allow_override=True) is True

    def test_exact_host_match(self, guard):
        """호스트 정확 일치 테스트"""
        with pytest.raises(SsrfRejectedException):
            guard.validate("https://github.com.evil.com/repo")
        with pytest.raises(SsrfRejectedException):
            guard.validate("https://api.github.com/repos/a/b")

    @pytest.mark.parametrize("url", [
        "not a url",
        "github.com/user/repo",
        "https://",
        "https://github.com:notaport/repo",
    ])
    def test_invalid_url(self, guard, url):
        """잘못된 URL 테스트"""
        with pytest.raises(InvalidUrlException):
            guard.validate(url)

    def test_custom_allow_list(self):
        """설정된 허용 목록 사용 테스트"""
        guard = HostGuard(Settings(allowed_import_hosts="git.example.org"))

        assert guard.validate("https://git.example.org/a/b") is True
        with pytest.raises(SsrfRejectedException):
            guard.validate("https://github.com/a/b")

    def test_convenience_function(self, settings):
        """편의 함수 테스트"""
        assert validate_import_url("https://github.com/a/b", settings=settings) is True
        with pytest.raises(SsrfRejectedException):
            validate_import_url("http://10.1.1.1/a/b", True, settings)


class TestIsPrivateHostname:
    """사설 주소 판정 테스트"""

    @pytest.mark.parametrize("hostname", [
        "172.15.0.1",
        "172.32.0.1",
        "172.example.com",
        "11.0.0.1",
        "192.169.0.1",
        "github.com",
    ])
    def test_public_hostnames(self, hostname):
        """공개 호스트 판정 테스트"""
        assert is_private_hostname(hostname) is False

    @pytest.mark.parametrize("hostname", [
        "localhost",
        "127.0.0.1",
        "10.255.255.255",
        "192.168.0.10",
        "172.16.0.0",
        "172.31.0.1",
    ])
    def test_private_hostnames(self, hostname):
        """사설 호스트 판정 테스트"""
        assert is_private_hostname(hostname) is True
