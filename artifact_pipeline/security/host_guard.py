"""
SSRF 방어 모듈

외부에서 입력된 가져오기 URL을 호스트 허용 목록과 사설 주소 차단 목록으로 검증합니다.
검증은 호스트 이름 문자열만으로 수행하며 DNS 조회는 하지 않습니다.
"""

from typing import Optional
from urllib.parse import urlsplit

from ..config.settings import Settings
from ..exceptions import InvalidUrlException, SsrfRejectedException
from ..utils.logging import get_logger

logger = get_logger(__name__)

PRIVATE_HOST_PREFIXES = ("127.", "192.168.", "10.")


def is_private_hostname(hostname: str) -> bool:
    """
    사설/루프백 호스트 이름인지 확인

    Args:
        hostname: 소문자 호스트 이름

    Returns:
        bool: 차단 대상 여부
    """
    if hostname == "localhost":
        return True

    if hostname.startswith(PRIVATE_HOST_PREFIXES):
        return True

    # 172.16.0.0 - 172.31.255.255 (두 번째 옥텟 숫자 범위 비교)
    octets = hostname.split(".")
    if len(octets) >= 3 and octets[0] == "172" and octets[1].isdigit():
        return 16 <= int(octets[1]) <= 31

    return False


class HostGuard:
    """가져오기 URL SSRF 검증기"""

    def __init__(self, settings: Optional[Settings] = None):
        """
        검증기 초기화

        Args:
            settings: 파이프라인 설정 (None이면 기본 설정 사용)
        """
        if settings is None:
            from ..config.settings import get_settings
            settings = get_settings()

        self.allowed_hosts = settings.allowed_hosts
        self.logger = logger

    def parse_hostname(self, url: str) -> str:
        """
        URL에서 호스트 이름 추출

        Raises:
            InvalidUrlException: URL 형식이 잘못되었을 때
        """
        try:
            parsed = urlsplit(url.strip())
            # 잘못된 포트는 접근 시점에 ValueError 발생
            parsed.port
        except (ValueError, AttributeError) as e:
            raise InvalidUrlException(str(url), str(e)) from e

        if not parsed.scheme or not parsed.hostname:
            raise InvalidUrlException(url, "scheme과 host가 필요합니다")

        return parsed.hostname

    def validate(self, url: str, allow_override: bool = False) -> bool:
        """
        가져오기 URL 검증

        Args:
            url: 검증할 URL
            allow_override: 허용 목록 검사 생략 여부 (사설 주소 차단은 항상 적용)

        Returns:
            bool: 검증 통과 시 True

        Raises:
            InvalidUrlException: URL 파싱 실패
            SsrfRejectedException: 허용되지 않은 호스트 또는 사설 주소
        """
        hostname = self.parse_hostname(url)

        if not allow_override and hostname not in self.allowed_hosts:
            self.logger.warning(f"허용되지 않은 가져오기 호스트: {hostname}")
            raise SsrfRejectedException(
                hostname,
                SsrfRejectedException.HOST_NOT_ALLOWED,
                allowed_hosts=self.allowed_hosts
            )

        if is_private_hostname(hostname):
            self.logger.warning(f"사설 주소 가져오기 차단: {hostname}")
            raise SsrfRejectedException(hostname, SsrfRejectedException.PRIVATE_ADDRESS)

        return True


def validate_import_url(url: str, allow_override: bool = False, settings: Optional[Settings] = None) -> bool:
    """
    편의 함수: 가져오기 URL 검증

    Args:
        url: 검증할 URL
        allow_override: 허용 목록 검사 생략 여부
        settings: 파이프라인 설정

    Returns:
        bool: 검증 통과 시 True
    """
    return HostGuard(settings).validate(url, allow_override)
