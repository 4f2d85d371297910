"""
예외 클래스 정의 모듈

아티팩트 배포 파이프라인에서 사용되는 커스텀 예외들을 정의합니다.
"""

from typing import Optional, Sequence


class ArtifactPipelineException(Exception):
    """아티팩트 파이프라인 기본 예외 클래스"""

    def __init__(self, message: str, error_code: Optional[str] = None):
        """
        예외 초기화

        Args:
            message: 오류 메시지
            error_code: 오류 코드 (선택사항)
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class InvalidUrlException(ArtifactPipelineException):
    """URL 파싱에 실패했을 때 발생하는 예외"""

    def __init__(self, url: str, error_detail: str):
        """
        잘못된 URL 예외 초기화

        Args:
            url: 입력 URL
            error_detail: 오류 상세 정보
        """
        message = f"Invalid URL: {url} - {error_detail}"
        super().__init__(message, "INVALID_URL")
        self.url = url
        self.error_detail = error_detail


class SsrfRejectedException(ArtifactPipelineException):
    """SSRF 정책에 의해 URL이 거부되었을 때 발생하는 예외"""

    HOST_NOT_ALLOWED = "host not allowed"
    PRIVATE_ADDRESS = "private address"

    def __init__(self, hostname: str, reason: str, allowed_hosts: Optional[Sequence[str]] = None):
        """
        SSRF 거부 예외 초기화

        Args:
            hostname: 거부된 호스트 이름
            reason: 거부 사유
            allowed_hosts: 허용된 호스트 목록 (허용 목록 위반 시)
        """
        if reason == self.HOST_NOT_ALLOWED:
            allowed = ", ".join(allowed_hosts or [])
            message = f"Host {hostname} is not allowed. Allowed hosts: {allowed}"
        else:
            message = f"Host {hostname} rejected: {reason}"
        super().__init__(message, "SSRF_REJECTED")
        self.hostname = hostname
        self.reason = reason
        self.allowed_hosts = list(allowed_hosts or [])


class UnsupportedProviderException(ArtifactPipelineException):
    """지원하지 않는 저장소 플랫폼일 때 발생하는 예외"""

    def __init__(self, url: str):
        message = (
            f"Unsupported repository platform: {url}. "
            "Only GitHub and GitLab are currently supported."
        )
        super().__init__(message, "UNSUPPORTED_PROVIDER")
        self.url = url


class InvalidRepoUrlException(ArtifactPipelineException):
    """저장소 URL에서 owner/repo를 추출할 수 없을 때 발생하는 예외"""

    def __init__(self, provider: str, url: str):
        message = f"Invalid {provider} repository URL: {url}"
        super().__init__(message, "INVALID_REPO_URL")
        self.provider = provider
        self.url = url


class FetchFailedException(ArtifactPipelineException):
    """필수 메타데이터 조회 실패 예외"""

    def __init__(self, resource: str, status: Optional[int] = None, error_detail: Optional[str] = None):
        """
        메타데이터 조회 실패 예외 초기화

        Args:
            resource: 조회 대상 리소스
            status: HTTP 상태 코드 (전송 계층 오류 시 None)
            error_detail: 오류 상세 정보
        """
        status_info = f"HTTP {status}" if status is not None else "전송 실패"
        detail_info = f" - {error_detail}" if error_detail else ""
        message = f"Failed to fetch {resource}: {status_info}{detail_info}"
        super().__init__(message, "FETCH_FAILED")
        self.resource = resource
        self.status = status
        self.error_detail = error_detail


class NoMatchException(ArtifactPipelineException):
    """요청한 플랫폼/아키텍처에 맞는 에셋이 없을 때 발생하는 예외"""

    def __init__(self, platform: str, arch: str):
        message = f"No matching asset found for this platform/arch: {platform}/{arch}"
        super().__init__(message, "NO_MATCH")
        self.platform = platform
        self.arch = arch


class IntegrityMismatchException(ArtifactPipelineException):
    """체크섬 검증 실패 예외"""

    def __init__(self, expected: str, actual: str, storage_key: Optional[str] = None):
        """
        체크섬 불일치 예외 초기화

        Args:
            expected: 기대한 SHA-256 값
            actual: 실제 계산된 SHA-256 값
            storage_key: 저장소 키 (선택사항)
        """
        key_info = f" ({storage_key})" if storage_key else ""
        message = f"Checksum verification failed{key_info}: expected {expected}, got {actual}"
        super().__init__(message, "INTEGRITY_MISMATCH")
        self.expected = expected
        self.actual = actual
        self.storage_key = storage_key


class StorageException(ArtifactPipelineException):
    """오브젝트 저장소 관련 예외"""

    def __init__(self, operation: str, error_detail: str):
        message = f"저장소 오류 ({operation}): {error_detail}"
        super().__init__(message, "STORAGE_ERROR")
        self.operation = operation
        self.error_detail = error_detail


class InvalidMimeTypeException(ArtifactPipelineException):
    """허용되지 않은 MIME 타입 예외"""

    def __init__(self, mime_type: str):
        message = f"허용되지 않은 파일 형식입니다: {mime_type}"
        super().__init__(message, "INVALID_MIME_TYPE")
        self.mime_type = mime_type


class ConfigurationException(ArtifactPipelineException):
    """설정 오류 시 발생하는 예외"""

    def __init__(self, config_key: str, error_detail: str):
        """
        설정 예외 초기화

        Args:
            config_key: 설정 키
            error_detail: 오류 상세 정보
        """
        message = f"설정 오류: {config_key} - {error_detail}"
        super().__init__(message, "CONFIGURATION_ERROR")
        self.config_key = config_key
        self.error_detail = error_detail
