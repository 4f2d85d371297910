"""
보안 패키지

가져오기 URL에 대한 SSRF 검증을 제공합니다.
"""

from .host_guard import HostGuard, is_private_hostname, validate_import_url

__all__ = ["HostGuard", "is_private_hostname", "validate_import_url"]
