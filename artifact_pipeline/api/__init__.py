"""
API 패키지

파이프라인의 HTTP 엔드포인트를 제공합니다.
"""

from .main import create_app

__all__ = ["create_app"]
