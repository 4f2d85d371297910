"""
플랫폼 매칭 패키지
"""

from .platform_matcher import PlatformMatcher, field_matches, resolve_asset

__all__ = ["PlatformMatcher", "field_matches", "resolve_asset"]
