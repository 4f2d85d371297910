"""
테스트 공용 픽스처
"""

import pytest

from artifact_pipeline.config.settings import Settings

from fakes import MemoryStorage


@pytest.fixture
def settings():
    """테스트용 설정 픽스처"""
    return Settings(
        github_api_url="https://api.github.com",
        gitlab_api_url="https://gitlab.com/api/v4",
        public_url="https://registry.example.com",
        log_level="DEBUG"
    )


@pytest.fixture
def storage():
    """메모리 저장소 픽스처"""
    return MemoryStorage()

