"""
모델 테스트 모듈

파이프라인 데이터 모델과 에셋 카탈로그를 테스트합니다.
"""

import pytest

from artifact_pipeline.api.models import ImportPreviewRequest
from artifact_pipeline.catalog import InMemoryAssetCatalog
from artifact_pipeline.models.base import (
    Asset,
    ImportRequest,
    InstallQuery,
    RepoAsset,
    RepoMetadata,
    StoredAssetDescriptor,
)
from artifact_pipeline.models.enums import PlatformFamily, RepositoryProvider


class TestStoredAssetDescriptor:
    """저장 에셋 정보 모델 테스트"""

    def test_descriptor_creation(self):
        descriptor = StoredAssetDescriptor(storage_key="assets/1-ab-tool.zip", sha256="c" * 64, size=10)

        assert descriptor.sha256 == "c" * 64

    @pytest.mark.parametrize("sha256", ["C" * 64, "c" * 63, "not-a-checksum"])
    def test_invalid_checksum(self, sha256):
        """체크섬 형식 검증 테스트"""
        with pytest.raises(ValueError):
            StoredAssetDescriptor(storage_key="assets/k", sha256=sha256, size=10)

    def test_negative_size(self):
        with pytest.raises(ValueError):
            StoredAssetDescriptor(storage_key="assets/k", sha256="c" * 64, size=-1)


class TestRepoMetadata:
    """저장소 메타데이터 모델 테스트"""

    def test_defaults(self):
        metadata = RepoMetadata(owner="acme", name="tool")

        assert metadata.releases == []
        assert metadata.readme is None

    def test_asset_size_validation(self):
        with pytest.raises(ValueError):
            RepoAsset(name="tool.zip", url="https://example.com/tool.zip", size=-5)


class TestRequests:
    """요청 모델 테스트"""

    def test_import_request_defaults(self):
        request = ImportRequest(url="https://github.com/acme/tool")

        assert request.token is None
        assert request.allow_override is False

    def test_install_query_requires_fields(self):
        """설치 조회 키 필수값 테스트"""
        with pytest.raises(ValueError):
            InstallQuery(owner="acme", name="tool", version="1.0.0", platform="", arch="x64")

    def test_preview_request_strips_url(self):
        request = ImportPreviewRequest(repository_url=" https://github.com/acme/tool ")

        assert request.repository_url == "https://github.com/acme/tool"


class TestEnums:
    """열거형 테스트"""

    def test_values(self):
        assert RepositoryProvider.GITHUB.value == "github"
        assert RepositoryProvider.GITLAB.value == "gitlab"
        assert PlatformFamily.UNKNOWN.value == "unknown"


class TestInMemoryAssetCatalog:
    """메모리 카탈로그 테스트"""

    def make_asset(self, asset_id: int) -> Asset:
        return Asset(id=asset_id, filename=f"tool-{asset_id}.zip", sha256="d" * 64)

    def test_unknown_release(self):
        assert InMemoryAssetCatalog().find_release_assets("acme", "tool", "1.0.0") is None

    def test_assets_in_insertion_order(self):
        """에셋은 추가 순서대로 반환"""
        catalog = InMemoryAssetCatalog()
        catalog.add_asset("acme", "tool", "1.0.0", self.make_asset(2))
        catalog.add_asset("acme", "tool", "1.0.0", self.make_asset(1))

        assets = catalog.find_release_assets("acme", "tool", "1.0.0")

        assert [asset.id for asset in assets] == [2, 1]

    def test_returns_copy(self):
        catalog = InMemoryAssetCatalog()
        catalog.add_release("acme", "tool", "1.0.0", [self.make_asset(1)])

        catalog.find_release_assets("acme", "tool", "1.0.0").clear()

        assert len(catalog.find_release_assets("acme", "tool", "1.0.0")) == 1

    def test_find_asset(self):
        """릴리스 내 에셋 ID 조회 테스트"""
        catalog = InMemoryAssetCatalog()
        catalog.add_release("acme", "tool", "1.0.0", [self.make_asset(1), self.make_asset(2)])

        assert catalog.find_asset("acme", "tool", "1.0.0", 2).filename == "tool-2.zip"
        assert catalog.find_asset("acme", "tool", "1.0.0", 3) is None
        assert catalog.find_asset("acme", "tool", "2.0.0", 1) is None
