"""
통합 테스트 모듈

가져오기부터 설치 스크립트 생성까지 파이프라인 전체 흐름을 테스트합니다.
"""

import hashlib

import pytest

from artifact_pipeline.catalog import InMemoryAssetCatalog
from artifact_pipeline.exceptions import IntegrityMismatchException, SsrfRejectedException
from artifact_pipeline.importer import RepoImporter
from artifact_pipeline.installer import InstallScriptGenerator
from artifact_pipeline.integrity import AssetIntegrityService
from artifact_pipeline.matching import PlatformMatcher
from artifact_pipeline.models.base import Asset
from artifact_pipeline.security import HostGuard

from fakes import FakeHttpClient, json_response

BINARY = b"#!/bin/sh\necho tool\n"


class TestFullPipelineWorkflow:
    """전체 파이프라인 워크플로우 테스트"""

    @pytest.mark.asyncio
    async def test_import_ingest_install(self, settings, storage):
        """가져오기-저장-설치 스크립트 워크플로우 테스트"""
        # 저장소 메타데이터 가져오기
        http_client = FakeHttpClient({
            "https://api.github.com/repos/acme/tool": json_response({"description": "A tool"}),
            "https://api.github.com/repos/acme/tool/releases": json_response([{
                "tag_name": "1.0.0",
                "body": "첫 릴리스",
                "assets": [{
                    "name": "tool-linux-x64",
                    "browser_download_url": "https://github.com/acme/tool/releases/download/1.0.0/tool-linux-x64",
                    "size": len(BINARY),
                    "content_type": "application/octet-stream",
                }],
            }]),
        })

        url = "https://github.com/acme/tool"
        HostGuard(settings).validate(url)
        async with RepoImporter(settings, http_client) as importer:
            metadata = await importer.import_repository(url)

        release = metadata.releases[0]
        repo_asset = release.assets[0]

        # 에셋 저장 및 체크섬 계산
        integrity = AssetIntegrityService(storage, settings)
        descriptor = integrity.ingest(BINARY, repo_asset.name, repo_asset.content_type)

        catalog = InMemoryAssetCatalog()
        catalog.add_asset(metadata.owner, metadata.name, release.version, Asset(
            id=1,
            filename=repo_asset.name,
            size=descriptor.size,
            sha256=descriptor.sha256,
            storage_key=descriptor.storage_key,
            platform="linux",
            arch="x64",
        ))

        # 설치 시점 에셋 선택과 스크립트 생성
        candidates = catalog.find_release_assets("acme", "tool", "1.0.0")
        asset = PlatformMatcher().resolve(candidates, "linux", "x64")
        script = InstallScriptGenerator(settings).generate_script(
            "acme", "tool", "1.0.0", "linux", "x64",
            integrity.download_url(asset.storage_key),
            asset.sha256,
            asset.filename,
        )

        assert asset.sha256 == hashlib.sha256(BINARY).hexdigest()
        assert f"EXPECTED={asset.sha256}\n" in script
        assert "https://storage.test/assets/" in script
        assert integrity.fetch_verified(asset.storage_key) == BINARY

    @pytest.mark.asyncio
    async def test_rejected_url_never_fetched(self, settings):
        """SSRF 거부 URL은 네트워크 계층에 도달하지 않음"""
        http_client = FakeHttpClient()

        with pytest.raises(SsrfRejectedException):
            HostGuard(settings).validate("http://127.0.0.1:8080/acme/tool", allow_override=True)
        with pytest.raises(SsrfRejectedException):
            await RepoImporter(settings, http_client).import_repository("http://localhost/github.com/acme/tool")

        assert http_client.calls == []

    def test_tampered_asset_detected(self, settings, storage):
        """저장 후 변조된 에셋 검출 테스트"""
        integrity = AssetIntegrityService(storage, settings)
        descriptor = integrity.ingest(BINARY, "tool")

        storage.objects[descriptor.storage_key] = BINARY + b"# injected\n"

        with pytest.raises(IntegrityMismatchException):
            integrity.fetch_verified(descriptor.storage_key)
