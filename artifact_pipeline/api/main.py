"""
FastAPI 메인 애플리케이션

저장소 가져오기 미리보기와 플랫폼별 설치 스크립트 엔드포인트를 제공합니다.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse

from ..catalog import AssetCatalog, InMemoryAssetCatalog
from ..config.settings import Settings, get_settings
from ..exceptions import ArtifactPipelineException
from ..importer.http import HttpClient
from ..importer.importer import RepoImporter
from ..installer.generator import InstallScriptGenerator
from ..integrity.service import AssetIntegrityService
from ..integrity.storage import S3Storage, StorageBackend
from ..matching.platform_matcher import PlatformMatcher
from ..models.base import Asset, InstallQuery, RepoMetadata
from ..security.host_guard import HostGuard
from ..utils.logging import get_logger, setup_logging
from .models import ErrorResponse, ImportPreviewRequest, InstallCommandResponse

logger = get_logger(__name__)

# 오류 코드 -> HTTP 상태
ERROR_STATUS = {
    "INVALID_URL": status.HTTP_400_BAD_REQUEST,
    "SSRF_REJECTED": status.HTTP_400_BAD_REQUEST,
    "UNSUPPORTED_PROVIDER": status.HTTP_400_BAD_REQUEST,
    "INVALID_REPO_URL": status.HTTP_400_BAD_REQUEST,
    "FETCH_FAILED": status.HTTP_502_BAD_GATEWAY,
    "NO_MATCH": status.HTTP_404_NOT_FOUND,
}

router = APIRouter(prefix="/api/v1")


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog(request: Request) -> AssetCatalog:
    return request.app.state.catalog


def get_importer(request: Request) -> RepoImporter:
    return RepoImporter(request.app.state.settings, request.app.state.http_client)


def get_generator(settings: Settings = Depends(get_app_settings)) -> InstallScriptGenerator:
    return InstallScriptGenerator(settings)


def get_integrity(request: Request) -> AssetIntegrityService:
    return AssetIntegrityService(request.app.state.storage, request.app.state.settings)


def resolve_install_asset(query: InstallQuery, catalog: AssetCatalog) -> Asset:
    """
    설치 조회 키로 에셋 선택

    Raises:
        HTTPException: 릴리스가 없을 때 (404)
        NoMatchException: 일치하는 에셋이 없을 때
    """
    candidates = catalog.find_release_assets(query.owner, query.name, query.version)
    if candidates is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Release not found"
        )
    return PlatformMatcher().resolve(candidates, query.platform, query.arch)


def asset_download_url(settings: Settings, query: InstallQuery, asset: Asset) -> str:
    """
    에셋 다운로드 엔드포인트 URL

    Raises:
        HTTPException: 카탈로그 ID가 없어 내려받을 수 없는 에셋 (404)
    """
    if asset.id is None:
        logger.error(f"카탈로그 ID 없는 에셋: {asset.filename}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Asset is not downloadable"
        )

    base_url = settings.public_url.rstrip('/')
    return (
        f"{base_url}/api/v1/packages/{query.owner}/{query.name}"
        f"/releases/{query.version}/assets/{asset.id}"
    )


@router.post("/import/preview", response_model=RepoMetadata, tags=["Import"])
async def import_preview(
    request: ImportPreviewRequest,
    settings: Settings = Depends(get_app_settings),
    importer: RepoImporter = Depends(get_importer)
):
    """
    저장소 가져오기 미리보기

    요청 URL을 먼저 SSRF 정책으로 검증한 뒤 제공자 메타데이터를 조회합니다.
    결과는 저장하지 않습니다.
    """
    HostGuard(settings).validate(request.repository_url, request.allow_override)
    return await importer.import_repository(request.repository_url, request.token)


@router.get(
    "/packages/{owner}/{name}/install/{version}/{platform}/{arch}",
    response_class=PlainTextResponse,
    tags=["Install"]
)
async def install_script(
    owner: str,
    name: str,
    version: str,
    platform: str,
    arch: str,
    settings: Settings = Depends(get_app_settings),
    catalog: AssetCatalog = Depends(get_catalog),
    generator: InstallScriptGenerator = Depends(get_generator)
):
    """플랫폼별 설치 스크립트 (text/plain)"""
    query = InstallQuery(owner=owner, name=name, version=version, platform=platform, arch=arch)
    asset = resolve_install_asset(query, catalog)

    script = generator.generate_script(
        owner, name, version, platform, arch,
        asset_download_url(settings, query, asset),
        asset.sha256,
        asset.filename
    )
    return PlainTextResponse(script)


@router.get(
    "/packages/{owner}/{name}/install-command/{version}/{platform}/{arch}",
    response_model=InstallCommandResponse,
    tags=["Install"]
)
async def install_command(
    owner: str,
    name: str,
    version: str,
    platform: str,
    arch: str,
    settings: Settings = Depends(get_app_settings),
    catalog: AssetCatalog = Depends(get_catalog),
    generator: InstallScriptGenerator = Depends(get_generator)
):
    """한 줄 설치 명령"""
    query = InstallQuery(owner=owner, name=name, version=version, platform=platform, arch=arch)
    asset = resolve_install_asset(query, catalog)

    return InstallCommandResponse(
        command=generator.generate_command(
            owner, name, version, platform, arch,
            asset_download_url(settings, query, asset),
            asset.sha256
        ),
        cli_command=generator.generate_cli_command(owner, name, version),
        filename=asset.filename,
        sha256=asset.sha256
    )


@router.get(
    "/packages/{owner}/{name}/releases/{version}/assets/{asset_id}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    tags=["Install"]
)
async def download_asset(
    owner: str,
    name: str,
    version: str,
    asset_id: int,
    catalog: AssetCatalog = Depends(get_catalog),
    integrity: AssetIntegrityService = Depends(get_integrity)
):
    """에셋 다운로드 (서명된 저장소 URL로 리다이렉트)"""
    asset = catalog.find_asset(owner, name, version, asset_id)
    if asset is None or not asset.storage_key:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Asset not found"
        )

    return RedirectResponse(
        integrity.download_url(asset.storage_key),
        status_code=status.HTTP_302_FOUND
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리"""
    app_logger = setup_logging(app.state.settings)
    app_logger.info("API 서버 시작")

    try:
        yield
    finally:
        app_logger.info("API 서버 종료")
        await app.state.http_client.close()


def create_app(settings: Optional[Settings] = None, catalog: Optional[AssetCatalog] = None,
               http_client: Optional[HttpClient] = None,
               storage: Optional[StorageBackend] = None) -> FastAPI:
    """
    FastAPI 애플리케이션 생성

    Args:
        settings: 파이프라인 설정 (None이면 기본 설정 사용)
        catalog: 에셋 카탈로그 (None이면 메모리 카탈로그)
        http_client: 제공자 API용 HTTP 클라이언트
        storage: 에셋 오브젝트 저장소 (None이면 S3 저장소)
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="아티팩트 배포 파이프라인 API",
        description="저장소 가져오기 검증과 자체 검증 설치 스크립트 API",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.state.settings = settings
    app.state.catalog = catalog or InMemoryAssetCatalog()
    app.state.http_client = http_client or HttpClient(settings)
    app.state.storage = storage if storage is not None else S3Storage(settings)

    @app.exception_handler(ArtifactPipelineException)
    async def pipeline_exception_handler(request: Request, exc: ArtifactPipelineException):
        """파이프라인 예외 핸들러"""
        status_code = ERROR_STATUS.get(exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        logger.warning(f"요청 실패 ({exc.error_code}): {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=exc.message,
                code=exc.error_code
            ).model_dump(mode="json")
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """HTTP 예외 핸들러"""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=str(exc.detail),
                code=str(exc.status_code)
            ).model_dump(mode="json")
        )

    # CORS 미들웨어
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # GZip 압축 미들웨어
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.get("/", tags=["Root"])
    async def root():
        """루트 엔드포인트"""
        return {
            "message": "아티팩트 배포 파이프라인 API",
            "version": "1.0.0",
            "status": "running",
            "timestamp": datetime.now().isoformat(),
            "docs_url": "/docs"
        }

    app.include_router(router)
    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_level="info"
    )
