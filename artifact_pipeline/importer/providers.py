"""
저장소 제공자별 메타데이터 조회 모듈

GitHub, GitLab API에서 프로젝트 정보, README, 릴리스를 조회해
공통 RepoMetadata 형태로 정규화합니다.
"""

import asyncio
import base64
import re
from typing import Any, Dict, List, Optional, Protocol, Tuple
from urllib.parse import quote

from ..config.settings import Settings
from ..exceptions import FetchFailedException, InvalidRepoUrlException
from ..models.base import RepoAsset, RepoMetadata, RepoRelease
from ..models.enums import RepositoryProvider
from ..security.host_guard import HostGuard
from ..utils.logging import get_logger
from .fetch import run_sub_fetch
from .http import HttpClient

logger = get_logger(__name__)


class MetadataFetcher(Protocol):
    """제공자별 메타데이터 조회 기능"""

    provider: RepositoryProvider

    async def fetch(self, url: str, token: Optional[str] = None) -> RepoMetadata:
        ...

    async def fetch_metadata(self, owner: str, repo: str, token: Optional[str] = None) -> RepoMetadata:
        ...


def parse_repo_path(host: str, url: str) -> Optional[Tuple[str, str]]:
    """
    URL에서 (owner, repo) 추출

    Args:
        host: 제공자 호스트 (예: github.com)
        url: 저장소 URL

    Returns:
        (owner, repo) 튜플 (형식이 맞지 않으면 None)
    """
    match = re.search(rf"{re.escape(host)}/([^/?#]+)/([^/?#]+)", url)
    if not match:
        return None

    owner, repo = match.group(1), match.group(2)
    if repo.endswith(".git"):
        repo = repo[:-len(".git")]
    if not owner or not repo:
        return None
    return owner, repo


class GitHubFetcher:
    """GitHub 메타데이터 조회기"""

    provider = RepositoryProvider.GITHUB
    host = "github.com"

    def __init__(self, settings: Settings, http_client: HttpClient, guard: Optional[HostGuard] = None):
        """
        GitHub 조회기 초기화

        Args:
            settings: 파이프라인 설정
            http_client: HTTP 클라이언트
            guard: SSRF 검증기 (None이면 설정으로 생성)
        """
        self.settings = settings
        self.http_client = http_client
        self.guard = guard or HostGuard(settings)
        self.api_url = settings.github_api_url.rstrip('/')
        self.logger = logger

    def _headers(self, token: Optional[str]) -> Dict[str, str]:
        headers = {
            'Accept': 'application/vnd.github+json',
            'User-Agent': self.settings.http_user_agent,
        }
        if token:
            headers['Authorization'] = f"Bearer {token}"
        return headers

    async def fetch(self, url: str, token: Optional[str] = None) -> RepoMetadata:
        """URL 검증 후 메타데이터 조회"""
        self.guard.validate(url, allow_override=False)

        parsed = parse_repo_path(self.host, url)
        if not parsed:
            raise InvalidRepoUrlException("GitHub", url)

        owner, repo = parsed
        return await self.fetch_metadata(owner, repo, token)

    async def fetch_metadata(self, owner: str, repo: str, token: Optional[str] = None) -> RepoMetadata:
        """
        GitHub 저장소 메타데이터 조회

        프로젝트 정보 조회 실패만 치명적이며 README, 릴리스 조회 실패는 빈 값으로 대체됩니다.

        Args:
            owner: 저장소 소유자
            repo: 저장소 이름
            token: GitHub 토큰 (선택사항)

        Returns:
            RepoMetadata: 정규화된 메타데이터

        Raises:
            FetchFailedException: 프로젝트 정보 조회 실패
        """
        headers = self._headers(token)
        repo_api = f"{self.api_url}/repos/{owner}/{repo}"

        project, readme, releases = await asyncio.gather(
            run_sub_fetch("repository", self._fetch_project(repo_api, headers), required=True),
            run_sub_fetch("README", self._fetch_readme(repo_api, headers)),
            run_sub_fetch("releases", self._fetch_releases(repo_api, headers)),
        )

        project_data = project.unwrap()
        metadata = RepoMetadata(
            owner=owner,
            name=repo,
            description=project_data.get('description'),
            readme=readme.unwrap(""),
            homepage=project_data.get('homepage') or None,
            releases=releases.unwrap([]),
        )

        self.logger.info(
            f"GitHub 저장소 조회 완료: {owner}/{repo} (릴리스 {len(metadata.releases)}개)"
        )
        return metadata

    async def _fetch_project(self, repo_api: str, headers: Dict[str, str]) -> Dict[str, Any]:
        response = await self.http_client.get(repo_api, headers)
        if not response.ok:
            raise FetchFailedException("repository", response.status)
        return response.json()

    async def _fetch_readme(self, repo_api: str, headers: Dict[str, str]) -> str:
        response = await self.http_client.get(f"{repo_api}/readme", headers)
        if not response.ok:
            raise FetchFailedException("README", response.status)

        content = response.json().get('content') or ""
        return base64.b64decode(content).decode('utf-8')

    async def _fetch_releases(self, repo_api: str, headers: Dict[str, str]) -> List[RepoRelease]:
        response = await self.http_client.get(f"{repo_api}/releases", headers)
        if not response.ok:
            raise FetchFailedException("releases", response.status)

        releases = []
        for release in response.json()[:self.settings.max_import_releases]:
            assets = [
                RepoAsset(
                    name=asset['name'],
                    url=asset['browser_download_url'],
                    size=asset.get('size') or 0,
                    content_type=asset.get('content_type'),
                )
                for asset in release.get('assets') or []
            ]
            releases.append(RepoRelease(
                version=release['tag_name'],
                notes=release.get('body'),
                assets=assets,
            ))
        return releases


class GitLabFetcher:
    """GitLab 메타데이터 조회기 (릴리스는 조회하지 않음)"""

    provider = RepositoryProvider.GITLAB
    host = "gitlab.com"
    readme_refs = ("main", "master")

    def __init__(self, settings: Settings, http_client: HttpClient, guard: Optional[HostGuard] = None):
        """
        GitLab 조회기 초기화

        Args:
            settings: 파이프라인 설정
            http_client: HTTP 클라이언트
            guard: SSRF 검증기 (None이면 설정으로 생성)
        """
        self.settings = settings
        self.http_client = http_client
        self.guard = guard or HostGuard(settings)
        self.api_url = settings.gitlab_api_url.rstrip('/')
        self.logger = logger

    def _headers(self, token: Optional[str]) -> Dict[str, str]:
        headers = {'User-Agent': self.settings.http_user_agent}
        if token:
            headers['PRIVATE-TOKEN'] = token
        return headers

    async def fetch(self, url: str, token: Optional[str] = None) -> RepoMetadata:
        """URL 검증 후 메타데이터 조회"""
        self.guard.validate(url, allow_override=False)

        parsed = parse_repo_path(self.host, url)
        if not parsed:
            raise InvalidRepoUrlException("GitLab", url)

        owner, repo = parsed
        return await self.fetch_metadata(owner, repo, token)

    async def fetch_metadata(self, owner: str, repo: str, token: Optional[str] = None) -> RepoMetadata:
        """
        GitLab 프로젝트 메타데이터 조회

        Args:
            owner: 프로젝트 네임스페이스
            repo: 프로젝트 이름
            token: GitLab 토큰 (선택사항)

        Returns:
            RepoMetadata: 정규화된 메타데이터 (releases는 항상 빈 목록)

        Raises:
            FetchFailedException: 프로젝트 정보 조회 실패
        """
        headers = self._headers(token)
        project_path = quote(f"{owner}/{repo}", safe="")
        project_api = f"{self.api_url}/projects/{project_path}"

        project, readme = await asyncio.gather(
            run_sub_fetch("project", self._fetch_project(project_api, headers), required=True),
            run_sub_fetch("README", self._fetch_readme(project_api, headers)),
        )

        project_data = project.unwrap()
        metadata = RepoMetadata(
            owner=owner,
            name=repo,
            description=project_data.get('description'),
            readme=readme.unwrap(""),
            homepage=project_data.get('web_url'),
            releases=[],
        )

        self.logger.info(f"GitLab 프로젝트 조회 완료: {owner}/{repo}")
        return metadata

    async def _fetch_project(self, project_api: str, headers: Dict[str, str]) -> Dict[str, Any]:
        response = await self.http_client.get(project_api, headers)
        if not response.ok:
            raise FetchFailedException("project", response.status)
        return response.json()

    async def _fetch_readme(self, project_api: str, headers: Dict[str, str]) -> str:
        status = None
        for ref in self.readme_refs:
            response = await self.http_client.get(
                f"{project_api}/repository/files/README.md/raw?ref={ref}", headers
            )
            if response.ok:
                return response.text()
            status = response.status

        raise FetchFailedException("README", status)
