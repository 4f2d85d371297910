"""
저장소 가져오기 패키지

외부 저장소 제공자에서 프로젝트 메타데이터와 릴리스를 가져옵니다.
"""

from .fetch import SubFetchResult, run_sub_fetch
from .http import HttpClient, HttpResponse
from .importer import PROVIDER_DISPATCH, RepoImporter, import_repository
from .providers import GitHubFetcher, GitLabFetcher, parse_repo_path

__all__ = [
    "SubFetchResult",
    "run_sub_fetch",
    "HttpClient",
    "HttpResponse",
    "PROVIDER_DISPATCH",
    "RepoImporter",
    "import_repository",
    "GitHubFetcher",
    "GitLabFetcher",
    "parse_repo_path",
]
