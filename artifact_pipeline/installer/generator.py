"""
설치 스크립트 생성 모듈

해석된 에셋과 체크섬으로 플랫폼별 자체 검증 설치 스크립트(POSIX sh, PowerShell)와
한 줄 설치 명령을 생성합니다. 입출력이 없고 같은 입력이면 항상 같은 텍스트를 반환합니다.

스크립트에 들어가는 값(파일명, URL, 패키지 이름 등)은 외부 저장소에서 온 값일 수 있으므로
모두 셸 리터럴로 인용한 변수에 담고, 본문에서는 변수로만 참조합니다.
"""

import shlex
from typing import Optional

from ..config.settings import Settings
from ..models.enums import PlatformFamily

POSIX_MARKERS = ("linux", "darwin", "macos")
WINDOWS_MARKERS = ("windows",)

# PowerShell은 유니코드 작은따옴표도 문자열 구분자로 취급
POWERSHELL_QUOTES = ("'", "\u2018", "\u2019", "\u201a", "\u201b")


def classify_platform(platform: str) -> PlatformFamily:
    """
    플랫폼 문자열 분류 (대소문자 무시 부분 문자열 검사)

    Args:
        platform: 요청 플랫폼

    Returns:
        PlatformFamily: POSIX, WINDOWS, UNKNOWN 중 하나
    """
    lower_platform = platform.lower()
    if any(marker in lower_platform for marker in POSIX_MARKERS):
        return PlatformFamily.POSIX
    if any(marker in lower_platform for marker in WINDOWS_MARKERS):
        return PlatformFamily.WINDOWS
    return PlatformFamily.UNKNOWN


def powershell_literal(value: str) -> str:
    """PowerShell 작은따옴표 문자열 리터럴 (따옴표는 두 번 써서 이스케이프)"""
    for quote in POWERSHELL_QUOTES:
        value = value.replace(quote, quote * 2)
    return f"'{value}'"


def install_filename(filename: str) -> str:
    """설치 대상 파일명 (경로 구성요소 제거)"""
    base = filename.replace("\\", "/").rsplit("/", 1)[-1]
    if base in ("", ".", ".."):
        return "package"
    return base


def _posix_script(owner: str, name: str, version: str, platform: str, arch: str,
                  asset_url: str, sha256: str, filename: str) -> str:
    q = shlex.quote
    return f"""#!/bin/sh
set -eu

PACKAGE={q(f"{owner}/{name}")}
VERSION={q(version)}
TARGET={q(f"{platform}/{arch}")}
ASSET_URL={q(asset_url)}
ASSET_NAME={q(install_filename(filename))}
EXPECTED={q(sha256)}

echo "Installing $PACKAGE v$VERSION for $TARGET"

# Download asset
TMPFILE=$(mktemp)
if ! curl -fsSL -o "$TMPFILE" "$ASSET_URL"; then
  echo "Download failed: $ASSET_URL" >&2
  rm -f "$TMPFILE"
  exit 1
fi

# Verify checksum
if command -v sha256sum >/dev/null 2>&1; then
  ACTUAL=$(sha256sum "$TMPFILE" | cut -d ' ' -f 1)
elif command -v shasum >/dev/null 2>&1; then
  ACTUAL=$(shasum -a 256 "$TMPFILE" | cut -d ' ' -f 1)
else
  echo "No SHA-256 tool found (sha256sum or shasum required)" >&2
  rm -f "$TMPFILE"
  exit 1
fi
if [ "$ACTUAL" != "$EXPECTED" ]; then
  echo "Checksum verification failed! expected $EXPECTED, got $ACTUAL" >&2
  rm -f "$TMPFILE"
  exit 1
fi

echo "Checksum verified successfully"

# Determine installation directory
if [ -z "${{INSTALL_DIR:-}}" ]; then
  INSTALL_DIR="/usr/local/bin"
  if [ ! -w "$INSTALL_DIR" ]; then
    INSTALL_DIR="$HOME/.local/bin"
  fi
fi
mkdir -p "$INSTALL_DIR"

# Extract or move file
ASSET_KIND=$(printf '%s' "$ASSET_NAME" | tr '[:upper:]' '[:lower:]')
case "$ASSET_KIND" in
  *.tar.gz|*.tgz)
    tar -xzf "$TMPFILE" -C "$INSTALL_DIR"
    rm -f "$TMPFILE"
    ;;
  *.zip)
    unzip -q -o "$TMPFILE" -d "$INSTALL_DIR"
    rm -f "$TMPFILE"
    ;;
  *)
    mv "$TMPFILE" "$INSTALL_DIR/$ASSET_NAME"
    chmod +x "$INSTALL_DIR/$ASSET_NAME"
    ;;
esac

echo "Successfully installed $PACKAGE v$VERSION"
echo "Location: $INSTALL_DIR"
"""


def _powershell_script(owner: str, name: str, version: str, platform: str, arch: str,
                       asset_url: str, sha256: str, filename: str) -> str:
    lit = powershell_literal
    return rf"""# PowerShell Install Script
$ErrorActionPreference = "Stop"

$Owner = {lit(owner)}
$Name = {lit(name)}
$Version = {lit(version)}
$Target = {lit(f"{platform}/{arch}")}
$AssetUrl = {lit(asset_url)}
$AssetName = {lit(install_filename(filename))}
$Expected = {lit(sha256)}

Write-Host "Installing $Owner/$Name v$Version for $Target"

# Download asset
$TmpFile = [System.IO.Path]::GetTempFileName()
try {{
    Invoke-WebRequest -Uri $AssetUrl -OutFile $TmpFile -UseBasicParsing
}} catch {{
    Remove-Item $TmpFile -ErrorAction SilentlyContinue
    Write-Host "Download failed: $AssetUrl"
    exit 1
}}

# Verify checksum
$Hash = (Get-FileHash -Path $TmpFile -Algorithm SHA256).Hash.ToLower()
if ($Hash -ne $Expected) {{
    Remove-Item $TmpFile
    Write-Host "Checksum verification failed! expected $Expected, got $Hash"
    exit 1
}}

Write-Host "Checksum verified successfully"

# Installation directory
$InstallDir = Join-Path $env:LOCALAPPDATA (Join-Path "Programs" (Join-Path $Owner $Name))
New-Item -ItemType Directory -Force -Path $InstallDir | Out-Null

# Extract or move file
if ($AssetName -match '\.zip$') {{
    $ZipFile = "$TmpFile.zip"
    Move-Item -Path $TmpFile -Destination $ZipFile -Force
    Expand-Archive -Path $ZipFile -DestinationPath $InstallDir -Force
    Remove-Item $ZipFile
}} else {{
    Move-Item -Path $TmpFile -Destination (Join-Path $InstallDir $AssetName) -Force
}}

Write-Host "Successfully installed $Owner/$Name v$Version"
Write-Host "Location: $InstallDir"
"""


def _manual_instructions(owner: str, name: str, version: str, platform: str, arch: str,
                         asset_url: str, sha256: str) -> str:
    return f"""# Manual installation required for {owner}/{name} v{version} ({platform}/{arch})
# Download: {asset_url}
# SHA256: {sha256}
# Verify the SHA256 checksum of the downloaded file before installing it.
"""


class InstallScriptGenerator:
    """플랫폼별 설치 스크립트 생성기"""

    def __init__(self, settings: Optional[Settings] = None):
        """
        생성기 초기화

        Args:
            settings: 파이프라인 설정 (None이면 기본 설정 사용)
        """
        if settings is None:
            from ..config.settings import get_settings
            settings = get_settings()

        self.public_url = settings.public_url.rstrip('/')

    def generate_script(self, owner: str, name: str, version: str, platform: str, arch: str,
                        asset_url: str, sha256: str, filename: str) -> str:
        """
        설치 스크립트 생성

        POSIX, Windows 스크립트는 내려받은 파일의 체크섬을 설치 단계보다 먼저 검증하며,
        불일치 시 임시 파일을 지우고 0이 아닌 코드로 종료합니다.

        Args:
            owner: 패키지 소유자
            name: 패키지 이름
            version: 릴리스 버전
            platform: 요청 플랫폼
            arch: 요청 아키텍처
            asset_url: 에셋 다운로드 URL
            sha256: 에셋 체크섬
            filename: 에셋 원본 파일명

        Returns:
            str: text/plain 스크립트 본문
        """
        family = classify_platform(platform)

        if family is PlatformFamily.POSIX:
            return _posix_script(owner, name, version, platform, arch, asset_url, sha256, filename)
        if family is PlatformFamily.WINDOWS:
            return _powershell_script(owner, name, version, platform, arch, asset_url, sha256, filename)
        return _manual_instructions(owner, name, version, platform, arch, asset_url, sha256)

    def install_script_url(self, owner: str, name: str, version: str, platform: str, arch: str) -> str:
        """설치 스크립트 엔드포인트 URL"""
        return f"{self.public_url}/api/v1/packages/{owner}/{name}/install/{version}/{platform}/{arch}"

    def generate_command(self, owner: str, name: str, version: str, platform: str, arch: str,
                         asset_url: str, sha256: str) -> str:
        """
        한 줄 설치 명령 생성

        스크립트를 직접 포함하지 않고 설치 스크립트 엔드포인트를 셸에 파이프합니다.
        알 수 없는 플랫폼은 수동 다운로드/검증 명령을 반환합니다.
        """
        family = classify_platform(platform)
        script_url = self.install_script_url(owner, name, version, platform, arch)

        if family is PlatformFamily.POSIX:
            return f"curl -fsSL {shlex.quote(script_url)} | sh"
        if family is PlatformFamily.WINDOWS:
            return f"iwr -useb {powershell_literal(script_url)} | iex"

        return (
            "# Download and verify\n"
            f"curl -fsSL -o package {shlex.quote(asset_url)}\n"
            f"echo {shlex.quote(sha256 + '  package')} | sha256sum -c -\n"
            "# Install manually after verification"
        )

    def generate_cli_command(self, owner: str, name: str, version: str) -> str:
        """레지스트리 CLI 추가 명령 생성"""
        return f"mn add {owner}/{name}@{version}"


def generate_install_script(owner: str, name: str, version: str, platform: str, arch: str,
                            asset_url: str, sha256: str, filename: str,
                            settings: Optional[Settings] = None) -> str:
    """편의 함수: 설치 스크립트 생성"""
    return InstallScriptGenerator(settings).generate_script(
        owner, name, version, platform, arch, asset_url, sha256, filename
    )


def generate_install_command(owner: str, name: str, version: str, platform: str, arch: str,
                             asset_url: str, sha256: str, settings: Optional[Settings] = None) -> str:
    """편의 함수: 한 줄 설치 명령 생성"""
    return InstallScriptGenerator(settings).generate_command(
        owner, name, version, platform, arch, asset_url, sha256
    )
