"""运行时发布包模块

解析 BepInEx 发布包并安装到游戏目录。
"""

from .resolver import (
    DEFAULT_BEPINEX_VERSION,
    LEGACY_RELEASES,
    HostPlatform,
    ReleaseDescriptor,
    detect_host_platform,
    is_legacy_version,
    resolve_release,
)
from .installer import (
    Downloader,
    Extractor,
    HttpDownloader,
    InstallResult,
    RuntimeInstaller,
    ZipExtractor,
    is_runtime_installed,
    manual_install_hint,
)

__all__ = [
    # 发布包解析
    "DEFAULT_BEPINEX_VERSION",
    "LEGACY_RELEASES",
    "HostPlatform",
    "ReleaseDescriptor",
    "detect_host_platform",
    "is_legacy_version",
    "resolve_release",

    # 安装
    "Downloader",
    "Extractor",
    "HttpDownloader",
    "InstallResult",
    "RuntimeInstaller",
    "ZipExtractor",
    "is_runtime_installed",
    "manual_install_hint",
]
