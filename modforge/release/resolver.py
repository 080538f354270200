"""
BepInEx 发布包解析

根据 (版本, 宿主平台, 架构) 计算发布包文件名和下载地址。
纯函数，无 I/O；任何输入都能得到一个可用的结果。
"""

import platform
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from ..detect.models import ArchitectureTag

COMPONENT_NAME = "BepInEx"
DEFAULT_BEPINEX_VERSION = "5.4.23.2"
RELEASE_URL_TEMPLATE = "https://github.com/BepInEx/BepInEx/releases/download/v{version}/{file_name}"


class HostPlatform(str, Enum):
    """宿主操作系统类别"""
    WINDOWS = "windows"
    LINUX = "linux"
    MACOS = "macos"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class LegacyNaming:
    """旧版命名规则：`BepInEx_{tag}_{version}{build_suffix}.zip`"""
    build_suffix: str


# 使用旧命名规则的版本。新增条目即可支持同样命名的其他版本。
LEGACY_RELEASES: Dict[str, LegacyNaming] = {
    "5.4.21": LegacyNaming(build_suffix=".0"),
}

# 旧版平台标签 -> 文件名中的标签
LEGACY_FILE_TAGS = {
    "win_x86": "x86",
    "win_x64": "x64",
    "unix": "unix",
}


@dataclass(frozen=True)
class ReleaseDescriptor:
    """发布包描述"""
    platform_tag: str
    file_name: str
    download_url: str
    version: str
    architecture_assumed: bool = False  # 架构未知时按 x64 处理


def detect_host_platform(system: Optional[str] = None) -> HostPlatform:
    """根据 platform.system() 判断宿主平台"""
    system = (system if system is not None else platform.system()).lower()
    if system == "windows":
        return HostPlatform.WINDOWS
    if system == "linux":
        return HostPlatform.LINUX
    if system == "darwin":
        return HostPlatform.MACOS
    return HostPlatform.UNKNOWN


def is_legacy_version(version: str) -> bool:
    return version.strip().lstrip("v") in LEGACY_RELEASES


def _file_version(version: str) -> str:
    """补齐到四段版本号：5.4.22 -> 5.4.22.0"""
    parts = version.split(".")
    while len(parts) < 4:
        parts.append("0")
    return ".".join(parts)


def _platform_tag(host: HostPlatform, arch: ArchitectureTag, legacy: bool) -> str:
    if host == HostPlatform.WINDOWS or host == HostPlatform.UNKNOWN:
        return "win_x86" if arch == ArchitectureTag.X86 else "win_x64"
    if legacy:
        return "unix"
    if host == HostPlatform.MACOS:
        return "macos_x64"
    return "linux_x64"


def resolve_release(
    version: str,
    host_platform: Union[HostPlatform, str],
    architecture: Union[ArchitectureTag, str],
) -> ReleaseDescriptor:
    """解析发布包

    Args:
        version: BepInEx 版本号，例如 "5.4.22"（可带前缀 "v"）
        host_platform: 宿主平台；未知平台按 Windows 处理
        architecture: 游戏架构；未知架构按 x64 处理并标记 architecture_assumed

    Returns:
        ReleaseDescriptor: 发布包描述
    """
    version = version.strip().lstrip("v")

    try:
        host = HostPlatform(host_platform)
    except ValueError:
        host = HostPlatform.UNKNOWN

    try:
        arch = ArchitectureTag(architecture)
    except ValueError:
        arch = ArchitectureTag.UNKNOWN

    assumed = arch == ArchitectureTag.UNKNOWN
    if host == HostPlatform.UNKNOWN:
        # 未知平台固定使用 Windows 64 位包
        arch = ArchitectureTag.X64
    elif assumed:
        arch = ArchitectureTag.X64

    legacy = LEGACY_RELEASES.get(version)
    tag = _platform_tag(host, arch, legacy is not None)

    if legacy is not None:
        file_name = f"{COMPONENT_NAME}_{LEGACY_FILE_TAGS[tag]}_{version}{legacy.build_suffix}.zip"
    else:
        file_name = f"{COMPONENT_NAME}_{tag}_{_file_version(version)}.zip"

    return ReleaseDescriptor(
        platform_tag=tag,
        file_name=file_name,
        download_url=RELEASE_URL_TEMPLATE.format(version=version, file_name=file_name),
        version=version,
        architecture_assumed=assumed,
    )
