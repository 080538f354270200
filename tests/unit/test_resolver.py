"""
发布包解析单元测试
"""

import pytest

from modforge.detect.models import ArchitectureTag
from modforge.release.resolver import (
    HostPlatform,
    detect_host_platform,
    is_legacy_version,
    resolve_release,
)

BASE_URL = "https://github.com/BepInEx/BepInEx/releases/download"


class TestResolveRelease:
    """resolve_release 测试"""

    def test_legacy_windows_x86(self):
        """测试旧命名规则"""
        release = resolve_release("5.4.21", HostPlatform.WINDOWS, ArchitectureTag.X86)
        assert release.file_name == "BepInEx_x86_5.4.21.0.zip"
        assert release.download_url == f"{BASE_URL}/v5.4.21/BepInEx_x86_5.4.21.0.zip"
        assert release.platform_tag == "win_x86"
        assert not release.architecture_assumed

    def test_modern_windows_x64(self):
        """测试新命名规则"""
        release = resolve_release("5.4.22", HostPlatform.WINDOWS, ArchitectureTag.X64)
        assert release.file_name == "BepInEx_win_x64_5.4.22.0.zip"
        assert release.download_url == f"{BASE_URL}/v5.4.22/BepInEx_win_x64_5.4.22.0.zip"

    def test_four_part_version(self):
        release = resolve_release("5.4.23.2", HostPlatform.WINDOWS, ArchitectureTag.X86)
        assert release.file_name == "BepInEx_win_x86_5.4.23.2.zip"
        assert release.download_url.endswith("/v5.4.23.2/BepInEx_win_x86_5.4.23.2.zip")

    def test_version_prefix_stripped(self):
        release = resolve_release("v5.4.22", HostPlatform.WINDOWS, ArchitectureTag.X64)
        assert release.version == "5.4.22"
        assert "/vv" not in release.download_url

    def test_unknown_architecture_assumes_x64(self):
        """测试未知架构按 x64 处理并标记"""
        release = resolve_release("5.4.22", HostPlatform.WINDOWS, ArchitectureTag.UNKNOWN)
        assert release.platform_tag == "win_x64"
        assert release.architecture_assumed

    def test_unknown_platform_uses_windows_x64(self):
        """测试未知平台固定使用 Windows 64 位包"""
        release = resolve_release("5.4.22", HostPlatform.UNKNOWN, ArchitectureTag.X86)
        assert release.file_name == "BepInEx_win_x64_5.4.22.0.zip"

    def test_invalid_values_coerced(self):
        release = resolve_release("5.4.22", "beos", "arm")
        assert release.platform_tag == "win_x64"
        assert release.architecture_assumed

    @pytest.mark.parametrize("host, tag", [
        (HostPlatform.LINUX, "linux_x64"),
        (HostPlatform.MACOS, "macos_x64"),
    ])
    def test_modern_unix(self, host, tag):
        release = resolve_release("5.4.22", host, ArchitectureTag.X64)
        assert release.file_name == f"BepInEx_{tag}_5.4.22.0.zip"

    def test_legacy_unix(self):
        release = resolve_release("5.4.21", HostPlatform.LINUX, ArchitectureTag.X64)
        assert release.file_name == "BepInEx_unix_5.4.21.0.zip"

    def test_pure(self):
        """测试相同输入得到相同结果"""
        a = resolve_release("5.4.22", HostPlatform.LINUX, ArchitectureTag.X64)
        b = resolve_release("5.4.22", HostPlatform.LINUX, ArchitectureTag.X64)
        assert a == b


class TestHostPlatform:
    """宿主平台识别测试"""

    @pytest.mark.parametrize("system, expected", [
        ("Windows", HostPlatform.WINDOWS),
        ("Linux", HostPlatform.LINUX),
        ("Darwin", HostPlatform.MACOS),
        ("FreeBSD", HostPlatform.UNKNOWN),
    ])
    def test_detect(self, system, expected):
        assert detect_host_platform(system) == expected

    def test_is_legacy_version(self):
        assert is_legacy_version("5.4.21")
        assert is_legacy_version("v5.4.21")
        assert not is_legacy_version("5.4.22")
