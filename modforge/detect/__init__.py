"""环境检测模块

提供游戏安装扫描、主程序架构识别、运行时兼容性检查和 Unity 版本探测。
"""

from .models import ArchitectureTag, CandidateSource, CompatibilityResult, InstallCandidate
from .binary import detect_architecture, find_primary_executable, inspect_header
from .runtime import validate_runtime, is_excluded_assembly, MAIN_ASSEMBLY_NAME
from .scanner import scan_installations, resolve_manual_path
from .unity_version import detect_unity_version, DEFAULT_UNITY_VERSION

__all__ = [
    # 数据结构
    "ArchitectureTag",
    "CandidateSource",
    "CompatibilityResult",
    "InstallCandidate",

    # 架构识别
    "detect_architecture",
    "find_primary_executable",
    "inspect_header",

    # 兼容性检查
    "validate_runtime",
    "is_excluded_assembly",
    "MAIN_ASSEMBLY_NAME",

    # 安装扫描
    "scan_installations",
    "resolve_manual_path",

    # 版本探测
    "detect_unity_version",
    "DEFAULT_UNITY_VERSION",
]
