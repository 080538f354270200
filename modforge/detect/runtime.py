"""
运行时兼容性检查

检查游戏数据目录是否为 Mono 运行时（存在 Managed 目录），
并在 Managed 目录中找出游戏主程序集。只读检查，不修改任何文件。
"""

from pathlib import Path
from typing import List, Union

from ..errors import FailureReason
from ..utils.logging import debug, info, warning, LogStage
from .models import CompatibilityResult

MANAGED_DIR_NAME = "Managed"
MAIN_ASSEMBLY_NAME = "Assembly-CSharp.dll"

# IL2CPP 构建的特征文件（仅用于给出更明确的提示）
IL2CPP_MARKERS = ("il2cpp_data",)
IL2CPP_ROOT_MARKERS = ("GameAssembly.dll", "GameAssembly.so")

# 框架/运行时程序集，不作为游戏主程序集候选
EXCLUDED_PREFIXES = (
    "Unity.",
    "UnityEngine",
    "System",
    "Mono.",
    "mscorlib",
    "netstandard",
    "Microsoft.",
    "Newtonsoft.",
    "BepInEx",
    "0Harmony",
    "HarmonyX",
    "MonoMod",
)
EXCLUDED_SUBSTRINGS = (
    ".Unity",
)


def is_excluded_assembly(file_name: str) -> bool:
    """判断程序集是否属于框架库"""
    if any(file_name.startswith(prefix) for prefix in EXCLUDED_PREFIXES):
        return True
    return any(part in file_name for part in EXCLUDED_SUBSTRINGS)


def list_candidate_assemblies(managed_dir: Path) -> List[str]:
    """列出 Managed 目录中非框架的程序集，按名称排序（不区分大小写）"""
    names = [
        p.name for p in managed_dir.iterdir()
        if p.is_file() and p.suffix.lower() == ".dll" and not is_excluded_assembly(p.name)
    ]
    return sorted(names, key=str.lower)


def _il2cpp_detail(data_dir: Path) -> str:
    markers = [m for m in IL2CPP_MARKERS if (data_dir / m).exists()]
    markers += [m for m in IL2CPP_ROOT_MARKERS if (data_dir.parent / m).exists()]
    if markers:
        return f"检测到 IL2CPP 构建特征: {', '.join(markers)}"
    return "缺少 Managed 目录，推测为 IL2CPP 构建"


def validate_runtime(data_dir: Union[str, Path]) -> CompatibilityResult:
    """检查游戏数据目录的运行时兼容性

    Args:
        data_dir: Unity `<Game>_Data` 目录

    Returns:
        CompatibilityResult: 检查结果
    """
    data_dir = Path(data_dir)

    if not data_dir.is_dir():
        warning(f"数据目录不存在: {data_dir}", stage=LogStage.VALIDATE)
        return CompatibilityResult(
            is_compatible=False,
            failure_reason=FailureReason.NOT_FOUND,
            detail=f"目录不存在: {data_dir}",
        )

    managed_dir = data_dir / MANAGED_DIR_NAME
    if not managed_dir.is_dir():
        detail = _il2cpp_detail(data_dir)
        warning(detail, stage=LogStage.VALIDATE)
        return CompatibilityResult(
            is_compatible=False,
            failure_reason=FailureReason.INCOMPATIBLE_RUNTIME,
            detail=detail,
        )

    try:
        candidates = list_candidate_assemblies(managed_dir)
    except OSError as e:
        warning(f"无法读取 Managed 目录: {e}", stage=LogStage.VALIDATE)
        candidates = []

    debug(f"候选程序集: {candidates}", stage=LogStage.VALIDATE)

    if MAIN_ASSEMBLY_NAME in candidates:
        info(f"主程序集: {MAIN_ASSEMBLY_NAME}", stage=LogStage.VALIDATE)
        return CompatibilityResult(
            is_compatible=True,
            main_assembly_name=MAIN_ASSEMBLY_NAME,
            candidates=tuple(candidates),
            managed_dir=managed_dir,
        )

    if candidates:
        info(f"未找到 {MAIN_ASSEMBLY_NAME}，共有 {len(candidates)} 个候选程序集", stage=LogStage.VALIDATE)
        return CompatibilityResult(
            is_compatible=True,
            candidates=tuple(candidates),
            managed_dir=managed_dir,
            detail="需要手动选择主程序集",
        )

    warning("Managed 目录中没有可用的游戏程序集", stage=LogStage.VALIDATE)
    return CompatibilityResult(
        is_compatible=True,
        failure_reason=FailureReason.NO_GAME_ASSEMBLY,
        managed_dir=managed_dir,
        detail="没有找到游戏程序集，需要手动指定",
    )
