"""
检测结果数据结构
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from ..errors import FailureReason


class ArchitectureTag(str, Enum):
    """游戏主程序架构"""
    X86 = "x86"
    X64 = "x64"
    UNKNOWN = "unknown"


class CandidateSource(str, Enum):
    """安装候选的来源"""
    STEAM = "steam"
    MANUAL = "manual"


@dataclass(frozen=True)
class InstallCandidate:
    """游戏安装候选

    data_dir 是 Unity 的 `<Game>_Data` 目录，root_dir 是其所在的游戏根目录。
    """
    display_name: str
    data_dir: Path
    root_dir: Path
    source: CandidateSource = CandidateSource.MANUAL

    @property
    def data_name(self) -> str:
        """去掉 `_Data` 后缀的数据目录名，通常等于主程序名"""
        name = self.data_dir.name
        if name.endswith("_Data"):
            return name[:-len("_Data")]
        return name


@dataclass(frozen=True)
class CompatibilityResult:
    """运行时兼容性检查结果

    failure_reason 为 NO_GAME_ASSEMBLY 时运行时仍然兼容，
    只是主程序集需要用户手动指定。
    """
    is_compatible: bool
    main_assembly_name: Optional[str] = None
    failure_reason: Optional[FailureReason] = None
    candidates: Tuple[str, ...] = field(default_factory=tuple)
    managed_dir: Optional[Path] = None
    detail: str = ""

    @property
    def needs_selection(self) -> bool:
        """运行时兼容，但没有确定的主程序集"""
        return self.is_compatible and self.main_assembly_name is None
