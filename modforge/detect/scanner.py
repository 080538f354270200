"""
游戏安装扫描

在 Steam 库中查找 Unity 游戏（含 `<Game>_Data` 目录的安装），
以及把用户输入的路径解析为安装候选。
"""

import os
import platform
import re
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from ..utils.logging import debug, info, LogStage
from ..utils.paths import expand_path
from .models import CandidateSource, InstallCandidate

DATA_DIR_SUFFIX = "_Data"
LIBRARY_FOLDERS_FILE = Path("steamapps") / "libraryfolders.vdf"
STEAM_COMMON_DIR = Path("steamapps") / "common"

_VDF_PATH_RE = re.compile(r'"path"\s+"([^"]+)"')


def default_steam_roots() -> List[Path]:
    """按操作系统返回可能的 Steam 安装目录"""
    system = platform.system()
    home = Path.home()

    if system == "Windows":
        roots = [
            Path(os.environ.get("ProgramFiles(x86)", r"C:\Program Files (x86)")) / "Steam",
            Path(os.environ.get("ProgramFiles", r"C:\Program Files")) / "Steam",
        ]
    elif system == "Darwin":
        roots = [home / "Library" / "Application Support" / "Steam"]
    else:
        roots = [
            home / ".steam" / "steam",
            home / ".local" / "share" / "Steam",
            home / ".var" / "app" / "com.valvesoftware.Steam" / ".local" / "share" / "Steam",
        ]
    return roots


def parse_library_folders(vdf_text: str) -> List[Path]:
    """从 libraryfolders.vdf 文本中提取库路径"""
    return [Path(m.replace("\\\\", "\\")) for m in _VDF_PATH_RE.findall(vdf_text)]


def steam_library_dirs(steam_roots: Iterable[Path]) -> List[Path]:
    """汇总所有 Steam 库目录（去重，保持发现顺序）"""
    libraries: List[Path] = []

    def _add(path: Path):
        if path not in libraries and (path / STEAM_COMMON_DIR).is_dir():
            libraries.append(path)

    for root in steam_roots:
        if not root.is_dir():
            continue
        _add(root)

        vdf = root / LIBRARY_FOLDERS_FILE
        try:
            text = vdf.read_text(encoding="utf-8", errors="replace")
        except OSError:
            continue
        for lib in parse_library_folders(text):
            _add(lib)

    return libraries


def find_data_dirs(game_root: Path) -> List[Path]:
    """列出游戏根目录下的 `<Game>_Data` 目录"""
    try:
        return sorted(
            p for p in game_root.iterdir()
            if p.is_dir() and p.name.endswith(DATA_DIR_SUFFIX)
        )
    except OSError:
        return []


def scan_directory(common_dir: Path, source: CandidateSource = CandidateSource.STEAM) -> List[InstallCandidate]:
    """扫描一个包含多个游戏目录的文件夹（如 steamapps/common）"""
    candidates: List[InstallCandidate] = []
    try:
        game_dirs = sorted(p for p in common_dir.iterdir() if p.is_dir())
    except OSError:
        return candidates

    for game_dir in game_dirs:
        for data_dir in find_data_dirs(game_dir):
            candidates.append(InstallCandidate(
                display_name=game_dir.name,
                data_dir=data_dir,
                root_dir=game_dir,
                source=source,
            ))
    return candidates


def scan_installations(
    steam_roots: Optional[Sequence[Path]] = None,
    extra_dirs: Optional[Sequence[Union[str, Path]]] = None,
) -> List[InstallCandidate]:
    """扫描所有 Unity 游戏安装

    Args:
        steam_roots: Steam 根目录，默认按操作系统推断
        extra_dirs: 额外扫描的游戏库目录（每个子目录视为一个游戏）

    Returns:
        List[InstallCandidate]: 按显示名排序的候选列表
    """
    roots = list(steam_roots) if steam_roots is not None else default_steam_roots()
    candidates: List[InstallCandidate] = []

    for library in steam_library_dirs(roots):
        debug(f"扫描 Steam 库: {library}", stage=LogStage.SCAN)
        candidates.extend(scan_directory(library / STEAM_COMMON_DIR))

    for extra in extra_dirs or []:
        extra_path = expand_path(extra)
        debug(f"扫描额外目录: {extra_path}", stage=LogStage.SCAN)
        candidates.extend(scan_directory(extra_path, CandidateSource.MANUAL))

    # 同一目录可能被多个来源发现
    unique = {c.data_dir: c for c in candidates}
    result = sorted(unique.values(), key=lambda c: c.display_name.lower())
    info(f"找到 {len(result)} 个 Unity 游戏安装", stage=LogStage.SCAN)
    return result


def resolve_manual_path(path: Union[str, Path]) -> Optional[InstallCandidate]:
    """把用户输入的路径解析为安装候选

    支持三种输入：`<Game>_Data` 目录、游戏根目录、游戏主程序。

    Returns:
        Optional[InstallCandidate]: 无法解析时为 None
    """
    target = expand_path(path)

    if target.is_file():
        data_dir = target.parent / f"{target.stem}{DATA_DIR_SUFFIX}"
        if data_dir.is_dir():
            return InstallCandidate(target.stem, data_dir, target.parent)
        target = target.parent

    if not target.is_dir():
        return None

    if target.name.endswith(DATA_DIR_SUFFIX):
        root = target.parent
        return InstallCandidate(root.name, target, root)

    data_dirs = find_data_dirs(target)
    if not data_dirs:
        return None
    if len(data_dirs) > 1:
        debug(f"{target} 下有多个数据目录，使用 {data_dirs[0].name}", stage=LogStage.SCAN)
    return InstallCandidate(target.name, data_dirs[0], target)
