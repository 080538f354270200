"""
路径工具

提供路径处理相关的工具函数。
"""

import os
import re
from pathlib import Path
from typing import Union


def expand_path(path: Union[str, Path]) -> Path:
    """扩展路径（处理环境变量和用户目录）

    Args:
        path: 原始路径

    Returns:
        Path: 扩展后的绝对路径
    """
    if isinstance(path, str):
        path = os.path.expandvars(path.strip().strip('"'))
        path = os.path.expanduser(path)

    return Path(path).resolve()


def is_within(path: Path, root: Path) -> bool:
    """检查 path 解析后是否位于 root 之内（防止目录穿越）"""
    try:
        path.resolve().relative_to(root.resolve())
        return True
    except ValueError:
        return False


def to_identifier(text: str, fallback: str = "Mod") -> str:
    """把任意文本转换为 PascalCase 的 C# 标识符

    Args:
        text: 原始文本，例如游戏名 "Lethal Company"
        fallback: 结果为空时使用的名称

    Returns:
        str: 合法标识符，例如 "LethalCompany"
    """
    words = re.findall(r"[A-Za-z0-9]+", text)
    ident = "".join(w[:1].upper() + w[1:] for w in words)
    if not ident:
        return fallback
    if ident[0].isdigit():
        ident = "_" + ident
    return ident


def to_slug(text: str, fallback: str = "unknown") -> str:
    """转换为小写、只含字母数字的片段（用于 GUID）"""
    slug = re.sub(r"[^a-z0-9]", "", text.lower())
    return slug or fallback


def format_size(size_bytes: int) -> str:
    """格式化文件大小

    Args:
        size_bytes: 字节数

    Returns:
        str: 格式化的大小字符串
    """
    if size_bytes == 0:
        return "0 B"

    units = ["B", "KB", "MB", "GB", "TB"]
    unit_index = 0
    size = float(size_bytes)

    while size >= 1024.0 and unit_index < len(units) - 1:
        size /= 1024.0
        unit_index += 1

    if unit_index == 0:
        return f"{int(size)} {units[unit_index]}"
    return f"{size:.1f} {units[unit_index]}"
