"""
Unity 版本探测

Unity 序列化文件的头部包含生成它的编辑器版本字符串（如 "2020.3.28f1"）。
按顺序尝试几个已知文件，读取开头一段字节并匹配版本号。
探测失败时返回默认版本，不抛出异常。
"""

import re
from pathlib import Path
from typing import Optional, Union

from ..utils.logging import debug, LogStage

DEFAULT_UNITY_VERSION = "2021.3.0"
PROBE_READ_LIMIT = 64 * 1024
PROBE_FILES = ("globalgamemanagers", "data.unity3d", "mainData")

_VERSION_RE = re.compile(rb"(20\d{2}|6000|[4-6])\.(\d{1,2})\.(\d{1,3})[abfpx]\d+")


def parse_unity_version(data: bytes) -> Optional[str]:
    """从字节中解析出不带发布后缀的版本号，例如 b"2020.3.28f1" -> "2020.3.28" """
    match = _VERSION_RE.search(data)
    if not match:
        return None
    return ".".join(part.decode("ascii") for part in match.groups())


def detect_unity_version(data_dir: Union[str, Path], default: str = DEFAULT_UNITY_VERSION) -> str:
    """探测游戏使用的 Unity 版本

    Args:
        data_dir: `<Game>_Data` 目录
        default: 探测失败时返回的版本

    Returns:
        str: 版本号（如 "2020.3.28"）
    """
    data_dir = Path(data_dir)

    for name in PROBE_FILES:
        probe = data_dir / name
        try:
            with open(probe, "rb") as f:
                version = parse_unity_version(f.read(PROBE_READ_LIMIT))
        except OSError:
            continue

        if version:
            debug(f"从 {name} 识别到 Unity {version}", stage=LogStage.DETECT)
            return version

    debug(f"未能识别 Unity 版本，使用默认值 {default}", stage=LogStage.DETECT)
    return default
