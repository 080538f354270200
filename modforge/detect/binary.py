"""
可执行文件头解析

从 PE（Windows）或 ELF（Linux）文件头推断主程序架构。
任何解析失败都返回 ArchitectureTag.UNKNOWN，不抛出异常。
"""

import struct
from pathlib import Path
from typing import Optional, Union

from ..utils.logging import debug, LogStage
from .models import ArchitectureTag, InstallCandidate

# 最多读取的头部字节数
HEADER_READ_LIMIT = 4096

# PE: DOS 头中 e_lfanew 的位置，以及 COFF 头中 Machine 字段相对 PE 签名的偏移
DOS_MAGIC = b"MZ"
PE_OFFSET_FIELD = 0x3C
PE_SIGNATURE = b"PE\x00\x00"
MACHINE_FIELD_OFFSET = 4
MIN_HEADER_SIZE = PE_OFFSET_FIELD + 4

MACHINE_TYPES = {
    0x014C: ArchitectureTag.X86,   # IMAGE_FILE_MACHINE_I386
    0x8664: ArchitectureTag.X64,   # IMAGE_FILE_MACHINE_AMD64
}

ELF_MAGIC = b"\x7fELF"
ELF_CLASSES = {
    1: ArchitectureTag.X86,
    2: ArchitectureTag.X64,
}


def inspect_header(data: bytes) -> ArchitectureTag:
    """从文件头字节推断架构

    Args:
        data: 文件开头的字节

    Returns:
        ArchitectureTag: 识别出的架构，无法识别时为 UNKNOWN
    """
    if data[:4] == ELF_MAGIC and len(data) > 4:
        return ELF_CLASSES.get(data[4], ArchitectureTag.UNKNOWN)

    if len(data) < MIN_HEADER_SIZE or data[:2] != DOS_MAGIC:
        return ArchitectureTag.UNKNOWN

    (pe_offset,) = struct.unpack_from("<I", data, PE_OFFSET_FIELD)
    machine_offset = pe_offset + MACHINE_FIELD_OFFSET
    if machine_offset + 2 > len(data):
        return ArchitectureTag.UNKNOWN

    if data[pe_offset:pe_offset + 4] != PE_SIGNATURE:
        return ArchitectureTag.UNKNOWN

    (machine,) = struct.unpack_from("<H", data, machine_offset)
    return MACHINE_TYPES.get(machine, ArchitectureTag.UNKNOWN)


def detect_architecture(path: Union[str, Path, None]) -> ArchitectureTag:
    """读取可执行文件并推断架构

    Args:
        path: 可执行文件路径

    Returns:
        ArchitectureTag: 架构；文件不存在、过短或格式不符时为 UNKNOWN
    """
    if not path:
        return ArchitectureTag.UNKNOWN

    try:
        with open(path, "rb") as f:
            data = f.read(HEADER_READ_LIMIT)
    except OSError as e:
        debug(f"无法读取可执行文件 {path}: {e}", stage=LogStage.DETECT)
        return ArchitectureTag.UNKNOWN

    try:
        arch = inspect_header(data)
    except struct.error:
        return ArchitectureTag.UNKNOWN

    debug(f"{Path(path).name}: 架构 {arch.value}", stage=LogStage.DETECT)
    return arch


def find_primary_executable(candidate: InstallCandidate) -> Optional[Path]:
    """定位游戏主程序

    优先与数据目录同名的 .exe，其次是 Linux 原生播放器，
    最后是根目录下任意非崩溃处理器的 .exe。
    """
    root = candidate.root_dir
    name = candidate.data_name

    for suffix in (".exe", ".x86_64", ".x86"):
        exe = root / f"{name}{suffix}"
        if exe.is_file():
            return exe

    try:
        others = sorted(
            p for p in root.glob("*.exe")
            if p.is_file() and not p.name.lower().startswith("unitycrashhandler")
        )
    except OSError:
        return None

    return others[0] if others else None
