"""
错误类型

FailureReason 是各组件返回的结构化失败原因；异常类只在需要中断流程时抛出。
"""

from enum import Enum
from typing import Optional


class FailureReason(str, Enum):
    """结构化失败原因"""
    NOT_FOUND = "not_found"
    INCOMPATIBLE_RUNTIME = "incompatible_runtime"
    NO_GAME_ASSEMBLY = "no_game_assembly"
    DOWNLOAD_FAILED = "download_failed"
    EXTRACT_FAILED = "extract_failed"
    SUBSTITUTION_FAILED = "substitution_failed"


class ModforgeError(Exception):
    """modforge 错误基类"""
    pass


class DownloadError(ModforgeError):
    """下载失败（网络错误、超时、HTTP 错误状态）"""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class ExtractError(ModforgeError):
    """解压失败（损坏的归档、目录穿越、写入失败）"""
    pass


class WizardError(ModforgeError):
    """向导流程错误"""
    pass


class WizardCancelled(WizardError):
    """用户在确认环节取消"""
    pass


class IncompatibleRuntimeError(WizardError):
    """目标游戏运行时不兼容（IL2CPP），唯一会终止整个流程的错误"""

    def __init__(self, message: str, reason: FailureReason = FailureReason.INCOMPATIBLE_RUNTIME):
        super().__init__(message)
        self.reason = reason
