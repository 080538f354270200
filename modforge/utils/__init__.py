"""通用工具模块"""

from .logging import (
    configure_logging,
    get_output_facade,
    get_stage_logger,
    OutputLevel,
    StageLogger,
    LogStage,
)

from .paths import (
    expand_path,
    is_within,
    to_identifier,
    to_slug,
    format_size,
)

__all__ = [
    # 日志相关
    "configure_logging",
    "get_output_facade",
    "get_stage_logger",
    "OutputLevel",
    "StageLogger",
    "LogStage",

    # 路径相关
    "expand_path",
    "is_within",
    "to_identifier",
    "to_slug",
    "format_size",
]
