"""配置模块

提供 YAML 设置文件的加载、验证和保存，以及模板变量模型。
"""

from .schema import GitModel, WizardSettings
from .loader import (
    ConfigLoader,
    ConfigError,
    ConfigValidationError,
    DEFAULT_SETTINGS_FILE,
    config_loader,
    load_settings,
    save_settings,
)
from .variables import ProjectVariables, derive_quick_defaults

__all__ = [
    # 主要类
    "GitModel",
    "WizardSettings",
    "ConfigLoader",
    "ProjectVariables",

    # 异常类
    "ConfigError",
    "ConfigValidationError",

    # 便捷函数
    "load_settings",
    "save_settings",
    "derive_quick_defaults",

    # 常量与单例
    "DEFAULT_SETTINGS_FILE",
    "config_loader",
]
