"""
配置加载器

负责从 YAML 文件加载向导设置并进行验证。
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .schema import WizardSettings

DEFAULT_SETTINGS_FILE = "modforge.yaml"


class ConfigError(Exception):
    """配置错误基类"""
    pass


class ConfigValidationError(ConfigError):
    """配置验证错误"""

    def __init__(self, message: str, errors: List[Dict[str, Any]]):
        super().__init__(message)
        self.errors = errors

    def format_errors(self) -> str:
        """格式化错误信息为人类可读的格式"""
        formatted = []
        for error in self.errors:
            loc = " -> ".join(str(item) for item in error.get('loc', []))
            msg = error.get('msg', '未知错误')
            input_val = error.get('input', '')

            if loc:
                formatted.append(f"字段 '{loc}': {msg}")
                if input_val:
                    formatted.append(f"  输入值: {input_val}")
            else:
                formatted.append(f"根级别: {msg}")

        return "\n".join(formatted)

    def format_errors_json(self) -> str:
        return json.dumps(self.errors, ensure_ascii=False, indent=2, default=str)


class ConfigLoader:
    """配置加载器"""

    def __init__(self):
        self.yaml = YAML()
        self.yaml.preserve_quotes = True
        self.yaml.width = 4096

    def load_from_file(self, config_path: Union[str, Path]) -> WizardSettings:
        """从文件加载设置

        Args:
            config_path: 设置文件路径

        Returns:
            WizardSettings: 验证后的设置

        Raises:
            ConfigError: 文件不存在、格式错误或验证失败
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigError(f"配置文件不存在: {config_path}")

        if not config_path.is_file():
            raise ConfigError(f"配置路径不是文件: {config_path}")

        if config_path.suffix.lower() not in ['.yaml', '.yml']:
            raise ConfigError(f"配置文件必须是 .yaml 或 .yml 格式: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                raw_data = self.yaml.load(f)
        except YAMLError as e:
            raise ConfigError(f"YAML 解析错误: {e}")
        except OSError as e:
            raise ConfigError(f"文件读取错误: {e}")

        # 空文件等同于全部默认值
        if raw_data is None:
            return WizardSettings()

        if not isinstance(raw_data, dict):
            raise ConfigError("配置文件根级别必须是对象/字典格式")

        return self.load_from_dict(dict(raw_data))

    def load_from_dict(self, data: Dict[str, Any]) -> WizardSettings:
        """从字典加载设置

        Raises:
            ConfigValidationError: 配置验证错误
        """
        try:
            return WizardSettings.from_dict(data)
        except ValidationError as e:
            raise ConfigValidationError("配置验证失败", list(e.errors()))

    def save_to_file(self, settings: WizardSettings, output_path: Union[str, Path]) -> None:
        """保存设置到文件"""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                self.yaml.dump(settings.to_dict(), f)
        except OSError as e:
            raise ConfigError(f"保存配置文件失败: {e}")


# 全局加载器实例
config_loader = ConfigLoader()


def load_settings(config_path: Optional[Union[str, Path]] = None,
                  project_dir: Optional[Union[str, Path]] = None) -> WizardSettings:
    """加载向导设置

    显式指定的 config_path 必须存在；否则尝试项目目录下的 modforge.yaml，
    不存在时返回默认设置。
    """
    if config_path:
        return config_loader.load_from_file(config_path)

    if project_dir:
        candidate = Path(project_dir) / DEFAULT_SETTINGS_FILE
        if candidate.is_file():
            return config_loader.load_from_file(candidate)

    return WizardSettings()


def save_settings(settings: WizardSettings, output_path: Union[str, Path]) -> None:
    config_loader.save_to_file(settings, output_path)
