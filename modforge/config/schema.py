"""
配置 Schema 定义

使用 Pydantic 定义向导的 YAML 设置文件模型（modforge.yaml）。
所有字段都有默认值，设置文件本身是可选的。
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..release.resolver import DEFAULT_BEPINEX_VERSION
from ..template.paths import DEFAULT_TEMPLATE_SUFFIX

DEFAULT_PLAN_FILE = "SETUP_PLAN.md"
DEFAULT_COMMIT_MESSAGE = "Initial commit"


class GitModel(BaseModel):
    """版本控制配置模型"""
    enabled: bool = Field(True, description="完成后是否询问初始化 git 仓库")
    remote_url: Optional[str] = Field(None, description="origin 远程仓库地址")
    commit_message: str = Field(DEFAULT_COMMIT_MESSAGE, description="首次提交信息", min_length=1)

    @field_validator('remote_url')
    @classmethod
    def validate_remote_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class WizardSettings(BaseModel):
    """向导设置

    命令行参数优先于设置文件，设置文件优先于内置默认值。
    """
    author: Optional[str] = Field(None, description="默认作者名", max_length=100)
    bepinex_version: str = Field(DEFAULT_BEPINEX_VERSION, description="BepInEx 版本")
    template_suffix: str = Field(DEFAULT_TEMPLATE_SUFFIX, description="模板文件名后缀", min_length=2)
    plan_file: Optional[str] = Field(DEFAULT_PLAN_FILE, description="清理时一并删除的计划文件")
    download_timeout: float = Field(60.0, description="下载超时（秒）", gt=0, le=3600)
    install_runtime: bool = Field(True, description="是否询问安装 BepInEx 到游戏目录")
    cleanup: bool = Field(True, description="渲染后是否询问删除模板文件")
    git: GitModel = Field(default_factory=GitModel, description="版本控制配置")
    extra_search_paths: List[str] = Field(default_factory=list, description="额外的游戏库目录")

    model_config = {
        "extra": "forbid",
        "str_strip_whitespace": True,
    }

    @field_validator('bepinex_version')
    @classmethod
    def validate_bepinex_version(cls, v: str) -> str:
        """版本号为 3-4 段数字，可带前缀 v"""
        v = v.lstrip('v')
        if not re.match(r'^\d+\.\d+\.\d+(\.\d+)?$', v):
            raise ValueError("BepInEx 版本号格式不正确，例如 5.4.22 或 5.4.23.2")
        return v

    @field_validator('template_suffix')
    @classmethod
    def validate_template_suffix(cls, v: str) -> str:
        if not v.startswith('.') or '/' in v or '\\' in v:
            raise ValueError("模板后缀必须以 '.' 开头且不能包含路径分隔符")
        return v

    @field_validator('plan_file')
    @classmethod
    def validate_plan_file(cls, v: Optional[str]) -> Optional[str]:
        """计划文件只能是项目根目录下的单个文件名"""
        if not v:
            return None
        if '/' in v or '\\' in v or v in ('.', '..'):
            raise ValueError("plan_file 必须是文件名，不能包含路径")
        return v

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WizardSettings':
        return cls.model_validate(data)
