"""
模板变量模型

ProjectVariables 是不可变的：向导每一步通过 with_updates() 得到新实例，
最终由 to_mapping() 生成交给模板引擎的 `{KEY: value}` 映射。
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, field_validator

from ..utils.paths import to_identifier, to_slug

DEFAULT_MOD_VERSION = "1.0.0"

_NAMESPACE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")

# 字段名 -> (占位符键, 提示文本)，顺序即交互模式的提问顺序
VARIABLE_FIELDS = {
    "author": ("AUTHOR", "作者"),
    "mod_name": ("MOD_NAME", "Mod 名称"),
    "mod_guid": ("MOD_GUID", "Mod GUID"),
    "mod_version": ("MOD_VERSION", "Mod 版本"),
    "mod_description": ("MOD_DESCRIPTION", "Mod 描述"),
    "namespace": ("NAMESPACE", "代码命名空间"),
    "game_name": ("GAME_NAME", "游戏名称"),
    "game_path": ("GAME_PATH", "游戏根目录"),
    "game_data_dir": ("GAME_DATA_DIR", "游戏数据目录"),
    "managed_path": ("MANAGED_PATH", "Managed 目录"),
    "process_name": ("PROCESS_NAME", "游戏进程名"),
    "main_assembly": ("MAIN_ASSEMBLY", "游戏主程序集"),
    "unity_version": ("UNITY_VERSION", "Unity 版本"),
    "bepinex_version": ("BEPINEX_VERSION", "BepInEx 版本"),
    "architecture": ("ARCHITECTURE", "游戏架构"),
}

class ProjectVariables(BaseModel):
    """模板变量集合

    未设置（None）的变量不会出现在映射中，对应占位符保持原样。
    """
    author: Optional[str] = None
    mod_name: Optional[str] = None
    mod_guid: Optional[str] = None
    mod_version: Optional[str] = None
    mod_description: Optional[str] = None
    namespace: Optional[str] = None
    game_name: Optional[str] = None
    game_path: Optional[str] = None
    game_data_dir: Optional[str] = None
    managed_path: Optional[str] = None
    process_name: Optional[str] = None
    main_assembly: Optional[str] = None
    unity_version: Optional[str] = None
    bepinex_version: Optional[str] = None
    architecture: Optional[str] = None

    model_config = {
        "frozen": True,
        "extra": "forbid",
        "str_strip_whitespace": True,
    }

    @field_validator('namespace')
    @classmethod
    def validate_namespace(cls, v: Optional[str]) -> Optional[str]:
        """命名空间允许点分的 C# 标识符"""
        if v is None:
            return None
        if not _NAMESPACE_RE.match(v):
            raise ValueError(f"命名空间不是合法的 C# 标识符: {v}")
        return v

    def with_updates(self, **changes: Any) -> 'ProjectVariables':
        """返回应用了修改的新实例（经过完整验证）"""
        data = self.model_dump()
        data.update(changes)
        return ProjectVariables.model_validate(data)

    def to_mapping(self) -> Dict[str, str]:
        """生成 `{占位符键: 值}` 映射，省略未设置的变量"""
        mapping: Dict[str, str] = {}
        for field_name, (key, _label) in VARIABLE_FIELDS.items():
            value = getattr(self, field_name)
            if value is not None:
                mapping[key] = str(value)
        return mapping

    def missing(self, keys: Optional[List[str]] = None) -> List[str]:
        """列出没有值的占位符键；keys 为空时检查全部已知键"""
        mapping = self.to_mapping()
        wanted = keys if keys is not None else [key for key, _ in VARIABLE_FIELDS.values()]
        return [key for key in wanted if key not in mapping]


def derive_quick_defaults(base: ProjectVariables, author: str) -> ProjectVariables:
    """根据作者名和检测到的游戏信息推导其余用户变量

    Args:
        base: 已包含检测结果（游戏名等）的变量
        author: 作者名

    Returns:
        ProjectVariables: 新的变量实例
    """
    author = author.strip()
    game = base.game_name or "Game"
    mod_name = f"{to_identifier(game, fallback='Game')}Mod"

    return base.with_updates(
        author=author,
        mod_name=mod_name,
        mod_guid=f"com.{to_slug(author)}.{mod_name.lower()}",
        mod_version=DEFAULT_MOD_VERSION,
        mod_description=f"A {game} mod by {author}",
        namespace=mod_name,
    )

