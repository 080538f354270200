"""
模板路径变换
"""

from pathlib import PurePath
from typing import TypeVar

DEFAULT_TEMPLATE_SUFFIX = ".template"

P = TypeVar("P", bound=PurePath)


def is_template_path(path: PurePath, suffix: str = DEFAULT_TEMPLATE_SUFFIX) -> bool:
    """文件名是否带模板标记（且去掉标记后文件名非空）"""
    return path.name.endswith(suffix) and len(path.name) > len(suffix)


def strip_template_marker(path: P, suffix: str = DEFAULT_TEMPLATE_SUFFIX) -> P:
    """去掉文件名末尾的模板标记，返回同目录下的输出路径

    `Plugin.cs.template` -> `Plugin.cs`。只改最后一段文件名，
    与平台路径分隔符无关；不带标记的路径原样返回。
    """
    if not is_template_path(path, suffix):
        return path
    return path.with_name(path.name[:-len(suffix)])
