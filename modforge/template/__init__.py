"""模板模块

占位符替换引擎与模板路径变换。
"""

from .engine import (
    FileOutcome,
    TemplateEngine,
    cleanup_templates,
    collect_placeholders,
    discover_templates,
    find_placeholders,
    placeholder,
    substitute_text,
)
from .paths import DEFAULT_TEMPLATE_SUFFIX, is_template_path, strip_template_marker

__all__ = [
    "FileOutcome",
    "TemplateEngine",
    "cleanup_templates",
    "collect_placeholders",
    "discover_templates",
    "find_placeholders",
    "placeholder",
    "substitute_text",
    "DEFAULT_TEMPLATE_SUFFIX",
    "is_template_path",
    "strip_template_marker",
]
