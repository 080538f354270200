"""
模板替换引擎

在项目目录中查找带模板标记的文件，把 `{{KEY}}` 占位符替换为变量值，
写入去掉标记的同级文件。原模板文件保留，删除由向导的清理步骤负责。
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Mapping, Optional, Set, Tuple, Union

from ..errors import FailureReason
from ..utils.logging import debug, info, success, warning, LogStage
from .paths import DEFAULT_TEMPLATE_SUFFIX, is_template_path, strip_template_marker

# 扫描时跳过的目录
SKIPPED_DIRS = frozenset({".git", ".vs", ".idea", "bin", "obj", "node_modules"})

_PLACEHOLDER_RE = re.compile(r"\{\{([A-Z][A-Z0-9_]*)\}\}")


def placeholder(key: str) -> str:
    return "{{" + key + "}}"


def find_placeholders(text: str) -> List[str]:
    """按出现顺序列出文本中的占位符名（去重）"""
    seen: List[str] = []
    for key in _PLACEHOLDER_RE.findall(text):
        if key not in seen:
            seen.append(key)
    return seen


def substitute_text(text: str, variables: Mapping[str, str]) -> str:
    """替换文本中的占位符

    每个键按字面量匹配 `{{KEY}}`（区分大小写），替换全部出现位置；
    变量值原样写入，不做转义解释。没有对应变量的占位符保持不变。
    """
    if not variables:
        return text

    # 一次扫描完成全部替换，变量值中的占位符不会被再次展开
    keys = sorted(variables, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(placeholder(key)) for key in keys))
    return pattern.sub(lambda m: str(variables[m.group(0)[2:-2]]), text)


@dataclass
class FileOutcome:
    """单个模板文件的处理结果"""
    template_path: Path
    output_path: Path
    success: bool
    error: Optional[str] = None
    unresolved: List[str] = field(default_factory=list)

    @property
    def failure_reason(self) -> Optional[FailureReason]:
        return None if self.success else FailureReason.SUBSTITUTION_FAILED


class TemplateEngine:
    """模板替换引擎"""

    def __init__(self, suffix: str = DEFAULT_TEMPLATE_SUFFIX, encoding: str = "utf-8"):
        self.suffix = suffix
        self.encoding = encoding

    def discover(self, root: Union[str, Path]) -> List[Path]:
        """递归查找模板文件，按相对路径排序"""
        root = Path(root)
        found = sorted(self._walk(root), key=lambda p: p.relative_to(root).as_posix())
        debug(f"发现 {len(found)} 个模板文件", stage=LogStage.RENDER)
        return found

    def _walk(self, directory: Path) -> Iterator[Path]:
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            warning(f"无法读取目录 {directory}: {e}", stage=LogStage.RENDER)
            return

        for entry in entries:
            if entry.is_dir():
                if entry.name not in SKIPPED_DIRS:
                    yield from self._walk(entry)
            elif is_template_path(entry, self.suffix):
                yield entry

    def output_path_for(self, template_path: Path) -> Path:
        return strip_template_marker(template_path, self.suffix)

    def render_file(self, template_path: Path, variables: Mapping[str, str]) -> FileOutcome:
        """处理单个模板文件

        读写失败记录在结果中，不抛出异常。
        """
        output_path = self.output_path_for(template_path)

        try:
            # newline="" 保留模板原有的换行符
            with open(template_path, "r", encoding=self.encoding, newline="") as f:
                content = f.read()

            rendered = substitute_text(content, variables)

            with open(output_path, "w", encoding=self.encoding, newline="") as f:
                f.write(rendered)
        except (OSError, UnicodeError) as e:
            warning(f"处理模板失败 {template_path.name}: {e}", stage=LogStage.RENDER)
            return FileOutcome(template_path, output_path, False, error=str(e))

        unresolved = find_placeholders(rendered)
        if unresolved:
            debug(f"{output_path.name} 中保留未定义的占位符: {', '.join(unresolved)}", stage=LogStage.RENDER)
        return FileOutcome(template_path, output_path, True, unresolved=unresolved)

    def process(self, root: Union[str, Path], variables: Mapping[str, str]) -> List[FileOutcome]:
        """处理目录中的全部模板文件

        Args:
            root: 项目根目录
            variables: 变量名到替换值的映射

        Returns:
            List[FileOutcome]: 每个模板文件一个结果，单个失败不会中断批处理
        """
        templates = self.discover(root)
        info(f"渲染 {len(templates)} 个模板文件", stage=LogStage.RENDER)

        outcomes = [self.render_file(path, variables) for path in templates]

        failed = [o for o in outcomes if not o.success]
        if failed:
            warning(f"{len(failed)} 个模板文件处理失败", stage=LogStage.RENDER)
        else:
            success(f"模板渲染完成 ({len(outcomes)} 个文件)", stage=LogStage.RENDER)
        return outcomes

    def cleanup(self, root: Union[str, Path], plan_file: Optional[str] = None) -> Tuple[List[Path], List[Path]]:
        """删除模板文件和指定的计划文件

        只删除 discover() 找到的模板文件以及 root 下名为 plan_file 的单个文件。

        Returns:
            Tuple[List[Path], List[Path]]: (已删除, 删除失败)
        """
        root = Path(root)
        targets = self.discover(root)
        if plan_file:
            plan = root / plan_file
            if plan.is_file():
                targets.append(plan)

        removed: List[Path] = []
        failed: List[Path] = []
        for path in targets:
            try:
                path.unlink()
                removed.append(path)
                debug(f"已删除 {path.relative_to(root)}", stage=LogStage.CLEANUP)
            except OSError as e:
                warning(f"无法删除 {path}: {e}", stage=LogStage.CLEANUP)
                failed.append(path)
        return removed, failed


def collect_placeholders(root: Union[str, Path], suffix: str = DEFAULT_TEMPLATE_SUFFIX) -> Set[str]:
    """汇总目录中所有模板引用到的占位符名"""
    keys: Set[str] = set()
    engine = TemplateEngine(suffix)
    for path in engine.discover(root):
        try:
            keys.update(find_placeholders(path.read_text(encoding=engine.encoding)))
        except (OSError, UnicodeError):
            continue
    return keys


def discover_templates(root: Union[str, Path], suffix: str = DEFAULT_TEMPLATE_SUFFIX) -> List[Path]:
    return TemplateEngine(suffix).discover(root)


def cleanup_templates(
    root: Union[str, Path],
    plan_file: Optional[str] = None,
    suffix: str = DEFAULT_TEMPLATE_SUFFIX,
) -> Tuple[List[Path], List[Path]]:
    return TemplateEngine(suffix).cleanup(root, plan_file)
