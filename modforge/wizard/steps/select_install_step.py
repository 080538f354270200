"""
选择游戏安装步骤模块

使用命令行给出的路径，或扫描 Steam 库让用户选择，也可以手动输入路径。
"""

from typing import Callable, List, Optional

from ...detect.models import InstallCandidate
from ...detect.scanner import resolve_manual_path, scan_installations
from ...errors import WizardCancelled, WizardError
from ...utils.logging import info, success, warning, LogStage
from modforge.wizard.wizard_context import WizardContext
from .wizard_step import WizardStep

MAX_ATTEMPTS = 5
MANUAL_ENTRY = "手动输入游戏路径"

Scanner = Callable[[WizardContext], List[InstallCandidate]]


def _default_scanner(context: WizardContext) -> List[InstallCandidate]:
    return scan_installations(extra_dirs=context.settings.extra_search_paths)


class SelectInstallStep(WizardStep):
    """选择游戏安装步骤"""

    def __init__(self, scanner: Optional[Scanner] = None):
        super().__init__("select", "选择游戏安装")
        self.scanner = scanner or _default_scanner

    def execute(self, context: WizardContext) -> None:
        candidate = None

        if context.game_path:
            candidate = resolve_manual_path(context.game_path)
            if candidate is None:
                warning(f"无法在指定路径中找到 Unity 游戏: {context.game_path}", stage=LogStage.SCAN)

        if candidate is None:
            candidate = self._choose(context)

        context.candidate = candidate
        success(f"已选择: {candidate.display_name} ({candidate.data_dir})", stage=LogStage.SCAN)

    def _choose(self, context: WizardContext) -> InstallCandidate:
        candidates = self.scanner(context)

        if candidates:
            options = [f"{c.display_name}  ({c.root_dir})" for c in candidates]
            options.append(MANUAL_ENTRY)
            index = context.prompter.choose("选择游戏", options)
            if index < len(candidates):
                return candidates[index]
        else:
            info("未自动发现 Unity 游戏，请手动输入路径", stage=LogStage.SCAN)

        return self._ask_path(context)

    def _ask_path(self, context: WizardContext) -> InstallCandidate:
        for _ in range(MAX_ATTEMPTS):
            raw = context.prompter.ask("游戏目录、<Game>_Data 目录或主程序路径（输入 q 退出）").strip()
            if raw.lower() == "q":
                raise WizardCancelled("用户取消了游戏选择")
            if not raw:
                continue

            candidate = resolve_manual_path(raw)
            if candidate is not None:
                return candidate
            warning(f"路径中没有 Unity 数据目录: {raw}", stage=LogStage.SCAN)

        raise WizardError("多次输入的路径都无效")
