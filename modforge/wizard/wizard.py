"""
向导主类

负责把一次向导运行的结果（成功、取消、失败）转换为统一的结果对象和退出码。
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config.schema import WizardSettings
from ..errors import IncompatibleRuntimeError, WizardCancelled, WizardError
from ..release.installer import RuntimeInstaller
from ..utils.logging import error, info, success, warning, LogStage
from .prompts import Prompter, RichPrompter
from .steps.select_install_step import Scanner
from .wizard_context import WizardContext
from .wizard_pipeline import WizardPipeline


@dataclass
class WizardResult:
    """向导结果"""
    success: bool
    cancelled: bool = False
    exit_code: int = 0
    error: Optional[str] = None
    context: Optional[WizardContext] = None


class SetupWizard:
    """项目初始化向导

    scanner / installer / prompter 都可以替换，便于在测试中脱离终端、网络和 Steam。
    """

    def __init__(
        self,
        prompter: Optional[Prompter] = None,
        scanner: Optional[Scanner] = None,
        installer: Optional[RuntimeInstaller] = None,
    ):
        self.prompter = prompter or RichPrompter()
        self.pipeline = WizardPipeline(scanner=scanner, installer=installer)

    def run(
        self,
        project_dir: Path,
        settings: Optional[WizardSettings] = None,
        quick: bool = False,
        game_path: Optional[str] = None,
    ) -> WizardResult:
        """运行向导

        Args:
            project_dir: 模板项目目录
            settings: 向导设置，缺省使用默认值
            quick: 是否使用快速模式
            game_path: 命令行指定的游戏路径

        Returns:
            WizardResult: 取消时 exit_code 为 0，不兼容或其他中断为 1
        """
        context = WizardContext(
            project_dir=Path(project_dir),
            settings=settings or WizardSettings(),
            prompter=self.prompter,
            quick=quick,
            game_path=game_path,
        )

        info(f"项目目录: {context.project_dir}", stage=LogStage.INIT)
        try:
            self.pipeline.execute(context)
        except WizardCancelled as e:
            warning(f"已取消: {e}", stage=LogStage.DONE)
            return WizardResult(success=False, cancelled=True, exit_code=0, error=str(e), context=context)
        except IncompatibleRuntimeError as e:
            error(f"游戏不受支持: {e}", stage=LogStage.VALIDATE)
            return WizardResult(success=False, exit_code=1, error=str(e), context=context)
        except WizardError as e:
            error(f"向导中断: {e}", stage=LogStage.DONE)
            return WizardResult(success=False, exit_code=1, error=str(e), context=context)

        self._summarize(context)
        return WizardResult(success=True, context=context)

    def _summarize(self, context: WizardContext) -> None:
        rendered = sum(1 for o in context.outcomes if o.success)
        failed = len(context.outcomes) - rendered
        success(f"已渲染 {rendered} 个文件", stage=LogStage.DONE)
        if failed:
            warning(f"{failed} 个文件渲染失败，模板文件已保留", stage=LogStage.DONE)

        result = context.install_result
        if result is not None and result.success:
            success(f"BepInEx {result.descriptor.version} 已安装到 {result.target_dir}", stage=LogStage.DONE)

        if context.git_result is not None and not context.git_result.success:
            warning(f"git 初始化未完成: {context.git_result.error}", stage=LogStage.VCS)
