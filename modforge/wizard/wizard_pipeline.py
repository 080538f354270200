"""
向导管道模块

使用管道模式协调向导步骤的执行。
"""

from typing import List, Optional

from ..utils.logging import debug, info, LogStage
from .wizard_context import WizardContext
from .steps.wizard_step import WizardStep
from .steps.select_install_step import SelectInstallStep, Scanner
from .steps.validate_compatibility_step import ValidateCompatibilityStep
from .steps.collect_variables_step import CollectVariablesStep
from .steps.substitute_step import SubstituteStep
from .steps.install_runtime_step import InstallRuntimeStep
from .steps.cleanup_step import CleanupStep
from .steps.version_control_step import VersionControlStep
from ..release.installer import RuntimeInstaller


class WizardPipeline:
    """向导管道，负责协调向导步骤的执行"""

    def __init__(self, scanner: Optional[Scanner] = None, installer: Optional[RuntimeInstaller] = None):
        self.scanner = scanner
        self.installer = installer
        self._steps: List[WizardStep] = []

        self._init_default_steps()

    def _init_default_steps(self):
        """初始化默认的向导步骤

        渲染确认在安装之前，取消时游戏目录和项目目录都保持原样。
        """
        self._steps = [
            SelectInstallStep(self.scanner),
            ValidateCompatibilityStep(),
            CollectVariablesStep(),
            SubstituteStep(),
            InstallRuntimeStep(self.installer),
            CleanupStep(),
            VersionControlStep(),
        ]

    def add_step(self, step: WizardStep, position: Optional[int] = None):
        """添加向导步骤"""
        if position is None:
            self._steps.append(step)
        else:
            self._steps.insert(position, step)

    def remove_step(self, step_name: str):
        """移除向导步骤"""
        self._steps = [step for step in self._steps if step.name != step_name]

    def get_steps(self) -> List[WizardStep]:
        """获取所有向导步骤"""
        return self._steps.copy()

    def execute(self, context: WizardContext) -> WizardContext:
        """依次执行每个步骤

        Raises:
            WizardError: 步骤中断了向导
        """
        for step in self._steps:
            if not step.should_run(context):
                debug(f"跳过步骤: {step.description}", stage=LogStage.INIT)
                continue
            info(f"执行步骤: {step.description}", stage=LogStage.INIT)
            step.execute(context)
            context.completed_steps.append(step.name)

        return context
