"""
版本控制步骤模块
"""

from ... import vcs
from ...utils.logging import info, LogStage
from modforge.wizard.wizard_context import WizardContext
from .wizard_step import WizardStep


class VersionControlStep(WizardStep):
    """git 初始化步骤"""

    def __init__(self):
        super().__init__("vcs", "初始化版本控制")

    def should_run(self, context: WizardContext) -> bool:
        return context.settings.git.enabled

    def execute(self, context: WizardContext) -> None:
        if (context.project_dir / ".git").exists():
            info("项目已是 git 仓库，跳过初始化", stage=LogStage.VCS)
            return

        if not context.prompter.confirm("初始化 git 仓库并提交？", default=False):
            return

        remote = context.settings.git.remote_url
        if remote is None:
            remote = context.prompter.ask("远程仓库地址（可留空）", default="").strip() or None

        context.git_result = vcs.init_repository(
            context.project_dir,
            remote_url=remote,
            commit_message=context.settings.git.commit_message,
        )
