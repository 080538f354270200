"""
清理步骤模块

经用户同意后删除模板文件和计划文件。
"""

from ...template.engine import TemplateEngine
from ...utils.logging import info, success, warning, LogStage
from modforge.wizard.wizard_context import WizardContext
from .wizard_step import WizardStep


class CleanupStep(WizardStep):
    """清理步骤"""

    def __init__(self):
        super().__init__("cleanup", "清理模板文件")

    def should_run(self, context: WizardContext) -> bool:
        return context.settings.cleanup and bool(context.outcomes)

    def execute(self, context: WizardContext) -> None:
        if context.render_failed:
            warning("部分模板渲染失败，保留全部模板文件", stage=LogStage.CLEANUP)
            return

        plan_file = context.settings.plan_file
        extra = f" 和 {plan_file}" if plan_file else ""
        if not context.prompter.confirm(f"删除 {len(context.outcomes)} 个模板文件{extra}？", default=True):
            info("保留模板文件", stage=LogStage.CLEANUP)
            return

        engine = TemplateEngine(context.settings.template_suffix)
        removed, failed = engine.cleanup(context.project_dir, plan_file)
        context.removed_files = removed

        if failed:
            warning(f"{len(failed)} 个文件无法删除，请手动处理", stage=LogStage.CLEANUP)
        success(f"已删除 {len(removed)} 个文件", stage=LogStage.CLEANUP)
