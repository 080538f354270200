"""
模板渲染步骤模块

确认后把收集到的变量写入项目中的全部模板文件。
确认环节被拒绝时整个向导取消，此时还没有任何文件被改写。
"""

from typing import Optional

from ...errors import WizardCancelled
from ...template.engine import TemplateEngine, collect_placeholders
from ...utils.logging import info, warning, LogStage
from modforge.wizard.wizard_context import WizardContext
from .wizard_step import WizardStep


class SubstituteStep(WizardStep):
    """模板渲染步骤"""

    def __init__(self, engine: Optional[TemplateEngine] = None):
        super().__init__("substitute", "渲染模板文件")
        self.engine = engine

    def _engine_for(self, context: WizardContext) -> TemplateEngine:
        return self.engine or TemplateEngine(context.settings.template_suffix)

    def execute(self, context: WizardContext) -> None:
        engine = self._engine_for(context)
        templates = engine.discover(context.project_dir)

        if not templates:
            warning(f"{context.project_dir} 中没有 *{engine.suffix} 模板文件", stage=LogStage.RENDER)
            return

        referenced = sorted(collect_placeholders(context.project_dir, engine.suffix))
        missing = context.variables.missing(referenced)
        if missing:
            warning(f"以下占位符没有对应变量，将原样保留: {', '.join(missing)}", stage=LogStage.RENDER)

        info(f"将在 {context.project_dir} 中渲染 {len(templates)} 个模板文件", stage=LogStage.RENDER)
        if not context.prompter.confirm("开始写入文件？", default=True):
            raise WizardCancelled("用户取消了模板渲染")

        context.outcomes = engine.process(context.project_dir, context.variables.to_mapping())

        for outcome in context.outcomes:
            if not outcome.success:
                warning(f"  {outcome.template_path}: {outcome.error}", stage=LogStage.RENDER)
