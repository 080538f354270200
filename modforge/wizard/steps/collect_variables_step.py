"""
变量收集步骤模块

快速模式：只询问作者名，其余变量自动推导，确认后继续；
拒绝时转入交互模式，以推导结果作为默认值逐项询问。
"""

from typing import Optional

from pydantic import ValidationError

from ...config.variables import (
    VARIABLE_FIELDS,
    ProjectVariables,
    derive_quick_defaults,
)
from ...utils.logging import info, print as console_print, warning, LogStage
from modforge.wizard.prompts import variables_table
from modforge.wizard.wizard_context import WizardContext
from .wizard_step import WizardStep


class CollectVariablesStep(WizardStep):
    """变量收集步骤"""

    def __init__(self):
        super().__init__("collect", "收集模板变量")

    def execute(self, context: WizardContext) -> None:
        if context.quick:
            variables = derive_quick_defaults(
                context.variables, self._ask_author(context, context.settings.author)
            )
            console_print(variables_table(variables.to_mapping()))
            if context.prompter.confirm("使用以上设置？", default=True):
                context.variables = variables
                return

            info("进入交互模式", stage=LogStage.COLLECT)
            context.variables = self._interactive(context, variables)
            return

        context.variables = self._interactive(context, context.variables)

    def _ask_author(self, context: WizardContext, default: Optional[str] = None) -> str:
        while True:
            author = context.prompter.ask("作者名", default=default).strip()
            if author:
                return author
            warning("作者名不能为空", stage=LogStage.COLLECT)

    def _interactive(self, context: WizardContext, variables: ProjectVariables) -> ProjectVariables:
        """逐项询问，检测值或推导值作为默认值"""
        for field_name, (key, label) in VARIABLE_FIELDS.items():
            if field_name == "author":
                author = self._ask_author(context, variables.author or context.settings.author)
                if variables.mod_name is None:
                    variables = derive_quick_defaults(variables, author)
                else:
                    variables = variables.with_updates(author=author)
                continue

            while True:
                current = getattr(variables, field_name)
                value = context.prompter.ask(f"{label} ({key})", default=current).strip()
                try:
                    variables = variables.with_updates(**{field_name: value or None})
                    break
                except ValidationError as e:
                    warning(f"{label} 无效: {e.errors()[0].get('msg', e)}", stage=LogStage.COLLECT)

        console_print(variables_table(variables.to_mapping()))
        return variables
