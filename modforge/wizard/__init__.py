"""交互式项目初始化向导"""

from .prompts import Prompter, RichPrompter, variables_table
from .wizard import SetupWizard, WizardResult
from .wizard_context import WizardContext
from .wizard_pipeline import WizardPipeline

__all__ = [
    "Prompter",
    "RichPrompter",
    "variables_table",
    "SetupWizard",
    "WizardResult",
    "WizardContext",
    "WizardPipeline",
]
