"""
向导步骤基类模块

定义向导步骤的抽象接口。
"""

from abc import ABC, abstractmethod

from modforge.wizard.wizard_context import WizardContext


class WizardStep(ABC):
    """向导步骤抽象基类"""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description

    @abstractmethod
    def execute(self, context: WizardContext) -> None:
        """执行向导步骤"""
        pass

    def should_run(self, context: WizardContext) -> bool:
        """可选步骤根据设置决定是否执行"""
        return True
