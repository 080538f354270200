"""
交互输入

向导通过 Prompter 与用户交互，默认实现基于 rich.prompt；
测试中替换为按脚本应答的实现。
"""

from typing import Dict, Optional, Protocol, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table


class Prompter(Protocol):
    """交互输入接口"""

    def ask(self, label: str, default: Optional[str] = None) -> str:
        """询问一个文本值，直接回车时返回 default"""
        ...

    def confirm(self, question: str, default: bool = True) -> bool:
        ...

    def choose(self, label: str, options: Sequence[str], default: int = 0) -> int:
        """从选项中选择一项，返回下标"""
        ...


class RichPrompter:
    """基于 rich.prompt 的终端交互"""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def ask(self, label: str, default: Optional[str] = None) -> str:
        if default is None:
            return Prompt.ask(escape(label), console=self.console)
        return Prompt.ask(escape(label), console=self.console, default=default)

    def confirm(self, question: str, default: bool = True) -> bool:
        return Confirm.ask(escape(question), console=self.console, default=default)

    def choose(self, label: str, options: Sequence[str], default: int = 0) -> int:
        table = Table(show_header=False, box=None)
        table.add_column("#", style="cyan", justify="right")
        table.add_column("选项")
        for i, option in enumerate(options, start=1):
            table.add_row(str(i), escape(option))
        self.console.print(table)

        while True:
            choice = IntPrompt.ask(escape(label), console=self.console, default=default + 1)
            if 1 <= choice <= len(options):
                return choice - 1
            self.console.print(f"[red]请输入 1 - {len(options)} 之间的编号[/red]")


def variables_table(mapping: Dict[str, str], title: str = "模板变量") -> Table:
    """把变量映射渲染为表格"""
    table = Table(title=title)
    table.add_column("变量", style="cyan", no_wrap=True)
    table.add_column("值", style="green")
    for key, value in mapping.items():
        table.add_row(key, escape(value))
    return table
