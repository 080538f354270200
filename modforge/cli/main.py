"""
Modforge CLI 主入口

单命令向导：modforge [quick] [选项]
"""

import traceback
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..config import ConfigError, ConfigValidationError, load_settings
from ..utils.logging import configure_logging, OutputLevel
from ..wizard.wizard import SetupWizard


app = typer.Typer(
    name="modforge",
    help="Modforge - Unity/BepInEx 模组项目初始化向导",
    rich_markup_mode="rich",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    """显示版本信息"""
    if value:
        console.print(f"Modforge v{__version__}")
        raise typer.Exit()


@app.command()
def main(
    mode: Optional[str] = typer.Argument(None, help="传入 quick 使用快速模式"),
    quick: bool = typer.Option(False, "--quick", "-q", help="快速模式：只询问作者名"),
    project_dir: str = typer.Option(".", "--project-dir", "-p", help="模板项目目录"),
    game_path: Optional[str] = typer.Option(None, "--game-path", "-g", help="游戏目录、_Data 目录或主程序路径"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="设置文件路径 (默认 <项目目录>/modforge.yaml)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出详细调试日志 (DEBUG 级别)"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="日志输出文件"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback, is_eager=True, help="显示版本信息"
    ),
) -> None:
    """初始化 BepInEx 模组项目

    示例:
        modforge quick
        modforge --project-dir ./MyMod --game-path "D:/Games/Valheim"
    """
    if mode is not None and mode.lower() != "quick":
        console.print(f"[red]未知模式: {escape(mode)}[/red] (可用: quick)")
        raise typer.Exit(1)
    quick = quick or mode is not None

    level = OutputLevel.DEBUG if verbose else OutputLevel.INFO
    configure_logging(level, log_file)

    project_path = Path(project_dir).expanduser()
    if not project_path.is_dir():
        console.print(f"[red]项目目录不存在: {escape(str(project_path))}[/red]")
        raise typer.Exit(1)

    try:
        settings = load_settings(config, project_path)
    except ConfigValidationError as e:
        console.print("[red]设置验证失败:[/red]")
        console.print(escape(e.format_errors()))
        raise typer.Exit(1)
    except ConfigError as e:
        console.print(f"[red]设置错误[/red]: {escape(str(e))}")
        raise typer.Exit(1)

    try:
        result = SetupWizard().run(project_path, settings, quick=quick, game_path=game_path)
    except KeyboardInterrupt:
        console.print("\n[yellow]已中断[/yellow]")
        raise typer.Exit(0)
    except Exception as e:
        console.print(f"[red]向导运行时发生意外错误[/red]: {escape(str(e))}")
        if verbose:
            console.print(f"[yellow]详细错误信息:[/yellow]\n{escape(traceback.format_exc())}")
        raise typer.Exit(1)

    raise typer.Exit(result.exit_code)


if __name__ == "__main__":
    app()
