"""
BepInEx 安装步骤模块

解析与游戏匹配的 BepInEx 发布包，经用户同意后下载并解压到游戏目录。
安装失败不会中断向导，只给出手动安装指引。
"""

from typing import Optional

from ...release.installer import RuntimeInstaller, is_runtime_installed
from ...release.resolver import HostPlatform, resolve_release
from ...utils.logging import info, warning, LogStage
from modforge.wizard.wizard_context import WizardContext
from .wizard_step import WizardStep


def target_platform(context: WizardContext) -> HostPlatform:
    """Windows 主程序（含 Proton/Wine 下运行的）需要 Windows 版 BepInEx"""
    if context.executable is not None and context.executable.suffix.lower() == ".exe":
        return HostPlatform.WINDOWS
    return context.host_platform


class InstallRuntimeStep(WizardStep):
    """BepInEx 安装步骤"""

    def __init__(self, installer: Optional[RuntimeInstaller] = None):
        super().__init__("install", "安装 BepInEx")
        self.installer = installer

    def should_run(self, context: WizardContext) -> bool:
        return context.settings.install_runtime and context.candidate is not None

    def execute(self, context: WizardContext) -> None:
        version = context.variables.bepinex_version or context.settings.bepinex_version
        descriptor = resolve_release(version, target_platform(context), context.architecture)
        context.release = descriptor

        info(f"匹配的发布包: {descriptor.file_name}", stage=LogStage.RESOLVE)
        if descriptor.architecture_assumed:
            warning("无法识别游戏架构，按 64 位处理", stage=LogStage.RESOLVE)

        game_root = context.candidate.root_dir
        if is_runtime_installed(game_root):
            question = f"{game_root} 中已安装 BepInEx，是否覆盖安装 {descriptor.version}？"
            default = False
        else:
            question = f"下载并安装 BepInEx {descriptor.version} 到游戏目录？"
            default = True

        if not context.prompter.confirm(question, default=default):
            info("跳过 BepInEx 安装", stage=LogStage.RESOLVE)
            return

        installer = self.installer or RuntimeInstaller(timeout=context.settings.download_timeout)
        result = installer.install(descriptor, game_root)
        context.install_result = result

        if not result.success:
            warning("BepInEx 安装失败，向导将继续", stage=LogStage.EXTRACT)
            warning(result.hint, stage=LogStage.EXTRACT)
