"""
兼容性检查步骤模块

检查所选游戏是否为 Mono 运行时，确定主程序集，
并探测主程序架构和 Unity 版本作为后续变量的默认值。
"""

from ...detect.binary import detect_architecture, find_primary_executable
from ...detect.runtime import MAIN_ASSEMBLY_NAME, validate_runtime
from ...detect.unity_version import detect_unity_version
from ...errors import FailureReason, IncompatibleRuntimeError, WizardError
from ...utils.logging import info, success, warning, LogStage
from modforge.wizard.wizard_context import WizardContext
from .wizard_step import WizardStep


class ValidateCompatibilityStep(WizardStep):
    """兼容性检查步骤"""

    def __init__(self):
        super().__init__("validate", "检查游戏运行时")

    def execute(self, context: WizardContext) -> None:
        candidate = context.candidate
        if candidate is None:
            raise WizardError("尚未选择游戏安装")

        result = validate_runtime(candidate.data_dir)
        context.compatibility = result

        if not result.is_compatible:
            if result.failure_reason == FailureReason.NOT_FOUND:
                raise WizardError(result.detail)
            raise IncompatibleRuntimeError(
                f"{candidate.display_name} 不是 Mono 运行时，无法注入 BepInEx: {result.detail}",
                result.failure_reason or FailureReason.INCOMPATIBLE_RUNTIME,
            )

        main_assembly = result.main_assembly_name
        if main_assembly is None:
            main_assembly = self._resolve_assembly(context)

        executable = find_primary_executable(candidate)
        context.executable = executable
        if executable is None:
            warning("未找到游戏主程序，架构未知", stage=LogStage.DETECT)
        context.architecture = detect_architecture(executable)
        unity_version = detect_unity_version(candidate.data_dir)

        info(f"架构: {context.architecture.value}  Unity: {unity_version}", stage=LogStage.DETECT)

        context.variables = context.variables.with_updates(
            game_name=candidate.display_name,
            game_path=str(candidate.root_dir),
            game_data_dir=str(candidate.data_dir),
            managed_path=str(result.managed_dir),
            process_name=executable.stem if executable else candidate.data_name,
            main_assembly=main_assembly,
            unity_version=unity_version,
            bepinex_version=context.settings.bepinex_version,
            architecture=context.architecture.value,
        )
        success("运行时兼容", stage=LogStage.VALIDATE)

    def _resolve_assembly(self, context: WizardContext) -> str:
        """没有标准主程序集时由用户选择或输入"""
        result = context.compatibility
        if result.candidates:
            index = context.prompter.choose("选择游戏主程序集", list(result.candidates))
            return result.candidates[index]

        warning(f"{result.detail}", stage=LogStage.VALIDATE)
        name = context.prompter.ask("主程序集文件名", default=MAIN_ASSEMBLY_NAME).strip()
        return name or MAIN_ASSEMBLY_NAME
