"""
Modforge - Unity/BepInEx 模组项目初始化向导

Detects a Unity (Mono) game install, fills a mod project template and
installs a matching BepInEx release.
"""

__version__ = "0.1.0"

from .config.schema import WizardSettings
from .wizard.wizard import SetupWizard, WizardResult

__all__ = ["WizardSettings", "SetupWizard", "WizardResult", "__version__"]
