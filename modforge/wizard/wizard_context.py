"""
向导上下文模块

定义向导各步骤之间传递的共享数据。
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, TYPE_CHECKING

from ..config.schema import WizardSettings
from ..config.variables import ProjectVariables
from ..detect.models import ArchitectureTag, CompatibilityResult, InstallCandidate
from ..release.resolver import HostPlatform, detect_host_platform

if TYPE_CHECKING:
    from ..release.installer import InstallResult
    from ..release.resolver import ReleaseDescriptor
    from ..template.engine import FileOutcome
    from ..vcs import GitResult
    from .prompts import Prompter


@dataclass
class WizardContext:
    """向导上下文

    variables 本身不可变，步骤通过替换整个实例来推进。
    """
    project_dir: Path
    settings: WizardSettings
    prompter: 'Prompter'
    quick: bool = False
    game_path: Optional[str] = None
    host_platform: HostPlatform = field(default_factory=detect_host_platform)

    # 各步骤产生的数据
    candidate: Optional[InstallCandidate] = None
    compatibility: Optional[CompatibilityResult] = None
    executable: Optional[Path] = None
    architecture: ArchitectureTag = ArchitectureTag.UNKNOWN
    variables: ProjectVariables = field(default_factory=ProjectVariables)
    release: Optional['ReleaseDescriptor'] = None
    install_result: Optional['InstallResult'] = None
    outcomes: List['FileOutcome'] = field(default_factory=list)
    removed_files: List[Path] = field(default_factory=list)
    git_result: Optional['GitResult'] = None

    completed_steps: List[str] = field(default_factory=list)

    @property
    def render_failed(self) -> bool:
        return any(not o.success for o in self.outcomes)
