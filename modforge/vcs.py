"""
版本控制初始化

调用外部 git 命令初始化仓库、设置远程、完成首次提交。
只关心每条命令是否成功，不解析输出。
"""

import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .utils.logging import get_stage_logger, LogStage

GIT_TIMEOUT = 120

logger = get_stage_logger(LogStage.VCS)


@dataclass
class GitResult:
    """git 初始化结果"""
    success: bool
    completed: List[str] = field(default_factory=list)  # 已成功执行的子命令
    error: Optional[str] = None


def git_available() -> bool:
    return shutil.which("git") is not None


def _run_git(args: Sequence[str], cwd: Path) -> subprocess.CompletedProcess:
    logger.debug(f"git {' '.join(args)}")
    return subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        timeout=GIT_TIMEOUT,
    )


def init_repository(
    project_dir: Union[str, Path],
    remote_url: Optional[str] = None,
    commit_message: str = "Initial commit",
) -> GitResult:
    """初始化 git 仓库并提交全部文件

    Args:
        project_dir: 项目目录
        remote_url: origin 远程地址，可选
        commit_message: 首次提交信息

    Returns:
        GitResult: 执行结果，第一条失败的命令即停止
    """
    project_dir = Path(project_dir)

    if not git_available():
        logger.warning("未找到 git 命令，跳过版本控制初始化")
        return GitResult(False, error="git 不可用")

    commands = [("init", ["init"])]
    if remote_url:
        commands.append(("remote", ["remote", "add", "origin", remote_url]))
    commands.append(("add", ["add", "-A"]))
    commands.append(("commit", ["commit", "-m", commit_message]))

    result = GitResult(True)
    for name, args in commands:
        try:
            proc = _run_git(args, project_dir)
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning(f"git {name} 执行失败: {e}")
            return GitResult(False, result.completed, str(e))

        if proc.returncode != 0:
            message = (proc.stderr or proc.stdout or "").strip() or f"退出码 {proc.returncode}"
            logger.warning(f"git {name} 失败: {message}")
            return GitResult(False, result.completed, message)

        result.completed.append(name)

    logger.info(f"已初始化 git 仓库: {project_dir}")
    logger.success("首次提交完成")
    return result
