"""
BepInEx 安装器

下载发布包到临时文件，解压到游戏根目录（覆盖同名文件），
无论成功与否都删除临时文件。失败以结构化结果返回给调用者。
"""

import os
import tempfile
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Union

import requests

from ..errors import DownloadError, ExtractError, FailureReason
from ..utils.logging import debug, info, success, error, LogStage
from ..utils.paths import format_size, is_within
from .resolver import ReleaseDescriptor

DEFAULT_TIMEOUT = 60.0
CHUNK_SIZE = 64 * 1024
RUNTIME_MARKER = Path("BepInEx") / "core"


class Downloader(Protocol):
    """下载能力：把 url 的响应体写入 destination"""

    def download(self, url: str, destination: Path, timeout: float) -> None:
        ...


class Extractor(Protocol):
    """解压能力：把归档完整解压到 target_dir"""

    def extract(self, archive: Path, target_dir: Path) -> None:
        ...


class HttpDownloader:
    """基于 requests 的流式下载"""

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()

    def download(self, url: str, destination: Path, timeout: float) -> None:
        try:
            with self.session.get(url, stream=True, timeout=timeout) as response:
                response.raise_for_status()
                written = 0
                with open(destination, "wb") as f:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
                            written += len(chunk)
        except requests.exceptions.Timeout as e:
            raise DownloadError(f"下载超时（{timeout:.0f} 秒）: {url}", url) from e
        except requests.exceptions.RequestException as e:
            raise DownloadError(f"下载失败: {e}", url) from e
        except OSError as e:
            raise DownloadError(f"写入临时文件失败: {e}", url) from e

        debug(f"已下载 {format_size(written)}", stage=LogStage.DOWNLOAD)


class ZipExtractor:
    """zip 解压，拒绝目录穿越的条目"""

    def extract(self, archive: Path, target_dir: Path) -> None:
        try:
            with zipfile.ZipFile(archive, "r") as zf:
                for member in zf.namelist():
                    if not is_within(target_dir / member, target_dir):
                        raise ExtractError(f"归档中包含越界路径: {member}")
                target_dir.mkdir(parents=True, exist_ok=True)
                zf.extractall(target_dir)
        except (zipfile.BadZipFile, zlib.error, EOFError) as e:
            raise ExtractError(f"归档损坏: {e}") from e
        except (NotImplementedError, RuntimeError) as e:
            # 不支持的压缩方式或加密条目
            raise ExtractError(f"无法解压归档: {e}") from e
        except OSError as e:
            raise ExtractError(f"解压失败: {e}") from e


@dataclass
class InstallResult:
    """安装结果"""
    success: bool
    descriptor: ReleaseDescriptor
    target_dir: Path
    failure_reason: Optional[FailureReason] = None
    error: Optional[str] = None

    @property
    def hint(self) -> Optional[str]:
        """失败时的手动安装指引"""
        if self.success:
            return None
        return manual_install_hint(self.descriptor, self.target_dir)


def manual_install_hint(descriptor: ReleaseDescriptor, target_dir: Union[str, Path]) -> str:
    return (
        f"请手动下载 {descriptor.file_name}:\n"
        f"  {descriptor.download_url}\n"
        f"并将其内容解压到游戏根目录:\n"
        f"  {target_dir}"
    )


def _create_temp_archive() -> Path:
    """创建下载用的临时文件；临时目录不可写时视为下载失败"""
    try:
        fd, temp_name = tempfile.mkstemp(suffix=".zip", prefix="modforge_")
    except OSError as e:
        raise DownloadError(f"无法创建临时文件: {e}") from e
    os.close(fd)
    return Path(temp_name)


def is_runtime_installed(game_root: Union[str, Path]) -> bool:
    """游戏目录中是否已安装 BepInEx"""
    return (Path(game_root) / RUNTIME_MARKER).is_dir()


class RuntimeInstaller:
    """BepInEx 安装器

    下载和解压能力可注入，默认使用 HttpDownloader 和 ZipExtractor。
    """

    def __init__(
        self,
        downloader: Optional[Downloader] = None,
        extractor: Optional[Extractor] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.downloader = downloader or HttpDownloader()
        self.extractor = extractor or ZipExtractor()
        self.timeout = timeout

    def install(self, descriptor: ReleaseDescriptor, target_dir: Union[str, Path]) -> InstallResult:
        """下载并解压发布包

        Args:
            descriptor: 发布包描述
            target_dir: 游戏根目录

        Returns:
            InstallResult: 安装结果；失败时 failure_reason 为 DOWNLOAD_FAILED 或 EXTRACT_FAILED
        """
        target_dir = Path(target_dir)
        temp_path: Optional[Path] = None

        try:
            temp_path = _create_temp_archive()

            info(f"下载 {descriptor.file_name}", stage=LogStage.DOWNLOAD)
            debug(f"来源: {descriptor.download_url}", stage=LogStage.DOWNLOAD)
            self.downloader.download(descriptor.download_url, temp_path, self.timeout)

            info(f"解压到 {target_dir}", stage=LogStage.EXTRACT)
            self.extractor.extract(temp_path, target_dir)

        except DownloadError as e:
            error(str(e), stage=LogStage.DOWNLOAD)
            return InstallResult(False, descriptor, target_dir, FailureReason.DOWNLOAD_FAILED, str(e))
        except ExtractError as e:
            error(str(e), stage=LogStage.EXTRACT)
            return InstallResult(False, descriptor, target_dir, FailureReason.EXTRACT_FAILED, str(e))
        finally:
            try:
                if temp_path is not None:
                    temp_path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                debug(f"无法删除临时文件 {temp_path}: {e}", stage=LogStage.DOWNLOAD)

        success(f"BepInEx {descriptor.version} 已安装", stage=LogStage.EXTRACT)
        return InstallResult(True, descriptor, target_dir)
