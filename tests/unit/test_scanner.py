"""
游戏安装扫描与 Unity 版本探测单元测试
"""

from pathlib import Path

from modforge.detect.models import CandidateSource
from modforge.detect.scanner import (
    parse_library_folders,
    resolve_manual_path,
    scan_installations,
    steam_library_dirs,
)
from modforge.detect.unity_version import (
    DEFAULT_UNITY_VERSION,
    detect_unity_version,
    parse_unity_version,
)


def make_game(common: Path, name: str, data_name: str = None) -> Path:
    game = common / name
    (game / f"{data_name or name}_Data" / "Managed").mkdir(parents=True)
    return game


class TestSteamLibraries:
    """Steam 库扫描测试"""

    def test_parse_library_folders(self):
        text = '''
"libraryfolders"
{
    "0"
    {
        "path"		"C:\\\\Program Files (x86)\\\\Steam"
        "label"		""
    }
    "1"
    {
        "path"		"/mnt/games/SteamLibrary"
    }
}
'''
        paths = parse_library_folders(text)
        assert paths == [Path("C:\\Program Files (x86)\\Steam"), Path("/mnt/games/SteamLibrary")]

    def test_scan_installations(self, tmp_path):
        """测试扫描主库和 libraryfolders.vdf 中的附加库"""
        steam = tmp_path / "Steam"
        common = steam / "steamapps" / "common"
        make_game(common, "Valheim", "valheim")
        (common / "NotUnity").mkdir(parents=True)

        extra_lib = tmp_path / "Library2"
        make_game(extra_lib / "steamapps" / "common", "Among Us")

        (steam / "steamapps" / "libraryfolders.vdf").write_text(
            f'"libraryfolders"\n{{\n "1"\n {{\n  "path" "{extra_lib.as_posix()}"\n }}\n}}\n',
            encoding="utf-8",
        )

        candidates = scan_installations(steam_roots=[steam])

        assert [c.display_name for c in candidates] == ["Among Us", "Valheim"]
        valheim = candidates[1]
        assert valheim.data_dir.name == "valheim_Data"
        assert valheim.data_name == "valheim"
        assert valheim.source == CandidateSource.STEAM

    def test_missing_roots(self, tmp_path):
        assert steam_library_dirs([tmp_path / "nope"]) == []
        assert scan_installations(steam_roots=[tmp_path / "nope"]) == []

    def test_extra_dirs(self, tmp_path):
        make_game(tmp_path / "games", "Subnautica")
        candidates = scan_installations(steam_roots=[], extra_dirs=[str(tmp_path / "games")])
        assert len(candidates) == 1
        assert candidates[0].source == CandidateSource.MANUAL


class TestResolveManualPath:
    """手动路径解析测试"""

    def test_root_dir(self, tmp_path):
        game = make_game(tmp_path, "Valheim", "valheim")
        candidate = resolve_manual_path(game)
        assert candidate.data_dir == (game / "valheim_Data").resolve()
        assert candidate.display_name == "Valheim"

    def test_data_dir(self, tmp_path):
        game = make_game(tmp_path, "Valheim")
        candidate = resolve_manual_path(str(game / "Valheim_Data"))
        assert candidate.root_dir == game.resolve()

    def test_executable(self, tmp_path):
        game = make_game(tmp_path, "Valheim", "valheim")
        (game / "valheim.exe").write_bytes(b"")
        candidate = resolve_manual_path(f'"{game / "valheim.exe"}"')
        assert candidate.data_dir.name == "valheim_Data"

    def test_unresolvable(self, tmp_path):
        assert resolve_manual_path(tmp_path / "missing") is None
        (tmp_path / "empty").mkdir()
        assert resolve_manual_path(tmp_path / "empty") is None


class TestUnityVersion:
    """Unity 版本探测测试"""

    def test_parse(self):
        assert parse_unity_version(b"\x00\x00\x0022\x00\x00\x002020.3.28f1\x00") == "2020.3.28"
        assert parse_unity_version(b"6000.0.23f1") == "6000.0.23"
        assert parse_unity_version(b"5.6.7p2") == "5.6.7"
        assert parse_unity_version(b"no version here 1.2.3") is None

    def test_detect_from_file(self, tmp_path):
        (tmp_path / "globalgamemanagers").write_bytes(b"\x00" * 20 + b"2019.4.40f1\x00")
        assert detect_unity_version(tmp_path) == "2019.4.40"

    def test_default(self, tmp_path):
        assert detect_unity_version(tmp_path) == DEFAULT_UNITY_VERSION
        assert detect_unity_version(tmp_path / "missing", default="5.0.0") == "5.0.0"
