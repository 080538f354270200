"""
运行时兼容性检查单元测试
"""

from modforge.detect.runtime import (
    MAIN_ASSEMBLY_NAME,
    is_excluded_assembly,
    list_candidate_assemblies,
    validate_runtime,
)
from modforge.errors import FailureReason


def make_data_dir(root, assemblies=(), managed=True):
    data_dir = root / "Game_Data"
    data_dir.mkdir(parents=True)
    if managed:
        managed_dir = data_dir / "Managed"
        managed_dir.mkdir()
        for name in assemblies:
            (managed_dir / name).write_bytes(b"")
    return data_dir


class TestValidateRuntime:
    """validate_runtime 测试"""

    def test_missing_directory(self, tmp_path):
        """测试数据目录不存在"""
        result = validate_runtime(tmp_path / "Nope_Data")
        assert not result.is_compatible
        assert result.failure_reason == FailureReason.NOT_FOUND

    def test_no_managed_is_incompatible(self, tmp_path):
        """测试缺少 Managed 目录时判定为不兼容，不论其他文件如何"""
        data_dir = make_data_dir(tmp_path, managed=False)
        (data_dir / "il2cpp_data").mkdir()
        (tmp_path / "GameAssembly.dll").write_bytes(b"")
        (data_dir / MAIN_ASSEMBLY_NAME).write_bytes(b"")

        result = validate_runtime(data_dir)
        assert not result.is_compatible
        assert result.failure_reason == FailureReason.INCOMPATIBLE_RUNTIME
        assert "il2cpp_data" in result.detail
        assert "GameAssembly.dll" in result.detail

    def test_canonical_assembly(self, tmp_path):
        """测试存在 Assembly-CSharp.dll"""
        data_dir = make_data_dir(tmp_path, ["UnityEngine.dll", MAIN_ASSEMBLY_NAME, "assembly_valheim.dll"])
        result = validate_runtime(data_dir)
        assert result.is_compatible
        assert result.main_assembly_name == "Assembly-CSharp.dll"
        assert result.failure_reason is None
        assert not result.needs_selection
        assert result.managed_dir == data_dir / "Managed"

    def test_candidates_without_canonical(self, tmp_path):
        """测试没有标准主程序集时返回排序后的候选列表"""
        data_dir = make_data_dir(tmp_path, [
            "UnityEngine.CoreModule.dll",
            "System.Core.dll",
            "zeta.dll",
            "Alpha.dll",
            "beta.dll",
        ])
        result = validate_runtime(data_dir)
        assert result.is_compatible
        assert result.main_assembly_name is None
        assert result.needs_selection
        assert result.candidates == ("Alpha.dll", "beta.dll", "zeta.dll")

    def test_no_game_assembly(self, tmp_path):
        """测试只有框架程序集"""
        data_dir = make_data_dir(tmp_path, ["mscorlib.dll", "UnityEngine.dll", "Mono.Security.dll"])
        result = validate_runtime(data_dir)
        assert result.is_compatible
        assert result.failure_reason == FailureReason.NO_GAME_ASSEMBLY
        assert result.candidates == ()

    def test_read_only(self, tmp_path):
        """测试检查不会修改目录内容"""
        data_dir = make_data_dir(tmp_path, [MAIN_ASSEMBLY_NAME])
        before = sorted(p.relative_to(tmp_path) for p in tmp_path.rglob("*"))
        validate_runtime(data_dir)
        after = sorted(p.relative_to(tmp_path) for p in tmp_path.rglob("*"))
        assert before == after


class TestAssemblyFilters:
    """程序集过滤测试"""

    def test_excluded(self):
        for name in ["UnityEngine.UI.dll", "System.dll", "Mono.Cecil.dll", "mscorlib.dll",
                     "netstandard.dll", "0Harmony.dll", "Unity.TextMeshPro.dll", "Sirenix.Unity.dll"]:
            assert is_excluded_assembly(name), name

    def test_not_excluded(self):
        for name in ["Assembly-CSharp.dll", "assembly_valheim.dll", "Game.Core.dll"]:
            assert not is_excluded_assembly(name), name

    def test_only_dll_files(self, tmp_path):
        managed = tmp_path / "Managed"
        managed.mkdir()
        (managed / "Game.dll").write_bytes(b"")
        (managed / "Game.pdb").write_bytes(b"")
        (managed / "Sub.dll").mkdir()
        assert list_candidate_assemblies(managed) == ["Game.dll"]
