"""
模板替换引擎单元测试
"""

from pathlib import Path, PurePosixPath, PureWindowsPath

import pytest

from modforge.errors import FailureReason
from modforge.template.engine import (
    TemplateEngine,
    cleanup_templates,
    collect_placeholders,
    find_placeholders,
    substitute_text,
)
from modforge.template.paths import is_template_path, strip_template_marker


class TestSubstituteText:
    """substitute_text 测试"""

    def test_basic(self):
        """测试基本替换"""
        text = "Game: {{GAME_NAME}}, Ver: {{UNITY_VERSION}}"
        result = substitute_text(text, {"GAME_NAME": "Valheim", "UNITY_VERSION": "2020.3.28"})
        assert result == "Game: Valheim, Ver: 2020.3.28"

    def test_all_occurrences(self):
        assert substitute_text("{{A}}-{{A}}", {"A": "x"}) == "x-x"

    def test_missing_key_passthrough(self):
        """测试没有对应变量的占位符原样保留"""
        assert substitute_text("{{A}} {{B}}", {"A": "1"}) == "1 {{B}}"

    def test_case_sensitive(self):
        assert substitute_text("{{game_name}}", {"GAME_NAME": "x"}) == "{{game_name}}"

    def test_values_are_literal(self):
        """测试变量值中的特殊字符不被解释"""
        value = r"C:\Games\1 $0 \g<0> {{B}}"
        assert substitute_text("{{A}}", {"A": value}) == value

    def test_idempotent(self):
        """测试对已替换的文本再次替换结果不变"""
        mapping = {"GAME_NAME": "Valheim", "MOD_NAME": "ValheimMod"}
        once = substitute_text("{{GAME_NAME}}/{{MOD_NAME}}/{{OTHER}}", mapping)
        assert substitute_text(once, mapping) == once

    def test_values_not_reexpanded(self):
        """测试变量值中的占位符不会被其他变量再次展开"""
        assert substitute_text("{{A}} {{B}}", {"A": "{{B}}", "B": "x"}) == "{{B}} x"
        assert substitute_text("{{A}} {{B}}", {"B": "x", "A": "{{B}}"}) == "{{B}} x"

    def test_empty_mapping(self):
        assert substitute_text("{{A}}", {}) == "{{A}}"

    def test_find_placeholders(self):
        assert find_placeholders("{{B}} {{A}} {{B}} {{lower}} {A}") == ["B", "A"]


class TestTemplatePaths:
    """模板路径变换测试"""

    def test_strip_marker(self):
        assert strip_template_marker(PurePosixPath("src/Plugin.cs.template")) == PurePosixPath("src/Plugin.cs")

    def test_strip_marker_windows(self):
        path = PureWindowsPath(r"C:\mod\Mod.csproj.template")
        assert strip_template_marker(path) == PureWindowsPath(r"C:\mod\Mod.csproj")

    def test_no_marker_unchanged(self):
        path = PurePosixPath("README.md")
        assert strip_template_marker(path) == path

    def test_bare_suffix_is_not_template(self):
        assert not is_template_path(PurePosixPath(".template"))

    def test_custom_suffix(self):
        assert strip_template_marker(PurePosixPath("a.cs.tpl"), ".tpl") == PurePosixPath("a.cs")


@pytest.fixture
def project(tmp_path):
    """Valheim 模组模板项目"""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "Plugin.cs.template").write_text(
        'namespace {{NAMESPACE}}\n{\n    [BepInPlugin("{{MOD_GUID}}", "{{MOD_NAME}}", "{{MOD_VERSION}}")]\n}\n',
        encoding="utf-8",
    )
    (tmp_path / "Mod.csproj.template").write_text(
        "<GamePath>{{GAME_PATH}}</GamePath>\r\n<Unity>{{UNITY_VERSION}}</Unity>\r\n", encoding="utf-8"
    )
    (tmp_path / "README.md").write_text("{{MOD_NAME}} untouched", encoding="utf-8")
    (tmp_path / "bin").mkdir()
    (tmp_path / "bin" / "Old.cs.template").write_text("{{MOD_NAME}}", encoding="utf-8")
    (tmp_path / "SETUP_PLAN.md").write_text("plan", encoding="utf-8")
    return tmp_path


MAPPING = {
    "NAMESPACE": "ValheimMod",
    "MOD_GUID": "com.alice.valheimmod",
    "MOD_NAME": "ValheimMod",
    "MOD_VERSION": "1.0.0",
    "GAME_PATH": r"D:\Steam\steamapps\common\Valheim",
}


class TestTemplateEngine:
    """TemplateEngine 测试"""

    def test_discover(self, project):
        """测试发现顺序稳定并跳过构建目录"""
        found = TemplateEngine().discover(project)
        assert [p.relative_to(project).as_posix() for p in found] == [
            "Mod.csproj.template",
            "src/Plugin.cs.template",
        ]

    def test_process(self, project):
        """测试渲染写入去掉标记的文件，保留模板"""
        outcomes = TemplateEngine().process(project, MAPPING)

        assert all(o.success for o in outcomes)
        plugin = (project / "src" / "Plugin.cs").read_text(encoding="utf-8")
        assert "namespace ValheimMod" in plugin
        assert '"com.alice.valheimmod", "ValheimMod", "1.0.0"' in plugin
        assert (project / "src" / "Plugin.cs.template").exists()
        assert (project / "README.md").read_text(encoding="utf-8") == "{{MOD_NAME}} untouched"
        assert not (project / "bin" / "Old.cs").exists()

    def test_preserves_line_endings(self, project):
        TemplateEngine().process(project, MAPPING)
        data = (project / "Mod.csproj").read_bytes()
        assert b"\r\n" in data
        assert b"D:\\Steam\\steamapps\\common\\Valheim" in data

    def test_unresolved_reported(self, project):
        """测试未解析的占位符记录在结果中但不算失败"""
        outcomes = TemplateEngine().process(project, MAPPING)
        csproj = next(o for o in outcomes if o.output_path.name == "Mod.csproj")
        assert csproj.success
        assert csproj.unresolved == ["UNITY_VERSION"]

    def test_per_file_failure(self, project):
        """测试单个文件失败不影响其他文件"""
        (project / "bad.txt.template").write_bytes(b"\xff\xfe\x00broken")
        outcomes = TemplateEngine().process(project, MAPPING)

        bad = next(o for o in outcomes if o.template_path.name == "bad.txt.template")
        assert not bad.success
        assert bad.failure_reason == FailureReason.SUBSTITUTION_FAILED
        assert (project / "src" / "Plugin.cs").exists()

    def test_rerun_idempotent(self, project):
        engine = TemplateEngine()
        engine.process(project, MAPPING)
        first = (project / "src" / "Plugin.cs").read_bytes()
        engine.process(project, MAPPING)
        assert (project / "src" / "Plugin.cs").read_bytes() == first

    def test_cleanup(self, project):
        """测试只删除模板文件和计划文件"""
        TemplateEngine().process(project, MAPPING)
        removed, failed = cleanup_templates(project, "SETUP_PLAN.md")

        assert failed == []
        assert {p.name for p in removed} == {"Mod.csproj.template", "Plugin.cs.template", "SETUP_PLAN.md"}
        assert (project / "src" / "Plugin.cs").exists()
        assert (project / "README.md").exists()
        assert (project / "bin" / "Old.cs.template").exists()

    def test_collect_placeholders(self, project):
        assert collect_placeholders(project) == {
            "NAMESPACE", "MOD_GUID", "MOD_NAME", "MOD_VERSION", "GAME_PATH", "UNITY_VERSION",
        }
