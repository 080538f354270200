"""
输出门面单元测试
"""

import io

from rich.console import Console

from modforge.utils.logging import LogStage, OutputFacade, OutputLevel


def make_facade():
    out, err = io.StringIO(), io.StringIO()
    facade = OutputFacade(
        console=Console(file=out, width=200, color_system=None),
        error_console=Console(file=err, width=200, color_system=None),
    )
    return facade, out, err


class TestOutputFacade:
    """OutputFacade 测试"""

    def test_level_filter(self):
        """测试低于当前级别的消息被过滤"""
        facade, out, _err = make_facade()
        facade.debug("hidden")
        facade.info("shown", stage=LogStage.SCAN)
        assert "hidden" not in out.getvalue()
        assert "SCAN" in out.getvalue()

        facade.set_level(OutputLevel.DEBUG)
        facade.debug("now visible")
        assert "now visible" in out.getvalue()

    def test_errors_go_to_stderr(self):
        facade, out, err = make_facade()
        facade.error("boom")
        assert "boom" in err.getvalue()
        assert "boom" not in out.getvalue()

    def test_log_file(self, tmp_path):
        """测试日志文件追加写入纯文本"""
        facade, _out, _err = make_facade()
        log_path = tmp_path / "logs" / "modforge.log"
        facade.set_log_file(log_path)
        facade.warning("careful", stage=LogStage.DOWNLOAD)
        facade.close()

        line = log_path.read_text(encoding="utf-8").strip()
        assert line.endswith("[WARNING] [DOWNLOAD] careful")

    def test_unknown_level_ignored(self):
        facade, _out, _err = make_facade()
        facade.set_level("VERBOSE")
        assert facade.level == OutputLevel.INFO

    def test_markup_in_message_is_literal(self):
        """测试消息中的方括号按原文输出"""
        facade, out, _err = make_facade()
        facade.warning(r"路径中没有 Unity 数据目录: C:\mods[/x]", stage=LogStage.SCAN)
        facade.info("D:/Games/[Demo] Game")
        assert r"C:\mods[/x]" in out.getvalue()
        assert "[Demo] Game" in out.getvalue()
