"""转换流程与命令行测试"""

import io
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from srtstretch.core.errors import ConfigurationError, IOFailureError, MalformedIndexError
from srtstretch.main import StretchOptions, main, stretch_file, stretch_stream
from srtstretch.utils.logger import logger

BOM = b"\xef\xbb\xbf"
SRT_BYTES = (
    b"1\r\n00:00:23,065 --> 00:00:25,363\r\nJennifer, this is Carrie\r\nMathison and Peter Quinn.\r\n\r\n"
    b"2\r\n00:00:25,442 --> 00:00:28,116 X1:63 X2:223 Y1:43 Y2:58\r\nThey were there with Sandy\r\nwhen it happened.\r\n\r\n"
)


@pytest.fixture
def srt_file(tmp_path):
    """写入示例字幕文件"""
    path = tmp_path / "input.srt"
    path.write_bytes(SRT_BYTES)
    return path


class TestStretchStream:
    """stretch_stream 测试"""

    def test_identity_at_equal_fps(self):
        dst = io.BytesIO()
        count = stretch_stream(io.BytesIO(SRT_BYTES), dst, 25, 25)
        assert count == 2
        assert dst.getvalue() == SRT_BYTES

    def test_bom_preserved(self):
        dst = io.BytesIO()
        stretch_stream(io.BytesIO(BOM + SRT_BYTES), dst, 25, 25)
        assert dst.getvalue() == BOM + SRT_BYTES

    def test_no_bom_added(self):
        dst = io.BytesIO()
        stretch_stream(io.BytesIO(SRT_BYTES), dst, 25, 25)
        assert not dst.getvalue().startswith(BOM)

    def test_rescaled(self):
        dst = io.BytesIO()
        stretch_stream(io.BytesIO(SRT_BYTES), dst, 23.967, 25)
        lines = dst.getvalue().split(b"\r\n")
        assert lines[1] == b"00:00:22,111 --> 00:00:24,315"
        assert lines[6].endswith(b" X1:63 X2:223 Y1:43 Y2:58")

    def test_separators_normalized(self):
        src = SRT_BYTES.replace(b"\r\n\r\n2", b"\r\n\r\n\r\n\r\n2").rstrip(b"\r\n")
        dst = io.BytesIO()
        stretch_stream(io.BytesIO(src), dst, 25, 25)
        assert dst.getvalue() == SRT_BYTES

    def test_destination_left_open(self):
        dst = io.BytesIO()
        stretch_stream(io.BytesIO(SRT_BYTES), dst, 25, 25)
        assert not dst.closed

    def test_partial_output_kept_on_error(self):
        src = SRT_BYTES + b"oops\r\n"
        dst = io.BytesIO()
        with pytest.raises(MalformedIndexError):
            stretch_stream(io.BytesIO(src), dst, 25, 25)
        assert dst.getvalue() == SRT_BYTES

    def test_empty_input(self):
        dst = io.BytesIO()
        assert stretch_stream(io.BytesIO(b""), dst, 25, 30) == 0
        assert dst.getvalue() == b""


class TestStretchFile:
    """stretch_file 测试"""

    def test_writes_output(self, srt_file, tmp_path):
        output = tmp_path / "output.srt"
        assert stretch_file(srt_file, output, 25, 25) == 2
        assert output.read_bytes() == SRT_BYTES

    def test_missing_input(self, tmp_path):
        with pytest.raises(IOFailureError):
            stretch_file(tmp_path / "missing.srt", tmp_path / "out.srt", 25, 25)

    def test_output_directory_missing(self, srt_file, tmp_path):
        with pytest.raises(IOFailureError):
            stretch_file(srt_file, tmp_path / "nope" / "out.srt", 25, 25)


class TestStretchOptions:
    """参数校验测试"""

    def test_valid(self):
        options = StretchOptions.from_args(
            input_path="a.srt", output_path="b.srt", fps_in=1, fps_out=120
        )
        assert options.fps_in == 1.0
        assert options.fps_out == 120.0
        assert options.input_path == Path("a.srt")

    @pytest.mark.parametrize("fps_in,fps_out", [(0.5, 25), (25, 120.5), (0, 0), (-1, 25)])
    def test_out_of_range(self, fps_in, fps_out):
        with pytest.raises(ConfigurationError) as exc_info:
            StretchOptions.from_args(
                input_path="a.srt", output_path="b.srt", fps_in=fps_in, fps_out=fps_out
            )
        assert "1 到 120" in str(exc_info.value)

    def test_unknown_encoding(self):
        with pytest.raises(ConfigurationError) as exc_info:
            StretchOptions.from_args(
                input_path="a.srt",
                output_path="b.srt",
                fps_in=25,
                fps_out=25,
                encoding="no-such-codec",
            )
        assert "--encoding" in str(exc_info.value)


class TestCli:
    """命令行测试"""

    def test_success(self, srt_file, tmp_path):
        output = tmp_path / "out.srt"
        code = main(["--in", str(srt_file), "--out", str(output), "--infps", "23.967", "--outfps", "25"])
        assert code == 0
        assert output.read_bytes().split(b"\r\n")[1] == b"00:00:22,111 --> 00:00:24,315"

    def test_fps_out_of_range(self, srt_file, tmp_path):
        output = tmp_path / "out.srt"
        code = main(["--in", str(srt_file), "--out", str(output), "--infps", "200", "--outfps", "25"])
        assert code == 1
        assert not output.exists()

    def test_malformed_input(self, tmp_path):
        bad = tmp_path / "bad.srt"
        bad.write_bytes(b"x\r\n00:00:01,000 --> 00:00:02,000\r\n")
        code = main(["--in", str(bad), "--out", str(tmp_path / "out.srt"), "--infps", "25", "--outfps", "24"])
        assert code == 1

    def test_missing_flags(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--in", "a.srt"])
        assert exc_info.value.code == 2


class TestSafetyChecks:
    """输入输出相关的检查"""

    def test_output_same_as_input(self, srt_file):
        with pytest.raises(ConfigurationError):
            stretch_file(srt_file, srt_file, 25, 25)
        assert srt_file.read_bytes() == SRT_BYTES

    def test_output_same_as_input_relative(self, srt_file, monkeypatch):
        monkeypatch.chdir(srt_file.parent)
        with pytest.raises(ConfigurationError):
            stretch_file(Path(srt_file.name), srt_file, 25, 25)
        assert srt_file.read_bytes() == SRT_BYTES

    def test_cli_same_path(self, srt_file):
        code = main(["--in", str(srt_file), "--out", str(srt_file), "--infps", "25", "--outfps", "24"])
        assert code == 1
        assert srt_file.read_bytes() == SRT_BYTES

    @pytest.mark.parametrize("encoding", ["utf-8-sig", "utf-16", "utf-32-le"])
    def test_bom_writing_encoding_rejected(self, encoding):
        with pytest.raises(ConfigurationError):
            StretchOptions.from_args(
                input_path="a.srt", output_path="b.srt", fps_in=25, fps_out=25, encoding=encoding
            )

    def test_latin1_accepted(self):
        options = StretchOptions.from_args(
            input_path="a.srt", output_path="b.srt", fps_in=25, fps_out=25, encoding="latin-1"
        )
        assert options.encoding == "latin-1"

    def test_empty_input_warns(self, tmp_path, monkeypatch):
        empty = tmp_path / "empty.srt"
        empty.write_bytes(b"")
        warnings = []
        monkeypatch.setattr(logger, "warning", warnings.append)
        assert stretch_file(empty, tmp_path / "out.srt", 25, 24) == 0
        assert len(warnings) == 1
        assert (tmp_path / "out.srt").read_bytes() == b""
