"""主程序入口"""

import argparse
import codecs
import io
import os
import sys
from pathlib import Path
from typing import IO, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from rich.console import Console

from .core.errors import ConfigurationError, IOFailureError, SrtStretchError
from .core.parser import UTF8_BOM, BlockReader, strip_bom
from .core.serializer import LINE_TERMINATOR, write_block
from .utils.config import FPS_MAX, FPS_MIN, settings
from .utils.logger import logger

console = Console()

# 字段名 -> 命令行参数名
_FLAG_NAMES = {
    "input_path": "--in",
    "output_path": "--out",
    "fps_in": "--infps",
    "fps_out": "--outfps",
    "encoding": "--encoding",
}


class StretchOptions(BaseModel):
    """一次转换的参数"""

    input_path: Path = Field(..., description="源字幕文件路径")
    output_path: Path = Field(..., description="输出字幕文件路径")
    fps_in: float = Field(..., ge=FPS_MIN, le=FPS_MAX, description="源字幕帧率")
    fps_out: float = Field(..., ge=FPS_MIN, le=FPS_MAX, description="目标帧率")
    encoding: str = Field("utf-8", description="字幕文本编码")

    @field_validator("encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        try:
            name = codecs.lookup(value).name
        except LookupError:
            raise ValueError(f"未知编码: {value}")
        # BOM 由输入决定，不能由编码器额外写入；按字节 \n 分行要求 ASCII 兼容
        if name == "utf-8-sig" or name.startswith(("utf-16", "utf-32")):
            raise ValueError(f"不支持的编码: {value}")
        return value

    @classmethod
    def from_args(cls, **kwargs) -> "StretchOptions":
        """创建参数对象，校验失败时抛出 ConfigurationError"""
        try:
            return cls(**kwargs)
        except ValidationError as e:
            raise ConfigurationError("; ".join(_describe_errors(e))) from None


def _describe_errors(error: ValidationError) -> List[str]:
    messages = []
    for item in error.errors():
        field = str(item["loc"][0]) if item["loc"] else ""
        flag = _FLAG_NAMES.get(field, field)
        if field in ("fps_in", "fps_out") and item["type"] in (
            "greater_than_equal",
            "less_than_equal",
        ):
            messages.append(f"{flag} 应在 {FPS_MIN:g} 到 {FPS_MAX:g} 之间")
        else:
            messages.append(f"{flag}: {item['msg']}")
    return messages


def _write_separator(sink: IO[str]) -> None:
    try:
        sink.write(LINE_TERMINATOR)
    except OSError as e:
        raise IOFailureError(f"写入输出失败: {str(e)}") from e


def stretch_stream(
    src: IO[bytes],
    dst: IO[bytes],
    fps_src: float,
    fps_dst: float,
    encoding: Optional[str] = None,
) -> int:
    """从 src 读取 SRT，按帧率比例缩放时间轴后写入 dst

    Args:
        src: 可读的二进制流
        dst: 可写的二进制流，返回时不会被关闭
        fps_src: 源帧率
        fps_dst: 目标帧率
        encoding: 文本编码，默认使用配置中的 SRT_ENCODING

    Returns:
        写入的字幕块数量
    """
    encoding = encoding or settings.srt_encoding

    has_bom, raw_lines = strip_bom(src)
    if has_bom:
        try:
            dst.write(UTF8_BOM)
        except OSError as e:
            raise IOFailureError(f"写入输出失败: {str(e)}") from e

    sink = io.TextIOWrapper(
        dst, encoding=encoding, errors="surrogateescape", newline="", write_through=True
    )
    count = 0
    try:
        for block in BlockReader(raw_lines, encoding):
            block.stretch(fps_src, fps_dst)
            write_block(block, sink)
            _write_separator(sink)
            count += 1
    finally:
        # 不关闭调用方的流
        sink.detach()

    return count


def _same_file(first: Path, second: Path) -> bool:
    if Path(first).resolve() == Path(second).resolve():
        return True
    try:
        return os.path.samefile(first, second)
    except OSError:
        return False


def stretch_file(
    input_path: Path,
    output_path: Path,
    fps_src: float,
    fps_dst: float,
    encoding: Optional[str] = None,
) -> int:
    """转换字幕文件，输出文件已存在时覆盖"""
    logger.info(f"开始转换字幕: {input_path} ({fps_src:g} fps -> {fps_dst:g} fps)")

    if _same_file(input_path, output_path):
        raise ConfigurationError(f"输出文件不能与输入文件相同: {output_path}")

    try:
        src = open(input_path, "rb")
    except OSError as e:
        raise IOFailureError(f"无法打开输入文件: {str(e)}") from e

    with src:
        try:
            dst = open(output_path, "wb")
        except OSError as e:
            raise IOFailureError(f"无法创建输出文件: {str(e)}") from e

        try:
            with dst:
                count = stretch_stream(src, dst, fps_src, fps_dst, encoding)
        except OSError as e:
            raise IOFailureError(f"写入输出文件失败: {str(e)}") from e

    if count == 0:
        logger.warning(f"输入文件中没有字幕块: {input_path}")
    logger.info(f"字幕转换完成: {output_path}, 共 {count} 条")
    return count


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="srt-stretch",
        description="按帧率比例缩放 SRT 字幕时间轴，保留 BOM 与位置信息。",
    )
    parser.add_argument("--in", dest="input", required=True, metavar="FILE", help="源 SRT 文件路径")
    parser.add_argument("--out", dest="output", required=True, metavar="FILE", help="输出 SRT 文件路径")
    parser.add_argument("--infps", type=float, required=True, help="源字幕的帧率 (1-120)")
    parser.add_argument("--outfps", type=float, required=True, help="目标帧率 (1-120)")
    parser.add_argument(
        "--encoding",
        type=str,
        default=None,
        help="字幕文本编码（默认: utf-8，可通过环境变量 SRT_ENCODING 配置）",
    )
    parser.add_argument("--verbose", action="store_true", help="输出调试日志")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logger.set_level("DEBUG")

    try:
        options = StretchOptions.from_args(
            input_path=args.input,
            output_path=args.output,
            fps_in=args.infps,
            fps_out=args.outfps,
            encoding=args.encoding or settings.srt_encoding,
        )
        count = stretch_file(
            options.input_path,
            options.output_path,
            options.fps_in,
            options.fps_out,
            options.encoding,
        )
    except ConfigurationError as e:
        logger.error(f"参数错误: {str(e)}")
        return 1
    except SrtStretchError as e:
        logger.error(f"字幕转换失败: {str(e)}")
        return 1

    console.print(f"✅ 已写入 {count} 条字幕: {options.output_path}", style="green")
    return 0


# CLI入口点
def cli() -> None:
    """命令行入口"""
    sys.exit(main())


if __name__ == "__main__":
    cli()
