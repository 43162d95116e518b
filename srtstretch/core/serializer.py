"""SRT 字幕块序列化模块"""

from typing import IO

from .errors import IOFailureError
from .models import Block
from .timestamp import format_timestamp

LINE_TERMINATOR = "\r\n"
ARROW = " --> "


def format_block(block: Block) -> str:
    """把字幕块渲染为 SRT 文本，不含块之间的空行"""
    timing = format_timestamp(block.start) + ARROW + format_timestamp(block.end)
    if block.position_info is not None:
        timing += " " + block.position_info

    lines = [str(block.index), timing]
    lines.extend(block.lines)
    return "".join(line + LINE_TERMINATOR for line in lines)


def write_block(block: Block, sink: IO[str]) -> None:
    """写入一个字幕块"""
    try:
        sink.write(format_block(block))
    except OSError as e:
        raise IOFailureError(f"写入字幕块 #{block.index} 失败: {str(e)}") from e
