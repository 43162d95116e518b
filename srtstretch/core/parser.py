"""SRT 字幕块解析模块"""

import io
import re
from typing import IO, Iterable, Iterator, Optional, Tuple, Union

from ..utils.config import settings
from ..utils.logger import logger
from .errors import IOFailureError, MalformedIndexError, MalformedTimestampError
from .models import Block
from .timestamp import parse_timing_line

UTF8_BOM = b"\xef\xbb\xbf"

INDEX_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)

Line = Union[str, bytes]


def strip_bom(stream: IO[bytes]) -> Tuple[bool, Iterator[bytes]]:
    """检测并去除开头的 UTF-8 BOM

    Returns:
        (是否存在 BOM, 去除 BOM 后的原始行迭代器)
    """
    try:
        head = stream.read(len(UTF8_BOM))
    except OSError as e:
        raise IOFailureError(f"读取文件失败: {str(e)}") from e

    if head == UTF8_BOM:
        logger.debug("检测到 UTF-8 BOM")
        return True, _raw_lines(b"", stream)
    return False, _raw_lines(head, stream)


def _raw_lines(head: bytes, stream: IO[bytes]) -> Iterator[bytes]:
    """把预读的字节按原有行边界放回流的开头"""
    for piece in io.BytesIO(head):
        if piece.endswith(b"\n"):
            yield piece
        else:
            # 预读停在行中间，补齐该行剩余部分
            yield piece + stream.readline()
    yield from stream


def _strip_terminator(line: str) -> str:
    # 只按 \n 分行，并去掉紧邻的一个 \r
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def iter_lines(
    stream: Iterable[Line],
    encoding: Optional[str] = None,
    errors: str = "surrogateescape",
) -> Iterator[str]:
    """逐行读取，去除行结束符并解码为文本"""
    encoding = encoding or settings.srt_encoding
    iterator = iter(stream)
    while True:
        try:
            raw = next(iterator)
        except StopIteration:
            return
        except OSError as e:
            raise IOFailureError(f"读取文件失败: {str(e)}") from e

        if isinstance(raw, bytes):
            raw = raw.decode(encoding, errors)
        yield _strip_terminator(raw)


def parse_index(line: str, line_no: Optional[int] = None) -> int:
    """解析字幕序号行"""
    if not INDEX_PATTERN.fullmatch(line):
        raise MalformedIndexError(f"无法解析字幕序号: {line!r}", line_no)
    return int(line)


class BlockReader:
    """按块读取 SRT 字幕，单次遍历，读完即止"""

    def __init__(self, stream: Iterable[Line], encoding: Optional[str] = None) -> None:
        self._lines = iter_lines(stream, encoding)
        self.line_no = 0

    def _next_line(self) -> Optional[str]:
        line = next(self._lines, None)
        if line is not None:
            self.line_no += 1
        return line

    def read_block(self) -> Optional[Block]:
        """读取下一个字幕块，流正常结束时返回 None"""
        # 跳过空行
        line = self._next_line()
        while line == "":
            line = self._next_line()

        if line is None:
            return None

        index = parse_index(line, self.line_no)

        timing = self._next_line()
        if timing is None:
            raise MalformedTimestampError("序号之后缺少时间轴行", self.line_no)
        try:
            start, end, position_info = parse_timing_line(timing)
        except MalformedTimestampError as e:
            raise MalformedTimestampError(e.message, self.line_no) from None

        # 读取字幕文本，直到空行或文件结束
        text = []
        while True:
            line = self._next_line()
            if not line:
                break
            text.append(line)

        logger.debug(f"读取字幕块 #{index}: {len(text)} 行文本")
        return Block(
            index=index,
            start=start,
            end=end,
            position_info=position_info,
            lines=text,
        )

    def __iter__(self) -> Iterator[Block]:
        while True:
            block = self.read_block()
            if block is None:
                return
            yield block

