"""时间轴编解码与帧率换算"""

import re
from typing import Optional, Tuple

from .errors import MalformedTimestampError

# 时长统一以整数纳秒表示
NANOSECOND = 1
MILLISECOND = 1_000_000 * NANOSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

# 00:00:25,442 --> 00:00:28,116  X1:63 X2:223 Y1:43 Y2:58
TIMESTAMP_PATTERN = re.compile(
    r"(\d{2}):(\d{2}):(\d{2}),(\d{3})\s-->\s(\d{2}):(\d{2}):(\d{2}),(\d{3})\s*(.*)$",
    re.ASCII,
)


def timestamp(hours: str, minutes: str, seconds: str, millis: str) -> int:
    """将时、分、秒、毫秒数字组合为纳秒时长（不校验取值范围）"""
    return (
        int(hours) * HOUR
        + int(minutes) * MINUTE
        + int(seconds) * SECOND
        + int(millis) * MILLISECOND
    )


def parse_timing_line(text: str) -> Tuple[int, int, Optional[str]]:
    """解析时间轴行

    Args:
        text: 形如 ``HH:MM:SS,mmm --> HH:MM:SS,mmm [位置信息]`` 的一行

    Returns:
        (开始时间, 结束时间, 位置信息)，时间单位为纳秒，无位置信息时为 None

    Raises:
        MalformedTimestampError: 行格式不符合要求
    """
    match = TIMESTAMP_PATTERN.match(text)
    if match is None:
        raise MalformedTimestampError(f"无法解析时间轴: {text!r}")

    groups = match.groups()
    start = timestamp(*groups[0:4])
    end = timestamp(*groups[4:8])
    position_info = groups[8] if groups[8] else None
    return start, end, position_info


def format_timestamp(duration: int) -> str:
    """格式化为 HH:MM:SS,mmm，不足一毫秒的部分截断，小时不按天回绕"""
    total_ms = duration // MILLISECOND
    ms = total_ms % 1000
    total_seconds = total_ms // 1000
    s = total_seconds % 60
    total_minutes = total_seconds // 60
    m = total_minutes % 60
    h = total_minutes // 60
    return f"{h:02d}:{m:02d}:{s:02d},{ms:03d}"


def rescale(duration: int, fps_src: float, fps_dst: float) -> int:
    """按帧率比例线性缩放时长，结果向零截断为整数纳秒"""
    coeff = fps_src / fps_dst
    return int(float(duration) * coeff)
