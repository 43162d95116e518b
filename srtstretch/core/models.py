"""字幕数据模型"""

from dataclasses import dataclass, field
from typing import List, Optional

from .timestamp import rescale


@dataclass
class Block:
    """
    单条字幕块，对应 SRT 中的一个序号 + 时间轴 + 文本段落。

    时间单位为纳秒；position_info 为时间轴行末尾的位置信息，原样保留，
    没有时为 None。
    """

    index: int
    start: int
    end: int
    position_info: Optional[str] = None
    lines: List[str] = field(default_factory=list)

    def stretch(self, fps_src: float, fps_dst: float) -> None:
        """按帧率比例缩放开始与结束时间"""
        self.start = rescale(self.start, fps_src, fps_dst)
        self.end = rescale(self.end, fps_src, fps_dst)
