"""错误类型定义"""

from typing import Optional


class SrtStretchError(Exception):
    """所有错误的基类"""

    def __init__(self, message: str, line_no: Optional[int] = None) -> None:
        self.message = message
        self.line_no = line_no
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line_no is not None:
            return f"第 {self.line_no} 行: {self.message}"
        return self.message


class MalformedIndexError(SrtStretchError):
    """字幕块序号不是合法整数"""


class MalformedTimestampError(SrtStretchError):
    """时间轴行格式错误"""


class IOFailureError(SrtStretchError):
    """底层读写失败"""


class ConfigurationError(SrtStretchError):
    """命令行参数或配置错误"""
