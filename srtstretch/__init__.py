"""SRT 字幕帧率转换工具"""

__version__ = "0.1.0"
