"""配置管理模块"""

import os
from pathlib import Path
from typing import Optional

# 帧率允许范围（闭区间）
FPS_MIN = 1.0
FPS_MAX = 120.0


class Settings:
    """应用配置"""

    def __init__(self, env_file: str = ".env") -> None:
        # 日志配置
        self.log_level: str = "INFO"
        self.log_file: Optional[str] = None  # 为空时不写日志文件

        # 字幕文本编码
        self.srt_encoding: str = "utf-8"

        self._load_env(env_file)
        self._ensure_directories()

    def _load_env(self, env_file: str) -> None:
        """加载 .env 文件与环境变量，环境变量优先"""
        # 映射环境变量到属性
        attr_mapping = {
            "log_level": "log_level",
            "log_file": "log_file",
            "srt_encoding": "srt_encoding",
        }

        values = {}
        if os.path.exists(env_file):
            with open(env_file, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#") and "=" in line:
                        key, value = line.split("=", 1)
                        values[key.strip().lower()] = value.strip()

        for key in attr_mapping:
            env_value = os.environ.get(key.upper())
            if env_value is not None:
                values[key] = env_value.strip()

        for key, value in values.items():
            attr_name = attr_mapping.get(key)
            if not attr_name:
                continue
            if key == "log_file":
                setattr(self, attr_name, value or None)
            elif value:
                setattr(self, attr_name, value)

    def _ensure_directories(self) -> None:
        """确保目录存在"""
        if self.log_file:
            Path(self.log_file).parent.mkdir(parents=True, exist_ok=True)


# 全局配置实例
settings = Settings()
