"""Common模块 - 公共工具和基础设施

该模块提供：
- 全局配置管理
- 日志系统
- 异常类
- 常量定义
- 输入验证
- 取消令牌
"""

from .config import config, Config
from .logger import get_logger, console
from .exceptions import (
    MapSpiderError,
    ValidationError,
    BrowserError,
    ResultListNotFoundError,
    DetailPageTimeoutError,
    ExtractionError,
    FieldPostProcessError,
    ExportError,
    RunCancelledError,
)
from .cancellation import CancellationToken
from .types import SearchTarget

__all__ = [
    # 配置
    "config",
    "Config",
    # 日志
    "get_logger",
    "console",
    # 异常
    "MapSpiderError",
    "ValidationError",
    "BrowserError",
    "ResultListNotFoundError",
    "DetailPageTimeoutError",
    "ExtractionError",
    "FieldPostProcessError",
    "ExportError",
    "RunCancelledError",
    # 运行时
    "CancellationToken",
    "SearchTarget",
]
