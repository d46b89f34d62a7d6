"""日志系统

所有 mapspider 日志器共用一个 RichHandler 输出到终端，进度信息使用 rich markup 着色。
浏览器引擎沿用 loguru，--log-file 会同时接管两边的输出。
"""

from __future__ import annotations

import logging
import os

from loguru import logger as engine_logger
from rich.console import Console
from rich.logging import RichHandler

console = Console()

FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"

_console_handler: RichHandler | None = None


def get_log_level() -> int:
    """LOG_LEVEL 环境变量对应的级别，无法识别时为 INFO"""
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def _shared_console_handler() -> RichHandler:
    global _console_handler
    if _console_handler is None:
        _console_handler = RichHandler(
            console=console,
            show_path=False,
            markup=True,
            rich_tracebacks=True,
            tracebacks_show_locals=os.getenv("LOG_SHOW_LOCALS", "false").lower() == "true",
        )
        _console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        _console_handler.setLevel(get_log_level())
    return _console_handler


def get_logger(name: str) -> logging.Logger:
    """获取挂好终端输出的日志器

    日志器不向上传播，同名重复调用不会重复添加处理器。

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("[green]Found 12 URLs to scrape.[/green]")
    """
    logger = logging.getLogger(name)
    handler = _shared_console_handler()
    if handler not in logger.handlers:
        logger.addHandler(handler)
        logger.setLevel(get_log_level())
        logger.propagate = False
    return logger


def setup_file_logging(
    log_file: str,
    prefix: str = "mapspider",
    level: int = logging.DEBUG,
) -> logging.Handler:
    """为项目内所有日志器添加文件输出

    各模块日志器不向上传播，因此文件处理器需要挂到每个已创建的日志器上。
    浏览器引擎使用 loguru，同时为其添加同一文件作为输出。

    Args:
        log_file: 日志文件路径
        prefix: 日志器名称前缀
        level: 文件日志级别

    Returns:
        新添加的文件处理器
    """
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    for name in list(logging.root.manager.loggerDict):
        if name != prefix and not name.startswith(f"{prefix}."):
            continue
        logger = logging.getLogger(name)
        logger.addHandler(file_handler)
        # 终端级别由共享处理器控制，日志器本身放开到文件级别
        if logger.level > level:
            logger.setLevel(level)

    engine_logger.add(log_file, level=logging.getLevelName(level), encoding="utf-8")
    return file_handler
