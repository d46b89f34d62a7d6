"""输入验证工具

命令行参数的验证全部在启动浏览器之前完成。
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from .exceptions import OutputDirectoryError, QueryValidationError, ScrollCountError

_INTEGER_RE = re.compile(r"^[+-]?\d+$")


def validate_query(query: str | None) -> str:
    """验证并清理搜索关键词

    Args:
        query: 原始关键词

    Returns:
        去除首尾空白后的关键词

    Raises:
        QueryValidationError: 关键词为空时
    """
    if query is None or not query.strip():
        raise QueryValidationError(query or "")
    return query.strip()


def parse_max_scrolls(value: str | int | None, default: int) -> int:
    """解析最大滚动次数

    None 或空字符串使用默认值；其余必须是非负整数。

    Raises:
        ScrollCountError: 当值不是非负整数时
    """
    if value is None:
        return default
    if isinstance(value, bool):
        raise ScrollCountError(value)
    if isinstance(value, int):
        number = value
    else:
        text = str(value).strip()
        if not text:
            return default
        if not _INTEGER_RE.match(text):
            raise ScrollCountError(value)
        number = int(text)

    if number < 0:
        raise ScrollCountError(value)
    return number


def validate_output_dir(path: str | Path | None) -> Path:
    """验证输出目录可写

    目录已存在时必须是可写目录；不存在时，最近的已存在上级目录必须可写
    （导出时会递归创建）。

    Returns:
        绝对路径

    Raises:
        OutputDirectoryError: 当目录不可写时
    """
    target = Path(path) if path else Path.cwd()
    target = target.expanduser().resolve()

    if target.exists():
        if not target.is_dir():
            raise OutputDirectoryError(str(target), "not a directory")
        if not os.access(target, os.W_OK):
            raise OutputDirectoryError(str(target))
        return target

    # 向上查找最近的已存在目录
    for parent in target.parents:
        if parent.exists():
            if not parent.is_dir() or not os.access(parent, os.W_OK):
                raise OutputDirectoryError(str(target), f"cannot create under {parent}")
            return target

    raise OutputDirectoryError(str(target), "no existing parent directory")


def sanitize_filename(filename: str) -> str:
    """清理文件名，移除不安全字符

    Args:
        filename: 原始文件名

    Returns:
        安全的文件名
    """
    unsafe_chars = r'[<>:"/\\|?*\x00-\x1f]'
    safe_name = re.sub(unsafe_chars, "_", filename)

    safe_name = safe_name.strip(". ")

    if not safe_name:
        safe_name = "unnamed"

    if len(safe_name) > 200:
        safe_name = safe_name[:200]

    return safe_name
