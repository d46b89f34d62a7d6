"""自定义异常类

定义项目中使用的所有自定义异常，用于更精细的错误处理。
"""

from __future__ import annotations


class MapSpiderError(Exception):
    """MapSpider 基础异常类

    所有自定义异常的基类。
    """
    pass


class ValidationError(MapSpiderError):
    """参数验证失败（在启动浏览器之前抛出）"""
    pass


class QueryValidationError(ValidationError):
    """搜索关键词无效"""
    def __init__(self, query: str, reason: str = "must not be empty"):
        super().__init__(f"Invalid search query {query!r}: {reason}")
        self.query = query
        self.reason = reason


class ScrollCountError(ValidationError):
    """最大滚动次数无效"""
    def __init__(self, value: object):
        super().__init__(
            f"The number of scrolls must be a non-negative integer, got {value!r}"
        )
        self.value = value


class OutputDirectoryError(ValidationError):
    """输出目录不可写"""
    def __init__(self, path: str, reason: str = "no write access"):
        super().__init__(f"Output directory {path}: {reason}")
        self.path = path
        self.reason = reason


class BrowserError(MapSpiderError):
    """浏览器相关错误的基类"""
    pass


class ResultListNotFoundError(BrowserError):
    """结果列表在超时时间内未出现

    没有任何结果条目时无法继续，属于致命错误。
    """
    def __init__(self, selector: str, timeout_ms: int):
        super().__init__(f"Result list {selector!r} did not appear within {timeout_ms}ms")
        self.selector = selector
        self.timeout_ms = timeout_ms


class DetailPageTimeoutError(BrowserError):
    """详情页标志元素在超时时间内未出现"""
    def __init__(self, url: str, selector: str, timeout_ms: int):
        super().__init__(
            f"Detail marker {selector!r} did not appear within {timeout_ms}ms: {url}"
        )
        self.url = url
        self.selector = selector
        self.timeout_ms = timeout_ms


class ExtractionError(MapSpiderError):
    """详情页提取相关错误的基类"""
    pass


class FieldPostProcessError(ExtractionError):
    """字段后处理失败

    评分和电话的后处理假定原始值存在，缺失时抛出。
    """
    def __init__(self, field_name: str, url: str = ""):
        super().__init__(f"Field {field_name!r} is missing and cannot be post-processed: {url}")
        self.field_name = field_name
        self.url = url


class AggregatorSealedError(MapSpiderError):
    """结果集合已导出，不允许继续追加"""
    pass


class ExportError(MapSpiderError):
    """CSV 导出失败"""
    def __init__(self, path: str, message: str = "write failed"):
        super().__init__(f"Failed to export {path}: {message}")
        self.path = path


class RunCancelledError(MapSpiderError):
    """运行被用户中断"""
    def __init__(self, message: str = "Process interrupted"):
        super().__init__(message)
