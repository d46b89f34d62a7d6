"""配置管理"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .constants import DEFAULT_END_OF_LIST_MARKER, DEFAULT_MAX_SCROLLS

# 加载 .env 文件
load_dotenv()


def _split_markers(raw: str | None) -> list[str]:
    """解析以 | 分隔的到底标记列表"""
    if not raw:
        return [DEFAULT_END_OF_LIST_MARKER]
    markers = [m.strip() for m in raw.split("|") if m.strip()]
    return markers or [DEFAULT_END_OF_LIST_MARKER]


class BrowserConfig(BaseModel):
    """浏览器配置"""

    headless: bool = Field(default_factory=lambda: os.getenv("HEADLESS", "true").lower() == "true")
    viewport_width: int = Field(default_factory=lambda: int(os.getenv("VIEWPORT_WIDTH", "990")))
    viewport_height: int = Field(default_factory=lambda: int(os.getenv("VIEWPORT_HEIGHT", "708")))
    slow_mo: int = Field(default_factory=lambda: int(os.getenv("SLOW_MO", "0")))
    timeout_ms: int = Field(default_factory=lambda: int(os.getenv("STEP_TIMEOUT_MS", "5000")))
    browser_type: str = Field(default_factory=lambda: os.getenv("BROWSER_TYPE", "chromium"))
    # 浏览器启动失败时的重试次数
    launch_retries: int = Field(default_factory=lambda: int(os.getenv("BROWSER_LAUNCH_RETRIES", "2")))


class ScrollConfig(BaseModel):
    """列表滚动配置"""

    # 最大滚动次数（命令行参数可覆盖）
    max_scrolls: int = Field(
        default_factory=lambda: int(os.getenv("MAX_SCROLLS", str(DEFAULT_MAX_SCROLLS)))
    )
    # 每次滚动后的等待时间（秒）
    scroll_settle_delay: float = Field(
        default_factory=lambda: float(os.getenv("SCROLL_SETTLE_DELAY", "2.0"))
    )
    # 结束滚动后的最后一次等待（秒）
    final_settle_delay: float = Field(
        default_factory=lambda: float(os.getenv("FINAL_SETTLE_DELAY", "1.5"))
    )
    # 等待结果列表出现的超时时间（毫秒）
    list_selector_timeout_ms: int = Field(
        default_factory=lambda: int(os.getenv("LIST_SELECTOR_TIMEOUT_MS", "5000"))
    )
    # 到底提示文本，多个用 | 分隔，任一出现即停止
    end_of_list_markers: list[str] = Field(
        default_factory=lambda: _split_markers(os.getenv("END_OF_LIST_MARKERS"))
    )
    # 连续多少次滚动条目数未增长后停止，0 表示关闭
    no_growth_threshold: int = Field(
        default_factory=lambda: int(os.getenv("NO_GROWTH_THRESHOLD", "0"))
    )


class ExtractorConfig(BaseModel):
    """详情页提取配置"""

    # 等待详情页标志元素的超时时间（毫秒）
    detail_selector_timeout_ms: int = Field(
        default_factory=lambda: int(os.getenv("DETAIL_SELECTOR_TIMEOUT_MS", "5000"))
    )
    # 详情页导航超时（毫秒），只约束 goto，不影响标志元素等待
    detail_navigation_timeout_ms: int = Field(
        default_factory=lambda: int(os.getenv("DETAIL_NAVIGATION_TIMEOUT_MS", "30000"))
    )
    # 评分/电话缺失时是否视为提取失败（跳过该条目）
    strict_post_processing: bool = Field(
        default_factory=lambda: os.getenv("STRICT_POST_PROCESSING", "true").lower() == "true"
    )


class OutputConfig(BaseModel):
    """导出配置"""

    encoding: str = Field(default_factory=lambda: os.getenv("CSV_ENCODING", "utf-8"))
    website_separator: str = Field(default_factory=lambda: os.getenv("WEBSITE_SEPARATOR", ","))


class Config(BaseModel):
    """全局配置"""

    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    scroll: ScrollConfig = Field(default_factory=ScrollConfig)
    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def load(cls) -> "Config":
        """加载配置"""
        return cls()


# 全局配置实例
config = Config.load()
