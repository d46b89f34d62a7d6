"""pytest 全局配置和 fixtures

提供模拟的 Playwright 页面与浏览器会话，测试不会启动真实浏览器。
"""

from __future__ import annotations

import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Callable

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

# 添加项目路径
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mapspider.common.config import config  # noqa: E402
from mapspider.crawler.link_harvester import HARVEST_LINKS_JS  # noqa: E402
from mapspider.crawler.list_exhauster import (  # noqa: E402
    COUNT_ITEMS_JS,
    END_OF_LIST_JS,
    FINAL_SCROLL_JS,
    SCROLL_CONTAINER_JS,
)
from mapspider.field.place_extractor import EXTRACT_PLACE_JS  # noqa: E402


PLACE_URL = "https://www.google.com/maps/place/"


def place_url(slug: str) -> str:
    return f"{PLACE_URL}{slug}/data=!4m7"


def full_place_payload(name: str = "Bäckerei Schmidt") -> dict[str, Any]:
    """字段齐全的详情页脚本返回值"""
    return {
        "name": name,
        "category": "Bakery",
        "starRatingLabel": "4,6 Sterne ",
        "address": "Hauptstraße 1, 10115 Berlin",
        "phone": "\ue0b0+49 30 1234567",
        "website": ["https://baeckerei-schmidt.de/"],
    }


# ============================================================================
# 列表页
# ============================================================================


class FakeListPage:
    """模拟结果列表页

    Args:
        list_present: 结果条目是否会出现
        end_after: 第几次滚动后出现到底提示（None 表示永不出现）
        container: 是否能找到滚动容器
        hrefs: 收集链接时返回的 href 列表
        initial_items: 初始条目数
        items_per_scroll: 每次滚动新增条目数
        growth_stops_after: 滚动多少次之后不再增长（None 表示一直增长）
    """

    def __init__(
        self,
        list_present: bool = True,
        end_after: int | None = None,
        container: bool = True,
        hrefs: list[Any] | None = None,
        initial_items: int = 7,
        items_per_scroll: int = 7,
        growth_stops_after: int | None = None,
    ):
        self.list_present = list_present
        self.end_after = end_after
        self.container = container
        self.hrefs = list(hrefs or [])
        self.initial_items = initial_items
        self.items_per_scroll = items_per_scroll
        self.growth_stops_after = growth_stops_after

        self.scroll_attempts = 0
        self.final_scrolls = 0
        self.visited: list[str] = []
        self.scripts: list[str] = []

    @property
    def item_count(self) -> int:
        grown = self.scroll_attempts
        if self.growth_stops_after is not None:
            grown = min(grown, self.growth_stops_after)
        return self.initial_items + grown * self.items_per_scroll

    async def goto(self, url: str, **kwargs) -> None:
        self.visited.append(url)

    async def wait_for_selector(self, selector: str, timeout: int | None = None) -> None:
        if not self.list_present:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        if script == SCROLL_CONTAINER_JS:
            self.scripts.append("scroll")
            self.scroll_attempts += 1
            return self.container
        if script == END_OF_LIST_JS:
            self.scripts.append("end_check")
            return self.end_after is not None and self.scroll_attempts >= self.end_after
        if script == COUNT_ITEMS_JS:
            self.scripts.append("count")
            return self.item_count
        if script == FINAL_SCROLL_JS:
            self.scripts.append("final_scroll")
            self.final_scrolls += 1
            return True
        if script == HARVEST_LINKS_JS:
            self.scripts.append("harvest")
            return list(self.hrefs)
        raise AssertionError(f"unexpected script: {script[:40]}")


# ============================================================================
# 详情页与会话
# ============================================================================


class FakeDetailPage:
    """模拟详情页

    behaviours 中每个 URL 对应：
    - dict: evaluate 返回的字段
    - "timeout": 等待标志元素超时
    - Exception 实例: goto 时抛出
    - callable: evaluate 时调用，返回值作为字段
    """

    def __init__(self, behaviours: dict[str, Any]):
        self.behaviours = behaviours
        self.url: str | None = None
        self.closed = False
        self.goto_timeout: int | None = None
        self.wait_timeout: int | None = None

    async def goto(self, url: str, **kwargs) -> None:
        self.url = url
        self.goto_timeout = kwargs.get("timeout")
        behaviour = self.behaviours.get(url)
        if isinstance(behaviour, Exception):
            raise behaviour

    async def wait_for_selector(self, selector: str, timeout: int | None = None) -> None:
        self.wait_timeout = timeout
        if self.behaviours.get(self.url) == "timeout":
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        assert script == EXTRACT_PLACE_JS
        behaviour = self.behaviours.get(self.url)
        if callable(behaviour):
            return behaviour()
        return behaviour


class FakeSession:
    """模拟 BrowserSession：一个列表页 + 按需打开的详情页"""

    def __init__(
        self,
        list_page: FakeListPage | None = None,
        behaviours: dict[str, Any] | None = None,
    ):
        self.page = list_page or FakeListPage()
        self.behaviours = behaviours or {}
        self.opened: list[FakeDetailPage] = []
        self.open_now = 0
        self.max_open = 0
        self.navigated: list[str] = []
        self.stopped = False

    async def navigate(self, url: str, wait_until: str = "load") -> None:
        self.navigated.append(url)
        await self.page.goto(url)

    @asynccontextmanager
    async def detail_page(self):
        page = FakeDetailPage(self.behaviours)
        self.opened.append(page)
        self.open_now += 1
        self.max_open = max(self.max_open, self.open_now)
        try:
            yield page
        finally:
            page.closed = True
            self.open_now -= 1


def session_factory(session: FakeSession) -> Callable[..., Any]:
    """生成替换 create_browser_session 的工厂"""

    @asynccontextmanager
    async def _create(headless: bool | None = None, **kwargs):
        try:
            yield session
        finally:
            session.stopped = True

    return _create


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def fast_delays(monkeypatch):
    """测试中去掉固定等待"""
    monkeypatch.setattr(config.scroll, "scroll_settle_delay", 0.0)
    monkeypatch.setattr(config.scroll, "final_settle_delay", 0.0)
    monkeypatch.setattr(config.scroll, "no_growth_threshold", 0)
    monkeypatch.setattr(config.extractor, "strict_post_processing", True)


@pytest.fixture
def list_page():
    return FakeListPage()


@pytest.fixture
def temp_output_dir(tmp_path):
    """创建临时输出目录"""
    output_dir = tmp_path / "output"
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir
