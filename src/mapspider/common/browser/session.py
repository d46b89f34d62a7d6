"""浏览器会话管理"""

from __future__ import annotations

from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncGenerator

from playwright.async_api import Page

from ..config import config
from ..logger import get_logger
from .engine import BrowserEngine

logger = get_logger(__name__)


class BrowserSession:
    """浏览器会话管理器

    持有一个结果列表页（整个运行期间保持打开），
    并按需为每个详情链接发放独立的页面。
    """

    def __init__(
        self,
        headless: bool | None = None,
        viewport_width: int | None = None,
        viewport_height: int | None = None,
        slow_mo: int | None = None,
        engine: BrowserEngine | None = None,
    ):
        self.headless = headless if headless is not None else config.browser.headless
        self.viewport_width = viewport_width or config.browser.viewport_width
        self.viewport_height = viewport_height or config.browser.viewport_height
        self.slow_mo = slow_mo if slow_mo is not None else config.browser.slow_mo

        self._engine = engine
        self._stack: AsyncExitStack | None = None
        self._page: Page | None = None

    @property
    def viewport(self) -> dict[str, int]:
        return {"width": self.viewport_width, "height": self.viewport_height}

    async def start(self) -> Page:
        """启动浏览器并返回列表页 Page"""
        if self._engine is None:
            self._engine = BrowserEngine(
                default_headless=self.headless,
                default_viewport=self.viewport,
                default_browser_type=config.browser.browser_type,
                max_retries=config.browser.launch_retries,
                default_timeout=config.browser.timeout_ms,
                slow_mo=self.slow_mo,
            )

        self._stack = AsyncExitStack()
        self._page = await self._stack.enter_async_context(
            self._engine.page(viewport=self.viewport, timeout=config.browser.timeout_ms)
        )
        logger.debug(f"Browser session started (headless={self.headless})")
        return self._page

    async def stop(self) -> None:
        """关闭列表页和浏览器"""
        try:
            if self._stack is not None:
                await self._stack.aclose()
        finally:
            self._stack = None
            self._page = None
            if self._engine is not None:
                await self._engine.close()

    @property
    def page(self) -> Page | None:
        return self._page

    async def navigate(self, url: str, wait_until: str = "load") -> None:
        """列表页导航到指定 URL"""
        if not self._page:
            raise RuntimeError("Browser session not started")
        await self._page.goto(url, wait_until=wait_until)

    @asynccontextmanager
    async def detail_page(self) -> AsyncGenerator[Page, None]:
        """打开一个独立的详情页，退出时无论成败都会关闭"""
        if self._engine is None:
            raise RuntimeError("Browser session not started")
        async with self._engine.page(
            viewport=self.viewport,
            timeout=config.extractor.detail_navigation_timeout_ms,
        ) as page:
            yield page


@asynccontextmanager
async def create_browser_session(
    headless: bool | None = None,
    viewport_width: int | None = None,
    viewport_height: int | None = None,
) -> AsyncGenerator[BrowserSession, None]:
    """创建浏览器会话的上下文管理器"""
    session = BrowserSession(
        headless=headless,
        viewport_width=viewport_width,
        viewport_height=viewport_height,
    )
    try:
        await session.start()
        yield session
    finally:
        await session.stop()
