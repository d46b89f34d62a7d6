"""
异步浏览器引擎

管理单个 Browser 实例的生命周期，并以异步上下文管理器的形式发放页面。
每个页面拥有独立的 BrowserContext，退出上下文时页面与上下文一并关闭。
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Literal, Optional

from loguru import logger
from playwright.async_api import Browser, Page, Playwright, async_playwright
from playwright_stealth import Stealth


class BrowserEngine:
    """
    异步浏览器引擎：
    1. 懒启动 Browser 实例（带重试）。
    2. 所有通过 page() 获取的页面都运行在独立的 context 中。
    3. close() 彻底释放 Browser 与 Playwright。
    """

    def __init__(
        self,
        default_headless: bool = True,
        default_viewport: Optional[Dict[str, int]] = None,
        default_user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/128.0.0.0 Safari/537.36",
        default_launch_args: Optional[List[str]] = None,
        default_browser_type: Literal["chromium", "firefox", "webkit"] = "chromium",
        max_retries: int = 2,
        default_timeout: int = 5000,
        slow_mo: int = 0,
    ):
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._stealth_context: Optional[Any] = None
        self._lock = asyncio.Lock()

        self.default_headless = default_headless
        self.default_viewport = default_viewport or {"width": 990, "height": 708}
        self.default_user_agent = default_user_agent
        self.default_browser_type = default_browser_type
        self.max_retries = max_retries
        self.default_timeout = default_timeout
        self.slow_mo = slow_mo

        self.default_launch_args = default_launch_args or [
            "--no-sandbox",
            "--disable-setuid-sandbox",
            "--disable-blink-features=AutomationControlled",
            "--disable-infobars",
            "--disable-extensions",
            "--no-first-run",
        ]

    async def _ensure_browser(self) -> Browser:
        """
        确保 Browser 实例存活且可用

        首次调用时启动 Playwright（使用 Stealth 包装），
        浏览器启动失败时最多重试 max_retries 次。
        """
        async with self._lock:
            if self._browser and self._browser.is_connected():
                return self._browser

            if not self._playwright:
                self._stealth_context = Stealth().use_async(async_playwright())
                self._playwright = await self._stealth_context.__aenter__()

            for attempt in range(self.max_retries + 1):
                try:
                    launcher = getattr(self._playwright, self.default_browser_type)
                    self._browser = await launcher.launch(
                        headless=self.default_headless,
                        args=self.default_launch_args,
                        slow_mo=self.slow_mo,
                    )
                    logger.debug(
                        f"[Engine] {self.default_browser_type} launched (headless={self.default_headless})"
                    )
                    break
                except Exception as e:
                    if attempt == self.max_retries:
                        raise
                    logger.warning(f"[Engine] Browser launch failed ({attempt + 1}): {e}")

            return self._browser

    @asynccontextmanager
    async def page(
        self,
        viewport: Optional[Dict[str, int]] = None,
        timeout: Optional[int] = None,
        **context_kwargs,
    ) -> AsyncGenerator[Page, None]:
        """
        获取一个独立 context 中的 Page 对象。

        Args:
            viewport: 视口大小，默认使用引擎配置
            timeout: 页面默认超时（毫秒）
            **context_kwargs: 传递给 browser.new_context 的其他参数
        """
        browser = await self._ensure_browser()

        options = {
            "viewport": viewport or self.default_viewport,
            "user_agent": self.default_user_agent,
            "ignore_https_errors": True,
            **context_kwargs,
        }

        context = await browser.new_context(**options)
        try:
            page = await context.new_page()
            page.set_default_timeout(timeout or self.default_timeout)
            try:
                yield page
            finally:
                await page.close()
        finally:
            await context.close()

    async def close(self):
        """彻底关闭引擎"""
        if self._browser:
            try:
                await self._browser.close()
            except Exception as e:
                logger.debug(f"[Engine] Browser already closed: {e}")
        if self._stealth_context:
            await self._stealth_context.__aexit__(None, None, None)
        self._browser = None
        self._playwright = None
        self._stealth_context = None
