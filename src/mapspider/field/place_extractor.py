"""
详情页字段提取器

逐个打开详情链接，等待详情面板渲染后一次性读取所有字段。
主要特点：
1. 严格顺序：同一时间只打开一个详情页，处理完立即关闭。
2. 单条隔离：任何一条链接失败只会跳过该条，不影响整体运行。
3. 字段独立：单个字段的选择器缺失只会得到 None。
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Iterable

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..common.cancellation import CancellationToken
from ..common.config import config
from ..common.constants import (
    ADDRESS_SELECTOR,
    CATEGORY_SELECTOR,
    DETAIL_READY_SELECTOR,
    INFO_ROW_SELECTOR,
    NAME_SELECTOR,
    PHONE_ICON_GLYPH,
    STAR_RATING_SELECTOR,
)
from ..common.exceptions import DetailPageTimeoutError, RunCancelledError
from ..common.logger import get_logger
from .aggregator import ResultAggregator
from .models import ExtractedRecord, RawPlaceFields, build_record

if TYPE_CHECKING:
    from ..common.browser.session import BrowserSession

logger = get_logger(__name__)


EXTRACT_PLACE_JS = """
(selectors) => {
    const read = (fn) => {
        try {
            const value = fn();
            return value === undefined ? null : value;
        } catch (e) {
            return null;
        }
    };
    const rows = () => Array.from(document.querySelectorAll(selectors.infoRow));

    return {
        name: read(() => {
            const el = document.querySelector(selectors.name);
            return el ? el.value : null;
        }),
        category: read(() => {
            const el = document.querySelector(selectors.category);
            return el ? el.textContent : null;
        }),
        starRatingLabel: read(() => {
            const el = document.querySelector(selectors.starRating);
            return el ? el.getAttribute("aria-label") : null;
        }),
        address: read(() => {
            const el = document.querySelector(selectors.address);
            return el ? el.textContent : null;
        }),
        phone: read(() => {
            const el = rows().find((row) => (row.textContent || "").includes(selectors.phoneGlyph));
            return el ? el.textContent : null;
        }),
        website: read(() => rows().filter((row) => row.href).map((row) => row.href)) || [],
    };
}
"""

PLACE_SELECTORS = {
    "name": NAME_SELECTOR,
    "category": CATEGORY_SELECTOR,
    "starRating": STAR_RATING_SELECTOR,
    "address": ADDRESS_SELECTOR,
    "infoRow": INFO_ROW_SELECTOR,
    "phoneGlyph": PHONE_ICON_GLYPH,
}


class PlaceExtractor:
    """商家详情提取器"""

    def __init__(
        self,
        session: "BrowserSession",
        token: CancellationToken | None = None,
        timeout_ms: int | None = None,
        navigation_timeout_ms: int | None = None,
        strict_post_processing: bool | None = None,
        ready_selector: str = DETAIL_READY_SELECTOR,
    ):
        """
        Args:
            session: 浏览器会话，用于打开独立的详情页
            token: 取消令牌
            timeout_ms: 等待详情页标志元素的超时（毫秒）
            navigation_timeout_ms: 详情页导航超时（毫秒）
            strict_post_processing: 评分/电话缺失时是否跳过该条目
            ready_selector: 详情页渲染完成的标志元素
        """
        self.session = session
        self.token = token or CancellationToken()
        self.timeout_ms = timeout_ms or config.extractor.detail_selector_timeout_ms
        self.navigation_timeout_ms = (
            navigation_timeout_ms or config.extractor.detail_navigation_timeout_ms
        )
        self.strict_post_processing = (
            config.extractor.strict_post_processing
            if strict_post_processing is None
            else strict_post_processing
        )
        self.ready_selector = ready_selector

    async def extract(self, url: str) -> ExtractedRecord:
        """提取单个详情页，失败时抛出异常

        页面在返回或抛出之前一定已经关闭。
        """
        async with self.session.detail_page() as page:
            self.token.raise_if_cancelled()
            await page.goto(url, timeout=self.navigation_timeout_ms)

            self.token.raise_if_cancelled()
            try:
                await page.wait_for_selector(self.ready_selector, timeout=self.timeout_ms)
            except PlaywrightTimeoutError as e:
                raise DetailPageTimeoutError(url, self.ready_selector, self.timeout_ms) from e

            raw = RawPlaceFields.from_dict(await page.evaluate(EXTRACT_PLACE_JS, PLACE_SELECTORS))

        return build_record(raw, url, strict=self.strict_post_processing)

    async def run(
        self,
        urls: Iterable[str],
        aggregator: ResultAggregator | None = None,
    ) -> ResultAggregator:
        """按顺序提取所有链接，成功的记录追加到 aggregator"""
        urls = list(urls)
        aggregator = aggregator if aggregator is not None else ResultAggregator()
        total = len(urls)

        for i, url in enumerate(urls, start=1):
            self.token.raise_if_cancelled()
            started = time.perf_counter()
            try:
                record = await self.extract(url)
            except RunCancelledError:
                raise
            except Exception as e:
                aggregator.skip(url, e)
                logger.error(f"[red]({i}/{total}) Error extracting data for URL {url}, skipping[/red]")
                logger.debug(f"{type(e).__name__}: {e}")
                continue

            aggregator.add(record)
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            logger.info(
                f"[green]({i}/{total}) Extracted data for {record.name} in {elapsed_ms}ms[/green]"
            )

        return aggregator
