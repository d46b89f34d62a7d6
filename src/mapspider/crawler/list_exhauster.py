"""结果列表滚动模块

Google Maps 的结果列表是懒加载的：只有把滚动容器拉到底部，
才会渲染下一批条目。本模块反复滚动直到出现到底提示或用完滚动次数。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..common.cancellation import CancellationToken
from ..common.config import config
from ..common.constants import LIST_ITEM_SELECTOR, SCROLL_CONTAINER_DEPTH
from ..common.exceptions import ResultListNotFoundError
from ..common.logger import get_logger
from .models import ExhaustionResult

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = get_logger(__name__)


# 从第一个条目向上数 DIV，跨过 depth 层后即为滚动容器
SCROLL_CONTAINER_JS = """
([selector, depth]) => {
    const first = document.querySelector(selector);
    if (!first) return false;
    let parent = first.parentElement;
    let count = 0;
    while (parent && count < depth) {
        if (parent.tagName === "DIV") {
            count++;
        }
        if (count < depth) {
            parent = parent.parentElement;
        }
    }
    if (!parent) return false;
    parent.scrollTop = parent.scrollHeight;
    return true;
}
"""

END_OF_LIST_JS = """
(markers) => {
    const text = document.body ? document.body.innerText : "";
    return markers.some((marker) => text.includes(marker));
}
"""

COUNT_ITEMS_JS = """
(selector) => document.querySelectorAll(selector).length
"""

FINAL_SCROLL_JS = """
(selector) => {
    const elements = document.querySelectorAll(selector);
    const last = elements[elements.length - 1];
    if (!last) return false;
    last.scrollIntoView({ behavior: "smooth", block: "end" });
    return true;
}
"""


class ListExhauster:
    """结果列表滚动器

    流程：
    1. 等待结果条目出现（超时即致命错误）。
    2. 最多 max_scrolls 次：滚动容器到底 → 等待渲染 → 检查到底提示。
    3. 结束后再滚动一次并短暂等待，捕获最后的渲染。
    """

    def __init__(
        self,
        page: "Page",
        max_scrolls: int | None = None,
        token: CancellationToken | None = None,
        item_selector: str = LIST_ITEM_SELECTOR,
        end_markers: list[str] | None = None,
        settle_delay: float | None = None,
        final_settle_delay: float | None = None,
        list_timeout_ms: int | None = None,
        no_growth_threshold: int | None = None,
    ):
        """
        Args:
            page: 已打开搜索结果页的 Playwright 页面
            max_scrolls: 最大滚动次数，0 表示不滚动
            token: 取消令牌
            item_selector: 结果条目选择器
            end_markers: 到底提示文本列表，任一出现即停止
            settle_delay: 每次滚动后的等待（秒）
            final_settle_delay: 收尾滚动后的等待（秒）
            list_timeout_ms: 等待结果条目出现的超时（毫秒）
            no_growth_threshold: 条目数连续不增长多少次后停止，0 关闭
        """
        scroll_config = config.scroll
        self.page = page
        self.max_scrolls = scroll_config.max_scrolls if max_scrolls is None else max_scrolls
        self.token = token or CancellationToken()
        self.item_selector = item_selector
        self.end_markers = list(end_markers or scroll_config.end_of_list_markers)
        self.settle_delay = (
            scroll_config.scroll_settle_delay if settle_delay is None else settle_delay
        )
        self.final_settle_delay = (
            scroll_config.final_settle_delay if final_settle_delay is None else final_settle_delay
        )
        self.list_timeout_ms = list_timeout_ms or scroll_config.list_selector_timeout_ms
        self.no_growth_threshold = (
            scroll_config.no_growth_threshold if no_growth_threshold is None else no_growth_threshold
        )

        if self.max_scrolls < 0:
            raise ValueError("max_scrolls must be >= 0")

    async def run(self) -> ExhaustionResult:
        """执行滚动，返回滚动结果"""
        await self.wait_for_list()

        result = ExhaustionResult()
        last_count = await self.count_items() if self.no_growth_threshold > 0 else 0
        no_growth = 0

        while result.iterations < self.max_scrolls:
            self.token.raise_if_cancelled()
            logger.info(
                f"[green]({result.iterations + 1}) Auto-scrolling to load more results[/green]"
            )

            if not await self.scroll_to_bottom():
                result.missing_container_count += 1
                logger.debug("Scroll container not found, iteration is a no-op")

            await self.token.sleep(self.settle_delay)
            result.iterations += 1

            if await self.is_end_of_list():
                result.reached_end = True
                logger.debug(f"End of list reached after {result.iterations} scrolls")
                break

            if self.no_growth_threshold > 0:
                count = await self.count_items()
                no_growth = no_growth + 1 if count <= last_count else 0
                last_count = max(last_count, count)
                if no_growth >= self.no_growth_threshold:
                    result.stalled = True
                    logger.info(
                        f"[yellow]List stopped growing after {result.iterations} scrolls "
                        f"({count} results)[/yellow]"
                    )
                    break

        # 收尾：再滚动一次，捕获最后的渲染
        self.token.raise_if_cancelled()
        await self.page.evaluate(FINAL_SCROLL_JS, self.item_selector)
        await self.token.sleep(self.final_settle_delay)

        result.item_count = await self.count_items()
        logger.info(
            f"[green]Completed scrolling[/green] ({result.iterations} scrolls, "
            f"{result.item_count} results rendered)"
        )
        return result

    async def wait_for_list(self) -> None:
        """等待第一个结果条目出现

        Raises:
            ResultListNotFoundError: 超时未出现
        """
        self.token.raise_if_cancelled()
        try:
            await self.page.wait_for_selector(self.item_selector, timeout=self.list_timeout_ms)
        except PlaywrightTimeoutError as e:
            raise ResultListNotFoundError(self.item_selector, self.list_timeout_ms) from e

    async def scroll_to_bottom(self) -> bool:
        """把滚动容器拉到底部

        Returns:
            是否找到并滚动了容器
        """
        return bool(
            await self.page.evaluate(
                SCROLL_CONTAINER_JS, [self.item_selector, SCROLL_CONTAINER_DEPTH]
            )
        )

    async def is_end_of_list(self) -> bool:
        """页面文本中是否出现到底提示"""
        return bool(await self.page.evaluate(END_OF_LIST_JS, self.end_markers))

    async def count_items(self) -> int:
        return int(await self.page.evaluate(COUNT_ITEMS_JS, self.item_selector) or 0)
