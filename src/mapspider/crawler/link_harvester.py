"""详情链接收集模块 - 负责在滚动结束后读取所有详情页 URL"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from ..common.constants import PLACE_LINK_SELECTOR, PLACE_URL_PATTERN
from ..common.logger import get_logger

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = get_logger(__name__)


HARVEST_LINKS_JS = """
(selector) => Array.from(document.querySelectorAll(selector)).map((link) => link.href)
"""


def dedupe_links(hrefs: Iterable[object], url_pattern: str = PLACE_URL_PATTERN) -> list[str]:
    """去重并过滤链接，保持首次出现的顺序

    空值、非字符串以及不包含 url_pattern 的链接都会被丢弃。
    """
    unique: list[str] = []
    seen: set[str] = set()
    for href in hrefs:
        if not isinstance(href, str):
            continue
        cleaned = href.strip()
        if not cleaned or url_pattern not in cleaned or cleaned in seen:
            continue
        seen.add(cleaned)
        unique.append(cleaned)
    return unique


class LinkHarvester:
    """详情链接收集器

    按文档顺序读取结果列表中的详情链接。没有匹配链接时返回空列表。
    """

    def __init__(
        self,
        page: "Page",
        selector: str = PLACE_LINK_SELECTOR,
        url_pattern: str = PLACE_URL_PATTERN,
    ):
        self.page = page
        self.selector = selector
        self.url_pattern = url_pattern

    async def harvest(self) -> list[str]:
        logger.info("[green]Extracting URLs...[/green]")
        raw = await self.page.evaluate(HARVEST_LINKS_JS, self.selector) or []
        urls = dedupe_links(raw, self.url_pattern)

        if len(urls) != len(raw):
            logger.debug(f"URL dedupe: {len(raw)} -> {len(urls)}")
        logger.info(f"[green]Found {len(urls)} URLs to scrape.[/green]")
        return urls
