"""核心数据类型定义"""

from __future__ import annotations

from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    CONSENT_URL_TEMPLATE,
    DEFAULT_MAX_SCROLLS,
    MAPS_SEARCH_URL_TEMPLATE,
)


_URI_COMPONENT_SAFE = "!~*'()"


def encode_query(query: str) -> str:
    """编码搜索关键词

    含空格时做两次百分号编码（第一次编码供 maps 路径使用，
    第二次是因为整个 maps URL 作为 consent 页的 continue 参数）。
    """
    if " " in query:
        return quote(quote(query, safe=_URI_COMPONENT_SAFE), safe=_URI_COMPONENT_SAFE)
    return query


def build_search_url(query: str) -> str:
    """构造经过 consent 页跳转的 Google Maps 搜索 URL"""
    target = MAPS_SEARCH_URL_TEMPLATE.format(query=encode_query(query))
    return CONSENT_URL_TEMPLATE.format(target=target)


class SearchTarget(BaseModel):
    """一次运行的搜索参数，运行期间不可变"""

    model_config = ConfigDict(frozen=True)

    query: str = Field(..., min_length=1, description="搜索关键词")
    max_scrolls: int = Field(default=DEFAULT_MAX_SCROLLS, ge=0, description="最大滚动次数")

    @property
    def search_url(self) -> str:
        return build_search_url(self.query)

    @property
    def file_stem(self) -> str:
        """导出文件名前缀（空格替换为连字符）"""
        return self.query.replace(" ", "-")
