"""常量定义

集中管理 Google Maps 页面结构相关的选择器、URL 模板和导出列定义。
"""

from __future__ import annotations

# ============================================================================
# 列表页
# ============================================================================

# 结果列表中的单个条目
LIST_ITEM_SELECTOR = ".Nv2PK"

# 从第一个条目向上查找滚动容器时需要跨过的 DIV 层数
SCROLL_CONTAINER_DEPTH = 2

# 详情页链接
PLACE_URL_PATTERN = "https://www.google.com/maps/place/"
PLACE_LINK_SELECTOR = f'a.hfpxzc[href*="{PLACE_URL_PATTERN}"]'

# 列表到底的提示文本（德语界面）
DEFAULT_END_OF_LIST_MARKER = "Das Ende der Liste ist erreicht."

# 默认最大滚动次数
DEFAULT_MAX_SCROLLS = 1000

# ============================================================================
# 详情页
# ============================================================================

# 详情页渲染完成的标志
DETAIL_READY_SELECTOR = ".DUwDvf span"

NAME_SELECTOR = "#searchboxinput"
CATEGORY_SELECTOR = ".DkEaL"
STAR_RATING_SELECTOR = ".F7nice .ceNzKf"
ADDRESS_SELECTOR = ".Io6YTe"
INFO_ROW_SELECTOR = ".CsEnBe"

# 电话行前的图标字符（私有区字形）
PHONE_ICON_GLYPH = "\ue0b0"

# ============================================================================
# URL
# ============================================================================

MAPS_SEARCH_URL_TEMPLATE = "https://www.google.com/maps/search/{query}/"
CONSENT_URL_TEMPLATE = (
    "https://consent.google.com/m?continue={target}"
    "&gl=DE&m=0&pc=m&uxe=eomtm&cm=2&hl=en&src=1"
)

# ============================================================================
# 导出
# ============================================================================

# (记录属性名, CSV 表头)，顺序即列顺序
CSV_COLUMNS: tuple[tuple[str, str], ...] = (
    ("name", "NAME"),
    ("category", "TYPE"),
    ("star_rating", "STAR RATING"),
    ("address", "ADDRESS"),
    ("phone", "PHONE"),
    ("website", "WEBSITE"),
    ("scraped_at", "SCRAPED AT"),
    ("email", "EMAIL"),
    ("contacted", "CONTACTED"),
    ("source_url", "URL"),
)

CSV_EXTENSION = ".csv"
