"""列表采集模块：滚动结果列表并收集详情链接"""

from .link_harvester import LinkHarvester, dedupe_links
from .list_exhauster import ListExhauster
from .models import ExhaustionResult

__all__ = [
    "ExhaustionResult",
    "LinkHarvester",
    "ListExhauster",
    "dedupe_links",
]
