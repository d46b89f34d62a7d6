"""列表采集数据模型定义"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ExhaustionResult:
    """一次列表滚动的结果"""

    iterations: int = 0  # 实际执行的滚动次数（不含最后一次收尾滚动）
    reached_end: bool = False  # 是否检测到到底提示文本
    stalled: bool = False  # 是否因条目数连续不增长而停止
    item_count: int = 0  # 结束时已渲染的条目数
    missing_container_count: int = 0  # 未找到滚动容器的次数

    @property
    def exhausted_budget(self) -> bool:
        """是否用完了滚动次数上限"""
        return not self.reached_end and not self.stalled
