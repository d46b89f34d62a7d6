"""采集流水线运行器

按严格顺序串联各阶段：
1. 打开搜索结果页。
2. ListExhauster 滚动结果列表直到到底或用完次数。
3. LinkHarvester 收集详情链接。
4. PlaceExtractor 逐个提取详情，ResultAggregator 汇总。
5. 关闭浏览器后导出 CSV。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..common.browser import create_browser_session
from ..common.cancellation import CancellationToken
from ..common.logger import get_logger
from ..common.types import SearchTarget
from ..crawler import ExhaustionResult, LinkHarvester, ListExhauster
from ..field import ExtractedRecord, PlaceExtractor, ResultAggregator, SkippedLink
from ..output import build_output_path, export_records

logger = get_logger(__name__)


@dataclass
class PipelineResult:
    """一次运行的汇总"""

    target: SearchTarget
    output_path: Path
    records: tuple[ExtractedRecord, ...] = ()
    skipped: tuple[SkippedLink, ...] = ()
    harvested_count: int = 0
    exhaustion: ExhaustionResult = field(default_factory=ExhaustionResult)

    @property
    def record_count(self) -> int:
        return len(self.records)


async def run_pipeline(
    target: SearchTarget,
    output_dir: str | Path,
    headless: bool | None = None,
    token: CancellationToken | None = None,
) -> PipelineResult:
    """运行一次完整采集并导出 CSV

    Args:
        target: 搜索参数
        output_dir: 导出目录（不存在时递归创建）
        headless: 是否无头模式，None 使用配置
        token: 取消令牌

    Returns:
        运行汇总

    Raises:
        ResultListNotFoundError: 结果列表未出现
        RunCancelledError: 运行被中断（此时不导出）
        ExportError: 写出 CSV 失败
    """
    token = token or CancellationToken()
    aggregator = ResultAggregator()

    logger.info("[green]Launching browser...[/green]")
    async with create_browser_session(headless=headless) as session:
        token.raise_if_cancelled()
        logger.info("[green]Browser launched. Navigating...[/green]")
        await session.navigate(target.search_url)

        exhauster = ListExhauster(session.page, max_scrolls=target.max_scrolls, token=token)
        exhaustion = await exhauster.run()

        token.raise_if_cancelled()
        urls = await LinkHarvester(session.page).harvest()

        extractor = PlaceExtractor(session, token=token)
        await extractor.run(urls, aggregator)

    # 最后一个条目处理期间收到的中断不会被循环检测到
    token.raise_if_cancelled()

    records = aggregator.seal()
    output_path = build_output_path(output_dir, target.file_stem)
    export_records(records, output_path)

    if aggregator.skipped:
        logger.warning(
            f"[yellow]{len(aggregator.skipped)} of {len(urls)} URLs were skipped[/yellow]"
        )

    return PipelineResult(
        target=target,
        output_path=output_path,
        records=records,
        skipped=aggregator.skipped,
        harvested_count=len(urls),
        exhaustion=exhaustion,
    )
