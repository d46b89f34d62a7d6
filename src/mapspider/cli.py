"""CLI 入口"""

from __future__ import annotations

import asyncio
import threading
from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel

from .common.cancellation import (
    CancellationToken,
    install_signal_handlers,
    remove_signal_handlers,
)
from .common.config import config
from .common.constants import DEFAULT_MAX_SCROLLS
from .common.exceptions import RunCancelledError, ValidationError
from .common.logger import console, get_logger, setup_file_logging
from .common.types import SearchTarget
from .common.validators import parse_max_scrolls, validate_output_dir, validate_query
from .pipeline import PipelineResult, run_pipeline

logger = get_logger(__name__)

app = typer.Typer(
    name="mapspider",
    help="MapSpider - Google Maps search results scraper",
    add_completion=False,
)


def run_async_safely(coro):
    """在 CLI 同步上下文中安全执行协程。"""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    # 已有运行中的事件循环，需要在新线程中创建新的事件循环
    result_holder: dict[str, object] = {"result": None, "error": None}

    def _runner():
        try:
            result_holder["result"] = asyncio.run(coro)
        except BaseException as exc:  # noqa: BLE001
            result_holder["error"] = exc

    thread = threading.Thread(target=_runner, daemon=True)
    thread.start()
    thread.join()

    if result_holder["error"] is not None:
        raise result_holder["error"]  # type: ignore[misc]
    return result_holder["result"]


async def _run_scrape(
    target: SearchTarget,
    output_dir: Path,
    headless: bool | None,
) -> PipelineResult:
    """安装信号处理后运行流水线"""
    token = CancellationToken()
    installed = install_signal_handlers(token)
    try:
        return await run_pipeline(
            target=target,
            output_dir=output_dir,
            headless=headless,
            token=token,
        )
    finally:
        remove_signal_handlers(installed)


@app.command(context_settings={"ignore_unknown_options": True})
def scrape(
    query: str = typer.Argument(
        ...,
        help="Search query, e.g. \"bakery berlin\"",
    ),
    max_scrolls: str = typer.Argument(
        str(DEFAULT_MAX_SCROLLS),
        help="Maximum number of scroll iterations (non-negative integer)",
    ),
    output_dir: str = typer.Argument(
        "",
        help="Output directory (default: current working directory)",
        show_default=False,
    ),
    headless: Optional[bool] = typer.Option(
        None,
        "--headless/--no-headless",
        help="Run the browser headless (default from HEADLESS env)",
    ),
    log_file: str = typer.Option(
        "",
        "--log-file",
        help="Also write debug logs to this file",
    ),
):
    """
    Scrape Google Maps search results into a CSV file.

    示例:
        mapspider "bakery berlin" 20 ./exports
    """
    # 参数验证全部在启动浏览器之前完成
    try:
        target = SearchTarget(
            query=validate_query(query),
            max_scrolls=parse_max_scrolls(max_scrolls, DEFAULT_MAX_SCROLLS),
        )
        output_path = validate_output_dir(output_dir or None)
    except ValidationError as e:
        console.print(Panel(f"[red]{e}[/red]", title="Invalid arguments", style="red"))
        console.print('Usage: mapspider "query" [MAX_SCROLLS] [OUTPUT_DIR]')
        raise typer.Exit(1)

    if log_file:
        setup_file_logging(log_file)

    use_headless = headless if headless is not None else config.browser.headless
    console.print(
        Panel(
            f"[bold]Query:[/bold] {target.query}\n"
            f"[bold]Max scrolls:[/bold] {target.max_scrolls}\n"
            f"[bold]Headless:[/bold] {use_headless}\n"
            f"[bold]Output dir:[/bold] {output_path}",
            title="MapSpider",
            style="cyan",
        )
    )
    logger.info(f"[blue]Searching for query: {target.query}[/blue]")

    try:
        result = run_async_safely(_run_scrape(target, output_path, use_headless))
    except (KeyboardInterrupt, RunCancelledError):
        console.print("[red]Process interrupted[/red]")
        raise typer.Exit(130)
    except Exception as e:
        logger.debug("Run failed", exc_info=True)
        console.print(Panel(f"[red]{e}[/red]", title="Error", style="red"))
        raise typer.Exit(1)

    console.print(
        Panel(
            f"[green]Successfully written {result.record_count} records[/green]\n\n"
            f"File: {result.output_path}\n"
            f"Scrolls: {result.exhaustion.iterations}"
            f"{' (end of list reached)' if result.exhaustion.reached_end else ''}\n"
            f"URLs found: {result.harvested_count}\n"
            f"Skipped: {len(result.skipped)}",
            title="Done",
            style="green",
        )
    )


def main():
    """CLI 入口点

    供 pyproject.toml 中 [project.scripts] 调用。
    """
    app()


if __name__ == "__main__":
    main()
