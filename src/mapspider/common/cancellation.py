"""运行取消令牌

中断信号只负责设置令牌，真正的退出发生在下一个挂起点
（等待、导航、滚动之前），由 async with 链负责关闭已打开的页面和浏览器。
"""

from __future__ import annotations

import asyncio
import signal
from typing import Iterable

from .exceptions import RunCancelledError
from .logger import get_logger

logger = get_logger(__name__)


class CancellationToken:
    """协作式取消令牌"""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self.reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str = "Process interrupted") -> None:
        if not self._event.is_set():
            self.reason = reason
            self._event.set()

    def raise_if_cancelled(self) -> None:
        """已取消时抛出 RunCancelledError"""
        if self._event.is_set():
            raise RunCancelledError(self.reason or "Process interrupted")

    async def sleep(self, seconds: float) -> None:
        """可被取消打断的固定等待"""
        self.raise_if_cancelled()
        if seconds > 0:
            try:
                await asyncio.wait_for(self._event.wait(), timeout=seconds)
            except asyncio.TimeoutError:
                return
        self.raise_if_cancelled()


def install_signal_handlers(
    token: CancellationToken,
    signals: Iterable[signal.Signals] = (signal.SIGINT, signal.SIGTERM),
) -> list[signal.Signals]:
    """在当前事件循环上注册信号处理，收到信号时取消令牌

    不支持 add_signal_handler 的平台（如 Windows）保留默认的
    KeyboardInterrupt 行为。

    Returns:
        成功注册的信号列表（用于之后移除）
    """
    loop = asyncio.get_running_loop()
    installed: list[signal.Signals] = []
    for sig in signals:
        try:
            loop.add_signal_handler(sig, token.cancel, f"Received {sig.name}")
        except (NotImplementedError, RuntimeError, ValueError):
            logger.debug(f"Signal handler for {sig.name} not supported on this loop")
            continue
        installed.append(sig)
    return installed


def remove_signal_handlers(installed: Iterable[signal.Signals]) -> None:
    loop = asyncio.get_running_loop()
    for sig in installed:
        loop.remove_signal_handler(sig)
