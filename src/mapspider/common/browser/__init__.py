"""浏览器模块"""

from .engine import BrowserEngine
from .session import BrowserSession, create_browser_session

__all__ = [
    "BrowserEngine",
    "BrowserSession",
    "create_browser_session",
]
