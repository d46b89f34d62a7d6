"""配置单元测试"""

from mapspider.common.config import (
    BrowserConfig,
    ExtractorConfig,
    OutputConfig,
    ScrollConfig,
    _split_markers,
)


class TestDefaults:
    """默认值测试"""

    def test_browser_defaults(self, monkeypatch):
        for name in ("HEADLESS", "VIEWPORT_WIDTH", "VIEWPORT_HEIGHT"):
            monkeypatch.delenv(name, raising=False)
        cfg = BrowserConfig()
        assert cfg.headless is True
        assert (cfg.viewport_width, cfg.viewport_height) == (990, 708)

    def test_scroll_defaults(self, monkeypatch):
        for name in ("MAX_SCROLLS", "END_OF_LIST_MARKERS", "NO_GROWTH_THRESHOLD"):
            monkeypatch.delenv(name, raising=False)
        cfg = ScrollConfig()
        assert cfg.max_scrolls == 1000
        assert cfg.end_of_list_markers == ["Das Ende der Liste ist erreicht."]
        assert cfg.no_growth_threshold == 0

    def test_detail_timeout_defaults(self, monkeypatch):
        monkeypatch.delenv("DETAIL_SELECTOR_TIMEOUT_MS", raising=False)
        monkeypatch.delenv("DETAIL_NAVIGATION_TIMEOUT_MS", raising=False)
        cfg = ExtractorConfig()
        assert cfg.detail_selector_timeout_ms == 5000
        assert cfg.detail_navigation_timeout_ms == 30000

    def test_output_defaults(self, monkeypatch):
        monkeypatch.delenv("WEBSITE_SEPARATOR", raising=False)
        assert OutputConfig().website_separator == ","


class TestEnvironment:
    """环境变量覆盖测试"""

    def test_headless_false(self, monkeypatch):
        monkeypatch.setenv("HEADLESS", "false")
        assert BrowserConfig().headless is False

    def test_strict_post_processing_off(self, monkeypatch):
        monkeypatch.setenv("STRICT_POST_PROCESSING", "False")
        assert ExtractorConfig().strict_post_processing is False

    def test_markers_from_env(self, monkeypatch):
        monkeypatch.setenv(
            "END_OF_LIST_MARKERS",
            "You've reached the end of the list.| Das Ende der Liste ist erreicht. ",
        )
        assert ScrollConfig().end_of_list_markers == [
            "You've reached the end of the list.",
            "Das Ende der Liste ist erreicht.",
        ]

    def test_blank_markers_fall_back(self):
        assert _split_markers(" | ") == ["Das Ende der Liste ist erreicht."]
