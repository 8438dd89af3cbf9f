"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import Optional
from unittest.mock import AsyncMock, Mock

import pytest
from playwright.async_api import Browser, BrowserContext, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from navcheck.models.config import TestConfig, ViewportConfig
from navcheck.reporter.reporter import Reporter


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def viewport_config() -> ViewportConfig:
    """Create a desktop viewport configuration."""
    return ViewportConfig(name="desktop", width=1600, height=900)


def _build_config(tmp_path: Optional[Path] = None, **overrides) -> TestConfig:
    """Build a Bloomberg-style script with fast timings for tests."""
    data = dict(
        script_id="bloomberg-home-page",
        name="Bloomberg Home Page Test",
        description="Tests navigation from the home page to the stocks page",
        target_url="https://www.bloomberg.com",
        nav_selector="a[href$='stocks']",
        nav_label="Stocks",
        title_pattern="Bloomberg",
        destination_url_pattern="www.bloomberg.com/markets/stocks",
        page_load_timeout_ms=10000,
        settle_delay_ms=1000,
        capture_enabled=True,
        capture_dir=str(tmp_path / "captures") if tmp_path else "./captures",
        home_stage="home-page",
        destination_stage="stocks-page",
        viewports=[ViewportConfig(name="desktop", width=1600, height=900)],
    )
    data.update(overrides)
    return TestConfig(**data)


@pytest.fixture
def make_config():
    """Factory for scripts with per-test overrides."""
    return _build_config


@pytest.fixture
def test_config(tmp_path: Path) -> TestConfig:
    """Create a single-viewport script writing captures under tmp_path."""
    return _build_config(tmp_path)


@pytest.fixture
def three_viewport_config(tmp_path: Path) -> TestConfig:
    """Create a script cycling desktop and both mobile orientations."""
    return _build_config(
        tmp_path,
        viewports=[
            ViewportConfig(name="desktop", width=1600, height=900),
            ViewportConfig(name="mobile-landscape", width=640, height=360),
            ViewportConfig(name="mobile-portrait", width=360, height=640),
        ],
    )


@pytest.fixture
def temp_script_file(test_config: TestConfig, tmp_path: Path) -> Path:
    """Create a temporary script file."""
    script_file = tmp_path / "bloomberg-home-page.json"
    test_config.save(script_file)
    return script_file


# ============================================================================
# Mock Fixtures
# ============================================================================


def _build_page(
    title: str = "Bloomberg - Business News",
    element_found: bool = True,
    destination_url: Optional[str] = "https://www.bloomberg.com/markets/stocks",
    events: Optional[list] = None,
) -> AsyncMock:
    """Create a mock Playwright page that simulates the navigation path.

    ``destination_url=None`` makes the post-click URL wait time out.
    When ``events`` is given, driver calls are appended to it in order.
    """
    page = AsyncMock(spec=Page)
    page.url = "https://www.bloomberg.com/"
    page.title.return_value = title
    state = {"viewport": None}

    def log(*entry):
        if events is not None:
            events.append(entry)

    async def set_viewport_size(size):
        state["viewport"] = (size["width"], size["height"])
        log("resize", state["viewport"])

    async def goto(url, **kwargs):
        page.url = url
        log("goto", state["viewport"])

    async def wait_for_selector(selector, **kwargs):
        if not element_found:
            raise PlaywrightTimeoutError(f"Timeout {kwargs.get('timeout')}ms exceeded.")
        return Mock()

    async def click(selector, **kwargs):
        log("click", state["viewport"])

    async def wait_for_url(pattern, **kwargs):
        if destination_url is None:
            raise PlaywrightTimeoutError(f"Timeout {kwargs.get('timeout')}ms exceeded.")
        page.url = destination_url

    async def screenshot(path=None, **kwargs):
        log("screenshot", state["viewport"], Path(path).name)
        return b""

    page.set_viewport_size = AsyncMock(side_effect=set_viewport_size)
    page.goto = AsyncMock(side_effect=goto)
    page.wait_for_selector = AsyncMock(side_effect=wait_for_selector)
    page.click = AsyncMock(side_effect=click)
    page.wait_for_url = AsyncMock(side_effect=wait_for_url)
    page.screenshot = AsyncMock(side_effect=screenshot)
    page.wait_for_timeout = AsyncMock()
    page.wait_for_load_state = AsyncMock()
    return page


@pytest.fixture
def make_page():
    """Factory for mock pages simulating a given site behaviour."""
    return _build_page


@pytest.fixture
def mock_page() -> AsyncMock:
    """Create a mock page on which the whole navigation path succeeds."""
    return _build_page()


@pytest.fixture
def reporter() -> Reporter:
    """Create a recording reporter with no console output."""
    return Reporter("test")


def _build_browser(page: AsyncMock) -> AsyncMock:
    """Create a mock browser whose contexts hand out ``page``."""
    context = AsyncMock(spec=BrowserContext)
    context.new_page = AsyncMock(return_value=page)
    browser = AsyncMock(spec=Browser)
    browser.new_context = AsyncMock(return_value=context)
    return browser


@pytest.fixture
def make_browser():
    """Factory for mock browsers serving a given page."""
    return _build_browser


@pytest.fixture
def mock_browser(mock_page: AsyncMock) -> AsyncMock:
    """Create a mock Playwright browser serving the mock page."""
    return _build_browser(mock_page)
