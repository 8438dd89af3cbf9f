"""Browser session helpers for Playwright."""

from __future__ import annotations

from typing import Optional

from playwright.async_api import Browser, BrowserContext, Playwright

DEFAULT_VIEWPORT = {"width": 1600, "height": 900}


async def launch_browser(playwright: Playwright, headless: bool = True) -> Browser:
    """Launch the Chromium instance shared by every script in a run."""
    return await playwright.chromium.launch(
        headless=headless,
        args=[
            "--disable-blink-features=AutomationControlled",
        ],
    )


async def create_session_context(
    browser: Browser,
    user_agent: str,
    viewport: Optional[dict] = None,
) -> BrowserContext:
    """Create an isolated browser context carrying the script's user agent.

    Playwright fixes the user agent per context, so each script run gets its
    own context rather than mutating a shared one.
    """
    return await browser.new_context(
        viewport=viewport or DEFAULT_VIEWPORT,
        user_agent=user_agent,
        locale="en-US",
        extra_http_headers={
            "Accept-Language": "en-US,en;q=0.9",
        },
    )
