"""Navigation step — one full viewport cycle against the target page."""

from __future__ import annotations

import logging

from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from navcheck.models.config import TestConfig, ViewportConfig
from navcheck.models.test_result import (
    STAGE_ELEMENT_FOUND,
    STAGE_ELEMENT_NOT_FOUND,
    STAGE_NAVIGATION_TIMEOUT,
    STAGE_TITLE_MATCH,
    StepOutcome,
    ViewportResult,
)
from navcheck.reporter.reporter import Reporter

from .evidence_collector import EvidenceCollector

logger = logging.getLogger(__name__)

_RULE = "-" * 48


async def settle(page: Page, config: TestConfig) -> None:
    """Give asynchronous page resources time to finish after a load.

    Best effort only: the optional load-state wait is abandoned on timeout,
    and the fixed delay is a heuristic rather than a completion signal.
    """
    if config.settle_load_state:
        try:
            await page.wait_for_load_state(
                config.settle_load_state, timeout=config.page_load_timeout_ms
            )
        except PlaywrightTimeoutError:
            logger.debug("Load state '%s' not reached within %dms, continuing",
                         config.settle_load_state, config.page_load_timeout_ms)
    if config.settle_delay_ms:
        await page.wait_for_timeout(config.settle_delay_ms)


async def run_navigation_step(
    page: Page,
    config: TestConfig,
    viewport: ViewportConfig,
    reporter: Reporter,
    collector: EvidenceCollector,
) -> ViewportResult:
    """Resize, reload, assert, click through and capture for one viewport.

    Records exactly two assertions: the title match, then either the
    element-found/navigation pass or one of the two failure stages.
    Only Playwright timeouts count as assertion failures; every other
    driver error propagates to the caller.
    """
    result = ViewportResult(viewport=viewport)
    timeout = config.page_load_timeout_ms

    def record(stage: str, passed: bool, message: str) -> None:
        result.outcomes.append(StepOutcome(
            stage=stage, passed=passed, message=message,
            viewport_name=viewport.name, width=viewport.width, height=viewport.height,
        ))
        if passed:
            reporter.pass_(message)
        else:
            reporter.fail(message)

    # Resize and reload
    await page.set_viewport_size({"width": viewport.width, "height": viewport.height})
    await page.goto(config.target_url, timeout=timeout)
    await settle(page, config)

    reporter.info(_RULE)
    reporter.info(f"Current viewport: {viewport.label}")
    reporter.info(_RULE)

    title = await page.title()
    if config.title_regex.search(title):
        record(STAGE_TITLE_MATCH, True, f"The page title '{title}' matches /{config.title_pattern}/")
    else:
        record(STAGE_TITLE_MATCH, False, f"The page title '{title}' does not match /{config.title_pattern}/")

    try:
        await page.wait_for_selector(config.nav_selector, state="attached", timeout=timeout)
    except PlaywrightTimeoutError:
        logger.debug("Selector %s not found within %dms at %s",
                     config.nav_selector, timeout, viewport.label)
        record(STAGE_ELEMENT_NOT_FOUND, False,
               f"The {config.nav_label} link was not found or the page timed out")
        return result

    reporter.info(f"The {config.nav_label} link was found")

    if config.capture_enabled:
        result.captures.append(await collector.capture(page, config.home_stage, viewport))

    try:
        await page.click(config.nav_selector, timeout=timeout)
    except PlaywrightTimeoutError:
        logger.debug("Selector %s not clickable within %dms at %s",
                     config.nav_selector, timeout, viewport.label)
        record(STAGE_NAVIGATION_TIMEOUT, False,
               f"The {config.nav_label} link could not be clicked within {timeout}ms")
        return result

    try:
        await page.wait_for_url(config.destination_url_regex, timeout=timeout)
    except PlaywrightTimeoutError:
        record(STAGE_NAVIGATION_TIMEOUT, False,
               f"The {config.nav_label} page did not load within {timeout}ms "
               f"(url: {page.url})")
        return result

    if config.capture_enabled:
        result.captures.append(await collector.capture(page, config.destination_stage, viewport))

    record(STAGE_ELEMENT_FOUND, True,
           f"The {config.nav_label} link was found and led to {page.url}")
    return result
