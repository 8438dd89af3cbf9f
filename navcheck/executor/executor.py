"""Test run driver — prepares the browser session and runs all viewport cycles."""

from __future__ import annotations

import logging
from pathlib import Path

from playwright.async_api import Browser

from navcheck.models.config import TestConfig
from navcheck.models.test_result import RunSummary
from navcheck.reporter.reporter import Reporter
from navcheck.utils.browser import create_session_context

from .evidence_collector import EvidenceCollector
from .orchestrator import ViewportCycleOrchestrator

logger = logging.getLogger(__name__)


class TestRunDriver:
    """Runs one navigation test script against a live site using Playwright."""

    __test__ = False

    async def execute(self, config: TestConfig, reporter: Reporter, browser: Browser) -> RunSummary:
        """Execute the script and return its summary.

        The user agent is applied through a fresh browser context, the target
        is loaded once, and ``reporter.done()`` is called exactly once after
        every viewport cycle has finished. Driver faults are not caught: they
        propagate with the context closed and without ``done()``.
        """
        logger.info("Starting %s (%s) against %s",
                    config.script_id, config.name or config.description, config.target_url)
        first = config.viewports[0] if config.viewports else None
        viewport = {"width": first.width, "height": first.height} if first else None

        context = await create_session_context(browser, config.user_agent, viewport=viewport)
        try:
            page = await context.new_page()
            logger.debug("Initial load of %s (user agent: %s)", config.target_url, config.user_agent)
            await page.goto(config.target_url, timeout=config.page_load_timeout_ms)

            collector = EvidenceCollector(Path(config.capture_dir), config.script_id)
            orchestrator = ViewportCycleOrchestrator(page, reporter, collector)
            summary = await orchestrator.run(config)
        finally:
            await context.close()

        reporter.done()
        logger.info("Finished %s: %d passed, %d failed of %d expected (%.1fs)",
                    config.script_id, summary.passed, summary.failed,
                    summary.expected_assertions, summary.duration_seconds)
        return summary
