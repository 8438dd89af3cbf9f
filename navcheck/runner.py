"""Suite runner — owns the Playwright lifecycle and runs scripts one after another."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import Callable, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from navcheck.executor.executor import TestRunDriver
from navcheck.models.config import TestConfig
from navcheck.models.test_result import RunSummary
from navcheck.reporter.json_report import generate_json_report
from navcheck.reporter.reporter import ConsoleReporter, Reporter
from navcheck.suite.loader import discover_scripts
from navcheck.utils.browser import launch_browser

logger = logging.getLogger(__name__)


class SuiteRunner:
    """Runs one or more navigation test scripts in a single browser.

    A driver fault aborts only the script that raised it: the fault is logged,
    the script gets a summary carrying the error, and the next script runs.
    """

    def __init__(
        self,
        headless: bool = True,
        report_dir: Optional[Path] = None,
        reporter_factory: Optional[Callable[[TestConfig], Reporter]] = None,
    ):
        self.headless = headless
        self.report_dir = Path(report_dir) if report_dir else None
        self.reporter_factory = reporter_factory or (
            lambda cfg: ConsoleReporter(cfg.description or cfg.name or cfg.script_id)
        )

    def run_script(self, config: TestConfig) -> RunSummary:
        """Run a single script."""
        return self.run_scripts([config])[0]

    def run_scripts(self, configs: list[TestConfig]) -> list[RunSummary]:
        """Run each script in order and return their summaries."""
        return asyncio.run(self._run(configs))

    def run_folder(self, folder: str | Path) -> list[RunSummary]:
        """Discover scripts under ``folder`` and run them all."""
        configs = discover_scripts(folder)
        if not configs:
            logger.warning("No valid test scripts found in %s", folder)
            return []
        return self.run_scripts(configs)

    async def _run(self, configs: list[TestConfig]) -> list[RunSummary]:
        start = time.time()
        summaries: list[RunSummary] = []
        driver = TestRunDriver()

        async with async_playwright() as p:
            logger.debug("Launching Chromium (headless=%s)...", self.headless)
            browser = await launch_browser(p, headless=self.headless)
            try:
                for index, config in enumerate(configs):
                    logger.info("=== Script [%d/%d]: %s ===",
                                index + 1, len(configs), config.name or config.script_id)
                    reporter = self.reporter_factory(config)
                    try:
                        summary = await driver.execute(config, reporter, browser)
                    except (PlaywrightError, OSError) as e:
                        logger.error("Script %s aborted: %s", config.script_id, e)
                        summary = RunSummary(
                            script_id=config.script_id,
                            target_url=config.target_url,
                            expected_assertions=config.expected_assertions,
                            passed=reporter.passed,
                            failed=reporter.failed,
                            error=str(e),
                        )
                    summaries.append(summary)
                    self._write_report(summary)
            finally:
                await browser.close()

        logger.info("=== %d scripts complete in %.1fs ===", len(summaries), time.time() - start)
        return summaries

    def _write_report(self, summary: RunSummary) -> None:
        if not self.report_dir:
            return
        path = self.report_dir / f"report_{summary.script_id}.json"
        generate_json_report(summary, path)
        logger.info("JSON report: %s", path)
