"""Viewport cycle orchestrator — runs the navigation step once per viewport."""

from __future__ import annotations

import logging
import time

from playwright.async_api import Page

from navcheck.models.config import TestConfig
from navcheck.models.test_result import RunSummary
from navcheck.reporter.reporter import Reporter

from .evidence_collector import EvidenceCollector
from .navigation_step import run_navigation_step

logger = logging.getLogger(__name__)


class ViewportCycleOrchestrator:
    """Sequences viewport cycles over a single, exclusively owned page.

    Each cycle is awaited to its terminal outcome before the next one
    resizes the page, so captures and clicks from different viewports
    never interleave.
    """

    def __init__(self, page: Page, reporter: Reporter, collector: EvidenceCollector):
        self.page = page
        self.reporter = reporter
        self.collector = collector

    async def run(self, config: TestConfig) -> RunSummary:
        started_at = time.strftime("%Y-%m-%dT%H:%M:%SZ")
        start = time.time()
        summary = RunSummary(
            script_id=config.script_id,
            target_url=config.target_url,
            started_at=started_at,
            expected_assertions=config.expected_assertions,
        )
        total = len(config.viewports)
        logger.info("Cycling %d viewports for %s", total, config.script_id)

        for index, viewport in enumerate(config.viewports):
            logger.info("Viewport [%d/%d]: %s", index + 1, total, viewport.label)
            cycle_start = time.time()
            result = await run_navigation_step(
                self.page, config, viewport, self.reporter, self.collector,
            )
            summary.viewport_results.append(result)
            summary.passed += result.passed
            summary.failed += result.failed
            logger.info("Viewport %s: %d passed, %d failed, %d captures (%.1fs)",
                        viewport.label, result.passed, result.failed,
                        len(result.captures), time.time() - cycle_start)

        summary.completed_at = time.strftime("%Y-%m-%dT%H:%M:%SZ")
        summary.duration_seconds = round(time.time() - start, 2)
        if summary.passed + summary.failed != summary.expected_assertions:
            logger.warning("Recorded %d assertions for %s, expected %d",
                           summary.passed + summary.failed, config.script_id,
                           summary.expected_assertions)
        return summary
