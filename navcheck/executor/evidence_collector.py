"""Evidence collector — names and captures per-viewport screenshots."""

from __future__ import annotations

import logging
from pathlib import Path

from playwright.async_api import Page

from navcheck.models.config import ViewportConfig
from navcheck.models.test_result import CaptureArtifact, CaptureRegion

logger = logging.getLogger(__name__)


def name_for(script_id: str, stage: str, width: int, height: int) -> str:
    """Derive the screenshot filename for a stage at a given viewport size."""
    return f"{script_id}-{stage}-{width}-{height}.png"


class EvidenceCollector:
    """Captures viewport screenshots into a single directory for one script."""

    def __init__(self, capture_dir: Path, script_id: str):
        self.capture_dir = Path(capture_dir)
        self.script_id = script_id
        self.captures: list[CaptureArtifact] = []

    def name_for(self, stage: str, width: int, height: int) -> str:
        return name_for(self.script_id, stage, width, height)

    async def capture(self, page: Page, stage: str, viewport: ViewportConfig) -> CaptureArtifact:
        """Screenshot the full viewport region and return the artifact.

        Failures are not swallowed; a capture that cannot be written aborts
        the run like any other driver fault.
        """
        self.capture_dir.mkdir(parents=True, exist_ok=True)
        filename = self.name_for(stage, viewport.width, viewport.height)
        path = self.capture_dir / filename
        region = CaptureRegion(top=0, left=0, width=viewport.width, height=viewport.height)
        await page.screenshot(
            path=str(path),
            clip={"x": region.left, "y": region.top, "width": region.width, "height": region.height},
        )
        artifact = CaptureArtifact(filename=filename, path=str(path), stage=stage, region=region)
        self.captures.append(artifact)
        logger.debug("Captured %s", path)
        return artifact
