"""Configuration models for navigation test scripts."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Literal, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Title match + element-found/navigation
ASSERTIONS_PER_VIEWPORT = 2

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Ubuntu Chromium/53.0.2785.143 Chrome/53.0.2785.143 Safari/537.36"
)


class ViewportConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = "desktop"
    width: int = Field(default=1600, gt=0)
    height: int = Field(default=900, gt=0)

    @property
    def label(self) -> str:
        return f"{self.name}({self.width},{self.height})"


def default_viewports() -> tuple[ViewportConfig, ...]:
    return (
        ViewportConfig(name="desktop", width=1600, height=900),
        ViewportConfig(name="mobile-landscape", width=640, height=360),
        ViewportConfig(name="mobile-portrait", width=360, height=640),
    )


class TestConfig(BaseModel):
    """One navigation test script: manifest, target settings and capture settings.

    Frozen once constructed; a run never mutates it.
    """

    __test__ = False
    model_config = ConfigDict(frozen=True)

    # Manifest
    script_id: str
    name: str = ""
    description: str = ""

    # Target
    target_url: str
    nav_selector: str
    nav_label: str = "navigation"
    user_agent: str = DEFAULT_USER_AGENT
    title_pattern: str = ".*"
    destination_url_pattern: str

    # Timing
    page_load_timeout_ms: int = Field(default=10000, gt=0)
    settle_delay_ms: int = Field(default=1000, ge=0)
    settle_load_state: Optional[Literal["load", "domcontentloaded", "networkidle"]] = None

    # Screen capture
    capture_enabled: bool = True
    capture_dir: str = "./captures"
    home_stage: str = "home-page"
    destination_stage: str = "destination-page"
    viewports: tuple[ViewportConfig, ...] = Field(default_factory=default_viewports)

    @field_validator("target_url")
    @classmethod
    def check_absolute_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"target_url must be an absolute http(s) URL, got '{v}'")
        return v

    @field_validator("title_pattern", "destination_url_pattern")
    @classmethod
    def check_pattern_compiles(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid regular expression '{v}': {e}") from e
        return v

    @model_validator(mode="after")
    def check_unique_viewports(self) -> "TestConfig":
        seen: set[tuple[int, int]] = set()
        for vp in self.viewports:
            key = (vp.width, vp.height)
            if key in seen:
                raise ValueError(f"Duplicate viewport geometry {vp.width}x{vp.height}")
            seen.add(key)
        return self

    @property
    def title_regex(self) -> re.Pattern:
        return re.compile(self.title_pattern)

    @property
    def destination_url_regex(self) -> re.Pattern:
        return re.compile(self.destination_url_pattern)

    @property
    def expected_assertions(self) -> int:
        return len(self.viewports) * ASSERTIONS_PER_VIEWPORT

    @classmethod
    def load(cls, path: str | Path) -> "TestConfig":
        """Load a script from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Script file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save the script to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2)
