# === FILE: site_crawler/config.py ===
"""
Loading and validation of the SiteCrawler configuration.
Pydantic describes the schema and checks the data; YAML and JSON files are accepted.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CrawlerConfig(BaseModel):
    """Settings for a single crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seed_urls: List[str] = Field(default_factory=list, description="Start URLs (CLI arguments take precedence).")
    max_depth: int = Field(3, ge=0, description="Maximum link-following depth; seeds are depth 0.")
    max_pages: int = Field(100, ge=1, description="Hard cap on the number of stored pages.")
    concurrent_requests: int = Field(5, ge=1, description="Number of concurrent workers.")
    delay_ms: int = Field(1000, ge=0, description="Pause a worker takes after each fetch (milliseconds).")
    user_agent: str = Field("SiteCrawler/1.0", min_length=1, description="User-Agent header, also used for robots.txt.")
    respect_robots_txt: bool = Field(True, description="Honour robots.txt Allow/Disallow rules.")
    timeout: float = Field(10.0, gt=0, description="Timeout of a single request (seconds).")

    @field_validator("user_agent")
    def _check_header_safe(cls, v: str) -> str:
        if any(ord(ch) < 32 or ord(ch) == 127 for ch in v):
            raise ValueError("user_agent must not contain control characters")
        return v

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Read a YAML or JSON file and return a validated CrawlerConfig.

    ``None`` reads configs/default.yaml, falling back to the built-in
    defaults when that file is absent. Raises FileNotFoundError when an
    explicit *path* does not exist.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return CrawlerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return CrawlerConfig(**data)
