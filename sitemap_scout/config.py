# === FILE: sitemap_scout/config.py ===
"""
Loading and validation of the SitemapScout run configuration.
Pydantic describes the schema and checks the data.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
)

__all__ = ["DEFAULT_USER_AGENTS", "ScraperConfig", "load_config"]

DEFAULT_USER_AGENTS: tuple[str, ...] = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/61.0.3163.100 Safari/537.36",
    "Mozilla/5.0 (Windows NT 6.1; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/61.0.3163.100 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_12_6) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/61.0.3163.100 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_12_6) AppleWebKit/604.1.38 (KHTML, like Gecko) Version/11.0 Safari/604.1.38",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:56.0) Gecko/20100101 Firefox/56.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_13) AppleWebKit/604.1.38 (KHTML, like Gecko) Version/11.0 Safari/604.1.38",
)


class ScraperConfig(BaseModel):
    """Configuration for one discovery + scrape run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    root_url: HttpUrl = Field(..., description="Root sitemap (or sitemap index) URL.")
    concurrency: int = Field(10, ge=1, description="Max. number of page fetches in flight.")
    timeout: float = Field(10.0, gt=0, description="Timeout for a single request (seconds).")
    user_agents: List[str] = Field(
        default_factory=lambda: list(DEFAULT_USER_AGENTS),
        min_length=1,
        description="Pool of User-Agent strings, one picked at random per request.",
    )
    seed: Optional[int] = Field(None, description="Seed for the User-Agent picker; None = OS entropy.")
    skip_seen_sitemaps: bool = Field(
        False, description="Do not fetch a sitemap twice in one run (breaks sitemap cycles)."
    )

    @field_validator("user_agents")
    @classmethod
    def _no_blank_agents(cls, v: List[str]) -> List[str]:
        cleaned = [ua.strip() for ua in v]
        if any(not ua for ua in cleaned):
            raise ValueError("user_agents must not contain blank strings")
        return cleaned


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


def load_config(path: Union[str, Path, None]) -> ScraperConfig:
    """
    Read YAML or JSON and return a validated ScraperConfig.
    Raises FileNotFoundError when the config file does not exist.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
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

    return ScraperConfig(**data)
