# === FILE: domain_crawler/config.py ===
"""
Loading and validation of the DomainCrawler configuration.
Pydantic describes the schema; values come from YAML/JSON and the environment.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain_crawler.logger import get_logger

log = get_logger("config")


class CrawlerConfig(BaseModel):
    """Settings for one crawler process."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    store: Literal["redis", "memory"] = Field(
        "redis", description="Backend for the frontier and visited set."
    )
    redis_url: str = Field("redis://localhost:6379", description="Redis connection URL.")
    key_prefix: str = Field("", description="Prefix for the frontier/visited Redis keys.")
    reset_store: bool = Field(False, description="Clear frontier/visited keys before crawling.")
    max_concurrent_requests: int = Field(90, ge=1, description="Fetches allowed in flight at once.")
    http_timeout: float = Field(5.0, gt=0, description="Per-request timeout (seconds).")
    user_agent: str = Field("DomainCrawler/1.0", min_length=1, description="User-Agent header.")

    @field_validator("redis_url")
    @classmethod
    def _check_redis_scheme(cls, v: str) -> str:
        if not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError("redis_url must start with redis://, rediss:// or unix://")
        return v


_DEFAULT_CFG = Path("configs/default.yaml")

#: config field -> environment variable overriding it
ENV_OVERRIDES: Dict[str, str] = {
    "store": "CRAWLER_STORE",
    "redis_url": "CRAWLER_REDIS_URL",
    "key_prefix": "CRAWLER_KEY_PREFIX",
    "max_concurrent_requests": "CRAWLER_MAX_CONCURRENT_REQUESTS",
    "http_timeout": "CRAWLER_HTTP_TIMEOUT",
    "user_agent": "CRAWLER_USER_AGENT",
}


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


def _env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    # pydantic coerces the strings to the declared field types
    return {field: environ[var] for field, var in ENV_OVERRIDES.items() if environ.get(var)}


def load_config(
    path: Union[str, Path, None] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> CrawlerConfig:
    """
    Read YAML or JSON, apply ``CRAWLER_*`` environment overrides and return a
    validated CrawlerConfig.

    With ``path=None`` the default file is used when it exists, otherwise the
    built-in defaults. An explicit path that does not exist raises
    FileNotFoundError.
    """
    data: dict[str, Any] = {}
    if path is None:
        if _DEFAULT_CFG.is_file():
            data = _read_file(_DEFAULT_CFG)
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
        data = _read_file(path_obj)

    overrides = _env_overrides(os.environ if environ is None else environ)
    if overrides:
        log.debug("Config overridden from environment: %s", sorted(overrides))
    data.update(overrides)

    return CrawlerConfig(**data)


def _read_file(path: Path) -> dict[str, Any]:
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path)
    if suffix == ".json":
        return _read_json(path)
    raise ValueError(f"Unsupported config format: {suffix}")
