import sys
from pathlib import Path
from typing import Any, Literal
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from dataclasses import dataclass, field
import yaml

PROJECT_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_URLS = [
    "http://www.golang.org/",
    "http://www.google.com/",
    "http://www.example.com/",
    "https://dev.to/",
    "http://www.typescriptlang.org/",
    "http://www.japan.com/",
    "http://metanit.com/",
    "https://go.dev/",
    "http://www.golang.org/",
]


class ConfigError(ValueError):
    """Raised when a run is requested with an unusable configuration."""


class WorkItem(BaseModel):
    """
    One unit of work for the pool: the URL to fetch plus an opaque payload
    carried along for the caller's benefit.
    """
    url: str = Field(..., min_length=1)
    payload: Any = None


class PoolConfig(BaseModel):
    """
    Validated arguments for one pool run.

    Types are strict: a fractional or boolean pool size would defeat the
    semaphore bound, and a string from YAML must not be silently coerced.
    """
    target: str = Field(..., strict=True, min_length=1, description="Word to count")
    pool_size: int = Field(..., strict=True, ge=1, description="Max concurrent fetches")
    timeout_s: float = Field(..., strict=True, ge=1, description="Per-request timeout in seconds")
    strategy: Literal["lock", "queue"] = Field("lock", description="Result collection strategy")


class CountConfigFile(BaseModel):
    """Shape of wordcount_config.yaml; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    target_word: str = Field("Go", strict=True)
    urls: list[str] = Field(default_factory=lambda: list(DEFAULT_URLS), strict=True)
    pool_size: int = Field(5, strict=True)
    request_timeout_s: float = Field(30, strict=True)
    collect_strategy: str = Field("lock", strict=True)


def validate_pool_config(target: Any, pool_size: Any, timeout_s: Any, strategy: Any) -> PoolConfig:
    """Build a PoolConfig, turning pydantic's ValidationError into ConfigError."""
    try:
        return PoolConfig(target=target, pool_size=pool_size, timeout_s=timeout_s, strategy=strategy)
    except ValidationError as exc:
        raise ConfigError(f"invalid pool configuration:\n{exc}") from exc


@dataclass
class CountConfig:
    """
    Central configuration for a counting run.

    Values can be overridden via wordcount_config.yaml at the project root,
    and then again by CLI flags.
    """

    # What to look for (case sensitive, raw substring)
    target_word: str = "Go"
    urls: list[str] = field(default_factory=lambda: list(DEFAULT_URLS))

    # Pool tuning
    pool_size: int = 5
    request_timeout_s: float = 30
    collect_strategy: str = "lock"  # "lock" or "queue"

    def work_items(self) -> list[WorkItem]:
        return [WorkItem(url=u) for u in self.urls]


def load_count_config(path: str | Path | None = None) -> CountConfig:
    """
    Load CountConfig from YAML if present; otherwise use defaults.

    By default, looks for `wordcount_config.yaml` at the project root.
    Notices go to stderr so stdout carries only the count report.
    Raises ConfigError when a known key holds a value of the wrong type.
    """

    if path is None:
        path = PROJECT_ROOT / "wordcount_config.yaml"

    path = Path(path)

    if not path.exists():
        print(f"[config] YAML not found at {path}, using defaults", file=sys.stderr)
        return CountConfig()

    raw = path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw) or {}

    if not isinstance(data, dict):
        print(f"[config] Expected mapping in {path}, got {type(data)}, using defaults", file=sys.stderr)
        return CountConfig()

    try:
        checked = CountConfigFile.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Configuration file is invalid: {path}\n{exc}") from exc

    return CountConfig(**checked.model_dump())
