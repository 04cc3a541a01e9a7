# sew/config.py
from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ComposerConfig:
    seed: Optional[int] = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.seed is not None and self.seed < 0:
            raise ConfigError(f"Random seed must be >= 0, got {self.seed}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(
                f"Invalid log level '{self.log_level}', expected one of {', '.join(LOG_LEVELS)}"
            )

    def with_overrides(
        self, seed: Optional[int] = None, verbose: bool = False
    ) -> ComposerConfig:
        """Return a copy with command-line overrides applied."""
        cfg = self
        if seed is not None:
            cfg = replace(cfg, seed=seed)
        if verbose:
            cfg = replace(cfg, log_level="DEBUG")
        return cfg


def _parse_seed(value) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"Random seed must be an integer, got {value!r}")
    return value


def _section(data: dict, name: str) -> dict:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table, got {section!r}")
    return section


def load_from_toml(config_path: str | Path) -> ComposerConfig:
    """
    Load a ComposerConfig from a TOML file.

    Expected TOML structure (every key optional):

    [random]
    seed = 1234          # makes "mac random" reproducible

    [logging]
    level = "INFO"       # DEBUG|INFO|WARNING|ERROR|CRITICAL
    """
    p = Path(config_path)
    if not p.exists():
        raise FileNotFoundError(f"Configuration file not found: {p}")

    with p.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {p}: {e}") from e

    random = _section(data, "random")
    logging_section = _section(data, "logging")

    cfg = ComposerConfig(
        seed=_parse_seed(random.get("seed")),
        log_level=str(logging_section.get("level", "WARNING")).upper(),
    )

    logger.info("Loaded ComposerConfig from %s: seed=%s, level=%s", p, cfg.seed, cfg.log_level)
    return cfg


def default_config() -> ComposerConfig:
    """Unseeded random generator, warnings and errors only."""
    return ComposerConfig()
