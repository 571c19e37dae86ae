"""Build configuration for howmanyleft."""

from __future__ import annotations

import dataclasses
import os
import re
from pathlib import Path
from typing import Any

from howmanyleft._constants import CURRENT_FULL_YEAR, DEFAULT_CSV_DIR, DEFAULT_OUTPUT_PATH, GB_CUTOFF_PERIOD
from howmanyleft.exceptions import ConfigError

_YEAR_RE = re.compile(r"^\d{4}$")
_QUARTER_RE = re.compile(r"^\d{4}Q[1-4]$")


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class BuildConfig:
    """Snapshot build configuration.

    Parameters
    ----------
    csv_dir : Path
        Directory holding the ``df_VEH*.csv`` source files.
    output_path : Path
        Snapshot file to (re)create.
    current_year : str
        Reporting-year column read by the manufacture-year and
        engine-size merges.  Earlier year columns are ignored.
    gb_cutoff_period : str
        First quarter (``YYYYQn``) for which the GB-only tables are
        superseded by the UK-wide tables.
    fast_writes : bool
        Disable journaling and syncing while writing the snapshot.
        The file is rebuilt from scratch on every run, so durability
        is not needed.
    """

    csv_dir: Path = Path(DEFAULT_CSV_DIR)
    output_path: Path = Path(DEFAULT_OUTPUT_PATH)
    current_year: str = CURRENT_FULL_YEAR
    gb_cutoff_period: str = GB_CUTOFF_PERIOD
    fast_writes: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "csv_dir", Path(self.csv_dir))
        object.__setattr__(self, "output_path", Path(self.output_path))
        if not _YEAR_RE.match(self.current_year):
            raise ConfigError(f"current_year must be a four digit year, got {self.current_year!r}")
        if not _QUARTER_RE.match(self.gb_cutoff_period):
            raise ConfigError(f"gb_cutoff_period must look like 2014Q3, got {self.gb_cutoff_period!r}")

    @classmethod
    def from_env(cls, **overrides: Any) -> BuildConfig:
        """Create configuration from ``HOWMANYLEFT_*`` environment variables.

        Explicit keyword arguments override environment values; ``None``
        overrides are ignored so CLI defaults fall through.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "HOWMANYLEFT_CSV_DIR": "csv_dir",
            "HOWMANYLEFT_OUTPUT": "output_path",
            "HOWMANYLEFT_CURRENT_YEAR": "current_year",
            "HOWMANYLEFT_GB_CUTOFF": "gb_cutoff_period",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        config_kwargs["fast_writes"] = _env_bool(env.get("HOWMANYLEFT_FAST_WRITES"), True)

        config_kwargs.update({key: value for key, value in overrides.items() if value is not None})

        return cls(**config_kwargs)

    def source_path(self, filename: str) -> Path:
        return self.csv_dir / filename
