from __future__ import annotations

"""Runtime settings loader for the POLO collector.

All environment reads happen here so the rest of the codebase consumes a
*single* ``Settings`` object. Secrets (the SerpAPI key) live in ``.env`` and are
loaded with python-dotenv; what to collect lives in ``config/queries.yml`` (see
:mod:`polo_collector.config.collection`).
"""

import os
import pathlib
from dataclasses import dataclass, asdict, field
from typing import Optional, Dict, Any, Union

from dotenv import load_dotenv

CONFIG_FILENAME = "queries.yml"


# ---------------------------------------------------------------------------
# Project Paths
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class ProjectPaths:
    """Every on-disk location a run touches, anchored at one project root."""

    root: pathlib.Path

    @classmethod
    def from_root(cls, root: Union[str, pathlib.Path, None] = None) -> "ProjectPaths":
        base = pathlib.Path(root) if root is not None else pathlib.Path.cwd()
        return cls(root=base.expanduser().resolve())

    @property
    def data_dir(self) -> pathlib.Path:
        return self.root / "data"

    @property
    def raw_dir(self) -> pathlib.Path:
        return self.data_dir / "raw"

    @property
    def processed_dir(self) -> pathlib.Path:
        return self.data_dir / "processed"

    @property
    def config_dir(self) -> pathlib.Path:
        return self.root / "config"

    @property
    def config_file(self) -> pathlib.Path:
        return self.config_dir / CONFIG_FILENAME

    @property
    def log_dir(self) -> pathlib.Path:
        return self.root / "logs"

    def ensure_dirs(self) -> None:
        """Create the data/config/log folders so a first run never fails on I/O."""
        for d in (self.data_dir, self.raw_dir, self.processed_dir, self.config_dir, self.log_dir):
            d.mkdir(parents=True, exist_ok=True)


# ---------------------------------------------------------------------------
# Settings Dataclass
# ---------------------------------------------------------------------------
@dataclass(slots=True)
class Settings:
    """Resolved runtime configuration."""

    profile: str = "dev"  # semantic runtime profile label
    serpapi_api_key: Optional[str] = None
    project_root: pathlib.Path = field(default_factory=pathlib.Path.cwd)
    log_level: str = "INFO"
    request_timeout: float = 20.0  # seconds per SerpAPI call

    @property
    def paths(self) -> ProjectPaths:
        return ProjectPaths.from_root(self.project_root)

    def asdict(self) -> Dict[str, Any]:  # convenience for logging, key masked
        d = asdict(self)
        if d.get("serpapi_api_key"):
            d["serpapi_api_key"] = d["serpapi_api_key"][:4] + "..."
        return d


# ---------------------------------------------------------------------------
# Settings Builders
# ---------------------------------------------------------------------------

def settings_from_env(profile: str = "dev", root: Union[str, pathlib.Path, None] = None) -> Settings:
    """Assemble settings from env vars (+ ``.env``) and dataclass defaults.

    ``root`` (e.g. from ``--root``) beats ``POLO_PROJECT_ROOT``.
    """
    load_dotenv()
    s = Settings(profile=profile)

    # API key ---------------------------------------------------------------
    s.serpapi_api_key = os.getenv("SERPAPI_API_KEY") or None

    # Project root ----------------------------------------------------------
    raw_root = root if root is not None else os.getenv("POLO_PROJECT_ROOT")
    if raw_root:
        s.project_root = pathlib.Path(raw_root)

    # Logging ---------------------------------------------------------------
    s.log_level = os.getenv("POLO_LOG_LEVEL", s.log_level).upper()

    # HTTP timeout ----------------------------------------------------------
    try:
        s.request_timeout = float(os.getenv("POLO_REQUEST_TIMEOUT", s.request_timeout))
    except ValueError:  # leave default
        pass

    return s


def load_settings(profile: str = "dev", root: Union[str, pathlib.Path, None] = None) -> Settings:
    """Public loader: returns :class:`Settings` with project folders in place."""
    settings = settings_from_env(profile=profile, root=root)
    settings.paths.ensure_dirs()
    return settings
