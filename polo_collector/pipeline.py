from __future__ import annotations

"""One collection run: resolve config, collect SERP + Trends, write CSVs.

Usage (quick):
    from polo_collector.config import load_settings
    from polo_collector.pipeline import run

    s = load_settings()
    result = run(s, only="all")
    print(result.files)
"""

import logging
import pathlib
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from polo_collector.config import CollectionConfig, Settings, resolve
from polo_collector.output import (
    SERP_LINK_COLUMNS,
    SERP_LINKS_FILENAME,
    SERP_RAW_FILENAME,
    TRENDS_RAW_FILENAME,
    summarize_serp_links,
    write_csv,
)
from polo_collector.serp_client import SERP_COLUMNS, MissingApiKeyError, collect_serp
from polo_collector.trends_client import TRENDS_COLUMNS, collect_trends

logger = logging.getLogger(__name__)

STAGES = ("serp", "trends", "all")


@dataclass(slots=True)
class RunResult:
    config: CollectionConfig
    files: Dict[str, pathlib.Path] = field(default_factory=dict)
    counts: Dict[str, int] = field(default_factory=dict)


def run(
    settings: Settings,
    *,
    only: str = "all",
    config_path: Optional[Union[str, pathlib.Path]] = None,
    dry_run: bool = False,
    session=None,
    progress: bool = True,
) -> RunResult:
    """Execute the requested stage(s) and return what was written.

    Config errors surface before any network call. ``dry_run`` stops after
    config resolution.
    """
    if only not in STAGES:
        raise ValueError(f"only must be one of {STAGES}, got {only!r}")

    paths = settings.paths
    paths.ensure_dirs()
    cfg = resolve(config_path if config_path is not None else paths.config_file)
    logger.info(f"Resolved config: {cfg.asdict()}")

    result = RunResult(config=cfg)
    if dry_run:
        logger.info("Dry run – skipping collection.")
        return result

    if not settings.serpapi_api_key:
        raise MissingApiKeyError("SERPAPI_API_KEY is not set (add it to .env)")

    common = dict(api_key=settings.serpapi_api_key, timeout=settings.request_timeout,
                  session=session, progress=progress)

    if only in ("serp", "all"):
        serp_rows = collect_serp(cfg, **common)
        result.files["serp_raw"] = write_csv(serp_rows, paths.raw_dir / SERP_RAW_FILENAME, SERP_COLUMNS)
        links = summarize_serp_links(serp_rows)
        result.files["serp_links"] = write_csv(
            links.to_dict("records"), paths.processed_dir / SERP_LINKS_FILENAME, SERP_LINK_COLUMNS
        )
        result.counts["serp_raw"] = len(serp_rows)
        result.counts["serp_links"] = len(links)

    if only in ("trends", "all"):
        trend_rows = collect_trends(cfg, **common)
        result.files["trends_raw"] = write_csv(trend_rows, paths.raw_dir / TRENDS_RAW_FILENAME, TRENDS_COLUMNS)
        result.counts["trends_raw"] = len(trend_rows)

    return result
