from __future__ import annotations

"""CSV writers for collected data.

Raw rows go to ``data/raw`` exactly as collected. ``summarize_serp_links``
derives the processed view: one row per unique link per country/language.
"""

import logging
import pathlib
from typing import Iterable, Dict, Any, List, Union

import pandas as pd

logger = logging.getLogger(__name__)

SERP_RAW_FILENAME = "serp_results.csv"
TRENDS_RAW_FILENAME = "trends_interest.csv"
SERP_LINKS_FILENAME = "serp_unique_links.csv"

SERP_LINK_COLUMNS = ["country", "language", "link", "title", "best_position", "n_queries", "queries"]


def write_csv(
    rows: Iterable[Dict[str, Any]],
    path: Union[str, pathlib.Path],
    columns: List[str],
) -> pathlib.Path:
    """Write ``rows`` to ``path`` with a fixed column order (header always written)."""
    path = pathlib.Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(list(rows), columns=columns)
    df.to_csv(path, index=False, encoding="utf-8")
    logger.info(f"💾 Wrote {len(df)} rows -> {path}")
    return path


def summarize_serp_links(rows: Iterable[Dict[str, Any]]) -> pd.DataFrame:
    """Collapse raw SERP rows to unique (country, language, link).

    Keeps the first title seen, the best (lowest) organic position, and which
    queries surfaced the link.
    """
    df = pd.DataFrame(list(rows))
    if df.empty or "link" not in df.columns:
        return pd.DataFrame(columns=SERP_LINK_COLUMNS)

    df = df[df["link"].fillna("") != ""]
    if df.empty:
        return pd.DataFrame(columns=SERP_LINK_COLUMNS)
    df = df.assign(position=pd.to_numeric(df["position"], errors="coerce"))
    grouped = (
        df.groupby(["country", "language", "link"], sort=False)
        .agg(
            title=("title", "first"),
            best_position=("position", "min"),
            n_queries=("query", "nunique"),
            queries=("query", lambda qs: "; ".join(dict.fromkeys(qs))),
        )
        .reset_index()
    )
    return grouped[SERP_LINK_COLUMNS]
