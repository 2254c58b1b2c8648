# trends_client.py – Google Trends interest-over-time via SerpAPI
#
# Usage:
#   from polo_collector.trends_client import collect_trends
#   rows = collect_trends(cfg, api_key=settings.serpapi_api_key)

from __future__ import annotations

import logging
from typing import List, Dict, Any, Sequence

from tqdm import tqdm

from polo_collector.config import CollectionConfig
from polo_collector.serp_client import (
    MissingApiKeyError,
    SerpApiError,
    pause_between,
    serpapi_get,
)

# Google Trends compares at most five terms per request
MAX_TERMS_PER_REQUEST = 5

TRENDS_COLUMNS = ["query", "geo", "time", "date", "timestamp", "hits"]

logger = logging.getLogger(__name__)


def chunk_queries(queries: Sequence[str], size: int = MAX_TERMS_PER_REQUEST) -> List[List[str]]:
    """Split ``queries`` into consecutive groups of at most ``size``."""
    return [list(queries[i:i + size]) for i in range(0, len(queries), size)]


def trends_search(
    queries: Sequence[str],
    *,
    geo: str,
    time: str,
    api_key: str,
    timeout: float = 20,
    session=None,
) -> Dict[str, Any]:
    """Call SerpAPI (engine=google_trends, TIMESERIES) and return raw JSON."""
    if len(queries) > MAX_TERMS_PER_REQUEST:
        raise ValueError(f"Google Trends accepts at most {MAX_TERMS_PER_REQUEST} terms, got {len(queries)}")
    params = {
        "api_key": api_key,
        "engine": "google_trends",
        "q": ",".join(queries),
        "geo": geo,
        "date": time,
        "data_type": "TIMESERIES",
    }
    return serpapi_get(params, timeout=timeout, session=session)


def _hits(value: Dict[str, Any]) -> int:
    extracted = value.get("extracted_value")
    if isinstance(extracted, (int, float)) and not isinstance(extracted, bool):
        return int(extracted)
    raw = str(value.get("value", "")).strip()
    if raw.startswith("<"):  # "<1" means below the reporting threshold
        return 0
    try:
        return int(raw)
    except ValueError:
        return 0


def parse_trends_timeseries(raw: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Flatten ``interest_over_time.timeline_data`` into rows:
    [{query, date, timestamp, hits}, ...]
    """
    rows: List[Dict[str, Any]] = []
    timeline = (raw.get("interest_over_time") or {}).get("timeline_data") or []
    for point in timeline:
        for value in point.get("values", []) or []:
            rows.append({
                "query": value.get("query", ""),
                "date": point.get("date", ""),
                "timestamp": point.get("timestamp"),
                "hits": _hits(value),
            })
    return rows


def collect_trends(
    cfg: CollectionConfig,
    *,
    api_key: str,
    timeout: float = 20,
    session=None,
    progress: bool = True,
) -> List[Dict[str, Any]]:
    """
    Fetch interest over time for every destination and query chunk.
    Failed requests are logged and skipped.
    """
    if not api_key:
        raise MissingApiKeyError("SERPAPI_API_KEY is not set")

    chunks = chunk_queries(cfg.queries)
    jobs = [(geo, chunk) for geo in cfg.destinations for chunk in chunks]
    rows: List[Dict[str, Any]] = []

    for i, (geo, chunk) in enumerate(tqdm(jobs, desc="📈 Trends", disable=not progress)):
        if i:
            pause_between(cfg.pause)
        try:
            raw = trends_search(chunk, geo=geo, time=cfg.trends_time, api_key=api_key,
                                timeout=timeout, session=session)
        except SerpApiError as e:
            logger.warning(f"Trends failed for geo={geo} terms={chunk}: {e}")
            continue

        parsed = parse_trends_timeseries(raw)
        if not parsed:
            logger.info(f"No interest data for geo={geo} terms={chunk}")
        for row in parsed:
            rows.append({"geo": geo, "time": cfg.trends_time, **row})

    logger.info(f"✅ Trends collection finished: {len(rows)} rows from {len(jobs)} requests")
    return rows
